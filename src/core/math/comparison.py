"""
Comparison Engine — порядок и равенство нормализованных пар

Порядок: знак (negative < zero < positive), затем экспонента, затем мантисса.
NaN не упорядочен ни с чем (включая себя), как native float.

Равенство — точное совпадение (mantissa, exponent), без epsilon.
Для сравнений с допуском — семейство *_tolerance:
    |a - b| ≤ tolerance × max(|a|, |b|)
"""

from src.core.config import EPS_COMPARE_REL
from src.core.math.arithmetic import absolute, multiply, subtract
from src.core.math.normalizer import (
    NAN_PAIR,
    Pair,
    is_infinite_pair,
    is_nan_pair,
    normalize,
)


def sign_of(a: Pair) -> int:
    """-1 / 0 / 1; NaN → 0."""
    mantissa = a[0]
    if mantissa > 0:
        return 1
    if mantissa < 0:
        return -1
    return 0


def compare(a: Pair, b: Pair) -> int | None:
    """
    Трёхзначное сравнение.

    Returns:
        -1 если a < b, 0 если a == b, 1 если a > b, None если хотя бы один NaN

    Examples:
        >>> compare((3.224, 54.0), (1.24, 53.0))
        1
        >>> compare((-3.0, 5.0), (-1.0, 5.0))
        -1
        >>> compare((-1.0, 6.0), (-1.0, 5.0))
        -1
        >>> compare((float("nan"), float("nan")), (1.0, 0.0)) is None
        True
    """
    if is_nan_pair(*a) or is_nan_pair(*b):
        return None

    a_sign = sign_of(a)
    b_sign = sign_of(b)
    if a_sign != b_sign:
        return -1 if a_sign < b_sign else 1
    if a_sign == 0:
        return 0

    a_mantissa, a_exponent = a
    b_mantissa, b_exponent = b

    if a_exponent != b_exponent:
        # Для отрицательных бо́льшая экспонента означает меньшее значение
        return a_sign if a_exponent > b_exponent else -a_sign
    if a_mantissa != b_mantissa:
        return 1 if a_mantissa > b_mantissa else -1
    return 0


def equals(a: Pair, b: Pair) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def less_than(a: Pair, b: Pair) -> bool:
    return compare(a, b) == -1


def less_equal(a: Pair, b: Pair) -> bool:
    return compare(a, b) in (-1, 0)


def greater_than(a: Pair, b: Pair) -> bool:
    return compare(a, b) == 1


def greater_equal(a: Pair, b: Pair) -> bool:
    return compare(a, b) in (0, 1)


# =============================================================================
# MIN / MAX / CLAMP
# =============================================================================


def maximum(a: Pair, b: Pair) -> Pair:
    """Больший из двух; NaN пропагирует."""
    order = compare(a, b)
    if order is None:
        return NAN_PAIR
    return b if order < 0 else a


def minimum(a: Pair, b: Pair) -> Pair:
    """Меньший из двух; NaN пропагирует."""
    order = compare(a, b)
    if order is None:
        return NAN_PAIR
    return b if order > 0 else a


def clamp(a: Pair, lower: Pair, upper: Pair) -> Pair:
    """
    Ограничение a диапазоном [lower, upper].

    Examples:
        >>> clamp((5.0, 0.0), (1.0, 0.0), (2.0, 0.0))
        (2.0, 0.0)
    """
    return minimum(maximum(a, lower), upper)


# =============================================================================
# СРАВНЕНИЯ С ДОПУСКОМ
# =============================================================================


def equals_tolerance(a: Pair, b: Pair, tolerance: float = EPS_COMPARE_REL) -> bool:
    """
    Равенство с относительным допуском.

    Алгоритм:
        |a - b| ≤ tolerance × max(|a|, |b|)

    Args:
        a: Первое значение
        b: Второе значение
        tolerance: Относительный допуск (default: 1e-9)

    Returns:
        True если значения близки; False если хотя бы одно NaN

    Raises:
        ValueError: Если tolerance отрицательный или NaN

    Examples:
        >>> equals_tolerance((1.0, 100.0), (1.0000000001, 100.0))
        True
        >>> equals_tolerance((1.0, 100.0), (1.1, 100.0))
        False
    """
    if not tolerance >= 0.0:
        raise ValueError(f"tolerance must be non-negative, got {tolerance}")

    if is_nan_pair(*a) or is_nan_pair(*b):
        return False
    if equals(a, b):
        return True
    if is_infinite_pair(*a) or is_infinite_pair(*b):
        return False

    difference = absolute(subtract(a, b))
    bound = multiply(maximum(absolute(a), absolute(b)), normalize(tolerance, 0.0))
    order = compare(difference, bound)
    return order is not None and order <= 0


def compare_tolerance(a: Pair, b: Pair, tolerance: float = EPS_COMPARE_REL) -> int | None:
    """Как compare, но близкие в пределах tolerance значения дают 0."""
    if equals_tolerance(a, b, tolerance):
        return 0
    return compare(a, b)

