"""
Normalizer — Mantissa/Exponent Invariant

Единственный путь построения пары (mantissa, exponent):
- Обычное значение: 1 ≤ |mantissa| < 10, exponent — целое (как float)
- Zero: (0.0, 0.0)
- NaN: (nan, nan)
- Infinity: (±1.0, inf) — экспонента насыщена

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Сдвиг вычисляется напрямую через floor(log10(|m|)), без циклов умножения
2. После сдвига достаточно одной корректировки на ±1 разряд
3. exponent > exp_limit → signed infinity, exponent < -exp_limit → zero
4. Дробная часть экспоненты переносится в мантиссу
"""

import math
from typing import Final

from src.core.config import (
    EXP_LIMIT,
    INTEGER_PRECISION_EXPONENT,
    MAX_SIGNIFICANT_DIGITS,
    NUMBER_EXP_MAX,
    NUMBER_EXP_MIN,
    ROUND_TOLERANCE,
)
from src.core.math.power_table import power_of_ten

Pair = tuple[float, float]

# =============================================================================
# SENTINEL-ПАРЫ
# =============================================================================

ZERO_PAIR: Final[Pair] = (0.0, 0.0)
ONE_PAIR: Final[Pair] = (1.0, 0.0)
MINUS_ONE_PAIR: Final[Pair] = (-1.0, 0.0)
NAN_PAIR: Final[Pair] = (math.nan, math.nan)
INFINITY_PAIR: Final[Pair] = (1.0, math.inf)
NEG_INFINITY_PAIR: Final[Pair] = (-1.0, math.inf)

LOG10_2: Final[float] = math.log10(2.0)


def is_nan_pair(mantissa: float, exponent: float) -> bool:
    return math.isnan(mantissa) or math.isnan(exponent)


def is_infinite_pair(mantissa: float, exponent: float) -> bool:
    return exponent == math.inf and not math.isnan(mantissa)


def signed_infinity(sign: float) -> Pair:
    """Infinity-пара со знаком sign (ожидается ненулевое значение)."""
    return INFINITY_PAIR if sign > 0 else NEG_INFINITY_PAIR


# =============================================================================
# NORMALIZE
# =============================================================================


def _shift_mantissa(mantissa: float, shift: int) -> float:
    if shift == 0:
        return mantissa
    if shift > 0:
        return mantissa / power_of_ten(shift)
    if -shift <= NUMBER_EXP_MAX:
        # 10^k для малых k точны, умножение даёт корректное округление
        return mantissa * power_of_ten(-shift)
    # Subnormal: 10^-shift непредставимо, масштабируем в два шага
    return mantissa * power_of_ten(NUMBER_EXP_MAX) * power_of_ten(-shift - NUMBER_EXP_MAX)


def _saturate(mantissa: float, exponent: float, exp_limit: float) -> Pair:
    if exponent > exp_limit:
        return signed_infinity(mantissa)
    if exponent < -exp_limit:
        return ZERO_PAIR
    return (mantissa, exponent)


def normalize(mantissa: float, exponent: float, exp_limit: float = EXP_LIMIT) -> Pair:
    """
    Приведение произвольной пары к нормализованному виду.

    Алгоритм:
        shift = floor(log10(|m|))
        m' = m / 10^shift,  e' = e + shift
        если e' дробное: m' *= 10^frac(e'), e' = floor(e')
        одна корректировка, если m' вышла за [1, 10) из-за округления

    Args:
        mantissa: Исходная мантисса (любой конечный float)
        exponent: Исходная экспонента (±inf допустимы как sentinel)
        exp_limit: Предел |exponent| (default: активный режим)

    Returns:
        Нормализованная пара или sentinel (zero / NaN / ±infinity)

    Examples:
        >>> normalize(1024.0, 0.0)
        (1.024, 3.0)
        >>> normalize(0.5, 10.0)
        (5.0, 9.0)
        >>> normalize(0.0, 123.0)
        (0.0, 0.0)
        >>> normalize(float("inf"), 0.0)
        (nan, nan)
    """
    mantissa = float(mantissa)
    exponent = float(exponent)

    if math.isnan(mantissa) or math.isnan(exponent) or math.isinf(mantissa):
        return NAN_PAIR
    if mantissa == 0.0 or exponent == -math.inf:
        return ZERO_PAIR
    if exponent == math.inf:
        return signed_infinity(mantissa)

    magnitude = abs(mantissa)
    integral = exponent.is_integer()
    if integral and 1.0 <= magnitude < 10.0:
        return _saturate(mantissa, exponent, exp_limit)

    shift = math.floor(math.log10(magnitude))
    mantissa = _shift_mantissa(mantissa, shift)

    if not integral:
        whole = float(math.floor(exponent))
        mantissa *= 10.0 ** (exponent - whole)
        exponent = whole
    exponent += shift

    magnitude = abs(mantissa)
    if magnitude >= 10.0:
        mantissa /= 10.0
        exponent += 1.0
    elif magnitude < 1.0:
        mantissa *= 10.0
        exponent -= 1.0

    return _saturate(mantissa, exponent, exp_limit)


# =============================================================================
# КОНВЕРСИИ ИЗ NATIVE ТИПОВ
# =============================================================================


def normalize_digits(
    negative: bool,
    digits: str,
    exponent: int,
    exp_limit: float = EXP_LIMIT,
) -> Pair:
    """
    Пара для значения (-1)^negative × int(digits) × 10^exponent.

    Мантисса собирается из строки цифр ("1.234567"), поэтому результат
    совпадает для одинаковых десятичных записей независимо от источника
    (float, int, текст).

    Args:
        negative: Знак
        digits: Десятичные цифры без точки (ведущие нули допустимы)
        exponent: Десятичная экспонента младшей цифры
        exp_limit: Предел |exponent|

    Returns:
        Нормализованная пара

    Examples:
        >>> normalize_digits(False, "1234567", -4)
        (1.234567, 2.0)
        >>> normalize_digits(True, "000", 5)
        (0.0, 0.0)
    """
    significant = digits.lstrip("0")
    if not significant:
        return ZERO_PAIR

    exponent += len(significant) - 1
    if exponent > exp_limit:
        return signed_infinity(-1.0 if negative else 1.0)
    if exponent < -exp_limit:
        return ZERO_PAIR

    mantissa = float(f"{significant[0]}.{significant[1:]}")
    if negative:
        mantissa = -mantissa
    return normalize(mantissa, float(exponent), exp_limit)


def normalize_float(value: float, exp_limit: float = EXP_LIMIT) -> Pair:
    """
    Пара для native float через его кратчайшую десятичную запись (repr).

    Examples:
        >>> normalize_float(123.4567)
        (1.234567, 2.0)
        >>> normalize_float(-1e16)
        (-1.0, 16.0)
    """
    if math.isnan(value):
        return NAN_PAIR
    if math.isinf(value):
        return signed_infinity(value)
    if value == 0.0:
        return ZERO_PAIR

    coefficient, _, exp_text = repr(abs(value)).partition("e")
    whole, _, fraction = coefficient.partition(".")
    return normalize_digits(
        value < 0, whole + fraction, int(exp_text or 0) - len(fraction), exp_limit
    )


def normalize_int(value: int, exp_limit: float = EXP_LIMIT) -> Pair:
    """
    Пара для int произвольного размера.

    Для очень больших int младшие цифры отбрасываются до перевода в строку:
    они всё равно не помещаются в мантиссу double.

    Examples:
        >>> normalize_int(10 ** 400)
        (1.0, 400.0)
    """
    if value == 0:
        return ZERO_PAIR

    negative = value < 0
    magnitude = -value if negative else value
    dropped = max(0, int(magnitude.bit_length() * LOG10_2) - MAX_SIGNIFICANT_DIGITS - 3)
    if dropped:
        magnitude //= 10 ** dropped
    return normalize_digits(negative, str(magnitude), dropped, exp_limit)


# =============================================================================
# КОНВЕРСИЯ В NATIVE FLOAT
# =============================================================================


def denormalize(mantissa: float, exponent: float) -> float:
    """
    Приближённое native float значение пары.

    Для неотрицательной экспоненты результат, отличающийся от целого
    меньше чем на ROUND_TOLERANCE, привязывается к этому целому.

    Returns:
        float; ±inf выше диапазона double, 0.0 ниже

    Examples:
        >>> denormalize(1.024, 3.0)
        1024.0
        >>> denormalize(1.0, 400.0)
        inf
    """
    if is_nan_pair(mantissa, exponent):
        return math.nan
    if mantissa == 0.0:
        return 0.0
    if exponent > NUMBER_EXP_MAX:
        return math.copysign(math.inf, mantissa)
    if exponent < NUMBER_EXP_MIN:
        return 0.0

    power = int(exponent)
    if power >= 0:
        result = mantissa * power_of_ten(power)
    elif power >= -NUMBER_EXP_MAX:
        result = mantissa / power_of_ten(-power)
    else:
        result = mantissa / power_of_ten(NUMBER_EXP_MAX) / power_of_ten(-power - NUMBER_EXP_MAX)

    if power < 0 or power >= INTEGER_PRECISION_EXPONENT or math.isinf(result):
        return result

    rounded = float(round(result))
    if abs(rounded - result) < ROUND_TOLERANCE:
        return rounded
    return result
