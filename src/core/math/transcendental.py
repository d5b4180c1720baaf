"""
Transcendental & Rounding — pow / exp / log / sqrt / floor / ceil / round / trunc

Логарифмы вычисляются аналитически:
    log10(m × 10^e) = e + log10(m)
и возвращаются как native float (всегда помещаются в диапазон double).

Возведение в степень:
    прямой путь: m^p × 10^(e·p), если m^p конечно и ненулевое
    иначе через L = log10(|x|) × p:  mantissa = 10^frac(L), exponent = floor(L)

Округления:
    exponent ≥ INTEGER_PRECISION_EXPONENT → тождество (дробной части нет)
    малые экспоненты → прямой ответ без перехода к float
    иначе → native float операция и обратная конверсия

Вырожденные входы следуют native float: sqrt(-x) → NaN, log(0) → -inf,
0^-p → inf, (-x)^дробное → NaN.
"""

import math
from typing import Final

from src.core.config import EXP_LIMIT, INTEGER_PRECISION_EXPONENT
from src.core.math.normalizer import (
    INFINITY_PAIR,
    MINUS_ONE_PAIR,
    NAN_PAIR,
    ONE_PAIR,
    ZERO_PAIR,
    Pair,
    denormalize,
    is_nan_pair,
    normalize,
    normalize_float,
    signed_infinity,
)

LN_10: Final[float] = math.log(10.0)
LOG10_E: Final[float] = math.log10(math.e)
LOG10_2: Final[float] = math.log10(2.0)

# Порог, ниже которого math.exp не переполняется
EXP_NATIVE_LIMIT: Final[float] = 709.0


# =============================================================================
# ОКРУГЛЕНИЯ
# =============================================================================


def round_half_away_from_zero(value: float) -> float:
    """
    Округление к ближайшему целому, половины — от нуля.

    Examples:
        >>> round_half_away_from_zero(2.5)
        3.0
        >>> round_half_away_from_zero(-2.5)
        -3.0
        >>> round_half_away_from_zero(2.4999)
        2.0
    """
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return math.copysign(float(whole), value)


def _is_integral(a: Pair) -> bool:
    mantissa, exponent = a
    return (
        is_nan_pair(mantissa, exponent)
        or mantissa == 0.0
        or exponent >= INTEGER_PRECISION_EXPONENT
    )


def floor(a: Pair) -> Pair:
    """
    Наибольшее целое ≤ a.

    Examples:
        >>> floor((-5.0, -3.0))
        (-1.0, 0.0)
        >>> floor((1.5, 40.0))
        (1.5, 40.0)
    """
    if _is_integral(a):
        return a
    mantissa, exponent = a
    if exponent < 0:
        return ZERO_PAIR if mantissa > 0 else MINUS_ONE_PAIR
    return normalize_float(float(math.floor(denormalize(mantissa, exponent))))


def ceil(a: Pair) -> Pair:
    """Наименьшее целое ≥ a."""
    if _is_integral(a):
        return a
    mantissa, exponent = a
    if exponent < 0:
        return ONE_PAIR if mantissa > 0 else ZERO_PAIR
    return normalize_float(float(math.ceil(denormalize(mantissa, exponent))))


def trunc(a: Pair) -> Pair:
    """Отбрасывание дробной части (к нулю)."""
    if _is_integral(a):
        return a
    mantissa, exponent = a
    if exponent < 0:
        return ZERO_PAIR
    return normalize_float(float(math.trunc(denormalize(mantissa, exponent))))


def round_nearest(a: Pair) -> Pair:
    """
    Округление к ближайшему целому, половины — от нуля.

    Examples:
        >>> round_nearest((2.5, 0.0))
        (3.0, 0.0)
        >>> round_nearest((-4.9, -2.0))
        (0.0, 0.0)
    """
    if _is_integral(a):
        return a
    mantissa, exponent = a
    if exponent < -1:
        return ZERO_PAIR
    return normalize_float(round_half_away_from_zero(denormalize(mantissa, exponent)))


# =============================================================================
# ЛОГАРИФМЫ
# =============================================================================


def log10(a: Pair) -> float:
    """
    Десятичный логарифм как native float.

    Examples:
        >>> log10((1.0, 1000.0))
        1000.0
        >>> log10((0.0, 0.0))
        -inf
    """
    mantissa, exponent = a
    if is_nan_pair(mantissa, exponent) or mantissa < 0:
        return math.nan
    if mantissa == 0.0:
        return -math.inf
    if exponent == math.inf:
        return math.inf
    return exponent + math.log10(mantissa)


def ln(a: Pair) -> float:
    """Натуральный логарифм."""
    return log10(a) * LN_10


def log2(a: Pair) -> float:
    return log10(a) / LOG10_2


def log(a: Pair, base: Pair) -> float:
    """
    Логарифм по произвольному основанию: log10(a) / log10(base).

    Основание 1 даёт ±inf (или NaN для a = 1), как деление на ноль в IEEE 754.
    """
    numerator = log10(a)
    denominator = log10(base)
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


# =============================================================================
# СТЕПЕНИ И ЭКСПОНЕНТА
# =============================================================================


def _from_log10(log_value: float, sign: float, exp_limit: float) -> Pair:
    """Пара sign × 10^log_value: mantissa = 10^frac, exponent = floor."""
    if math.isnan(log_value):
        return NAN_PAIR
    if log_value == math.inf:
        return signed_infinity(sign)
    if log_value == -math.inf:
        return ZERO_PAIR

    if log_value.is_integer():
        whole = log_value
    else:
        whole = float(math.floor(log_value))
    return normalize(sign * 10.0 ** (log_value - whole), whole, exp_limit)


def pow10(power: float, exp_limit: float = EXP_LIMIT) -> Pair:
    """
    10^power.

    Examples:
        >>> pow10(3.0)
        (1.0, 3.0)
        >>> pow10(1e300, exp_limit=9e15)
        (1.0, inf)
    """
    return _from_log10(float(power), 1.0, exp_limit)


def power(a: Pair, exponent: float, exp_limit: float = EXP_LIMIT) -> Pair:
    """
    a^exponent.

    Args:
        a: Основание (нормализованная пара)
        exponent: Показатель степени (native float)
        exp_limit: Предел |exponent| результата

    Returns:
        Нормализованная пара; x^0 = 1 для любого x, включая NaN

    Examples:
        >>> power((2.0, 0.0), 10.0)
        (1.024, 3.0)
        >>> power((-8.0, 0.0), 0.5)
        (nan, nan)
        >>> power((0.0, 0.0), -1.0)
        (1.0, inf)
    """
    base_mantissa, base_exponent = a
    exponent = float(exponent)

    if exponent == 0.0:
        return ONE_PAIR
    if math.isnan(exponent) or is_nan_pair(base_mantissa, base_exponent):
        return NAN_PAIR

    negative = base_mantissa < 0
    integral = exponent.is_integer()
    if negative and not integral and not math.isinf(exponent):
        return NAN_PAIR

    odd = integral and math.fmod(exponent, 2.0) != 0.0
    sign = -1.0 if negative and odd else 1.0

    if math.isinf(exponent):
        if base_mantissa == 0.0 or base_exponent == math.inf:
            grows = (base_mantissa != 0.0) == (exponent > 0)
            return INFINITY_PAIR if grows else ZERO_PAIR
        magnitude_log = base_exponent + math.log10(abs(base_mantissa))
        if magnitude_log == 0.0:
            return ONE_PAIR
        grows = (magnitude_log > 0) == (exponent > 0)
        return INFINITY_PAIR if grows else ZERO_PAIR

    if base_mantissa == 0.0:
        return ZERO_PAIR if exponent > 0 else signed_infinity(sign)
    if base_exponent == math.inf:
        return signed_infinity(sign) if exponent > 0 else ZERO_PAIR

    magnitude = abs(base_mantissa)
    try:
        scaled = magnitude ** exponent
    except OverflowError:
        scaled = math.inf

    if 0.0 < scaled < math.inf:
        return normalize(sign * scaled, base_exponent * exponent, exp_limit)

    log_value = (base_exponent + math.log10(magnitude)) * exponent
    return _from_log10(log_value, sign, exp_limit)


def exp(a: Pair, exp_limit: float = EXP_LIMIT) -> Pair:
    """
    e^a.

    В пределах native диапазона используется math.exp, иначе
    e^x = 10^(x × log10(e)).

    Examples:
        >>> exp((0.0, 0.0))
        (1.0, 0.0)
    """
    mantissa, exponent = a
    if is_nan_pair(mantissa, exponent):
        return NAN_PAIR

    value = denormalize(mantissa, exponent)
    if abs(value) < EXP_NATIVE_LIMIT:
        return normalize(math.exp(value), 0.0, exp_limit)
    return _from_log10(value * LOG10_E, 1.0, exp_limit)


def sqrt(a: Pair, exp_limit: float = EXP_LIMIT) -> Pair:
    """
    Квадратный корень.

    Нечётная экспонента: mantissa × 10, exponent - 1, чтобы exponent / 2
    оставалась целой.

    Examples:
        >>> sqrt((1.6, 3.0))
        (4.0, 1.0)
        >>> sqrt((-4.0, 0.0))
        (nan, nan)
    """
    mantissa, exponent = a
    if is_nan_pair(mantissa, exponent) or mantissa < 0:
        return NAN_PAIR
    if mantissa == 0.0:
        return ZERO_PAIR
    if exponent == math.inf:
        return INFINITY_PAIR

    if math.fmod(exponent, 2.0) != 0.0:
        mantissa *= 10.0
        exponent -= 1.0
    return normalize(math.sqrt(mantissa), exponent / 2.0, exp_limit)
