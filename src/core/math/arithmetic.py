"""
Arithmetic Engine — add / sub / mul / div над нормализованными парами

Все функции принимают нормализованные пары и возвращают новую пару,
прошедшую normalize. Специальные состояния следуют правилам IEEE 754:
- NaN поглощает любой операнд
- inf + (-inf) → NaN, inf × 0 → NaN, 0 / 0 → NaN, inf / inf → NaN
- x / 0 → signed infinity

КРИТИЧЕСКИЙ ИНВАРИАНТ:
При сложении операнд, меньший более чем на MAX_SIGNIFICANT_DIGITS порядков,
пренебрежим: результат равен большему операнду.
"""

import math

from src.core.config import EXP_LIMIT, MAX_SIGNIFICANT_DIGITS
from src.core.math.normalizer import (
    NAN_PAIR,
    ZERO_PAIR,
    Pair,
    is_nan_pair,
    normalize,
    signed_infinity,
)


# =============================================================================
# UNARY
# =============================================================================


def negate(a: Pair) -> Pair:
    """Смена знака; zero остаётся zero."""
    mantissa, exponent = a
    if mantissa == 0.0:
        return ZERO_PAIR
    return (-mantissa, exponent)


def absolute(a: Pair) -> Pair:
    mantissa, exponent = a
    return (abs(mantissa), exponent)


def reciprocal(a: Pair, exp_limit: float = EXP_LIMIT) -> Pair:
    """
    1 / a.

    Examples:
        >>> reciprocal((4.0, 2.0))
        (2.5, -3.0)
    """
    mantissa, exponent = a
    if is_nan_pair(mantissa, exponent):
        return NAN_PAIR
    if mantissa == 0.0:
        return signed_infinity(1.0)
    if exponent == math.inf:
        return ZERO_PAIR
    return normalize(1.0 / mantissa, -exponent, exp_limit)


# =============================================================================
# ADD / SUB
# =============================================================================


def add(a: Pair, b: Pair, exp_limit: float = EXP_LIMIT) -> Pair:
    """
    Сумма двух пар.

    Алгоритм:
        Δ = e_big - e_small
        Δ > MAX_SIGNIFICANT_DIGITS → результат = больший операнд
        иначе m = m_big + m_small × 10^-Δ, normalize(m, e_big)

    Examples:
        >>> add((1.0, 16.0), (1.0, 0.0))
        (1.0, 16.0)
    """
    a_mantissa, a_exponent = a
    b_mantissa, b_exponent = b

    if is_nan_pair(a_mantissa, a_exponent) or is_nan_pair(b_mantissa, b_exponent):
        return NAN_PAIR

    a_infinite = a_exponent == math.inf
    b_infinite = b_exponent == math.inf
    if a_infinite or b_infinite:
        if a_infinite and b_infinite and (a_mantissa > 0) != (b_mantissa > 0):
            return NAN_PAIR
        return a if a_infinite else b

    if a_mantissa == 0.0:
        return b
    if b_mantissa == 0.0:
        return a

    if a_exponent >= b_exponent:
        big_mantissa, big_exponent, small_mantissa, small_exponent = a_mantissa, a_exponent, b_mantissa, b_exponent
    else:
        big_mantissa, big_exponent, small_mantissa, small_exponent = b_mantissa, b_exponent, a_mantissa, a_exponent

    delta = big_exponent - small_exponent
    if delta > MAX_SIGNIFICANT_DIGITS:
        return (big_mantissa, big_exponent)

    # Δ может быть любым float, поэтому прямое возведение, а не таблица
    mantissa = big_mantissa + small_mantissa * 10.0 ** -delta
    return normalize(mantissa, big_exponent, exp_limit)


def subtract(a: Pair, b: Pair, exp_limit: float = EXP_LIMIT) -> Pair:
    """a - b как a + (-b)."""
    return add(a, negate(b), exp_limit)


# =============================================================================
# MUL / DIV
# =============================================================================


def multiply(a: Pair, b: Pair, exp_limit: float = EXP_LIMIT) -> Pair:
    """
    Произведение: мантиссы перемножаются, экспоненты складываются.

    |m_a × m_b| ∈ [1, 100), поэтому normalize делает не более одного сдвига.

    Examples:
        >>> multiply((2.0, 0.0), (5.0, 0.0))
        (1.0, 1.0)
    """
    a_mantissa, a_exponent = a
    b_mantissa, b_exponent = b

    if is_nan_pair(a_mantissa, a_exponent) or is_nan_pair(b_mantissa, b_exponent):
        return NAN_PAIR

    if a_exponent == math.inf or b_exponent == math.inf:
        if a_mantissa == 0.0 or b_mantissa == 0.0:
            return NAN_PAIR
        return signed_infinity(a_mantissa * b_mantissa)

    if a_mantissa == 0.0 or b_mantissa == 0.0:
        return ZERO_PAIR

    return normalize(a_mantissa * b_mantissa, a_exponent + b_exponent, exp_limit)


def divide(a: Pair, b: Pair, exp_limit: float = EXP_LIMIT) -> Pair:
    """
    Частное: мантиссы делятся, экспоненты вычитаются.

    Examples:
        >>> divide((1.0, 0.0), (4.0, 0.0))
        (2.5, -1.0)
        >>> divide((1.0, 0.0), (0.0, 0.0))
        (1.0, inf)
    """
    a_mantissa, a_exponent = a
    b_mantissa, b_exponent = b

    if is_nan_pair(a_mantissa, a_exponent) or is_nan_pair(b_mantissa, b_exponent):
        return NAN_PAIR

    if b_mantissa == 0.0:
        if a_mantissa == 0.0:
            return NAN_PAIR
        return signed_infinity(a_mantissa)

    a_infinite = a_exponent == math.inf
    b_infinite = b_exponent == math.inf
    if a_infinite and b_infinite:
        return NAN_PAIR
    if a_infinite:
        return signed_infinity(a_mantissa * b_mantissa)
    if b_infinite or a_mantissa == 0.0:
        return ZERO_PAIR

    return normalize(a_mantissa / b_mantissa, a_exponent - b_exponent, exp_limit)
