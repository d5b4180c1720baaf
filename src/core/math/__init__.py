"""
Core math modules для Decimal

Численные примитивы над нормализованными парами (mantissa, exponent).
"""

# Power Table
from src.core.math.power_table import (
    TABLE_MAX_POWER,
    TABLE_MIN_POWER,
    get_power_table,
    power_of_ten,
)

# Normalizer
from src.core.math.normalizer import (
    INFINITY_PAIR,
    MINUS_ONE_PAIR,
    NAN_PAIR,
    NEG_INFINITY_PAIR,
    ONE_PAIR,
    ZERO_PAIR,
    Pair,
    denormalize,
    is_infinite_pair,
    is_nan_pair,
    normalize,
    normalize_digits,
    normalize_float,
    normalize_int,
    signed_infinity,
)

# Arithmetic
from src.core.math.arithmetic import (
    absolute,
    add,
    divide,
    multiply,
    negate,
    reciprocal,
    subtract,
)

# Comparison
from src.core.math.comparison import (
    clamp,
    compare,
    compare_tolerance,
    equals,
    equals_tolerance,
    greater_equal,
    greater_than,
    less_equal,
    less_than,
    maximum,
    minimum,
    sign_of,
)

# Transcendental & Rounding
from src.core.math.transcendental import (
    ceil,
    exp,
    floor,
    ln,
    log,
    log2,
    log10,
    pow10,
    power,
    round_half_away_from_zero,
    round_nearest,
    sqrt,
    trunc,
)

__all__ = [
    # Power Table
    "TABLE_MAX_POWER",
    "TABLE_MIN_POWER",
    "get_power_table",
    "power_of_ten",
    # Normalizer — Sentinels
    "INFINITY_PAIR",
    "MINUS_ONE_PAIR",
    "NAN_PAIR",
    "NEG_INFINITY_PAIR",
    "ONE_PAIR",
    "ZERO_PAIR",
    "Pair",
    # Normalizer — Functions
    "denormalize",
    "is_infinite_pair",
    "is_nan_pair",
    "normalize",
    "normalize_digits",
    "normalize_float",
    "normalize_int",
    "signed_infinity",
    # Arithmetic
    "absolute",
    "add",
    "divide",
    "multiply",
    "negate",
    "reciprocal",
    "subtract",
    # Comparison
    "clamp",
    "compare",
    "compare_tolerance",
    "equals",
    "equals_tolerance",
    "greater_equal",
    "greater_than",
    "less_equal",
    "less_than",
    "maximum",
    "minimum",
    "sign_of",
    # Transcendental & Rounding
    "ceil",
    "exp",
    "floor",
    "ln",
    "log",
    "log2",
    "log10",
    "pow10",
    "power",
    "round_half_away_from_zero",
    "round_nearest",
    "sqrt",
    "trunc",
]
