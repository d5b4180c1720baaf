"""
Text Codec — разбор и форматирование Decimal

Грамматика разбора:
    sign? digits ('.' digits)? (('e'|'E') sign? digits)?
хотя бы одна группа цифр (целая или дробная) должна быть непустой.

Форматирование:
- general:      как native число для -7 < exponent < 21, иначе "<m>e±<e>"
- exponential:  places цифр после точки, "1.50e+300"
- fixed:        places цифр после точки, "1500.00"
- precision:    заданное число значащих цифр, fixed или exponential

Цифры получаются масштабированием мантиссы на 10^k, округлением к целому
(половины — от нуля) и сборкой строки. Больше DEFAULT_PRECISION значащих
цифр не вычисляется: хвост добивается нулями. Это приближение, а не
точное десятичное преобразование.
"""

import math
import re
from typing import Final

from src.core.config import DEFAULT_PRECISION, EXP_LIMIT, FIXED_NOTATION_LIMIT
from src.core.math.normalizer import Pair, is_nan_pair, normalize_digits
from src.core.math.power_table import power_of_ten
from src.core.math.transcendental import round_half_away_from_zero

_LITERAL_RE: Final = re.compile(
    r"(?P<sign>[+-]?)(?P<whole>[0-9]*)(?:\.(?P<fraction>[0-9]*))?"
    r"(?:[eE](?P<exponent>[+-]?[0-9]+))?"
)

_FORMAT_SPEC_RE: Final = re.compile(r"(?:\.(?P<precision>[0-9]+))?(?P<kind>[eEfFgG]?)")

# Экспонента с большим числом цифр заведомо за пределом любого режима
_MAX_EXPONENT_DIGITS: Final[int] = 330

_UPPER_SPECIALS: Final[dict[str, str]] = {"NaN": "NAN", "Infinity": "INF", "-Infinity": "-INF"}

# Точность по умолчанию для format(d, "e"/"f"/"g"), как у float
FORMAT_SPEC_DEFAULT_PRECISION: Final[int] = 6


# =============================================================================
# EXCEPTIONS
# =============================================================================


class DecimalParseError(ValueError):
    """
    Строка не соответствует грамматике десятичного литерала.

    Attributes:
        text: Исходная строка
    """

    def __init__(self, text: str, reason: str):
        super().__init__(f"Cannot parse {text!r} as Decimal: {reason}")
        self.text = text


# =============================================================================
# PARSING
# =============================================================================


def parse_decimal(text: str, exp_limit: float = EXP_LIMIT) -> Pair:
    """
    Разбор десятичного литерала в нормализованную пару.

    Args:
        text: Строка вида "123456.7e-3"
        exp_limit: Предел |exponent|

    Returns:
        Нормализованная пара

    Raises:
        DecimalParseError: Если строка не соответствует грамматике

    Examples:
        >>> parse_decimal("123456.7e-3")
        (1.234567, 2.0)
        >>> parse_decimal("-.5")
        (-5.0, -1.0)
    """
    match = _LITERAL_RE.fullmatch(text)
    if match is None:
        raise DecimalParseError(text, "expected sign? digits ('.' digits)? (e sign? digits)?")

    whole = match["whole"]
    fraction = match["fraction"] or ""
    if not whole and not fraction:
        raise DecimalParseError(text, "no digits")

    exponent_text = match["exponent"] or "0"
    if len(exponent_text.lstrip("+-").lstrip("0")) > _MAX_EXPONENT_DIGITS:
        exponent = -(10 ** _MAX_EXPONENT_DIGITS) if exponent_text.startswith("-") else 10 ** _MAX_EXPONENT_DIGITS
    else:
        exponent = int(exponent_text)

    return normalize_digits(
        match["sign"] == "-", whole + fraction, exponent - len(fraction), exp_limit
    )


# =============================================================================
# ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ ФОРМАТИРОВАНИЯ
# =============================================================================


def _format_special(mantissa: float, exponent: float) -> str | None:
    if is_nan_pair(mantissa, exponent):
        return "NaN"
    if exponent == math.inf:
        return "Infinity" if mantissa > 0 else "-Infinity"
    return None


def _format_exponent(exponent: float) -> str:
    sign = "+" if exponent >= 0 else "-"
    # целая запись и для full-range: parse_decimal принимает до _MAX_EXPONENT_DIGITS цифр
    return sign + str(int(abs(exponent)))


def _sign_prefix(mantissa: float) -> str:
    return "-" if mantissa < 0 else ""


def _fraction_zeros(places: int) -> str:
    return "." + "0" * places if places > 0 else ""


def _check_places(places: int, name: str = "places", minimum: int = 0) -> None:
    if places < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {places}")


def _significant_digits(mantissa: float, exponent: float, count: int) -> tuple[str, float]:
    """
    count значащих цифр |mantissa| с округлением половины от нуля.

    Returns:
        (digits, exponent); при переносе (9.99 → 10.0) exponent растёт на 1
    """
    computed = min(count, DEFAULT_PRECISION)
    scaled = int(round_half_away_from_zero(abs(mantissa) * power_of_ten(computed - 1)))
    if scaled >= 10 ** computed:
        scaled //= 10
        exponent += 1.0
    return str(scaled) + "0" * (count - computed), exponent


def _positional(mantissa_text: str, exponent: int) -> str:
    """Запись цифр мантиссы без экспоненты: ("1.79", 3) → "1790"."""
    digits = mantissa_text.replace(".", "").rstrip("0") or "0"
    point = exponent + 1
    if point <= 0:
        return "0." + "0" * -point + digits
    if point >= len(digits):
        return digits + "0" * (point - len(digits))
    return digits[:point] + "." + digits[point:]


# =============================================================================
# FORMATTING
# =============================================================================


def format_general(pair: Pair) -> str:
    """
    Запись по умолчанию.

    Examples:
        >>> format_general((1.79, 3.0))
        '1790'
        >>> format_general((1.0, 308.0))
        '1e+308'
        >>> format_general((0.0, 0.0))
        '0'
    """
    mantissa, exponent = pair
    special = _format_special(mantissa, exponent)
    if special is not None:
        return special
    if mantissa == 0.0:
        return "0"

    if -7 < exponent < FIXED_NOTATION_LIMIT:
        return _sign_prefix(mantissa) + _positional(repr(abs(mantissa)), int(exponent))

    mantissa_text = repr(mantissa)
    if mantissa_text.endswith(".0"):
        mantissa_text = mantissa_text[:-2]
    return f"{mantissa_text}e{_format_exponent(exponent)}"


def format_exponential(pair: Pair, places: int | None = None) -> str:
    """
    Экспоненциальная запись с places цифрами после точки.

    Args:
        pair: Нормализованная пара
        places: Цифр после точки (default: DEFAULT_PRECISION - 1)

    Raises:
        ValueError: Если places < 0

    Examples:
        >>> format_exponential((1.23456, 300.0), 2)
        '1.23e+300'
        >>> format_exponential((9.999, -5.0), 2)
        '1.00e-4'
        >>> format_exponential((0.0, 0.0), 2)
        '0.00e+0'
    """
    if places is None:
        places = DEFAULT_PRECISION - 1
    _check_places(places)

    mantissa, exponent = pair
    special = _format_special(mantissa, exponent)
    if special is not None:
        return special
    if mantissa == 0.0:
        return "0" + _fraction_zeros(places) + "e+0"

    digits, exponent = _significant_digits(mantissa, exponent, places + 1)
    body = digits[0] + ("." + digits[1:] if places > 0 else "")
    return f"{_sign_prefix(mantissa)}{body}e{_format_exponent(exponent)}"


def format_fixed(pair: Pair, places: int = 0) -> str:
    """
    Запись с фиксированной точкой и places цифрами после неё.

    Для exponent ≥ FIXED_NOTATION_LIMIT возвращается экспоненциальная запись,
    как у native чисел ≥ 1e21. Значение, округляющееся к нулю, печатается
    без знака.

    Raises:
        ValueError: Если places < 0

    Examples:
        >>> format_fixed((1.0, 1.0), 1)
        '10.0'
        >>> format_fixed((1.234567, 2.0), 2)
        '123.46'
        >>> format_fixed((5.0, -4.0), 3)
        '0.001'
    """
    _check_places(places)

    mantissa, exponent = pair
    special = _format_special(mantissa, exponent)
    if special is not None:
        return special
    if mantissa == 0.0:
        return "0" + _fraction_zeros(places)
    if exponent >= FIXED_NOTATION_LIMIT:
        return format_exponential(pair, places)

    count = int(exponent) + 1 + places
    if count > 0:
        digits, rounded_exponent = _significant_digits(mantissa, exponent, count)
        if rounded_exponent > exponent:
            digits += "0"
        integer_length = int(rounded_exponent) + 1
    elif count == 0 and abs(mantissa) >= 5.0:
        # Округление вверх до единицы последнего разряда
        digits = "1"
        integer_length = 1 - places
    else:
        return "0" + _fraction_zeros(places)

    if integer_length <= 0:
        text = "0." + "0" * -integer_length + digits
    elif places == 0:
        text = digits
    else:
        text = digits[:integer_length] + "." + digits[integer_length:]
    return _sign_prefix(mantissa) + text


def format_precision(pair: Pair, precision: int | None = None) -> str:
    """
    Запись с precision значащими цифрами.

    exponent ≤ -7 или exponent ≥ precision → exponential, иначе fixed.

    Raises:
        ValueError: Если precision < 1

    Examples:
        >>> format_precision((1.234567, 2.0), 4)
        '123.5'
        >>> format_precision((1.234567, 20.0), 4)
        '1.235e+20'
    """
    if precision is None:
        precision = DEFAULT_PRECISION
    _check_places(precision, name="precision", minimum=1)

    mantissa, exponent = pair
    special = _format_special(mantissa, exponent)
    if special is not None:
        return special
    if mantissa == 0.0:
        return format_fixed(pair, precision - 1)

    if exponent <= -7 or exponent >= precision:
        return format_exponential(pair, precision - 1)
    return format_fixed(pair, precision - int(exponent) - 1)


def format_with_spec(pair: Pair, spec: str) -> str:
    """
    Поддержка format(d, spec): "[.precision][e|E|f|F|g|G]".

    Без типа и точности — format_general; без точности для e/f/g —
    FORMAT_SPEC_DEFAULT_PRECISION, как у float.

    Raises:
        ValueError: Если спецификатор не поддерживается
    """
    match = _FORMAT_SPEC_RE.fullmatch(spec)
    if match is None:
        raise ValueError(f"Invalid format specifier {spec!r} for Decimal")

    kind = match["kind"]
    precision = int(match["precision"]) if match["precision"] is not None else None

    if not kind:
        if precision is None:
            return format_general(pair)
        return format_precision(pair, max(precision, 1))

    if precision is None:
        precision = FORMAT_SPEC_DEFAULT_PRECISION

    lowered = kind.lower()
    if lowered == "e":
        text = format_exponential(pair, precision)
    elif lowered == "f":
        text = format_fixed(pair, precision)
    else:
        text = format_precision(pair, max(precision, 1))

    if not kind.isupper():
        return text
    # inf/nan в верхнем регистре пишутся как у float: "INF", "-INF", "NAN"
    return _UPPER_SPECIALS.get(text, text.upper())


def mantissa_with_decimal_places(pair: Pair, places: int) -> float:
    """
    Мантисса, округлённая до places знаков после точки.

    Examples:
        >>> mantissa_with_decimal_places((1.23456, 300.0), 2)
        1.23
    """
    _check_places(places)

    mantissa, exponent = pair
    if is_nan_pair(mantissa, exponent):
        return math.nan
    if mantissa == 0.0 or exponent == math.inf:
        return mantissa

    places = min(places, DEFAULT_PRECISION - 1)
    scale = power_of_ten(places)
    rounded = round_half_away_from_zero(abs(mantissa) * scale) / scale
    return math.copysign(rounded, mantissa)
