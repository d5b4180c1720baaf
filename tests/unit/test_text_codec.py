"""
Тесты для модуля Text Codec

Проверяет:
1. Разбор литералов и отказ на некорректных строках
2. Запись по умолчанию (general), exponential, fixed, precision
3. Перенос разряда при округлении (9.99 → 10.0)
4. format() спецификаторы
"""

import pytest

from src.core.codec.text import (
    DecimalParseError,
    format_exponential,
    format_fixed,
    format_general,
    format_precision,
    format_with_spec,
    mantissa_with_decimal_places,
    parse_decimal,
)
from src.core.config import DEFAULT_RANGE, FULL_RANGE
from src.core.math.normalizer import (
    INFINITY_PAIR,
    NAN_PAIR,
    NEG_INFINITY_PAIR,
    ZERO_PAIR,
    normalize,
    normalize_float,
)


# =============================================================================
# PARSING
# =============================================================================


class TestParseDecimal:
    """Тесты для parse_decimal"""

    def test_literal_with_exponent(self) -> None:
        assert parse_decimal("123456.7e-3") == (1.234567, 2.0)

    def test_matches_float_conversion(self) -> None:
        """Одинаковая десятичная запись → одинаковая пара"""
        assert parse_decimal("123456.7e-3") == normalize_float(123.4567)
        assert parse_decimal("0.1") == normalize_float(0.1)

    def test_optional_parts(self) -> None:
        assert parse_decimal("-.5") == (-5.0, -1.0)
        assert parse_decimal("5.") == (5.0, 0.0)
        assert parse_decimal("+12") == (1.2, 1.0)
        assert parse_decimal("2E+3") == (2.0, 3.0)

    def test_huge_exponent(self) -> None:
        assert parse_decimal("1e1000000") == (1.0, 1e6)
        assert parse_decimal("-4.2e-999999") == (-4.2, -999999.0)

    def test_exponent_beyond_range(self) -> None:
        limit = DEFAULT_RANGE.exp_limit
        assert parse_decimal("1e99999999999999999", exp_limit=limit) == INFINITY_PAIR
        assert parse_decimal("-1e99999999999999999", exp_limit=limit) == NEG_INFINITY_PAIR
        assert parse_decimal("1e-99999999999999999", exp_limit=limit) == ZERO_PAIR

    def test_zeros(self) -> None:
        assert parse_decimal("0") == ZERO_PAIR
        assert parse_decimal("-0.000e50") == ZERO_PAIR

    @pytest.mark.parametrize("text", ["", "abc", "1e", " 1", "1 ", "1.2.3", "e5", ".", "+", "1e+", "--1", "0x10"])
    def test_malformed(self, text: str) -> None:
        with pytest.raises(DecimalParseError) as exc_info:
            parse_decimal(text)
        assert exc_info.value.text == text

    def test_parse_error_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="Cannot parse"):
            parse_decimal("twelve")


# =============================================================================
# FORMATTING
# =============================================================================


class TestFormatGeneral:
    """Тесты для format_general"""

    def test_positional(self) -> None:
        assert format_general((1.79, 3.0)) == "1790"
        assert format_general((1.234567, 2.0)) == "123.4567"
        assert format_general((-2.5, -3.0)) == "-0.0025"
        assert format_general((1.0, 20.0)) == "100000000000000000000"

    def test_exponential(self) -> None:
        assert format_general((1.0, 308.0)) == "1e+308"
        assert format_general((1.5, 1000000.0)) == "1.5e+1000000"
        assert format_general((1.0, -7.0)) == "1e-7"
        assert format_general((-3.25, 21.0)) == "-3.25e+21"

    def test_specials(self) -> None:
        assert format_general(ZERO_PAIR) == "0"
        assert format_general(NAN_PAIR) == "NaN"
        assert format_general(INFINITY_PAIR) == "Infinity"
        assert format_general(NEG_INFINITY_PAIR) == "-Infinity"

    def test_round_trip(self) -> None:
        """parse(format(x)) == x для экспонент в широком диапазоне"""
        for mantissa in (1.2345678901234, -9.87654321, 3.0):
            for exponent in range(-30, 31, 3):
                pair = (mantissa, float(exponent))
                assert parse_decimal(format_general(pair)) == pair

    @pytest.mark.parametrize("exponent", [1e21, 1e100, 1e300, -1e300])
    def test_full_range_round_trip(self, exponent: float) -> None:
        """Экспоненты ≥ 1e21 пишутся целыми цифрами и разбираются обратно"""
        limit = FULL_RANGE.exp_limit
        pair = normalize(1.5, exponent, exp_limit=limit)
        text = format_general(pair)

        assert "e+1e" not in text and "e-1e" not in text
        assert parse_decimal(text, exp_limit=limit) == pair

    def test_full_range_exponent_digits(self) -> None:
        text = format_general(normalize(1.5, 1e21, exp_limit=FULL_RANGE.exp_limit))
        assert text == "1.5e+1" + "0" * 21


class TestFormatExponential:
    """Тесты для format_exponential"""

    def test_places(self) -> None:
        assert format_exponential((1.23456, 300.0), 2) == "1.23e+300"
        assert format_exponential((-1.5, -20.0), 1) == "-1.5e-20"

    def test_carry(self) -> None:
        """Округление 9.999 → 10.00 переносится в экспоненту"""
        assert format_exponential((9.999, -5.0), 2) == "1.00e-4"

    def test_zero_places(self) -> None:
        assert format_exponential((1.5, 3.0), 0) == "2e+3"

    def test_default_places(self) -> None:
        assert format_exponential((1.5, 0.0)) == "1.500000000000000e+0"

    def test_padding_beyond_precision(self) -> None:
        assert format_exponential((1.0, 5.0), 20) == "1." + "0" * 20 + "e+5"

    def test_specials(self) -> None:
        assert format_exponential(ZERO_PAIR, 2) == "0.00e+0"
        assert format_exponential(INFINITY_PAIR, 2) == "Infinity"
        assert format_exponential(NAN_PAIR, 2) == "NaN"

    def test_negative_places(self) -> None:
        with pytest.raises(ValueError, match="places"):
            format_exponential((1.0, 0.0), -1)

    def test_full_range_round_trip(self) -> None:
        limit = FULL_RANGE.exp_limit
        pair = normalize(-2.25, 1e300, exp_limit=limit)
        text = format_exponential(pair, 2)

        assert text.startswith("-2.25e+1")
        assert parse_decimal(text, exp_limit=limit) == pair


class TestFormatFixed:
    """Тесты для format_fixed"""

    def test_basic(self) -> None:
        assert format_fixed((1.0, 1.0), 1) == "10.0"
        assert format_fixed((1.234567, 2.0), 2) == "123.46"
        assert format_fixed((-1.5, 0.0), 0) == "-2"

    def test_carry(self) -> None:
        assert format_fixed((9.96, 0.0), 1) == "10.0"

    def test_small_values(self) -> None:
        assert format_fixed((5.0, -4.0), 3) == "0.001"
        assert format_fixed((4.9, -4.0), 3) == "0.000"
        assert format_fixed((5.0, -1.0), 0) == "1"
        assert format_fixed((2.5, -1.0), 0) == "0"
        assert format_fixed((1.25, -2.0), 4) == "0.0125"

    def test_rounds_to_unsigned_zero(self) -> None:
        assert format_fixed((-4.9, -4.0), 3) == "0.000"

    def test_large_integer_padding(self) -> None:
        assert format_fixed((1.0, 17.0), 2) == "100000000000000000.00"

    def test_beyond_fixed_limit(self) -> None:
        assert format_fixed((1.5, 25.0), 2) == "1.50e+25"

    def test_specials(self) -> None:
        assert format_fixed(ZERO_PAIR, 2) == "0.00"
        assert format_fixed(NEG_INFINITY_PAIR, 2) == "-Infinity"

    def test_negative_places(self) -> None:
        with pytest.raises(ValueError):
            format_fixed((1.0, 0.0), -2)


class TestFormatPrecision:
    """Тесты для format_precision"""

    def test_fixed_branch(self) -> None:
        assert format_precision((1.234567, 2.0), 4) == "123.5"

    def test_exponential_branch(self) -> None:
        assert format_precision((1.234567, 20.0), 4) == "1.235e+20"
        assert format_precision((1.5, -7.0), 3) == "1.50e-7"

    def test_zero(self) -> None:
        assert format_precision(ZERO_PAIR, 3) == "0.00"

    def test_invalid_precision(self) -> None:
        with pytest.raises(ValueError, match="precision"):
            format_precision((1.0, 0.0), 0)


class TestFormatWithSpec:
    """Тесты для format_with_spec"""

    def test_empty_spec_is_general(self) -> None:
        assert format_with_spec((1.5, 3.0), "") == "1500"

    def test_kinds(self) -> None:
        assert format_with_spec((1.5, 3.0), ".2e") == "1.50e+3"
        assert format_with_spec((1.5, 3.0), ".1f") == "1500.0"
        assert format_with_spec((1.5, 3.0), "f") == "1500.000000"
        assert format_with_spec((1.5, 3.0), ".3") == "1.50e+3"

    def test_uppercase(self) -> None:
        assert format_with_spec((1.5, 3.0), "E") == "1.500000E+3"
        assert format_with_spec((1.5, 3.0), "G") == "1500.00"

    def test_uppercase_specials_match_float(self) -> None:
        """inf/nan в верхнем регистре — как format(float, "E")"""
        assert format_with_spec(INFINITY_PAIR, "F") == format(float("inf"), "F") == "INF"
        assert format_with_spec(NEG_INFINITY_PAIR, "E") == format(float("-inf"), "E") == "-INF"
        assert format_with_spec(NAN_PAIR, ".2G") == format(float("nan"), ".2G") == "NAN"

    def test_lowercase_specials_unchanged(self) -> None:
        assert format_with_spec(INFINITY_PAIR, "e") == "Infinity"
        assert format_with_spec(NAN_PAIR, "f") == "NaN"

    @pytest.mark.parametrize("spec", ["x", ">10", ".2z", "e.2"])
    def test_invalid_spec(self, spec: str) -> None:
        with pytest.raises(ValueError, match="format specifier"):
            format_with_spec((1.0, 0.0), spec)


class TestMantissaWithDecimalPlaces:
    """Тесты для mantissa_with_decimal_places"""

    def test_rounding(self) -> None:
        assert mantissa_with_decimal_places((1.23456, 300.0), 2) == 1.23
        assert mantissa_with_decimal_places((-9.876, 5.0), 1) == -9.9

    def test_specials(self) -> None:
        assert mantissa_with_decimal_places(ZERO_PAIR, 3) == 0.0
        assert mantissa_with_decimal_places(INFINITY_PAIR, 3) == 1.0
