"""
Тесты для модуля Comparison Engine

Проверяет:
1. Порядок по знаку, экспоненте, мантиссе
2. Поведение NaN (неупорядочен)
3. min / max / clamp
4. Сравнения с относительным допуском
"""

import math

import pytest

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
from src.core.math.normalizer import (
    INFINITY_PAIR,
    NAN_PAIR,
    NEG_INFINITY_PAIR,
    ONE_PAIR,
    ZERO_PAIR,
    is_nan_pair,
)

# Строго возрастающая цепочка через все классы значений
ORDERED_CHAIN = [
    NEG_INFINITY_PAIR,
    (-1.0, 300.0),
    (-1.0, 0.0),
    (-1.0, -300.0),
    ZERO_PAIR,
    (1.0, -300.0),
    ONE_PAIR,
    (1.0, 300.0),
    INFINITY_PAIR,
]

ORDERED_PAIRS = [
    (lower, higher)
    for i, lower in enumerate(ORDERED_CHAIN)
    for higher in ORDERED_CHAIN[i + 1 :]
]


class TestCompare:
    """Тесты для compare и производных предикатов"""

    def test_positive_by_exponent(self) -> None:
        assert compare((3.224, 54.0), (1.24, 53.0)) == 1
        assert compare((1.24, 53.0), (3.224, 54.0)) == -1

    def test_negative_order_flipped(self) -> None:
        """Для отрицательных бо́льшая экспонента — меньшее значение"""
        assert compare((-1.0, 6.0), (-1.0, 5.0)) == -1
        assert compare((-3.0, 5.0), (-1.0, 5.0)) == -1

    def test_sign_first(self) -> None:
        assert compare(ZERO_PAIR, (-1.0, -300.0)) == 1
        assert compare((-9.0, 500.0), (1.0, -500.0)) == -1

    def test_equal(self) -> None:
        assert compare(ZERO_PAIR, ZERO_PAIR) == 0
        assert compare((2.5, 7.0), (2.5, 7.0)) == 0

    def test_infinities(self) -> None:
        assert compare(INFINITY_PAIR, (9.9, 9e15)) == 1
        assert compare(NEG_INFINITY_PAIR, (-9.9, 9e15)) == -1
        assert compare(INFINITY_PAIR, INFINITY_PAIR) == 0

    def test_nan_unordered(self) -> None:
        assert compare(NAN_PAIR, ONE_PAIR) is None
        assert compare(ONE_PAIR, NAN_PAIR) is None
        assert not less_than(NAN_PAIR, ONE_PAIR)
        assert not greater_equal(NAN_PAIR, NAN_PAIR)
        assert not equals(NAN_PAIR, NAN_PAIR)

    def test_predicates(self) -> None:
        assert less_than((1.0, 0.0), (2.0, 0.0))
        assert less_equal((2.0, 0.0), (2.0, 0.0))
        assert greater_than((1.0, 1.0), (9.0, 0.0))
        assert greater_equal((1.0, 1.0), (1.0, 1.0))

    def test_sign_of(self) -> None:
        assert sign_of((-2.0, 5.0)) == -1
        assert sign_of(ZERO_PAIR) == 0
        assert sign_of(INFINITY_PAIR) == 1
        assert sign_of(NAN_PAIR) == 0

    @pytest.mark.parametrize("lower, higher", ORDERED_PAIRS)
    def test_total_order_chain(self, lower: tuple, higher: tuple) -> None:
        """Каждая пара i < j цепочки упорядочена в обе стороны"""
        assert compare(lower, higher) == -1
        assert compare(higher, lower) == 1
        assert less_than(lower, higher)
        assert greater_than(higher, lower)
        assert not equals(lower, higher)


class TestMinMaxClamp:
    """Тесты для maximum / minimum / clamp"""

    def test_max_min(self) -> None:
        assert maximum((1.0, 2.0), (5.0, 1.0)) == (1.0, 2.0)
        assert minimum((1.0, 2.0), (5.0, 1.0)) == (5.0, 1.0)

    def test_nan_propagates(self) -> None:
        assert is_nan_pair(*maximum(NAN_PAIR, ONE_PAIR))
        assert is_nan_pair(*minimum(ONE_PAIR, NAN_PAIR))

    def test_clamp(self) -> None:
        assert clamp((5.0, 0.0), (1.0, 0.0), (2.0, 0.0)) == (2.0, 0.0)
        assert clamp((-5.0, 0.0), (1.0, 0.0), (2.0, 0.0)) == (1.0, 0.0)
        assert clamp((1.5, 0.0), (1.0, 0.0), (2.0, 0.0)) == (1.5, 0.0)


class TestTolerance:
    """Тесты для equals_tolerance / compare_tolerance"""

    def test_close_values(self) -> None:
        assert equals_tolerance((1.0, 100.0), (1.0000000001, 100.0))
        assert equals_tolerance((1.0, 1e6), (1.0000000001, 1e6))

    def test_distinct_values(self) -> None:
        assert not equals_tolerance((1.0, 100.0), (1.1, 100.0))
        assert not equals_tolerance((1.0, 100.0), (1.0, 101.0))

    def test_custom_tolerance(self) -> None:
        assert equals_tolerance((1.0, 0.0), (1.05, 0.0), tolerance=0.1)
        assert not equals_tolerance((1.0, 0.0), (1.05, 0.0), tolerance=0.01)

    def test_zero_tolerance_is_exact(self) -> None:
        assert equals_tolerance((2.0, 3.0), (2.0, 3.0), tolerance=0.0)
        assert not equals_tolerance((2.0, 3.0), (2.0000001, 3.0), tolerance=0.0)

    def test_specials(self) -> None:
        assert not equals_tolerance(NAN_PAIR, NAN_PAIR)
        assert equals_tolerance(INFINITY_PAIR, INFINITY_PAIR)
        assert not equals_tolerance(INFINITY_PAIR, (1.0, 100.0))

    def test_invalid_tolerance(self) -> None:
        with pytest.raises(ValueError):
            equals_tolerance(ONE_PAIR, ONE_PAIR, tolerance=-1e-9)
        with pytest.raises(ValueError):
            equals_tolerance(ONE_PAIR, ONE_PAIR, tolerance=math.nan)

    def test_compare_tolerance(self) -> None:
        assert compare_tolerance((1.0, 0.0), (1.0000000001, 0.0)) == 0
        assert compare_tolerance((1.0, 0.0), (2.0, 0.0)) == -1
        assert compare_tolerance(NAN_PAIR, ONE_PAIR) is None
