"""
Decimal — Immutable Big-Number Value Object

Число вида mantissa × 10^exponent с мантиссой double и экспонентой,
хранимой как float. Диапазон: до 10^(9e15) в режиме default и до
10^(1.79e308) в режиме full (см. src.core.config).

Immutable: каждая операция возвращает новый экземпляр, прошедший
normalize. Операторы делегируют в src.core.math (функции над парами).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Экземпляр создаётся только через Normalizer
2. 1 ≤ |mantissa| < 10 для обычных значений
3. Zero = (0, 0), NaN = (nan, nan), ±Infinity = (±1, inf)
4. Равенство — точное совпадение пары, без epsilon; int, Fraction и
   decimal.Decimal дополнительно должны точно равняться float этой пары
"""

import math
import numbers
from decimal import Decimal as StdDecimal
from typing import Any, Mapping, Union

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from src.core.codec import text as text_codec
from src.core.config import EPS_COMPARE_REL, NUMBER_EXP_MAX, NUMBER_EXP_MIN
from src.core.math import arithmetic, comparison, transcendental
from src.core.math.normalizer import (
    INFINITY_PAIR,
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

DecimalLike = Union["Decimal", int, float, str, numbers.Rational, StdDecimal]


def _std_decimal_pair(value: StdDecimal) -> Pair:
    if value.is_nan():
        return NAN_PAIR
    if value.is_infinite():
        return signed_infinity(-1.0 if value.is_signed() else 1.0)
    sign, digits, exponent = value.as_tuple()
    return normalize_digits(bool(sign), "".join(map(str, digits)), int(exponent))


def _to_pair(value: Any) -> Pair:
    """
    Нормализованная пара для поддерживаемого значения.

    Raises:
        TypeError: Если тип не поддерживается
        DecimalParseError: Если строка не является десятичным литералом
    """
    if isinstance(value, Decimal):
        return value.pair
    if isinstance(value, float):
        return normalize_float(value)
    if isinstance(value, numbers.Integral):
        return normalize_int(int(value))
    if isinstance(value, str):
        return text_codec.parse_decimal(value)
    if isinstance(value, StdDecimal):
        return _std_decimal_pair(value)
    if isinstance(value, numbers.Rational):
        return arithmetic.divide(
            normalize_int(int(value.numerator)), normalize_int(int(value.denominator))
        )
    if isinstance(value, numbers.Real):
        return normalize_float(float(value))
    raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")


def _operand_pair(value: Any) -> Pair | None:
    """Пара для операнда оператора; None — оператор не поддерживает тип."""
    if isinstance(value, Decimal):
        return value.pair
    if isinstance(value, str):
        return None
    try:
        return _to_pair(value)
    except TypeError:
        return None


def _power_operand(value: Any) -> float:
    if isinstance(value, Decimal):
        return value.to_float()
    return float(value)


def _native_float(pair: Pair) -> float | None:
    """Native float с той же парой; None, если такого float нет."""
    mantissa, exponent = pair
    if is_nan_pair(mantissa, exponent):
        return None
    if exponent == math.inf:
        return math.copysign(math.inf, mantissa)
    if mantissa == 0.0:
        return 0.0
    if not NUMBER_EXP_MIN <= exponent <= NUMBER_EXP_MAX:
        return None
    value = float(f"{mantissa!r}e{int(exponent)}")
    if math.isinf(value) or normalize_float(value) != pair:
        return None
    return value


class Decimal:
    """
    Большое число с double-точностью мантиссы.

    Конструктор принимает Decimal, int (любого размера, точно), float,
    str (десятичный литерал), fractions.Fraction, decimal.Decimal.

    Examples:
        >>> Decimal("123456.7e-3") == Decimal(123.4567)
        True
        >>> Decimal(2) * 5
        Decimal('10')
        >>> Decimal(2) ** 10
        Decimal('1024')
        >>> str(Decimal("1.5e1000000"))
        '1.5e+1000000'
    """

    __slots__ = ("mantissa", "exponent")

    mantissa: float
    exponent: float

    ZERO: "Decimal"
    ONE: "Decimal"
    NAN: "Decimal"
    INFINITY: "Decimal"
    NEG_INFINITY: "Decimal"

    def __init__(self, value: DecimalLike = 0) -> None:
        mantissa, exponent = _to_pair(value)
        object.__setattr__(self, "mantissa", mantissa)
        object.__setattr__(self, "exponent", exponent)

    @classmethod
    def _from_pair(cls, pair: Pair) -> "Decimal":
        # Только для пар, уже прошедших normalize
        instance = object.__new__(cls)
        object.__setattr__(instance, "mantissa", pair[0])
        object.__setattr__(instance, "exponent", pair[1])
        return instance

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self)._from_pair, (self.pair,))

    def __copy__(self) -> "Decimal":
        return self

    def __deepcopy__(self, memo: dict) -> "Decimal":
        return self

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def from_float(cls, value: float) -> "Decimal":
        return cls._from_pair(normalize_float(float(value)))

    @classmethod
    def from_int(cls, value: int) -> "Decimal":
        return cls._from_pair(normalize_int(value))

    @classmethod
    def from_string(cls, text: str) -> "Decimal":
        """
        Разбор десятичного литерала.

        Raises:
            DecimalParseError: Если строка не соответствует грамматике
        """
        return cls._from_pair(text_codec.parse_decimal(text))

    @classmethod
    def from_mantissa_exponent(cls, mantissa: float, exponent: float) -> "Decimal":
        """
        Decimal из произвольной пары (пара нормализуется).

        Examples:
            >>> Decimal.from_mantissa_exponent(123.0, 5).pair
            (1.23, 7.0)
        """
        return cls._from_pair(normalize(mantissa, exponent))

    @classmethod
    def from_decimal(cls, value: "Decimal") -> "Decimal":
        return cls._from_pair(value.pair)

    @classmethod
    def from_value(cls, value: DecimalLike) -> "Decimal":
        if type(value) is cls:
            return value
        return cls._from_pair(_to_pair(value))

    @classmethod
    def pow10(cls, power: float) -> "Decimal":
        """10^power."""
        return cls._from_pair(transcendental.pow10(power))

    # =========================================================================
    # СОСТОЯНИЕ
    # =========================================================================

    @property
    def pair(self) -> Pair:
        return (self.mantissa, self.exponent)

    def is_zero(self) -> bool:
        return self.mantissa == 0.0

    def is_nan(self) -> bool:
        return is_nan_pair(self.mantissa, self.exponent)

    def is_infinite(self) -> bool:
        return is_infinite_pair(self.mantissa, self.exponent)

    def is_finite(self) -> bool:
        return not (self.is_nan() or self.is_infinite())

    def sign(self) -> int:
        """-1 / 0 / 1; для NaN — 0."""
        return comparison.sign_of(self.pair)

    def to_float(self) -> float:
        """
        Ближайшее native float значение (±inf / 0.0 вне диапазона double).

        Examples:
            >>> Decimal(1024).to_float()
            1024.0
            >>> Decimal("1e400").to_float()
            inf
        """
        return denormalize(self.mantissa, self.exponent)

    def __float__(self) -> float:
        return self.to_float()

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __hash__(self) -> int:
        value = _native_float(self.pair)
        if value is not None:
            return hash(value)
        return hash(self.pair)

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def neg(self) -> "Decimal":
        return self._from_pair(arithmetic.negate(self.pair))

    def abs(self) -> "Decimal":
        return self._from_pair(arithmetic.absolute(self.pair))

    def recip(self) -> "Decimal":
        return self._from_pair(arithmetic.reciprocal(self.pair))

    def add(self, other: DecimalLike) -> "Decimal":
        return self._from_pair(arithmetic.add(self.pair, _to_pair(other)))

    def sub(self, other: DecimalLike) -> "Decimal":
        return self._from_pair(arithmetic.subtract(self.pair, _to_pair(other)))

    def mul(self, other: DecimalLike) -> "Decimal":
        return self._from_pair(arithmetic.multiply(self.pair, _to_pair(other)))

    def div(self, other: DecimalLike) -> "Decimal":
        return self._from_pair(arithmetic.divide(self.pair, _to_pair(other)))

    def __neg__(self) -> "Decimal":
        return self.neg()

    def __pos__(self) -> "Decimal":
        return self

    def __abs__(self) -> "Decimal":
        return self.abs()

    def __add__(self, other: Any) -> "Decimal":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return self._from_pair(arithmetic.add(self.pair, pair))

    def __radd__(self, other: Any) -> "Decimal":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return self._from_pair(arithmetic.add(pair, self.pair))

    def __sub__(self, other: Any) -> "Decimal":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return self._from_pair(arithmetic.subtract(self.pair, pair))

    def __rsub__(self, other: Any) -> "Decimal":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return self._from_pair(arithmetic.subtract(pair, self.pair))

    def __mul__(self, other: Any) -> "Decimal":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return self._from_pair(arithmetic.multiply(self.pair, pair))

    def __rmul__(self, other: Any) -> "Decimal":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return self._from_pair(arithmetic.multiply(pair, self.pair))

    def __truediv__(self, other: Any) -> "Decimal":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return self._from_pair(arithmetic.divide(self.pair, pair))

    def __rtruediv__(self, other: Any) -> "Decimal":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return self._from_pair(arithmetic.divide(pair, self.pair))

    def __pow__(self, power: Any, modulo: None = None) -> "Decimal":
        if modulo is not None:
            raise TypeError("Decimal does not support modular pow()")
        if not isinstance(power, (Decimal, numbers.Real)):
            return NotImplemented
        return self.pow(_power_operand(power))

    def __rpow__(self, base: Any) -> "Decimal":
        pair = _operand_pair(base)
        if pair is None:
            return NotImplemented
        return self._from_pair(transcendental.power(pair, self.to_float()))

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def compare(self, other: DecimalLike) -> int | None:
        """
        -1 / 0 / 1, или None если хотя бы один операнд NaN.

        Examples:
            >>> Decimal("1e100").compare(Decimal("-1e200"))
            1
        """
        return comparison.compare(self.pair, _to_pair(other))

    def __eq__(self, other: Any) -> bool:
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        if not comparison.equals(self.pair, pair):
            return False
        if isinstance(other, (Decimal, float)):
            return True
        # int, Fraction, decimal.Decimal: равны только float с той же парой, как в __hash__
        value = _native_float(self.pair)
        return value is not None and value == other

    def __lt__(self, other: Any) -> bool:
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return comparison.less_than(self.pair, pair)

    def __le__(self, other: Any) -> bool:
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return comparison.less_equal(self.pair, pair)

    def __gt__(self, other: Any) -> bool:
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return comparison.greater_than(self.pair, pair)

    def __ge__(self, other: Any) -> bool:
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return comparison.greater_equal(self.pair, pair)

    def max(self, other: DecimalLike) -> "Decimal":
        return self._from_pair(comparison.maximum(self.pair, _to_pair(other)))

    def min(self, other: DecimalLike) -> "Decimal":
        return self._from_pair(comparison.minimum(self.pair, _to_pair(other)))

    def clamp(self, lower: DecimalLike, upper: DecimalLike) -> "Decimal":
        return self._from_pair(comparison.clamp(self.pair, _to_pair(lower), _to_pair(upper)))

    def clamp_min(self, lower: DecimalLike) -> "Decimal":
        return self.max(lower)

    def clamp_max(self, upper: DecimalLike) -> "Decimal":
        return self.min(upper)

    def eq_tolerance(self, other: DecimalLike, tolerance: float = EPS_COMPARE_REL) -> bool:
        """
        Равенство с относительным допуском: |a - b| ≤ tolerance × max(|a|, |b|).

        Examples:
            >>> Decimal("1e500").eq_tolerance(Decimal("1.0000000001e500"))
            True
        """
        return comparison.equals_tolerance(self.pair, _to_pair(other), tolerance)

    def neq_tolerance(self, other: DecimalLike, tolerance: float = EPS_COMPARE_REL) -> bool:
        return not self.eq_tolerance(other, tolerance)

    def lt_tolerance(self, other: DecimalLike, tolerance: float = EPS_COMPARE_REL) -> bool:
        return comparison.compare_tolerance(self.pair, _to_pair(other), tolerance) == -1

    def lte_tolerance(self, other: DecimalLike, tolerance: float = EPS_COMPARE_REL) -> bool:
        return comparison.compare_tolerance(self.pair, _to_pair(other), tolerance) in (-1, 0)

    def gt_tolerance(self, other: DecimalLike, tolerance: float = EPS_COMPARE_REL) -> bool:
        return comparison.compare_tolerance(self.pair, _to_pair(other), tolerance) == 1

    def gte_tolerance(self, other: DecimalLike, tolerance: float = EPS_COMPARE_REL) -> bool:
        return comparison.compare_tolerance(self.pair, _to_pair(other), tolerance) in (0, 1)

    def compare_tolerance(
        self, other: DecimalLike, tolerance: float = EPS_COMPARE_REL
    ) -> int | None:
        return comparison.compare_tolerance(self.pair, _to_pair(other), tolerance)

    # =========================================================================
    # ОКРУГЛЕНИЯ
    # =========================================================================

    def floor(self) -> "Decimal":
        return self._from_pair(transcendental.floor(self.pair))

    def ceil(self) -> "Decimal":
        return self._from_pair(transcendental.ceil(self.pair))

    def round(self) -> "Decimal":
        """Округление к целому, половины — от нуля."""
        return self._from_pair(transcendental.round_nearest(self.pair))

    def trunc(self) -> "Decimal":
        return self._from_pair(transcendental.trunc(self.pair))

    def __floor__(self) -> "Decimal":
        return self.floor()

    def __ceil__(self) -> "Decimal":
        return self.ceil()

    def __trunc__(self) -> "Decimal":
        return self.trunc()

    def __round__(self, ndigits: int | None = None) -> "Decimal":
        if ndigits is None:
            return self.round()
        scale = Decimal.pow10(ndigits)
        return (self * scale).round() / scale

    # =========================================================================
    # СТЕПЕНИ И ЛОГАРИФМЫ
    # =========================================================================

    def pow(self, power: float) -> "Decimal":
        """
        self^power.

        Examples:
            >>> Decimal(2).pow(10).pair
            (1.024, 3.0)
            >>> Decimal(-8).pow(0.5).is_nan()
            True
        """
        return self._from_pair(transcendental.power(self.pair, power))

    def sqrt(self) -> "Decimal":
        return self._from_pair(transcendental.sqrt(self.pair))

    def exp(self) -> "Decimal":
        return self._from_pair(transcendental.exp(self.pair))

    def ln(self) -> float:
        return transcendental.ln(self.pair)

    def log10(self) -> float:
        """
        Десятичный логарифм как float: exponent + log10(mantissa).

        Examples:
            >>> Decimal("1e1000").log10()
            1000.0
        """
        return transcendental.log10(self.pair)

    def log2(self) -> float:
        return transcendental.log2(self.pair)

    def log(self, base: DecimalLike) -> float:
        return transcendental.log(self.pair, _to_pair(base))

    # =========================================================================
    # ФОРМАТИРОВАНИЕ
    # =========================================================================

    def to_string(self) -> str:
        return text_codec.format_general(self.pair)

    def to_exponential(self, places: int | None = None) -> str:
        return text_codec.format_exponential(self.pair, places)

    def to_fixed(self, places: int = 0) -> str:
        return text_codec.format_fixed(self.pair, places)

    def to_precision(self, precision: int | None = None) -> str:
        return text_codec.format_precision(self.pair, precision)

    def to_string_with_decimal_places(self, places: int) -> str:
        return self.to_exponential(places)

    def mantissa_with_decimal_places(self, places: int) -> float:
        return text_codec.mantissa_with_decimal_places(self.pair, places)

    def to_json(self) -> str:
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_string()!r})"

    def __format__(self, spec: str) -> str:
        return text_codec.format_with_spec(self.pair, spec)

    # =========================================================================
    # PYDANTIC
    # =========================================================================

    def to_record_dict(self) -> dict[str, float]:
        return {"mantissa": self.mantissa, "exponent": self.exponent}

    @classmethod
    def _validate(cls, value: Any) -> "Decimal":
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            try:
                mantissa = value["mantissa"]
                exponent = value["exponent"]
            except KeyError as exc:
                raise ValueError(f"Decimal record is missing {exc.args[0]!r}") from exc
            if not isinstance(mantissa, numbers.Real) or not isinstance(exponent, numbers.Real):
                raise ValueError("Decimal record fields must be numbers")
            return cls.from_mantissa_exponent(float(mantissa), float(exponent))
        try:
            return cls.from_value(value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.to_record_dict
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {
            "type": "object",
            "properties": {
                "mantissa": {"type": "number"},
                "exponent": {"type": "number"},
            },
            "required": ["mantissa", "exponent"],
        }


Decimal.ZERO = Decimal._from_pair(ZERO_PAIR)
Decimal.ONE = Decimal._from_pair(ONE_PAIR)
Decimal.NAN = Decimal._from_pair(NAN_PAIR)
Decimal.INFINITY = Decimal._from_pair(INFINITY_PAIR)
Decimal.NEG_INFINITY = Decimal._from_pair(NEG_INFINITY_PAIR)
