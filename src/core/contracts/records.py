"""
DecimalRecord — Serialized Form of Decimal

Immutable Pydantic модель пары {mantissa, exponent}.
Соответствует схеме schema/decimal_record.json.

Запись хранит уже нормализованную пару: ненормализованный ввод отклоняется,
а не исправляется, чтобы сериализованные данные оставались каноническими.
NaN и ±Infinity в JSON пишутся как константы NaN / Infinity.
"""

import math

from pydantic import BaseModel, Field, model_validator

from src.core.config import EXP_LIMIT
from src.core.domain.big_decimal import Decimal
from src.core.math.normalizer import is_nan_pair


class DecimalRecord(BaseModel):
    """
    Сериализуемая форма Decimal.

    Immutable модель (frozen=True). Значение = mantissa × 10^exponent.
    """

    mantissa: float = Field(..., description="Мантисса: 1 ≤ |mantissa| < 10, 0 для нуля")
    exponent: float = Field(..., description="Десятичная экспонента (целое значение)")

    model_config = {"frozen": True, "ser_json_inf_nan": "constants"}

    @model_validator(mode="after")
    def validate_normalized(self) -> "DecimalRecord":
        """Пара должна быть нормализована (включая sentinel-пары)."""
        mantissa, exponent = self.mantissa, self.exponent

        if is_nan_pair(mantissa, exponent):
            if not (math.isnan(mantissa) and math.isnan(exponent)):
                raise ValueError("NaN record must have both mantissa and exponent NaN")
            return self
        if exponent == math.inf:
            if abs(mantissa) != 1.0:
                raise ValueError(f"Infinity record must have mantissa ±1, got {mantissa}")
            return self
        if mantissa == 0.0:
            if exponent != 0.0:
                raise ValueError(f"Zero record must have exponent 0, got {exponent}")
            return self

        if not 1.0 <= abs(mantissa) < 10.0:
            raise ValueError(f"mantissa {mantissa} is not normalized to 1 <= |m| < 10")
        if not exponent.is_integer():
            raise ValueError(f"exponent {exponent} is not integral")
        if abs(exponent) > EXP_LIMIT:
            raise ValueError(f"exponent {exponent} exceeds range limit {EXP_LIMIT:g}")
        return self

    @classmethod
    def from_decimal(cls, value: Decimal) -> "DecimalRecord":
        return cls(mantissa=value.mantissa, exponent=value.exponent)

    def to_decimal(self) -> Decimal:
        return Decimal.from_mantissa_exponent(self.mantissa, self.exponent)
