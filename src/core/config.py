"""
Range Configuration — Exponent Range & Numeric Constants

Модуль определяет диапазон экспоненты Decimal и общие численные константы:
- DEFAULT_RANGE: |exponent| ≤ 9e15, экспонента всегда точное целое
- FULL_RANGE: |exponent| ≤ 1.79e308, выше 2^53 экспонента теряет точность

Режим выбирается один раз при импорте через переменную окружения
BREAK_INFINITY_RANGE ("default" | "full"). После импорта режим не меняется.
"""

import logging
from dataclasses import dataclass
from typing import Final, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


# =============================================================================
# ЧИСЛЕННЫЕ КОНСТАНТЫ
# =============================================================================

# Максимум значащих десятичных цифр, различимых в double
MAX_SIGNIFICANT_DIGITS: Final[int] = 17

# Диапазон десятичных экспонент native float
NUMBER_EXP_MAX: Final[int] = 308
NUMBER_EXP_MIN: Final[int] = -324

# Толерантность привязки к целому при конверсии в float
ROUND_TOLERANCE: Final[float] = 1e-10

# Начиная с этой экспоненты значение не имеет различимой дробной части
INTEGER_PRECISION_EXPONENT: Final[int] = 16

# Значащие цифры при форматировании по умолчанию
DEFAULT_PRECISION: Final[int] = 16

# Начиная с этой экспоненты fixed-нотация переходит в exponential
FIXED_NOTATION_LIMIT: Final[int] = 21

# Относительная толерантность для *_tolerance сравнений
EPS_COMPARE_REL: Final[float] = 1e-9

RANGE_ENV_VAR: Final[str] = "BREAK_INFINITY_RANGE"


# =============================================================================
# RANGE CONFIG
# =============================================================================


@dataclass(frozen=True)
class RangeConfig:
    """Диапазон экспоненты.

    exp_limit — наибольший |exponent| до насыщения:
    выше +exp_limit → signed infinity, ниже -exp_limit → zero.
    """

    name: str
    exp_limit: float


DEFAULT_RANGE: Final[RangeConfig] = RangeConfig(name="default", exp_limit=9e15)
FULL_RANGE: Final[RangeConfig] = RangeConfig(name="full", exp_limit=1.79e308)

_RANGES: Final[dict[str, RangeConfig]] = {
    DEFAULT_RANGE.name: DEFAULT_RANGE,
    FULL_RANGE.name: FULL_RANGE,
}


class RangeSettings(BaseSettings):
    """Режим диапазона из окружения (BREAK_INFINITY_RANGE)."""

    range: Literal["default", "full"] = Field(
        default="default",
        description="Режим диапазона экспоненты: default (9e15) или full (1.79e308)",
    )

    model_config = SettingsConfigDict(env_prefix="BREAK_INFINITY_", extra="ignore")

    @field_validator("range", mode="before")
    @classmethod
    def normalize_range(cls, v):
        """Регистр и пробелы не важны; пустое значение означает default."""
        if isinstance(v, str):
            return v.strip().lower() or "default"
        return v


def load_range_config(settings: RangeSettings | None = None) -> RangeConfig:
    """
    Разрешение режима диапазона.

    Args:
        settings: Готовые настройки (default: прочитать из окружения)

    Returns:
        RangeConfig для значения BREAK_INFINITY_RANGE; DEFAULT_RANGE если не задано

    Raises:
        pydantic.ValidationError: Если значение не "default" и не "full"
            (подкласс ValueError)

    Examples:
        >>> load_range_config(RangeSettings(range="FULL")).name
        'full'
    """
    if settings is None:
        settings = RangeSettings()
    return _RANGES[settings.range]


ACTIVE_RANGE: Final[RangeConfig] = load_range_config()
EXP_LIMIT: Final[float] = ACTIVE_RANGE.exp_limit

logger.debug("Decimal exponent range: %s (exp_limit=%g)", ACTIVE_RANGE.name, EXP_LIMIT)
