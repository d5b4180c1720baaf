"""
Power Table — Cached Powers of Ten

Таблица 10^i для i ∈ [NUMBER_EXP_MIN + 1, NUMBER_EXP_MAX] (т.е. -323..308).

Таблица строится ровно один раз при первом обращении (double-checked
locking) и после этого только читается, поэтому конкурентные чтения
не требуют синхронизации. Значения получены разбором литералов "1e{i}",
то есть каждое — ближайший к 10^i double.

Вне диапазона таблицы power_of_ten считает 10.0 ** i напрямую.
"""

import logging
import math
import threading
from typing import Final

from src.core.config import NUMBER_EXP_MAX, NUMBER_EXP_MIN

logger = logging.getLogger(__name__)

# Наименьшая степень в таблице: 1e-324 уже округляется к нулю
TABLE_MIN_POWER: Final[int] = NUMBER_EXP_MIN + 1
TABLE_MAX_POWER: Final[int] = NUMBER_EXP_MAX

_TABLE: tuple[float, ...] | None = None
_TABLE_LOCK = threading.Lock()


def _build_table() -> tuple[float, ...]:
    return tuple(float(f"1e{i}") for i in range(TABLE_MIN_POWER, TABLE_MAX_POWER + 1))


def get_power_table() -> tuple[float, ...]:
    """
    Таблица степеней десяти, построенная при первом вызове.

    Returns:
        Кортеж, где элемент с индексом k равен 10^(k + TABLE_MIN_POWER)
    """
    global _TABLE

    table = _TABLE
    if table is not None:
        return table

    with _TABLE_LOCK:
        if _TABLE is None:
            _TABLE = _build_table()
            logger.debug(
                "Built power-of-ten table for [%d, %d]", TABLE_MIN_POWER, TABLE_MAX_POWER
            )
        return _TABLE


def power_of_ten(power: int) -> float:
    """
    10^power как float.

    Args:
        power: Целая степень

    Returns:
        Значение из таблицы для power ∈ [-323, 308];
        иначе прямое вычисление (inf при переполнении, 0.0 при underflow)

    Examples:
        >>> power_of_ten(3)
        1000.0
        >>> power_of_ten(-2)
        0.01
        >>> power_of_ten(400)
        inf
    """
    if TABLE_MIN_POWER <= power <= TABLE_MAX_POWER:
        return get_power_table()[power - TABLE_MIN_POWER]

    try:
        return 10.0 ** power
    except OverflowError:
        return math.inf
