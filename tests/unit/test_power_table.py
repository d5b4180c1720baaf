"""
Тесты для модуля Power Table

Проверяет:
1. Значения таблицы и границы диапазона
2. Вычисление вне таблицы (overflow/underflow)
3. Однократное построение при конкурентном первом обращении
"""

import math
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.core.math import power_table
from src.core.math.power_table import (
    TABLE_MAX_POWER,
    TABLE_MIN_POWER,
    get_power_table,
    power_of_ten,
)


class TestPowerOfTen:
    """Тесты для power_of_ten"""

    def test_small_powers(self) -> None:
        assert power_of_ten(0) == 1.0
        assert power_of_ten(3) == 1000.0
        assert power_of_ten(-2) == 0.01

    def test_table_bounds(self) -> None:
        """Крайние элементы таблицы"""
        assert power_of_ten(TABLE_MAX_POWER) == 1e308
        assert power_of_ten(TABLE_MIN_POWER) == 1e-323

    def test_entries_match_literals(self) -> None:
        """Каждый элемент — ближайший к 10^i double"""
        for i in (-300, -17, -1, 1, 15, 22, 100, 307):
            assert power_of_ten(i) == float(f"1e{i}")

    def test_overflow_is_inf(self) -> None:
        assert power_of_ten(309) == math.inf
        assert power_of_ten(10_000) == math.inf

    def test_underflow_is_zero(self) -> None:
        assert power_of_ten(-400) == 0.0


class TestGetPowerTable:
    """Тесты для get_power_table"""

    def test_length(self) -> None:
        assert len(get_power_table()) == TABLE_MAX_POWER - TABLE_MIN_POWER + 1

    def test_cached(self) -> None:
        assert get_power_table() is get_power_table()

    def test_single_build_under_concurrency(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Конкурентное первое обращение строит таблицу ровно один раз"""
        original_build = power_table._build_table
        calls = []
        start = threading.Barrier(16)

        def counting_build() -> tuple[float, ...]:
            calls.append(1)
            return original_build()

        def first_access() -> tuple[float, ...]:
            start.wait()
            return get_power_table()

        monkeypatch.setattr(power_table, "_TABLE", None)
        monkeypatch.setattr(power_table, "_build_table", counting_build)

        with ThreadPoolExecutor(max_workers=16) as pool:
            tables = list(pool.map(lambda _: first_access(), range(16)))

        assert len(calls) == 1
        assert all(table is tables[0] for table in tables)
        assert tables[0][-TABLE_MIN_POWER] == 1.0
