from __future__ import annotations

from datetime import date, datetime

import pytest

from core.shift.models import ActualsState, BreakInterval, ControlPoint, ShiftConfig
from core.storage.store import LocalStore

SHIFT_DAY = date(2026, 10, 19)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(SHIFT_DAY.year, SHIFT_DAY.month, SHIFT_DAY.day, hour, minute)


@pytest.fixture()
def day_shift() -> ShiftConfig:
    """08:00-16:00, no breaks, 800 orders, 25 orders/h per worker, 2 in the last hour"""
    return ShiftConfig(
        shift_start="08:00",
        shift_end="16:00",
        expected_orders=800,
        avg_speed=25,
        staff_for_last_period=2,
    )


@pytest.fixture()
def shift_with_breaks() -> ShiftConfig:
    return ShiftConfig(
        shift_start="08:00",
        shift_end="16:00",
        breaks=[BreakInterval("09:00", "09:15"), BreakInterval("12:00", "12:30")],
        control_points=[ControlPoint("10:00"), ControlPoint("14:00")],
        expected_orders=725,
        avg_speed=25,
        staff_for_last_period=2,
    )


@pytest.fixture()
def actuals() -> ActualsState:
    return ActualsState(picked_actual=450, packed_actual=400)


@pytest.fixture()
def store(tmp_path) -> LocalStore:
    return LocalStore(str(tmp_path / "store.json"))
