from dataclasses import replace

import pytest

from core.shift.models import BreakInterval, ControlPoint, ShiftConfig
from utils.formatting import format_number, last_hour_interval_label, validate_shift_settings


def test_valid_settings(shift_with_breaks):
    errors, warnings, is_valid = validate_shift_settings(shift_with_breaks)
    assert is_valid
    assert errors == []
    assert warnings == []


def test_missing_shift_times():
    errors, _, is_valid = validate_shift_settings(ShiftConfig(shift_start="08:00"))
    assert not is_valid
    assert errors == ["Shift start and end times are required"]


def test_end_before_start(day_shift):
    errors, _, is_valid = validate_shift_settings(replace(day_shift, shift_end="07:00"))
    assert not is_valid
    assert "after shift start" in errors[0]


def test_unparseable_time(day_shift):
    _, _, is_valid = validate_shift_settings(replace(day_shift, shift_start="25:00"))
    assert not is_valid


def test_breaks_consuming_whole_shift(day_shift):
    config = replace(day_shift, breaks=[BreakInterval("08:00", "12:00"), BreakInterval("12:00", "16:00")])
    errors, _, is_valid = validate_shift_settings(config)
    assert not is_valid
    assert "Breaks take up the whole shift - no working time left" in errors


def test_overlapping_breaks(day_shift):
    config = replace(day_shift, breaks=[BreakInterval("09:00", "10:00"), BreakInterval("09:30", "10:30")])
    errors, _, is_valid = validate_shift_settings(config)
    assert not is_valid
    assert "Break 1 overlaps break 2" in errors


def test_break_outside_shift(day_shift):
    config = replace(day_shift, breaks=[BreakInterval("07:00", "07:30")])
    _, _, is_valid = validate_shift_settings(config)
    assert not is_valid


def test_incomplete_break_is_a_warning(day_shift):
    config = replace(day_shift, breaks=[BreakInterval("12:00", "")])
    _, warnings, is_valid = validate_shift_settings(config)
    assert is_valid
    assert len(warnings) == 1


def test_short_shift_warning(day_shift):
    config = replace(day_shift, shift_start="15:30")
    _, warnings, is_valid = validate_shift_settings(config)
    assert is_valid
    assert any("last-hour adjustment" in w for w in warnings)


def test_control_point_outside_shift_warning(day_shift):
    config = replace(day_shift, control_points=[ControlPoint("18:00")])
    _, warnings, is_valid = validate_shift_settings(config)
    assert is_valid
    assert any("outside the shift" in w for w in warnings)


def test_missing_speed_warning(day_shift):
    _, warnings, is_valid = validate_shift_settings(replace(day_shift, avg_speed=0))
    assert is_valid
    assert any("No average speed" in w for w in warnings)


def test_negative_numbers_rejected(day_shift):
    errors, _, is_valid = validate_shift_settings(replace(day_shift, expected_orders=-5))
    assert not is_valid
    assert "Expected number of orders must not be negative" in errors


@pytest.mark.parametrize("value, decimals, expected", [
    (None, None, "0"),
    (0, None, "0"),
    (1.14159, None, "1.14"),
    (-28.5714, 1, "-28.6"),
    (2, 0, "2"),
])
def test_format_number(value, decimals, expected):
    assert format_number(value, decimals) == expected


@pytest.mark.parametrize("shift_end, expected", [
    ("16:00", "15:00–16:00"),
    ("4:30 PM", "15:30–16:30"),
    ("00:30", "23:30–00:30"),
    ("", ""),
    ("garbage", ""),
])
def test_last_hour_interval_label(shift_end, expected):
    assert last_hour_interval_label(shift_end) == expected
