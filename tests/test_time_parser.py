from datetime import datetime, time

import pytest

from core.calculations.time_parser import anchor_time, format_time, parse_time


@pytest.mark.parametrize("text, expected", [
    ("14:30", (14, 30)),
    ("08:05", (8, 5)),
    ("2:30 PM", (14, 30)),
    ("12:00 AM", (0, 0)),
    ("12:00 PM", (12, 0)),
    ("12:15 am", (0, 15)),
    ("11:59 pm", (23, 59)),
    ("14:30:00", (14, 30)),
    ("16:00 PM", (16, 0)),
    ("13:00 pm", (13, 0)),
])
def test_parse_time_formats(text, expected):
    assert parse_time(text) == expected


def test_parse_time_empty_input_is_midnight():
    assert parse_time("") == (0, 0)
    assert parse_time(None) == (0, 0)
    assert parse_time("   ") == (0, 0)


def test_parse_time_accepts_time_objects():
    assert parse_time(time(9, 5)) == (9, 5)


@pytest.mark.parametrize("text", ["abc", "24:00", "10:75", "25:00 PM", "9:00 XM", "9"])
def test_parse_time_rejects_malformed_input(text):
    with pytest.raises(ValueError):
        parse_time(text)


def test_format_time_pads():
    assert format_time(7, 5) == "07:05"


def test_anchor_time_uses_reference_day():
    reference = datetime(2026, 3, 14, 18, 45)
    assert anchor_time("2:30 PM", reference) == datetime(2026, 3, 14, 14, 30)
