"""
Time-of-Day Parsing

Converts user-entered time strings ("HH:MM" or "HH:MM AM/PM") into 24-hour
(hours, minutes) pairs and anchors them to a calendar day.
"""

import logging
from datetime import datetime, time
from typing import Tuple, Union

logger = logging.getLogger(__name__)

TimeValue = Union[str, time, None]


def _parse_clock(clock: str, raw: str) -> Tuple[int, int]:
    parts = clock.split(':')
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time '{raw}'. Expected HH:MM or HH:MM AM/PM")
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        raise ValueError(f"Invalid time '{raw}'. Expected HH:MM or HH:MM AM/PM")
    if not 0 <= minutes <= 59:
        raise ValueError(f"Invalid minutes in time '{raw}'")
    return hours, minutes


def parse_time(value: TimeValue) -> Tuple[int, int]:
    """
    Parse a time-of-day into a 24-hour (hours, minutes) pair.

    A space in the string selects 12-hour parsing ("2:30 PM"); otherwise the
    string is read as 24-hour "HH:MM" (a trailing ":SS" is ignored).

    12-hour rules:
    - 12 AM -> hour 0
    - PM hours below 12 gain 12
    - 12 PM stays 12, and so does any hour already past noon ("16:00 PM")

    Args:
        value: Time string, datetime.time, or None/empty

    Returns:
        (hours, minutes); (0, 0) for empty input

    Raises:
        ValueError: If a non-empty string is not a recognizable time

    Examples:
        >>> parse_time("14:30")
        (14, 30)
        >>> parse_time("2:30 PM")
        (14, 30)
        >>> parse_time("12:00 AM")
        (0, 0)
    """
    if isinstance(value, time):
        return value.hour, value.minute

    if not value:
        return 0, 0

    text = str(value).strip()
    if not text:
        return 0, 0

    if ' ' not in text:
        hours, minutes = _parse_clock(text, text)
        if not 0 <= hours <= 23:
            raise ValueError(f"Invalid hours in time '{text}'")
        return hours, minutes

    clock, modifier = text.split(None, 1)
    modifier = modifier.strip().upper()
    if modifier not in ('AM', 'PM'):
        raise ValueError(f"Invalid meridiem '{modifier}' in time '{text}'")

    hours, minutes = _parse_clock(clock, text)
    if not 0 <= hours <= 23:
        raise ValueError(f"Invalid hours in time '{text}'")

    if modifier == 'PM' and hours < 12:
        hours += 12
    if modifier == 'AM' and hours == 12:
        hours = 0

    return hours, minutes


def format_time(hours: int, minutes: int) -> str:
    """Render a 24-hour (hours, minutes) pair as HH:MM"""
    return f"{hours:02d}:{minutes:02d}"


def anchor_time(value: TimeValue, reference: datetime) -> datetime:
    """
    Build the instant at ``value`` on the same calendar day as ``reference``.

    The result is naive (local wall clock).
    """
    hours, minutes = parse_time(value)
    return datetime(reference.year, reference.month, reference.day, hours, minutes)
