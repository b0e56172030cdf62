"""
Shift Clock

Effective working time of a same-day shift, net of breaks, seen from a
reference instant (now or a control point).
"""

import logging
from datetime import datetime
from typing import Optional

import pytz

from config import Config
from core.calculations.intervals import accumulate_intervals
from core.calculations.time_parser import anchor_time
from core.shift.models import ShiftClock, ShiftConfig

logger = logging.getLogger(__name__)


def local_now(timezone: Optional[str] = None) -> datetime:
    """
    Current local wall-clock time as a naive datetime.

    Args:
        timezone: Timezone name (defaults to Config.TIMEZONE)
    """
    tz = pytz.timezone(timezone or Config.TIMEZONE)
    return datetime.now(tz).replace(tzinfo=None)


def to_wall_clock(reference: datetime) -> datetime:
    """Drop tzinfo, keeping the local wall-clock reading"""
    if reference.tzinfo is not None:
        return reference.replace(tzinfo=None)
    return reference


def compute_shift_clock(config: ShiftConfig, reference: datetime) -> ShiftClock:
    """
    Compute total and elapsed effective work time for a shift.

    - total_shift_hours = end - start
    - total_work_time = total_shift_hours - all break time, never negative
    - raw elapsed = reference - start, clamped to [0, total_shift_hours]
    - hours_passed = raw elapsed - break time already behind the reference,
      clamped to [0, total_work_time]

    Args:
        config: Shift configuration (start/end must be set)
        reference: Instant to measure from; a timezone-aware value is read
                   as its local wall clock

    Returns:
        ShiftClock; all zeros when the shift window is not configured or
        its bounds cannot be parsed
    """
    if not config.is_configured:
        return ShiftClock()

    reference = to_wall_clock(reference)
    try:
        shift_start = anchor_time(config.shift_start, reference)
        shift_end = anchor_time(config.shift_end, reference)
    except ValueError as e:
        logger.warning(f"Unusable shift bounds - no working time: {e}")
        return ShiftClock()

    total_shift_hours = (shift_end - shift_start).total_seconds() / 3600.0
    if total_shift_hours <= 0:
        logger.warning(
            f"Shift end ({config.shift_end}) is not after shift start "
            f"({config.shift_start}) - no working time"
        )
        return ShiftClock(total_shift_hours=total_shift_hours)

    breaks = accumulate_intervals(config.breaks, reference)
    total_work_time = max(total_shift_hours - breaks.total_hours, 0.0)

    raw_elapsed = (reference - shift_start).total_seconds() / 3600.0
    raw_elapsed = min(max(raw_elapsed, 0.0), total_shift_hours)

    hours_passed = max(raw_elapsed - breaks.elapsed_hours, 0.0)
    hours_passed = min(hours_passed, total_work_time)

    return ShiftClock(
        total_shift_hours=total_shift_hours,
        total_break_hours=breaks.total_hours,
        total_work_time=total_work_time,
        hours_passed=hours_passed,
    )
