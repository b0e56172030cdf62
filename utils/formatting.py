"""
Formatting Utilities

Functions for formatting figures and timestamps and validating shift settings.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from config import Config
from core.calculations.time_parser import format_time, parse_time
from core.shift.models import ShiftConfig

logger = logging.getLogger(__name__)


def format_number(value, decimals: Optional[int] = None) -> str:
    """
    Format a figure for display, rendering missing values as "0".

    Args:
        value: Number or None
        decimals: Decimal places (defaults to Config.DISPLAY_DECIMALS)
    """
    if decimals is None:
        decimals = Config.DISPLAY_DECIMALS
    if not value:
        return "0"
    try:
        return f"{float(value):.{decimals}f}"
    except (TypeError, ValueError):
        return "0"


def format_saved_at(saved_at: Optional[datetime]) -> str:
    """Render a save timestamp as YYYY-MM-DD HH:MM:SS (empty if never saved)"""
    if saved_at is None:
        return ""
    return saved_at.strftime("%Y-%m-%d %H:%M:%S")


def last_hour_interval_label(shift_end: str) -> str:
    """
    Label for the final working hour, e.g. "15:00–16:00".

    Returns an empty string when the shift end is unset or unparseable.
    """
    if not shift_end:
        return ""
    try:
        hours, minutes = parse_time(shift_end)
    except ValueError:
        return ""
    end = datetime(2000, 1, 1, hours, minutes)
    start = end - timedelta(hours=1)
    return f"{start.strftime('%H:%M')}–{format_time(hours, minutes)}"


def _minutes(value: str) -> int:
    hours, minutes = parse_time(value)
    return hours * 60 + minutes


def validate_shift_settings(config: ShiftConfig) -> Tuple[List[str], List[str], bool]:
    """
    Validate shift settings before they are saved.

    Rejects configurations the calculation engine cannot plan against
    (unparseable times, end not after start, breaks consuming the whole
    shift) so no division by a non-positive work time reaches it.

    Args:
        config: Shift configuration from the settings form

    Returns:
        Tuple of (validation_errors, validation_warnings, is_valid)
    """
    validation_errors = []
    validation_warnings = []

    if not config.shift_start or not config.shift_end:
        validation_errors.append("Shift start and end times are required")
        return validation_errors, validation_warnings, False

    try:
        start_min = _minutes(config.shift_start)
        end_min = _minutes(config.shift_end)
    except ValueError as e:
        validation_errors.append(f"Invalid shift time: {e}")
        return validation_errors, validation_warnings, False

    if end_min <= start_min:
        validation_errors.append("Shift end time must be after shift start time (overnight shifts are not supported)")
        return validation_errors, validation_warnings, False

    # Breaks
    break_ranges = []
    for i, brk in enumerate(config.breaks, start=1):
        if not brk.is_complete:
            validation_warnings.append(f"⚠️ Break {i} is missing a start or end time and will be ignored")
            continue
        try:
            b_start = _minutes(brk.start)
            b_end = _minutes(brk.end)
        except ValueError as e:
            validation_errors.append(f"Break {i}: {e}")
            continue
        if b_end <= b_start:
            validation_errors.append(f"Break {i}: end time must be after start time")
            continue
        if b_start < start_min or b_end > end_min:
            validation_errors.append(f"Break {i} ({brk.start}–{brk.end}) lies outside the shift")
            continue
        break_ranges.append((b_start, b_end, i))

    break_ranges.sort()
    for (s1, e1, i1), (s2, e2, i2) in zip(break_ranges, break_ranges[1:]):
        if s2 < e1:
            validation_errors.append(f"Break {i1} overlaps break {i2}")

    total_break_min = sum(e - s for s, e, _ in break_ranges)
    work_hours = (end_min - start_min - total_break_min) / 60.0
    if work_hours <= 0:
        validation_errors.append("Breaks take up the whole shift - no working time left")
    elif work_hours <= 1:
        validation_warnings.append(
            f"⚠️ Only {work_hours:.2f}h of working time - the last-hour adjustment is not applied"
        )

    # Control points
    for i, cp in enumerate(config.control_points, start=1):
        if not cp.time:
            validation_warnings.append(f"⚠️ Control point {i} has no time and will be ignored")
            continue
        try:
            cp_min = _minutes(cp.time)
        except ValueError as e:
            validation_errors.append(f"Control point {i}: {e}")
            continue
        if cp_min < start_min or cp_min > end_min:
            validation_warnings.append(f"⚠️ Control point {i} ({cp.time}) lies outside the shift")

    # Numbers
    numeric_fields = [
        ("Expected number of orders", config.expected_orders),
        ("Average speed", config.avg_speed),
        ("Staff in the last hour", config.staff_for_last_period),
        ("Average picking speed", config.avg_picking_speed),
        ("Average packing speed", config.avg_packing_speed),
    ]
    for label, value in numeric_fields:
        if value is not None and value < 0:
            validation_errors.append(f"{label} must not be negative")

    if config.picking_speed <= 0 or config.packing_speed <= 0:
        validation_warnings.append("⚠️ No average speed set - staffing figures will show 0")

    is_valid = not validation_errors
    if not is_valid:
        logger.info(f"Settings rejected: {validation_errors}")
    return validation_errors, validation_warnings, is_valid
