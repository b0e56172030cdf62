"""
Interval Accumulation

Sums break intervals anchored to the reference day: their full duration and
the part of them already behind a reference instant.
"""

import logging
from datetime import datetime
from typing import Iterable

from core.calculations.time_parser import anchor_time
from core.shift.models import BreakInterval, IntervalTotals

logger = logging.getLogger(__name__)


def accumulate_intervals(
    intervals: Iterable[BreakInterval],
    reference: datetime
) -> IntervalTotals:
    """
    Accumulate interval durations relative to a reference instant.

    For each complete interval:
    - its whole duration counts toward ``total_hours``
    - the part at or before ``reference`` counts toward ``elapsed_hours``
      (all of it once the interval has ended, ``reference - start`` while
      inside it, nothing before it starts)

    Intervals with a missing or unparseable endpoint are skipped.

    Args:
        intervals: Break intervals with time-of-day endpoints
        reference: Comparison instant (now, or a checkpoint time), naive
                   local wall clock

    Returns:
        IntervalTotals with both sums in hours
    """
    total_hours = 0.0
    elapsed_hours = 0.0

    for interval in intervals:
        if not interval.is_complete:
            logger.debug(f"Skipping incomplete interval: {interval}")
            continue

        try:
            start = anchor_time(interval.start, reference)
            end = anchor_time(interval.end, reference)
        except ValueError as e:
            logger.warning(f"Skipping interval {interval.start}-{interval.end}: {e}")
            continue

        duration = (end - start).total_seconds() / 3600.0
        total_hours += duration

        if reference >= end:
            elapsed_hours += duration
        elif start < reference < end:
            elapsed_hours += (reference - start).total_seconds() / 3600.0

    return IntervalTotals(total_hours=total_hours, elapsed_hours=elapsed_hours)
