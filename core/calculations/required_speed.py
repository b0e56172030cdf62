"""
Required-Speed Model

Plans the hourly processing rate for a shift whose final hour is worked by a
separately sized (usually smaller) crew. The non-final hours are front-loaded
so that exactly the last-hour crew's capacity remains when the last hour
starts.
"""

import logging

from core.shift.models import RequiredSpeed

logger = logging.getLogger(__name__)


def calculate_required_speed(
    expected_orders: float,
    total_work_time: float,
    staff_for_last_period: float,
    avg_speed: float
) -> RequiredSpeed:
    """
    Calculate the required processing speed for one process.

    - base_speed = R / T (uniform rate across the effective shift)
    - capacity_last_hour = staff_for_last_period × avg_speed
    - candidate_speed = (R - capacity_last_hour) / (T - 1) when T > 1,
      otherwise base_speed
    - required_speed = max(base_speed, candidate_speed)

    Args:
        expected_orders: Target units for the shift (R)
        total_work_time: Effective work hours, breaks excluded (T)
        staff_for_last_period: Workers scheduled for the final hour
        avg_speed: Average units per worker per hour for this process

    Returns:
        RequiredSpeed; all zeros when T <= 0

    Examples:
        >>> speed = calculate_required_speed(800, 8, 2, 25)
        >>> round(speed.required_speed, 2)
        107.14
    """
    if total_work_time <= 0:
        logger.warning(
            f"Total work time is {total_work_time:.2f}h - required speed set to 0"
        )
        return RequiredSpeed()

    base_speed = expected_orders / total_work_time
    capacity_last_hour = staff_for_last_period * avg_speed

    if total_work_time > 1:
        candidate_speed = (expected_orders - capacity_last_hour) / (total_work_time - 1)
    else:
        candidate_speed = base_speed

    required_speed = max(base_speed, candidate_speed)

    return RequiredSpeed(
        base_speed=base_speed,
        capacity_last_hour=capacity_last_hour,
        candidate_speed=candidate_speed,
        required_speed=required_speed,
    )
