"""
Staffing Recommendations

Turns deviations into headcount guidance, last-hour feasibility and the
headline pace indicators shown on the update screen.
"""

import logging
from typing import Optional

from core.shift.models import (
    ActualsState,
    DeviationResult,
    LastHourIndicators,
    MainIndicators,
    Recommendations,
    ShiftConfig,
)

logger = logging.getLogger(__name__)

PROCESSES = ('picking', 'packing')


def _safe_ratio(numerator: float, denominator: float) -> float:
    if not denominator or denominator <= 0:
        return 0.0
    return numerator / denominator


def recommendation_text(process: str, deviation: float, avg_speed: float) -> str:
    """
    Guidance for one process.

    Behind plan: workers to add; ahead of plan: workers that can be moved
    away; exactly on plan: a confirmation. The headcount is
    |deviation| / avg_speed, or 0 without a usable speed.
    """
    if deviation < 0:
        additional = _safe_ratio(abs(deviation), avg_speed)
        return f"To meet the {process} plan, add {additional:.2f} additional employees."
    if deviation > 0:
        removable = _safe_ratio(deviation, avg_speed)
        return f"You can remove {removable:.2f} employees from {process}."
    return f"The {process} plan is met exactly."


def compute_last_hour_indicators(
    deviations: DeviationResult,
    config: ShiftConfig
) -> LastHourIndicators:
    """
    Check whether the last-hour crew can absorb the outstanding gap.

    Remaining work per process is the size of its deviation; the combined
    remainder (mean of both) is compared against the last-hour capacity
    (staff_for_last_period × average of the two process speeds, which is
    just avg_speed unless per-process speeds are set).

    Args:
        deviations: Result of compute_deviations
        config: Shift configuration

    Returns:
        LastHourIndicators with a user-facing message
    """
    remaining_picking = abs(deviations.picking_deviation)
    remaining_packing = abs(deviations.packing_deviation)
    total_remaining = (remaining_picking + remaining_packing) / 2
    capacity = config.staff_for_last_period * (config.picking_speed + config.packing_speed) / 2

    unprocessed = max(total_remaining - capacity, 0.0)
    will_meet_plan = total_remaining <= capacity

    if will_meet_plan:
        message = "Plan will be met on time"
    else:
        message = f"{round(unprocessed)} orders will remain unprocessed – Plan will not be met on time"
        logger.warning(f"Last hour shortfall: {unprocessed:.1f} orders above capacity {capacity:.1f}")

    return LastHourIndicators(
        remaining_picking=remaining_picking,
        remaining_packing=remaining_packing,
        total_remaining=total_remaining,
        capacity=capacity,
        unprocessed=unprocessed,
        will_meet_plan=will_meet_plan,
        message=message,
        staff_needed_picking=_safe_ratio(remaining_picking, config.picking_speed),
        staff_needed_packing=_safe_ratio(remaining_packing, config.packing_speed),
    )


def compute_recommendations(
    deviations: DeviationResult,
    config: ShiftConfig,
    last_hour: Optional[LastHourIndicators] = None
) -> Recommendations:
    """
    Staffing recommendation text for picking and packing.

    Args:
        deviations: Result of compute_deviations
        config: Shift configuration (per-process average speeds)
        last_hour: Optional last-hour indicators; when given, each text ends
                   with the headcount needed for the final hour

    Returns:
        Recommendations with one string per process

    Examples:
        >>> rec = compute_recommendations(DeviationResult(packing_deviation=-28.57),
        ...                               ShiftConfig(avg_speed=25))
        >>> rec.packing
        'To meet the packing plan, add 1.14 additional employees.'
    """
    texts = {}
    for process in PROCESSES:
        text = recommendation_text(
            process, deviations.deviation_for(process), config.speed_for(process)
        )
        if last_hour is not None:
            staff_needed = getattr(last_hour, f"staff_needed_{process}")
            text = f"{text} Staff needed for the last hour: {staff_needed:.2f}."
        texts[process] = text

    return Recommendations(picking=texts['picking'], packing=texts['packing'])


def compute_main_indicators(
    deviations: DeviationResult,
    config: ShiftConfig,
    actuals: ActualsState
) -> MainIndicators:
    """
    Headline pace figures.

    - actual speed = actual units / effective hours worked (0 before start)
    - recommended staff = required speed / average worker speed
    - packing progress = packed / target as a percentage, capped at 100
    """
    hours = deviations.hours_passed

    if config.expected_orders > 0:
        progress = min(actuals.packed_actual / config.expected_orders * 100, 100.0)
    else:
        progress = 0.0

    return MainIndicators(
        actual_speed_picking=_safe_ratio(actuals.picked_actual, hours),
        actual_speed_packing=_safe_ratio(actuals.packed_actual, hours),
        recommended_staff_picking=_safe_ratio(deviations.required_speed_picking, config.picking_speed),
        recommended_staff_packing=_safe_ratio(deviations.required_speed_packing, config.packing_speed),
        packing_progress_percent=progress,
    )
