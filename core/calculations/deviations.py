"""
Deviation Engine

Expected vs. actual progress for picking and packing at a reference instant.
"""

import logging
from datetime import datetime
from typing import Optional

from core.calculations.required_speed import calculate_required_speed
from core.calculations.shift_clock import compute_shift_clock, local_now
from core.shift.models import ActualsState, DeviationResult, ShiftConfig

logger = logging.getLogger(__name__)


def expected_processed(required_speed: float, hours_passed: float, expected_orders: float) -> float:
    """Planned cumulative units after ``hours_passed``, capped at the target"""
    return min(required_speed * hours_passed, expected_orders)


def process_deviation(actual: float, expected: float, expected_orders: float) -> float:
    """
    Actual minus expected units.

    Once the actual count reaches the target the plan is met and the
    deviation is 0.
    """
    if actual >= expected_orders:
        return 0.0
    return actual - expected


def compute_deviations(
    config: ShiftConfig,
    actuals: ActualsState,
    reference: Optional[datetime] = None
) -> DeviationResult:
    """
    Compute deviations from plan for both tracked processes.

    Each process gets its own required speed (its own average worker speed,
    shared target and last-hour crew).

    Args:
        config: Shift configuration
        actuals: Cumulative picked/packed counts
        reference: Instant to evaluate at (defaults to local now)

    Returns:
        DeviationResult; all zeros when the shift window is not configured
    """
    if not config.is_configured:
        logger.debug("Shift start/end not set - returning empty deviations")
        return DeviationResult.empty()

    if reference is None:
        reference = local_now()

    clock = compute_shift_clock(config, reference)
    target = config.expected_orders

    picking_speed = calculate_required_speed(
        target, clock.total_work_time, config.staff_for_last_period, config.picking_speed
    ).required_speed
    packing_speed = calculate_required_speed(
        target, clock.total_work_time, config.staff_for_last_period, config.packing_speed
    ).required_speed

    expected_picking = expected_processed(picking_speed, clock.hours_passed, target)
    expected_packing = expected_processed(packing_speed, clock.hours_passed, target)

    result = DeviationResult(
        hours_passed=clock.hours_passed,
        total_work_time=clock.total_work_time,
        required_speed_picking=picking_speed,
        required_speed_packing=packing_speed,
        expected_processed_picking=expected_picking,
        expected_processed_packing=expected_packing,
        picking_deviation=process_deviation(actuals.picked_actual, expected_picking, target),
        packing_deviation=process_deviation(actuals.packed_actual, expected_packing, target),
    )

    logger.info(
        f"Deviations at {reference.strftime('%H:%M')}: hours_passed={result.hours_passed:.2f}, "
        f"picking={result.picking_deviation:.2f}, packing={result.packing_deviation:.2f}"
    )
    return result
