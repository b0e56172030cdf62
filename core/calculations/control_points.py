"""
Control-Point Projection

Planned progress at arbitrary checkpoint times and the state transitions of
checkpoint records (seed, retime, record actuals, delete). All functions
return new values; persisting them is up to the caller.
"""

import logging
from dataclasses import replace
from datetime import date, datetime, time
from typing import List, Optional, Union

import numpy as np
import pandas as pd

from core.calculations.deviations import expected_processed, process_deviation
from core.calculations.required_speed import calculate_required_speed
from core.calculations.shift_clock import compute_shift_clock, local_now
from core.calculations.time_parser import anchor_time
from core.shift.models import (
    ActualsState,
    CheckpointRecord,
    ExpectedAtTime,
    ShiftConfig,
)

logger = logging.getLogger(__name__)

ACTUAL_FIELDS = ('actual_picked', 'actual_packed')


def _reference_day(reference_date: Optional[Union[date, datetime]]) -> datetime:
    if reference_date is None:
        return local_now()
    if isinstance(reference_date, datetime):
        return reference_date.replace(tzinfo=None)
    return datetime.combine(reference_date, time())


def compute_expected_at_time(
    config: ShiftConfig,
    checkpoint_time: Optional[str],
    reference_date: Optional[Union[date, datetime]] = None
) -> ExpectedAtTime:
    """
    Planned cumulative units for both processes at a checkpoint time.

    Runs the shift clock with the checkpoint as reference instant and the
    required-speed model per process; independent of live actuals. At the
    current instant this equals the deviation engine's expected figures.

    Args:
        config: Shift configuration
        checkpoint_time: Time-of-day string ("HH:MM" or "HH:MM AM/PM")
        reference_date: Day to anchor the checkpoint on (defaults to today)

    Returns:
        ExpectedAtTime; zeros for a blank/invalid time or unconfigured shift
    """
    if not checkpoint_time or not config.is_configured:
        return ExpectedAtTime()

    day = _reference_day(reference_date)
    try:
        instant = anchor_time(checkpoint_time, day)
    except ValueError as e:
        logger.warning(f"Ignoring checkpoint with invalid time: {e}")
        return ExpectedAtTime()

    clock = compute_shift_clock(config, instant)
    target = config.expected_orders
    expected = {}
    for process in ('picking', 'packing'):
        speed = calculate_required_speed(
            target, clock.total_work_time, config.staff_for_last_period, config.speed_for(process)
        ).required_speed
        expected[process] = expected_processed(speed, clock.hours_passed, target)

    return ExpectedAtTime(
        expected_picking=expected['picking'],
        expected_packing=expected['packing'],
    )


def seed_checkpoints(
    config: ShiftConfig,
    actuals: ActualsState,
    reference_date: Optional[Union[date, datetime]] = None
) -> ActualsState:
    """
    Create checkpoint records from the configured control points.

    Only seeds when ``actuals.cp_data`` is empty; otherwise ``actuals`` is
    returned unchanged. Control points without a time are skipped.
    """
    if actuals.cp_data or not config.control_points:
        return actuals

    records = []
    for cp in config.control_points:
        if not cp.time:
            continue
        expected = compute_expected_at_time(config, cp.time, reference_date)
        records.append(CheckpointRecord(
            time=cp.time,
            planned_picking=expected.expected_picking,
            planned_packing=expected.expected_packing,
        ))

    logger.info(f"Seeded {len(records)} checkpoint records from control points")
    return replace(actuals, cp_data=records)


def update_checkpoint_time(
    config: ShiftConfig,
    cp_data: List[CheckpointRecord],
    index: int,
    new_time: str,
    reference_date: Optional[Union[date, datetime]] = None
) -> List[CheckpointRecord]:
    """Move a checkpoint to a new time, re-planning it and keeping its actuals"""
    if not 0 <= index < len(cp_data):
        return list(cp_data)

    expected = compute_expected_at_time(config, new_time, reference_date)
    updated = list(cp_data)
    updated[index] = replace(
        cp_data[index],
        time=new_time,
        planned_picking=expected.expected_picking,
        planned_packing=expected.expected_packing,
    )
    return updated


def update_checkpoint_actual(
    cp_data: List[CheckpointRecord],
    index: int,
    field_name: str,
    value
) -> List[CheckpointRecord]:
    """Set ``actual_picked`` or ``actual_packed`` on one checkpoint record"""
    if field_name not in ACTUAL_FIELDS:
        raise ValueError(f"Unknown checkpoint field: '{field_name}'. Must be one of: {ACTUAL_FIELDS}")
    if not 0 <= index < len(cp_data):
        return list(cp_data)

    try:
        count = max(int(float(value or 0)), 0)
    except (TypeError, ValueError):
        count = 0

    updated = list(cp_data)
    updated[index] = replace(cp_data[index], **{field_name: count})
    return updated


def delete_checkpoint(cp_data: List[CheckpointRecord], index: int) -> List[CheckpointRecord]:
    """Remove the checkpoint at ``index``; out-of-range indexes are ignored"""
    return [cp for i, cp in enumerate(cp_data) if i != index]


def checkpoint_deviations(
    config: ShiftConfig,
    record: CheckpointRecord,
    reference_date: Optional[Union[date, datetime]] = None
) -> dict:
    """
    Actual minus freshly projected plan at one checkpoint.

    Follows the live deviation rule: 0 once the actual count reaches the target.
    """
    expected = compute_expected_at_time(config, record.time, reference_date)
    target = config.expected_orders
    return {
        'planned_picking': expected.expected_picking,
        'planned_packing': expected.expected_packing,
        'picking_deviation': process_deviation(record.actual_picked, expected.expected_picking, target),
        'packing_deviation': process_deviation(record.actual_packed, expected.expected_packing, target),
    }


def build_checkpoint_frame(
    cp_data: List[CheckpointRecord],
    expected_orders: Optional[float] = None
) -> pd.DataFrame:
    """
    Checkpoint records as a DataFrame for tables and charts.

    With a positive ``expected_orders``, deviations are 0 wherever the actual
    count has reached that target.

    Returns:
        DataFrame with columns time, planned_picking, actual_picked,
        planned_packing, actual_packed, picking_deviation, packing_deviation.
        Records without a time are dropped.
    """
    columns = [
        'time', 'planned_picking', 'actual_picked',
        'planned_packing', 'actual_packed',
        'picking_deviation', 'packing_deviation',
    ]
    rows = [
        {
            'time': cp.time,
            'planned_picking': cp.planned_picking,
            'actual_picked': cp.actual_picked,
            'planned_packing': cp.planned_packing,
            'actual_packed': cp.actual_packed,
        }
        for cp in cp_data if cp.time
    ]
    if not rows:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(rows)
    df['picking_deviation'] = df['actual_picked'] - df['planned_picking']
    df['packing_deviation'] = df['actual_packed'] - df['planned_packing']
    if expected_orders:
        df.loc[df['actual_picked'] >= expected_orders, 'picking_deviation'] = 0.0
        df.loc[df['actual_packed'] >= expected_orders, 'packing_deviation'] = 0.0
    return df[columns]


def build_plan_curve(
    config: ShiftConfig,
    step_minutes: int = 30,
    reference_date: Optional[Union[date, datetime]] = None
) -> pd.DataFrame:
    """
    Planned cumulative units across the whole shift.

    Samples the shift every ``step_minutes`` (shift end always included).

    Returns:
        DataFrame with columns time ("HH:MM"), timestamp, hours_passed,
        planned_picking, planned_packing; empty when the shift is not
        configured, its bounds cannot be parsed, or it has no working time
    """
    columns = ['time', 'timestamp', 'hours_passed', 'planned_picking', 'planned_packing']
    if not config.is_configured or step_minutes <= 0:
        return pd.DataFrame(columns=columns)

    day = _reference_day(reference_date)
    try:
        start = anchor_time(config.shift_start, day)
        end = anchor_time(config.shift_end, day)
    except ValueError as e:
        logger.warning(f"No plan curve for unusable shift bounds: {e}")
        return pd.DataFrame(columns=columns)
    if end <= start:
        return pd.DataFrame(columns=columns)

    timestamps = pd.date_range(start, end, freq=f"{step_minutes}min")
    if timestamps[-1] != pd.Timestamp(end):
        timestamps = timestamps.append(pd.DatetimeIndex([end]))

    total_work_time = compute_shift_clock(config, start).total_work_time
    if total_work_time <= 0:
        return pd.DataFrame(columns=columns)

    hours = np.array([
        compute_shift_clock(config, ts.to_pydatetime()).hours_passed for ts in timestamps
    ])

    target = config.expected_orders
    planned = {}
    for process in ('picking', 'packing'):
        speed = calculate_required_speed(
            target, total_work_time, config.staff_for_last_period, config.speed_for(process)
        ).required_speed
        planned[process] = np.minimum(speed * hours, target)

    return pd.DataFrame({
        'time': [ts.strftime('%H:%M') for ts in timestamps],
        'timestamp': timestamps,
        'hours_passed': hours,
        'planned_picking': planned['picking'],
        'planned_packing': planned['packing'],
    })
