"""
Shift Planning Models

Plain value types exchanged between the calculation engine and the UI/store:
- Shift configuration (window, breaks, control points, targets, speeds)
- Live actuals with control-point records
- Calculation results (deviations, speeds, indicators)

Persisted records use the camelCase keys of the stored JSON documents;
``from_dict``/``to_dict`` convert between the two.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


def _to_float(value: Any) -> float:
    """Coerce a form value (number, numeric string, blank) to float."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_optional_float(value: Any) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return _to_float(value)


def _to_count(value: Any) -> int:
    """Coerce a form value to a non-negative integer count."""
    return max(int(_to_float(value)), 0)


def _to_time_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass
class BreakInterval:
    """A scheduled non-working interval within the shift."""
    start: str = ""
    end: str = ""

    @property
    def is_complete(self) -> bool:
        """Both endpoints are filled in"""
        return bool(self.start) and bool(self.end)

    def to_dict(self) -> Dict[str, str]:
        return {'start': self.start, 'end': self.end}


@dataclass
class ControlPoint:
    """An intra-shift checkpoint time."""
    time: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {'time': self.time}


def parse_breaks(raw: Any) -> List[BreakInterval]:
    """
    Normalize stored breaks into BreakInterval objects.

    Accepts a list of ``{start, end}`` dicts or the legacy comma separated
    string form ``"09:00-09:15, 12:00-12:30"``.
    """
    if not raw:
        return []

    if isinstance(raw, str):
        breaks = []
        for interval in raw.split(','):
            if not interval.strip():
                continue
            parts = [p.strip() for p in interval.split('-')]
            start = parts[0] if len(parts) > 0 else ""
            end = parts[1] if len(parts) > 1 else ""
            breaks.append(BreakInterval(start, end))
        return breaks

    breaks = []
    for item in raw:
        if isinstance(item, BreakInterval):
            breaks.append(item)
        elif isinstance(item, dict):
            breaks.append(BreakInterval(
                _to_time_str(item.get('start')),
                _to_time_str(item.get('end'))
            ))
    return breaks


def parse_control_points(raw: Any) -> List[ControlPoint]:
    """
    Normalize stored control points into ControlPoint objects.

    Accepts a list of ``{time}`` dicts, a list of plain time strings, or a
    comma separated string.
    """
    if not raw:
        return []

    if isinstance(raw, str):
        return [ControlPoint(t.strip()) for t in raw.split(',') if t.strip()]

    points = []
    for item in raw:
        if isinstance(item, ControlPoint):
            points.append(item)
        elif isinstance(item, dict):
            points.append(ControlPoint(_to_time_str(item.get('time'))))
        else:
            points.append(ControlPoint(_to_time_str(item)))
    return points


@dataclass
class ShiftConfig:
    """
    Planning configuration for one shift.

    One ``expected_orders`` target is shared by picking and packing. Each
    process may override ``avg_speed`` with its own average throughput.
    """
    shift_start: str = ""
    shift_end: str = ""
    breaks: List[BreakInterval] = field(default_factory=list)
    control_points: List[ControlPoint] = field(default_factory=list)
    expected_orders: float = 0.0
    avg_speed: float = 0.0
    staff_for_last_period: float = 0.0
    avg_picking_speed: Optional[float] = None
    avg_packing_speed: Optional[float] = None

    @property
    def is_configured(self) -> bool:
        """Shift start and end are both set"""
        return bool(self.shift_start) and bool(self.shift_end)

    @property
    def picking_speed(self) -> float:
        """Average picking speed per worker (units/hour)"""
        if self.avg_picking_speed is not None:
            return self.avg_picking_speed
        return self.avg_speed

    @property
    def packing_speed(self) -> float:
        """Average packing speed per worker (units/hour)"""
        if self.avg_packing_speed is not None:
            return self.avg_packing_speed
        return self.avg_speed

    def speed_for(self, process: str) -> float:
        if process == 'picking':
            return self.picking_speed
        if process == 'packing':
            return self.packing_speed
        raise ValueError(f"Unknown process: '{process}'. Must be 'picking' or 'packing'")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ShiftConfig':
        """Build from a stored ``settings`` record"""
        data = data or {}
        return cls(
            shift_start=_to_time_str(data.get('shiftStart')),
            shift_end=_to_time_str(data.get('shiftEnd')),
            breaks=parse_breaks(data.get('breaks')),
            control_points=parse_control_points(data.get('controlPoints')),
            expected_orders=_to_float(data.get('expectedOrders')),
            avg_speed=_to_float(data.get('avgSpeed')),
            staff_for_last_period=_to_float(data.get('staffForLastPeriod')),
            avg_picking_speed=_to_optional_float(data.get('avgPickingSpeed')),
            avg_packing_speed=_to_optional_float(data.get('avgPackingSpeed')),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored ``settings`` record"""
        record = {
            'shiftStart': self.shift_start,
            'shiftEnd': self.shift_end,
            'breaks': [b.to_dict() for b in self.breaks],
            'controlPoints': [cp.to_dict() for cp in self.control_points],
            'expectedOrders': self.expected_orders,
            'avgSpeed': self.avg_speed,
            'staffForLastPeriod': self.staff_for_last_period,
        }
        if self.avg_picking_speed is not None:
            record['avgPickingSpeed'] = self.avg_picking_speed
        if self.avg_packing_speed is not None:
            record['avgPackingSpeed'] = self.avg_packing_speed
        return record


@dataclass
class CheckpointRecord:
    """Planned vs. actual progress recorded at one control point."""
    time: str = ""
    planned_picking: float = 0.0
    planned_packing: float = 0.0
    actual_picked: int = 0
    actual_packed: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CheckpointRecord':
        return cls(
            time=_to_time_str(data.get('time')),
            planned_picking=_to_float(data.get('plannedPicking')),
            planned_packing=_to_float(data.get('plannedPacking')),
            actual_picked=_to_count(data.get('actualPicked')),
            actual_packed=_to_count(data.get('actualPacked')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'time': self.time,
            'plannedPicking': self.planned_picking,
            'plannedPacking': self.planned_packing,
            'actualPicked': self.actual_picked,
            'actualPacked': self.actual_packed,
        }


@dataclass
class ActualsState:
    """Cumulative actuals entered during the shift."""
    picked_actual: int = 0
    packed_actual: int = 0
    cp_data: List[CheckpointRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ActualsState':
        """Build from a stored ``updateData`` record"""
        data = data or {}
        return cls(
            picked_actual=_to_count(data.get('pickedActual')),
            packed_actual=_to_count(data.get('packedActual')),
            cp_data=[CheckpointRecord.from_dict(cp) for cp in data.get('cpData') or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored ``updateData`` record"""
        return {
            'pickedActual': self.picked_actual,
            'packedActual': self.packed_actual,
            'cpData': [cp.to_dict() for cp in self.cp_data],
        }


@dataclass
class IntervalTotals:
    """Accumulated interval durations in hours"""
    total_hours: float = 0.0
    elapsed_hours: float = 0.0


@dataclass
class ShiftClock:
    """Effective working time of a shift as seen from one reference instant"""
    total_shift_hours: float = 0.0
    total_break_hours: float = 0.0
    total_work_time: float = 0.0
    hours_passed: float = 0.0


@dataclass
class RequiredSpeed:
    """Output of the required-speed model for one process (units/hour)"""
    base_speed: float = 0.0
    capacity_last_hour: float = 0.0
    candidate_speed: float = 0.0
    required_speed: float = 0.0


@dataclass
class DeviationResult:
    """Expected vs. actual progress at one instant"""
    hours_passed: float = 0.0
    total_work_time: float = 0.0
    required_speed_picking: float = 0.0
    required_speed_packing: float = 0.0
    expected_processed_picking: float = 0.0
    expected_processed_packing: float = 0.0
    picking_deviation: float = 0.0
    packing_deviation: float = 0.0

    @classmethod
    def empty(cls) -> 'DeviationResult':
        """All-zero result for a shift that is not configured yet"""
        return cls()

    def deviation_for(self, process: str) -> float:
        if process == 'picking':
            return self.picking_deviation
        if process == 'packing':
            return self.packing_deviation
        raise ValueError(f"Unknown process: '{process}'. Must be 'picking' or 'packing'")

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class ExpectedAtTime:
    """Planned cumulative units at a checkpoint time"""
    expected_picking: float = 0.0
    expected_packing: float = 0.0


@dataclass
class LastHourIndicators:
    """Whether the last-hour crew can clear what is left"""
    remaining_picking: float = 0.0
    remaining_packing: float = 0.0
    total_remaining: float = 0.0
    capacity: float = 0.0
    unprocessed: float = 0.0
    will_meet_plan: bool = True
    message: str = ""
    staff_needed_picking: float = 0.0
    staff_needed_packing: float = 0.0


@dataclass
class MainIndicators:
    """Headline pace figures for the update screen"""
    actual_speed_picking: float = 0.0
    actual_speed_packing: float = 0.0
    recommended_staff_picking: float = 0.0
    recommended_staff_packing: float = 0.0
    packing_progress_percent: float = 0.0


@dataclass
class Recommendations:
    """Staffing guidance text per process"""
    picking: str = ""
    packing: str = ""
