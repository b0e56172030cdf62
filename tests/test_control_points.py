import pytest

from core.calculations.control_points import (
    build_checkpoint_frame,
    build_plan_curve,
    checkpoint_deviations,
    compute_expected_at_time,
    delete_checkpoint,
    seed_checkpoints,
    update_checkpoint_actual,
    update_checkpoint_time,
)
from core.calculations.deviations import compute_deviations
from core.shift.models import ActualsState, CheckpointRecord, ControlPoint, ShiftConfig

from conftest import SHIFT_DAY, at


def test_checkpoint_matches_deviation_engine(shift_with_breaks, actuals):
    for hour, minute in [(8, 0), (9, 10), (12, 10), (14, 0), (16, 0)]:
        result = compute_deviations(shift_with_breaks, actuals, at(hour, minute))
        expected = compute_expected_at_time(shift_with_breaks, f"{hour:02d}:{minute:02d}", SHIFT_DAY)
        assert expected.expected_picking == pytest.approx(result.expected_processed_picking)
        assert expected.expected_packing == pytest.approx(result.expected_processed_packing)


def test_checkpoint_in_twelve_hour_format(day_shift):
    expected = compute_expected_at_time(day_shift, "2:00 PM", SHIFT_DAY)
    assert expected.expected_packing == pytest.approx(6 * 750 / 7)


@pytest.mark.parametrize("checkpoint_time", ["", None, "not a time"])
def test_blank_or_invalid_checkpoint_time(day_shift, checkpoint_time):
    expected = compute_expected_at_time(day_shift, checkpoint_time, SHIFT_DAY)
    assert expected.expected_picking == 0
    assert expected.expected_packing == 0


def test_unconfigured_shift_projects_zero():
    expected = compute_expected_at_time(ShiftConfig(expected_orders=100), "10:00", SHIFT_DAY)
    assert expected.expected_picking == 0


def test_seed_from_control_points(day_shift):
    day_shift.control_points = [ControlPoint("10:00"), ControlPoint(""), ControlPoint("14:00")]
    seeded = seed_checkpoints(day_shift, ActualsState(10, 5), SHIFT_DAY)
    assert [cp.time for cp in seeded.cp_data] == ["10:00", "14:00"]
    assert seeded.cp_data[0].planned_picking == pytest.approx(2 * 750 / 7)
    assert seeded.cp_data[1].planned_packing == pytest.approx(6 * 750 / 7)
    assert seeded.cp_data[0].actual_picked == 0
    assert seeded.picked_actual == 10


def test_seed_keeps_existing_records(shift_with_breaks):
    existing = ActualsState(cp_data=[CheckpointRecord("11:00", 1, 2, 3, 4)])
    assert seed_checkpoints(shift_with_breaks, existing, SHIFT_DAY) is existing


def test_update_time_replans_and_keeps_actuals(day_shift):
    cp_data = [CheckpointRecord("10:00", 1, 1, 200, 180)]
    updated = update_checkpoint_time(day_shift, cp_data, 0, "12:00", SHIFT_DAY)
    assert updated[0].time == "12:00"
    assert updated[0].planned_picking == pytest.approx(4 * 750 / 7)
    assert updated[0].actual_picked == 200
    assert updated[0].actual_packed == 180
    assert cp_data[0].time == "10:00"


def test_update_actual_coerces_counts():
    cp_data = [CheckpointRecord("10:00")]
    assert update_checkpoint_actual(cp_data, 0, "actual_picked", "12")[0].actual_picked == 12
    assert update_checkpoint_actual(cp_data, 0, "actual_packed", -3)[0].actual_packed == 0
    with pytest.raises(ValueError):
        update_checkpoint_actual(cp_data, 0, "planned_picking", 5)


def test_delete_by_position():
    cp_data = [CheckpointRecord("10:00"), CheckpointRecord("12:00"), CheckpointRecord("14:00")]
    assert [cp.time for cp in delete_checkpoint(cp_data, 1)] == ["10:00", "14:00"]
    assert len(delete_checkpoint(cp_data, 7)) == 3


def test_checkpoint_deviations(day_shift):
    record = CheckpointRecord("12:00", actual_picked=400, actual_packed=450)
    figures = checkpoint_deviations(day_shift, record, SHIFT_DAY)
    assert figures["picking_deviation"] == pytest.approx(400 - 4 * 750 / 7)
    assert figures["packing_deviation"] == pytest.approx(450 - 4 * 750 / 7)


def test_checkpoint_frame():
    df = build_checkpoint_frame([
        CheckpointRecord("10:00", 200, 190, 210, 180),
        CheckpointRecord("", 1, 1, 1, 1),
    ])
    assert list(df["time"]) == ["10:00"]
    assert df.loc[0, "picking_deviation"] == pytest.approx(10)
    assert df.loc[0, "packing_deviation"] == pytest.approx(-10)


def test_empty_checkpoint_frame_has_columns():
    df = build_checkpoint_frame([])
    assert df.empty
    assert "planned_packing" in df.columns


def test_plan_curve_hourly(day_shift):
    df = build_plan_curve(day_shift, step_minutes=60, reference_date=SHIFT_DAY)
    assert len(df) == 9
    assert df["time"].iloc[0] == "08:00"
    assert df["planned_picking"].iloc[0] == 0
    assert df["planned_packing"].iloc[4] == pytest.approx(4 * 750 / 7)
    assert df["planned_packing"].iloc[-1] == pytest.approx(800)


def test_plan_curve_always_ends_at_shift_end(day_shift):
    df = build_plan_curve(day_shift, step_minutes=45, reference_date=SHIFT_DAY)
    assert df["time"].iloc[-1] == "16:00"
    assert df["time"].iloc[-2] == "15:30"


def test_plan_curve_unconfigured():
    assert build_plan_curve(ShiftConfig(), reference_date=SHIFT_DAY).empty


def test_checkpoint_deviation_is_zero_once_target_reached(day_shift):
    record = CheckpointRecord("12:00", actual_picked=900, actual_packed=800)
    figures = checkpoint_deviations(day_shift, record, SHIFT_DAY)
    assert figures["picking_deviation"] == 0
    assert figures["packing_deviation"] == 0


def test_checkpoint_frame_applies_target():
    df = build_checkpoint_frame([
        CheckpointRecord("10:00", 200, 190, 210, 180),
        CheckpointRecord("12:00", 400, 400, 820, 800),
    ], expected_orders=800)
    assert df.loc[0, "picking_deviation"] == pytest.approx(10)
    assert df.loc[1, "picking_deviation"] == 0
    assert df.loc[1, "packing_deviation"] == 0


def test_plan_curve_with_unparseable_bounds(day_shift):
    day_shift.shift_start = "morning"
    assert build_plan_curve(day_shift, reference_date=SHIFT_DAY).empty
