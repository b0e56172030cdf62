from core.shift.models import ActualsState, CheckpointRecord, ControlPoint, ShiftConfig
from core.storage.store import load_actuals, save_actuals
from ui.update_data import forget_session_actuals, load_session_actuals


def test_first_load_seeds_and_persists(store, shift_with_breaks):
    session = {}
    actuals = load_session_actuals(store, shift_with_breaks, session)
    assert [cp.time for cp in actuals.cp_data] == ["10:00", "14:00"]
    assert load_actuals(store) == actuals


def test_actuals_are_cached_for_the_session(store, day_shift):
    session = {}
    first = load_session_actuals(store, day_shift, session)
    save_actuals(store, ActualsState(99, 99))
    assert load_session_actuals(store, day_shift, session) is first


def test_control_points_added_later_are_seeded(store, day_shift):
    session = {}
    assert load_session_actuals(store, day_shift, session).cp_data == []

    day_shift.control_points = [ControlPoint("10:00"), ControlPoint("14:00")]
    forget_session_actuals(session)
    actuals = load_session_actuals(store, day_shift, session)
    assert [cp.time for cp in actuals.cp_data] == ["10:00", "14:00"]


def test_existing_records_survive_a_settings_change(store, day_shift):
    save_actuals(store, ActualsState(5, 4, [CheckpointRecord("11:00", 1, 1, 3, 2)]))
    session = {}
    load_session_actuals(store, day_shift, session)

    config = ShiftConfig(
        shift_start="08:00",
        shift_end="16:00",
        control_points=[ControlPoint("10:00")],
    )
    forget_session_actuals(session)
    actuals = load_session_actuals(store, config, session)
    assert [cp.time for cp in actuals.cp_data] == ["11:00"]
    assert actuals.picked_actual == 5


def test_forget_clears_checkpoint_widgets():
    session = {"actuals": ActualsState(), "cpdata_time_0": "10:00", "picked_actual": 3}
    forget_session_actuals(session)
    assert session == {"picked_actual": 3}
