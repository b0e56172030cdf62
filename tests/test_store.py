from datetime import datetime

from core.shift.models import ActualsState, BreakInterval, CheckpointRecord, ShiftConfig
from core.storage.store import (
    LocalStore,
    load_actuals,
    load_settings,
    save_actuals,
    save_settings,
)


def test_empty_store(store):
    assert store.get("settings") is None
    assert store.saved_at("settings") is None
    assert load_settings(store) is None
    assert load_actuals(store) == ActualsState()


def test_set_get_and_remove(store):
    store.set("answer", {"value": 42})
    assert store.get("answer") == {"value": 42}
    assert isinstance(store.saved_at("answer"), datetime)
    store.remove("answer")
    assert store.get("answer") is None


def test_settings_round_trip(store, day_shift):
    day_shift.breaks = [BreakInterval("12:00", "12:30")]
    save_settings(store, day_shift)
    assert load_settings(store) == day_shift


def test_actuals_round_trip(store):
    actuals = ActualsState(10, 8, [CheckpointRecord("10:00", 214.5, 214.5, 200, 190)])
    save_actuals(store, actuals)
    assert load_actuals(store) == actuals


def test_keys_are_independent(store, day_shift):
    save_settings(store, day_shift)
    save_actuals(store, ActualsState(1, 2))
    assert load_settings(store) == day_shift
    assert load_actuals(store).packed_actual == 2


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    store = LocalStore(str(path))
    assert store.get("settings") is None
    store.set("settings", ShiftConfig(shift_start="08:00").to_dict())
    assert load_settings(store).shift_start == "08:00"


def test_creates_missing_directories(tmp_path):
    store = LocalStore(str(tmp_path / "nested" / "dir" / "store.json"))
    store.set("k", 1)
    assert store.get("k") == 1
