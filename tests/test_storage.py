"""Tests for the persisted last-calculation snapshot."""

import json

import pytest

from offgrid_sizer.sizing import ApplianceLoad, LastCalculationStore, SystemConfiguration, size_system
from offgrid_sizer.sizing.storage import STATE_ENV_VAR, SUN_HOURS_KEY, TOTAL_WATT_HOURS_KEY, default_state_path


def test_missing_file_gives_defaults(tmp_path):
    last = LastCalculationStore(tmp_path / "none.json").load()
    assert (last.daily_load_wh, last.sun_hours) == (0, 5)


def test_save_then_load(tmp_path):
    store = LastCalculationStore(tmp_path / "state" / "last.json")
    result = size_system([ApplianceLoad(power=100, hours=4)], SystemConfiguration(sun_hours=4.5))
    store.save(result)

    data = json.loads(store.path.read_text())
    assert data == {TOTAL_WATT_HOURS_KEY: 400, SUN_HOURS_KEY: 4.5}

    last = store.load()
    assert last.daily_load_wh == pytest.approx(400)
    assert last.sun_hours == pytest.approx(4.5)


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "last.json"
    path.write_text("{not json")
    last = LastCalculationStore(path).load()
    assert (last.daily_load_wh, last.sun_hours) == (0, 5)


def test_non_object_gives_defaults(tmp_path):
    path = tmp_path / "last.json"
    path.write_text("[1, 2]")
    assert LastCalculationStore(path).load().sun_hours == 5


def test_bad_values_fall_back_per_key(tmp_path):
    path = tmp_path / "last.json"
    path.write_text(json.dumps({TOTAL_WATT_HOURS_KEY: "lots", SUN_HOURS_KEY: "6"}))
    last = LastCalculationStore(path).load()
    assert last.daily_load_wh == 0
    assert last.sun_hours == 6

    path.write_text(json.dumps({TOTAL_WATT_HOURS_KEY: 800, SUN_HOURS_KEY: -2}))
    last = LastCalculationStore(path).load()
    assert last.daily_load_wh == 800
    assert last.sun_hours == 5


def test_env_var_overrides_default_path(tmp_path, monkeypatch):
    monkeypatch.setenv(STATE_ENV_VAR, str(tmp_path / "custom.json"))
    assert default_state_path() == tmp_path / "custom.json"
    assert LastCalculationStore().path == tmp_path / "custom.json"
