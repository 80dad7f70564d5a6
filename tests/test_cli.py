"""Tests for the command line entry point."""

import json

import pytest

from offgrid_sizer.sizing.cli import main
from offgrid_sizer.sizing.storage import STATE_ENV_VAR, TOTAL_WATT_HOURS_KEY


@pytest.fixture
def state(tmp_path, monkeypatch):
    path = tmp_path / "last.json"
    monkeypatch.setenv(STATE_ENV_VAR, str(path))
    return path


def _write_input(tmp_path, system=None, **extra):
    data = {
        "appliances": [{"name": "Fridge", "power": 100, "time_of_use": "Both", "hours": 24}],
        "system": system or {"system_voltage": 12, "battery_type": "Lithium", "sun_hours": 5},
        **extra,
    }
    path = tmp_path / "input.json"
    path.write_text(json.dumps(data))
    return path


def test_size_prints_summary_and_saves(tmp_path, state, capsys):
    outputs = tmp_path / "out"
    outputs.mkdir()
    rc = main([
        "size", str(_write_input(tmp_path)),
        "--pdf", str(outputs / "s.pdf"),
        "--text", str(outputs / "s.txt"),
        "--json", str(outputs / "s.json"),
    ])
    assert rc == 0
    assert "Solar System Summary" in capsys.readouterr().out
    assert json.loads(state.read_text())[TOTAL_WATT_HOURS_KEY] == 2400
    assert (outputs / "s.pdf").read_bytes().startswith(b"%PDF")
    assert (outputs / "s.txt").read_text().startswith("Solar System Summary")
    payload = json.loads((outputs / "s.json").read_text())
    assert payload["result"]["total_watt_hours"] == 2400


def test_size_no_save(tmp_path, state):
    assert main(["size", str(_write_input(tmp_path)), "--no-save"]) == 0
    assert not state.exists()


def test_size_reports_input_warnings(tmp_path, state, capsys):
    path = _write_input(tmp_path, system={"sun_hours": "cloudy"})
    assert main(["size", str(path)]) == 0
    assert "sun_hours" in capsys.readouterr().err


def test_size_zero_sun_hours_exits_1(tmp_path, state, capsys):
    path = _write_input(tmp_path, system={"sun_hours": 0})
    assert main(["size", str(path)]) == 1
    assert "sun_hours" in capsys.readouterr().err
    assert not state.exists()


def test_size_unknown_battery_exits_2(tmp_path, state):
    path = _write_input(tmp_path, system={"battery_type": "NiCd"})
    assert main(["size", str(path)]) == 2


def test_size_missing_file_exits_2(tmp_path, state):
    assert main(["size", str(tmp_path / "nope.json")]) == 2


def test_size_invalid_policy_exits_2(tmp_path, state):
    path = _write_input(tmp_path, policy={"inverter_safety_factor": -1})
    assert main(["size", str(path)]) == 2


def test_size_custom_policy(tmp_path, state, capsys):
    path = _write_input(tmp_path, policy={"inverter_safety_factor": 2})
    assert main(["size", str(path)]) == 0
    assert "Inverter size:      200.00 W" in capsys.readouterr().out


def test_check_uses_saved_calculation(tmp_path, state, capsys):
    assert main(["size", str(_write_input(tmp_path))]) == 0
    capsys.readouterr()
    rc = main(["check", "--panel", "400", "--battery-ah", "200", "--pdf", str(tmp_path / "check.pdf")])
    assert rc == 0
    out = capsys.readouterr().out
    # 2400 Wh/day against 2000 Wh of daily charge
    assert "Not sustainable" in out
    assert (tmp_path / "check.pdf").exists()


def test_check_without_saved_calculation(state, capsys):
    assert main(["check"]) == 0
    assert "No load configured" in capsys.readouterr().out


def test_check_rejects_zero_battery_voltage(state):
    assert main(["check", "--battery-v", "0"]) == 2


def test_packages_list(capsys):
    assert main(["packages"]) == 0
    out = capsys.readouterr().out
    for key in ("ecolite", "ecobasic", "standard", "premium", "maxduty"):
        assert key in out


def test_packages_write(tmp_path):
    assert main(["packages", "--write", "standard", "--directory", str(tmp_path)]) == 0
    assert (tmp_path / "solar-package-standard.txt").exists()


def test_packages_unknown_key(tmp_path):
    assert main(["packages", "--write", "giant", "--directory", str(tmp_path)]) == 2


@pytest.mark.parametrize(
    "data",
    [
        {"appliances": ["lamp"]},
        {"appliances": {"name": "lamp"}},
        {"appliances": [], "system": [12]},
    ],
)
def test_size_malformed_shapes_exit_2(tmp_path, state, capsys, data):
    path = tmp_path / "input.json"
    path.write_text(json.dumps(data))
    assert main(["size", str(path)]) == 2
    assert "must be" in capsys.readouterr().err
    assert not state.exists()
