"""Tests for the custom system check."""

import pytest

from offgrid_sizer.sizing import CheckStatus, CustomSystem, LastCalculation, check_custom_system


def test_no_load_has_no_autonomy():
    check = check_custom_system(CustomSystem(), LastCalculation(daily_load_wh=0, sun_hours=5))
    assert check.status is CheckStatus.NO_LOAD
    assert check.autonomy_days is None
    assert check.days_to_deplete is None
    assert "No load" in check.message


def test_sustainable_system():
    system = CustomSystem(inverter_w=1000, panel_w=400, battery_ah=100, battery_v=12)
    check = check_custom_system(system, LastCalculation(daily_load_wh=1000, sun_hours=5))
    assert check.status is CheckStatus.SUSTAINABLE
    assert check.battery_wh == pytest.approx(1200)
    assert check.safe_battery_wh == pytest.approx(960)
    assert check.autonomy_days == pytest.approx(0.96)
    assert check.net_energy_wh == pytest.approx(1000)
    assert check.days_to_deplete is None


def test_break_even_counts_as_sustainable():
    system = CustomSystem(panel_w=200)
    check = check_custom_system(system, LastCalculation(daily_load_wh=1000, sun_hours=5))
    assert check.net_energy_wh == 0
    assert check.status is CheckStatus.SUSTAINABLE


def test_depleting_system_reports_days_left():
    system = CustomSystem(panel_w=400, battery_ah=100, battery_v=12)
    check = check_custom_system(system, LastCalculation(daily_load_wh=3000, sun_hours=5))
    assert check.status is CheckStatus.DEPLETING
    assert check.net_energy_wh == pytest.approx(-1000)
    # full nominal capacity, not the safeguarded share
    assert check.days_to_deplete == pytest.approx(1.2)
    assert "1.2 days" in check.message


def test_zero_sun_hours_is_depleting_not_an_error():
    check = check_custom_system(CustomSystem(), LastCalculation(daily_load_wh=500, sun_hours=0))
    assert check.daily_charge_wh == 0
    assert check.status is CheckStatus.DEPLETING
