"""Tests for load aggregation and appliance field edits."""

import pytest
from pydantic import ValidationError

from offgrid_sizer.sizing import ApplianceLoad, DeviceEditError, PowerType, TimeOfUse, aggregate_loads, apply_edit


def test_single_day_appliance():
    totals = aggregate_loads([ApplianceLoad(power=10, time_of_use="Day", hours=5)])
    assert totals.total_day_wh == 50
    assert totals.total_night_wh == 0
    assert totals.total_watt_hours == 50
    assert totals.total_ac_watts == 10


def test_day_night_and_ac_dc_partition_the_same_energy():
    appliances = [
        ApplianceLoad(name="TV", power=100, time_of_use="Both", hours=4, quantity=2),
        ApplianceLoad(name="Pump", power_type="DC", volts=12, amps=2, time_of_use="Night", hours=5),
    ]
    totals = aggregate_loads(appliances)
    # TV: 100 W * 2 h * 2 = 400 Wh day and night; pump: 24 W * 5 h = 120 Wh night
    assert totals.total_day_wh == pytest.approx(400)
    assert totals.total_night_wh == pytest.approx(520)
    assert totals.total_ac_wh == pytest.approx(800)
    assert totals.total_dc_wh == pytest.approx(120)
    assert totals.total_watt_hours == pytest.approx(totals.total_day_wh + totals.total_night_wh)
    assert totals.total_watt_hours == pytest.approx(totals.total_ac_wh + totals.total_dc_wh)
    # DC devices never count toward the inverter
    assert totals.total_ac_watts == 200


def test_per_device_breakdown():
    totals = aggregate_loads([ApplianceLoad(name="Fan", power=50, time_of_use="Both", hours=6)])
    (fan,) = totals.devices
    assert fan.name == "Fan"
    assert fan.day_wh == pytest.approx(150)
    assert fan.night_wh == pytest.approx(150)
    assert fan.hours == 6


def test_no_appliances_gives_zero_totals():
    totals = aggregate_loads([])
    assert totals.total_watt_hours == 0
    assert totals.devices == ()


def test_split_given_without_hours_derives_hours():
    a = ApplianceLoad(time_of_use="Both", day_hours=3, night_hours=1)
    assert a.hours == 4


def test_inconsistent_hours_rejected():
    with pytest.raises(ValidationError):
        ApplianceLoad(time_of_use="Both", hours=5, day_hours=1, night_hours=1)


def test_day_appliance_cannot_have_night_hours():
    with pytest.raises(ValidationError):
        ApplianceLoad(time_of_use="Day", day_hours=2, night_hours=1)


def test_quantity_clamped_to_one():
    assert ApplianceLoad(quantity=0).quantity == 1
    assert ApplianceLoad(quantity=-4).quantity == 1


def test_edit_power_type_resets_power_fields():
    a = ApplianceLoad(power=60, hours=2)
    b = apply_edit(a, "power_type", "DC")
    assert b.power_type is PowerType.DC
    assert (b.power, b.volts, b.amps) == (0, 0, 0)
    assert b.hours == 2


def test_edit_time_of_use_moves_hours():
    a = ApplianceLoad(time_of_use="Day", hours=6)
    b = apply_edit(a, "time_of_use", "Night")
    assert (b.day_hours, b.night_hours) == (0, 6)
    c = apply_edit(b, "time_of_use", "Both")
    assert (c.day_hours, c.night_hours) == (3, 3)


def test_edit_hours_in_both_mode_keeps_proportion():
    a = ApplianceLoad(time_of_use="Both", day_hours=3, night_hours=1)
    b = apply_edit(a, "hours", "8")
    assert b.day_hours == pytest.approx(6)
    assert b.night_hours == pytest.approx(2)
    assert b.hours == 8


def test_edit_hours_in_both_mode_from_zero_splits_evenly():
    a = ApplianceLoad(time_of_use="Both")
    b = apply_edit(a, "hours", 4)
    assert (b.day_hours, b.night_hours) == (2, 2)


def test_edit_night_hours_recomputes_total():
    a = ApplianceLoad(time_of_use="Both", hours=4)
    b = apply_edit(a, "night_hours", "5")
    assert b.day_hours == 2
    assert b.hours == 7


def test_edit_locked_field_rejected():
    a = ApplianceLoad(time_of_use="Night", hours=4)
    with pytest.raises(DeviceEditError):
        apply_edit(a, "day_hours", 1)


def test_edit_invalid_number_becomes_zero():
    a = ApplianceLoad(power=60, hours=2)
    assert apply_edit(a, "power", "sixty").power == 0
    assert apply_edit(a, "quantity", "").quantity == 1


def test_edit_unknown_field_rejected():
    with pytest.raises(DeviceEditError):
        apply_edit(ApplianceLoad(), "colour", "red")


def test_edit_returns_new_row():
    a = ApplianceLoad(name="Lamp", power=10, hours=1)
    b = apply_edit(a, "name", "Desk lamp")
    assert a.name == "Lamp"
    assert b.name == "Desk lamp"
    assert b.time_of_use is TimeOfUse.DAY


@pytest.mark.parametrize(
    "time_of_use, expected",
    [("Day", (7, 0)), ("Night", (0, 7))],
)
def test_edit_hours_in_single_period_mode(time_of_use, expected):
    a = ApplianceLoad(time_of_use=time_of_use, hours=3)
    b = apply_edit(a, "hours", "7")
    assert (b.day_hours, b.night_hours) == expected
    assert b.hours == 7


@pytest.mark.parametrize("raw", ["0", "-3", 0, -3.5])
def test_edit_quantity_clamped_to_one(raw):
    a = ApplianceLoad(power=10, hours=1, quantity=4)
    assert apply_edit(a, "quantity", raw).quantity == 1


@pytest.mark.parametrize("field, value", [("power_type", "XY"), ("time_of_use", "Evening")])
def test_edit_unknown_option_rejected(field, value):
    with pytest.raises(DeviceEditError, match=field):
        apply_edit(ApplianceLoad(), field, value)


@pytest.mark.parametrize("quantity", [None, "many", float("inf")])
def test_unusable_quantity_is_a_validation_error(quantity):
    with pytest.raises(ValidationError):
        ApplianceLoad(quantity=quantity)
