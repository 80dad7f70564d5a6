"""Tests for tables, charts, text and PDF exports."""

import pytest

from offgrid_sizer.export import charts, tables
from offgrid_sizer.export.pdf import write_custom_check_pdf, write_summary_pdf
from offgrid_sizer.export.text import package_description, summary_text, write_package_file
from offgrid_sizer.sizing import (
    ApplianceLoad,
    CustomSystem,
    LastCalculation,
    SystemConfiguration,
    check_custom_system,
    get_package,
    recommend,
    size_system,
)


@pytest.fixture
def result():
    loads = [
        ApplianceLoad(name="Fridge", power=100, time_of_use="Both", hours=10),
        ApplianceLoad(name="Router", power_type="DC", volts=12, amps=1, time_of_use="Both", hours=24),
        ApplianceLoad(name="Lights", power=10, time_of_use="Night", hours=5, quantity=4),
    ]
    return size_system(loads, SystemConfiguration(system_voltage=24, battery_type="AGM", sun_hours=5))


def test_package_description():
    text = package_description(get_package("ecolite"))
    assert "Common 24-hour Solar Setups" in text
    assert "Package: EcoLite" in text
    assert "Estimated Daily Load: 300 Wh/day" in text
    assert "Runs: 2× LED bulbs, Phone charging, WiFi router, Small fan (few hours)" in text
    assert "Generated by Off-Grid Solar Sizer" in text


def test_write_package_file(tmp_path):
    path = write_package_file(get_package("premium"), tmp_path)
    assert path.name == "solar-package-premium.txt"
    assert "Premium Power" in path.read_text(encoding="utf-8")


def test_unknown_package():
    with pytest.raises(KeyError):
        get_package("megawatt")


def test_summary_text_marks_selected_chemistry(result):
    text = summary_text(result, recommend(result))
    assert text.startswith("Solar System Summary")
    assert "* AGM" in text
    assert "  Lithium" in text
    assert "Safe specs" in text


def test_tables(result):
    assert len(tables.battery_table(result)) == 4
    devices = tables.device_table(result)
    assert list(devices["Device"]) == ["Fridge", "Router", "Lights"]
    assert devices["Wh/day"].sum() == pytest.approx(result.total_watt_hours)
    specs = tables.key_specs_table(result)
    assert "Battery (AGM)" in set(specs["Parameter"])


def test_chart_series(result):
    series = charts.chart_series(result)
    assert set(series) == {"system_balance", "day_night", "ac_dc", "battery_by_type", "load_per_device", "supply_demand"}
    _, values = series["day_night"]
    assert sum(values) == pytest.approx(result.total_watt_hours)
    _, values = series["ac_dc"]
    assert sum(values) == pytest.approx(result.total_watt_hours)


def test_plotly_figures(result):
    recs = recommend(result)
    assert len(charts.device_impact_bubble(result).data) == 3
    assert len(charts.weather_impact_bubble(result, recs.weather).data) == 3
    for build in (
        charts.system_balance_bar,
        charts.system_balance_radar,
        charts.day_night_pie,
        charts.ac_dc_donut,
        charts.battery_by_type_bar,
        charts.load_per_device_bar,
        charts.supply_demand_polar,
    ):
        assert len(build(result).data) == 1


def test_summary_pdf_written(result, tmp_path):
    path = write_summary_pdf(result, tmp_path / "summary.pdf", recommend(result))
    assert path.read_bytes().startswith(b"%PDF")


def test_summary_pdf_with_no_load(tmp_path):
    empty = size_system([], SystemConfiguration())
    path = write_summary_pdf(empty, tmp_path / "empty.pdf")
    assert path.stat().st_size > 0


def test_custom_check_pdf_written(tmp_path):
    check = check_custom_system(CustomSystem(), LastCalculation(daily_load_wh=3000, sun_hours=5))
    path = write_custom_check_pdf(check, tmp_path / "check.pdf")
    assert path.read_bytes().startswith(b"%PDF")
