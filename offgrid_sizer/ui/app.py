"""
Off-Grid Solar Sizer - Streamlit UI
===================================

Interactive calculator for sizing a stand-alone solar system from a list of
appliances.

Pages:
1. Calculator
2. Common Setups
3. Custom System Check
4. About
"""

import tempfile
from pathlib import Path
from typing import Dict, Optional

import streamlit as st

from offgrid_sizer.export import charts, tables
from offgrid_sizer.export.pdf import write_custom_check_pdf, write_summary_pdf
from offgrid_sizer.export.text import PACKAGE_FILENAME_PREFIX, package_description, summary_text
from offgrid_sizer.sizing import (
    DEFAULT_POLICY,
    SOLAR_PACKAGES,
    ApplianceLoad,
    CheckStatus,
    CustomSystem,
    DeviceEditError,
    LastCalculationStore,
    PowerType,
    SizingError,
    SizingResult,
    TimeOfUse,
    apply_edit,
    check_custom_system,
    recommend,
    size_system,
)
from offgrid_sizer.sizing.parsing import parse_configuration

PAGES = ["🧮 Calculator", "📦 Common Setups", "🔋 Custom System Check", "ℹ️ About"]
NUMERIC_FIELDS = ("power", "volts", "amps", "hours", "day_hours", "night_hours", "quantity")


# Page configuration
st.set_page_config(
    page_title="Off-Grid Solar Sizer",
    page_icon="☀️",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stMetric {
        background-color: #f0f2f6;
        padding: 10px;
        border-radius: 5px;
    }
    h1 {
        color: #1f77b4;
    }
</style>
""", unsafe_allow_html=True)


def _rows() -> Dict[int, ApplianceLoad]:
    if "rows" not in st.session_state:
        st.session_state["rows"] = {0: ApplianceLoad(name="LED bulb", power=10, hours=5)}
        st.session_state["next_row_id"] = 1
    return st.session_state["rows"]


def _sync_widgets(row_id: int, appliance: ApplianceLoad):
    """Push model values back into the row's widgets after an edit."""
    for field in NUMERIC_FIELDS:
        st.session_state[f"{field}_{row_id}"] = f"{getattr(appliance, field):g}"
    st.session_state[f"name_{row_id}"] = appliance.name
    st.session_state[f"power_type_{row_id}"] = appliance.power_type.value
    st.session_state[f"time_of_use_{row_id}"] = appliance.time_of_use.value


def _on_edit(row_id: int, field: str):
    rows = _rows()
    try:
        rows[row_id] = apply_edit(rows[row_id], field, st.session_state[f"{field}_{row_id}"])
    except DeviceEditError as e:
        st.session_state["edit_error"] = str(e)
    _sync_widgets(row_id, rows[row_id])


def _add_row():
    rows = _rows()
    row_id = st.session_state["next_row_id"]
    st.session_state["next_row_id"] = row_id + 1
    rows[row_id] = ApplianceLoad()


def _remove_row(row_id: int):
    _rows().pop(row_id, None)


def _text_field(col, label: str, row_id: int, field: str, appliance: ApplianceLoad, disabled: bool = False):
    key = f"{field}_{row_id}"
    if key not in st.session_state:
        st.session_state[key] = f"{getattr(appliance, field):g}"
    col.text_input(label, key=key, on_change=_on_edit, args=(row_id, field), disabled=disabled)


def _appliance_row(row_id: int, appliance: ApplianceLoad):
    for field, value in (
        ("name", appliance.name),
        ("power_type", appliance.power_type.value),
        ("time_of_use", appliance.time_of_use.value),
    ):
        st.session_state.setdefault(f"{field}_{row_id}", value)

    cols = st.columns([3, 1.2, 1.2, 1.2, 1.4, 1, 1, 1, 1, 0.6])
    cols[0].text_input("Appliance", key=f"name_{row_id}", on_change=_on_edit, args=(row_id, "name"))
    cols[1].selectbox(
        "Type", [p.value for p in PowerType], key=f"power_type_{row_id}",
        on_change=_on_edit, args=(row_id, "power_type"),
    )
    if appliance.power_type is PowerType.AC:
        _text_field(cols[2], "Watts", row_id, "power", appliance)
        cols[3].markdown("&nbsp;")
    else:
        _text_field(cols[2], "Volts", row_id, "volts", appliance)
        _text_field(cols[3], "Amps", row_id, "amps", appliance)
    cols[4].selectbox(
        "Time of use", [t.value for t in TimeOfUse], key=f"time_of_use_{row_id}",
        on_change=_on_edit, args=(row_id, "time_of_use"),
    )
    _text_field(cols[5], "Hours", row_id, "hours", appliance)
    _text_field(cols[6], "Day h", row_id, "day_hours", appliance,
                disabled=appliance.time_of_use is TimeOfUse.NIGHT)
    _text_field(cols[7], "Night h", row_id, "night_hours", appliance,
                disabled=appliance.time_of_use is TimeOfUse.DAY)
    _text_field(cols[8], "Qty", row_id, "quantity", appliance)
    cols[9].button("🗑️", key=f"remove_{row_id}", on_click=_remove_row, args=(row_id,))


def _pdf_bytes(render) -> bytes:
    with tempfile.TemporaryDirectory() as tmp:
        return render(Path(tmp) / "report.pdf").read_bytes()


def page_calculator():
    """Calculator page."""
    st.header("🧮 Solar System Calculator")

    with st.sidebar:
        st.subheader("System Settings")
        voltage = st.selectbox("System Voltage (V)", [12, 24, 48])
        battery_type = st.selectbox("Battery Type", list(DEFAULT_POLICY.chemistries))
        days = st.number_input("Days of Autonomy", min_value=1.0, value=1.0, step=1.0)
        sun_hours = st.text_input("Peak Sun Hours", value="5")

    st.subheader("⚡ Appliances")
    rows = _rows()
    for row_id, appliance in list(rows.items()):
        _appliance_row(row_id, appliance)

    error = st.session_state.pop("edit_error", None)
    if error:
        st.warning(error)

    col1, col2 = st.columns([1, 5])
    col1.button("➕ Add appliance", on_click=_add_row)
    calculate = col2.button("Calculate", type="primary")

    if calculate:
        config, issues = parse_configuration({
            "system_voltage": voltage,
            "battery_type": battery_type,
            "days_of_autonomy": days,
            "sun_hours": sun_hours,
        })
        for issue in issues:
            st.warning(str(issue))
        try:
            result = size_system(rows.values(), config)
        except SizingError as e:
            st.error(f"⚠️ {e}")
            return
        st.session_state["result"] = result
        LastCalculationStore().save(result)

    result: Optional[SizingResult] = st.session_state.get("result")
    if result is None:
        st.info("👆 Enter your appliances and click Calculate.")
        return
    _show_result(result)


def _show_result(result: SizingResult):
    recs = recommend(result)

    st.divider()
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Total Consumption", f"{result.total_watt_hours:.0f} Wh/day")
    with col2:
        st.metric("Inverter", f"{result.inverter_size_w:.0f} W")
    with col3:
        st.metric("Solar Panels", f"{result.solar_panel_watts:.0f} W")
    with col4:
        st.metric("Controller", f"{result.controller_amps:.1f} A")

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Key Specifications**")
        st.dataframe(tables.key_specs_table(result), hide_index=True, use_container_width=True)
    with col2:
        st.markdown(f"**Battery Capacity for Night Load** ({result.days_of_autonomy:g} day(s) autonomy)")
        st.dataframe(tables.battery_table(result), hide_index=True, use_container_width=True)
        st.markdown("**Load Analysis**")
        st.dataframe(tables.device_table(result), hide_index=True, use_container_width=True)

    st.divider()
    st.subheader("🛒 Recommended Combinations")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.markdown(
            f"**Solar Panels** ({recs.panels.required_watts:.0f} W summer, "
            f"{recs.panels.winter_required_watts:.0f} W winter)"
        )
        st.dataframe(tables.panel_guide_table(recs.panels), hide_index=True, use_container_width=True)
    with col2:
        st.markdown(f"**{recs.battery.battery_type} Batteries** (~{recs.battery.required_ah:.0f} Ah "
                    f"@ {recs.battery.system_voltage}V)")
        if recs.battery.options:
            st.dataframe(tables.battery_guide_table(recs.battery), hide_index=True, use_container_width=True)
        else:
            st.info(f"No common {recs.battery.system_voltage}V battery sizes listed")
    with col3:
        st.markdown("**Safe Specs** (worst case)")
        st.dataframe(tables.safe_specs_table(recs.safe_specs), hide_index=True, use_container_width=True)

    inv = recs.inverter
    if inv.parallel_inverters:
        st.warning(f"A {inv.inverter_w:.0f} W inverter exceeds single-unit ranges; consider parallel "
                   "inverters on a 48V bus.")
    elif not inv.matches:
        st.warning(f"A {inv.inverter_w:.0f} W inverter is best served by a {inv.recommended_voltage}V "
                   f"system (current: {inv.system_voltage}V).")
    else:
        st.success(f"✅ {inv.system_voltage}V suits a {inv.inverter_w:.0f} W inverter.")

    st.divider()
    st.subheader("📈 Charts")
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(charts.system_balance_bar(result), use_container_width=True)
        st.plotly_chart(charts.day_night_pie(result), use_container_width=True)
        st.plotly_chart(charts.battery_by_type_bar(result), use_container_width=True)
        st.plotly_chart(charts.supply_demand_polar(result), use_container_width=True)
    with col2:
        st.plotly_chart(charts.system_balance_radar(result), use_container_width=True)
        st.plotly_chart(charts.ac_dc_donut(result), use_container_width=True)
        st.plotly_chart(charts.load_per_device_bar(result), use_container_width=True)
        st.plotly_chart(charts.device_impact_bubble(result), use_container_width=True)
    st.plotly_chart(charts.weather_impact_bubble(result, recs.weather), use_container_width=True)

    st.divider()
    col1, col2 = st.columns(2)
    col1.download_button(
        "📄 Download PDF summary",
        data=_pdf_bytes(lambda path: write_summary_pdf(result, path, recs)),
        file_name="solar-system-summary.pdf",
        mime="application/pdf",
    )
    col2.download_button(
        "📝 Download text summary",
        data=summary_text(result, recs),
        file_name="solar-system-summary.txt",
        mime="text/plain",
    )


def page_common_setups():
    """Common Setups page."""
    st.header("📦 Common 24-hour Solar Setups")
    st.caption("Reference packages only; they are not derived from your appliance list.")

    for pkg in SOLAR_PACKAGES:
        with st.expander(f"{pkg.name} (~{pkg.daily_wh:g} Wh/day)"):
            col1, col2 = st.columns(2)
            with col1:
                st.markdown(f"**PV:** {pkg.pv}")
                st.markdown(f"**Battery (LiFePO4):** {pkg.battery_lfp}")
                st.markdown(f"**Battery (Lead-Acid):** {pkg.battery_lead_acid}")
            with col2:
                st.markdown(f"**Inverter:** {pkg.inverter}")
                st.markdown(f"**Controller:** {pkg.controller}")
                st.markdown(f"**Runs:** {', '.join(pkg.runs)}")
            st.download_button(
                "Download package",
                data=package_description(pkg),
                file_name=f"{PACKAGE_FILENAME_PREFIX}{pkg.key}.txt",
                mime="text/plain",
                key=f"download_{pkg.key}",
            )


def page_custom_check(opened: bool):
    """Custom System Check page."""
    st.header("🔋 Custom System Check")

    if opened or "snapshot" not in st.session_state:
        st.session_state["snapshot"] = LastCalculationStore().load()
    last = st.session_state["snapshot"]

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Daily Load (last calculation)", f"{last.daily_load_wh:.0f} Wh")
    with col2:
        st.metric("Sun Hours", f"{last.sun_hours:g} h")

    col1, col2, col3, col4 = st.columns(4)
    inverter_w = col1.number_input("Inverter (W)", min_value=0.0, value=1000.0, step=100.0)
    panel_w = col2.number_input("Solar Panels (W)", min_value=0.0, value=400.0, step=50.0)
    battery_ah = col3.number_input("Battery (Ah)", min_value=0.0, value=100.0, step=10.0)
    battery_v = col4.selectbox("Battery Voltage (V)", [12, 24, 48])

    check = check_custom_system(
        CustomSystem(inverter_w=inverter_w, panel_w=panel_w, battery_ah=battery_ah, battery_v=battery_v),
        last,
    )

    st.dataframe(tables.custom_check_table(check), hide_index=True, use_container_width=True)
    if check.status is CheckStatus.SUSTAINABLE:
        st.success(f"✅ {check.message}")
    elif check.status is CheckStatus.DEPLETING:
        st.error(f"⚠️ {check.message}")
    else:
        st.info(check.message)

    st.download_button(
        "📄 Download check report",
        data=_pdf_bytes(lambda path: write_custom_check_pdf(check, path)),
        file_name="custom-system-check.pdf",
        mime="application/pdf",
    )


def page_about():
    st.header("ℹ️ About")
    st.markdown("""
    ## How the sizing works

    - **Inverter**: total simultaneous AC wattage plus a 25% safety margin.
    - **Battery**: only the night load is stored; daytime devices run directly
      from the panels. Capacity = night Wh x days of autonomy / (efficiency x depth of discharge),
      shown for every battery chemistry.
    - **Solar panels**: day load plus the energy needed to refill the battery,
      spread over the peak sun hours. Winter counts add 50%.
    - **Charge controller**: panel current at the system voltage plus a 25% margin.
    - **Safe specs**: a worst-case lead-acid sizing of the whole daily load over 3 days.

    ### Glossary

    - **Depth of Discharge**: fraction of nominal battery capacity that may be used.
    - **Days of Autonomy**: days the battery must carry the night load without sun.
    - **Peak Sun Hours**: equivalent hours of full-intensity sunlight per day.
    - **Watt-hour (Wh)**: energy of one watt sustained for one hour.
    """)


def main():
    """Main application."""
    st.title("☀️ Off-Grid Solar Sizer")

    with st.sidebar:
        st.header("Navigation")
        page = st.radio("Select Page", PAGES)
        st.divider()

    # the custom check reads the saved calculation once, when it is opened
    opened = st.session_state.get("page") != page
    st.session_state["page"] = page

    if "Calculator" in page:
        page_calculator()
    elif "Common Setups" in page:
        page_common_setups()
    elif "Custom System Check" in page:
        page_custom_check(opened)
    else:
        page_about()


if __name__ == "__main__":
    main()
