"""
Chart Data & Figures
====================

Chart series are derived once from a ``SizingResult``; the plotly figures
(UI) and the matplotlib report (PDF) both draw from these series.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

import plotly.graph_objects as go

from ..sizing.models import SizingResult, WeatherScenario

PALETTE = ["#4ade80", "#fbbf24", "#60a5fa", "#f87171", "#c084fc", "#818cf8"]
DAY_NIGHT_COLORS = ["#fbbf24", "#4f46e5"]
AC_DC_COLORS = ["#3b82f6", "#10b981"]
BUBBLE_SCALE = 5  # bubble radius per operating hour


def system_balance(result: SizingResult) -> Tuple[List[str], List[float]]:
    """Component ratings on one axis; the battery is shown in Ah."""
    labels = ["Load (W)", "Inverter (W)", "Panels (W)", "Controller (A)", "Battery (Ah)"]
    values = [
        result.total_ac_watts,
        result.inverter_size_w,
        result.solar_panel_watts,
        result.controller_amps,
        result.battery_ah(),
    ]
    return labels, values


def day_night(result: SizingResult) -> Tuple[List[str], List[float]]:
    return ["Day Load (Wh)", "Night Load (Wh)"], [result.total_day_wh, result.total_night_wh]


def ac_dc(result: SizingResult) -> Tuple[List[str], List[float]]:
    return ["AC Load (Wh)", "DC Load (Wh)"], [result.total_ac_wh, result.total_dc_wh]


def supply_demand(result: SizingResult) -> Tuple[List[str], List[float]]:
    labels = ["Day Supply (Wh)", "Night Supply (Wh)", "Day Demand (Wh)", "Night Demand (Wh)"]
    values = [result.solar_panel_watts * result.sun_hours, 0.0, result.total_day_wh, result.total_night_wh]
    return labels, values


def load_per_device(result: SizingResult) -> Tuple[List[str], List[float]]:
    return [d.name or "Unnamed" for d in result.devices], [d.watt_hours for d in result.devices]


def chart_series(result: SizingResult) -> Dict[str, Tuple[List[str], List[float]]]:
    return {
        "system_balance": system_balance(result),
        "day_night": day_night(result),
        "ac_dc": ac_dc(result),
        "battery_by_type": (list(result.battery_sizing_wh), list(result.battery_sizing_wh.values())),
        "load_per_device": load_per_device(result),
        "supply_demand": supply_demand(result),
    }


def _layout(fig: go.Figure, title: str) -> go.Figure:
    fig.update_layout(title=title, margin=dict(l=20, r=20, t=50, b=20), height=360)
    return fig


def system_balance_bar(result: SizingResult) -> go.Figure:
    labels, values = system_balance(result)
    fig = go.Figure(go.Bar(x=labels, y=values, marker_color=PALETTE[: len(labels)]))
    return _layout(fig, "System Component Balance")


def system_balance_radar(result: SizingResult) -> go.Figure:
    labels, values = system_balance(result)
    fig = go.Figure(
        go.Scatterpolar(
            r=values + values[:1],
            theta=labels + labels[:1],
            fill="toself",
            fillcolor="rgba(54,162,235,0.2)",
            line=dict(color="rgb(54,162,235)"),
            name="System Components Rating",
        )
    )
    return _layout(fig, "System Component Balance (Radar)")


def day_night_pie(result: SizingResult) -> go.Figure:
    labels, values = day_night(result)
    fig = go.Figure(go.Pie(labels=labels, values=values, marker=dict(colors=DAY_NIGHT_COLORS)))
    return _layout(fig, "Day vs. Night Load Distribution")


def ac_dc_donut(result: SizingResult) -> go.Figure:
    labels, values = ac_dc(result)
    fig = go.Figure(go.Pie(labels=labels, values=values, hole=0.5, marker=dict(colors=AC_DC_COLORS)))
    return _layout(fig, "AC vs. DC Load Distribution")


def battery_by_type_bar(result: SizingResult) -> go.Figure:
    names = list(result.battery_sizing_wh)
    fig = go.Figure(
        go.Bar(
            x=list(result.battery_sizing_wh.values()),
            y=names,
            orientation="h",
            marker_color=PALETTE[: len(names)],
        )
    )
    fig.update_layout(showlegend=False)
    return _layout(fig, "Required Battery Capacity by Type (Wh)")


def load_per_device_bar(result: SizingResult) -> go.Figure:
    labels, values = load_per_device(result)
    fig = go.Figure(go.Bar(x=labels, y=values, marker_color=PALETTE))
    return _layout(fig, "Load per Device (Wh/day)")


def supply_demand_polar(result: SizingResult) -> go.Figure:
    labels, values = supply_demand(result)
    fig = go.Figure(
        go.Barpolar(
            r=values,
            theta=labels,
            marker_color=["rgba(0,255,0,0.6)", "rgba(0,0,255,0.6)", "rgba(255,0,0,0.6)", "rgba(128,0,128,0.6)"],
            marker_line_color="yellow",
            marker_line_width=1,
        )
    )
    return _layout(fig, "Energy Supply vs Demand")


def device_impact_bubble(result: SizingResult) -> go.Figure:
    """Energy (x) vs power (y) per device; bubble size follows operating hours."""
    fig = go.Figure()
    for i, d in enumerate(result.devices):
        fig.add_trace(
            go.Scatter(
                x=[d.watt_hours],
                y=[d.watts],
                mode="markers",
                marker=dict(size=max(d.hours * BUBBLE_SCALE, 4), color=PALETTE[i % len(PALETTE)]),
                name=d.name or f"Device {i + 1}",
                hovertemplate="%{x:.0f} Wh/day, %{y:.0f} W, " + f"{d.hours:.1f} h<extra></extra>",
            )
        )
    fig.update_xaxes(title="Device Energy Usage (Wh/day)")
    fig.update_yaxes(title="Device Power (Watts)")
    return _layout(fig, "Device Impact: Energy vs Power vs Usage Time")


def weather_impact_bubble(result: SizingResult, scenarios: Tuple[WeatherScenario, ...]) -> go.Figure:
    """Generation per weather scenario; bubble size follows the battery requirement."""
    battery_wh = result.required_battery_wh
    fig = go.Figure()
    for i, s in enumerate(scenarios):
        fig.add_trace(
            go.Scatter(
                x=[s.sun_hours],
                y=[s.generated_wh],
                mode="markers",
                marker=dict(size=min(max(battery_wh / 50, 6), 80), color=PALETTE[i % len(PALETTE)]),
                name=s.label,
                hovertemplate=(
                    "%{x:.1f} sun hours, %{y:.0f} Wh generated. "
                    + f"Battery needed: {battery_wh:.0f} Wh<extra></extra>"
                ),
            )
        )
    fig.update_xaxes(title="Sun Hours per Day")
    fig.update_yaxes(title="Energy Generated (Wh)")
    return _layout(fig, "Weather Impact: Sun Hours vs Generation vs Storage")
