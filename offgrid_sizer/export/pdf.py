"""
PDF Reports
===========

Renders the calculation summary and the custom system check to PDF with
matplotlib. Figures are built with ``matplotlib.figure.Figure`` so no pyplot
state or interactive backend is involved.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import pandas as pd
from matplotlib.axes import Axes
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from ..sizing.models import CheckStatus, CustomCheckResult, Recommendations, SizingResult
from . import charts, tables

A4_INCHES = (8.27, 11.69)
HEADER_COLOR = "#2196f3"
FOOTER = "Generated by Off-Grid Solar Sizer"


def _page(title: str) -> Figure:
    fig = Figure(figsize=A4_INCHES)
    fig.text(0.5, 0.965, title, ha="center", va="center", fontsize=16, color="white",
             bbox=dict(boxstyle="square,pad=0.6", facecolor=HEADER_COLOR, edgecolor="none"))
    fig.text(0.5, 0.02, FOOTER, ha="center", fontsize=8, color="gray")
    return fig


def _table(ax: Axes, df: pd.DataFrame, title: str, empty_note: str = "Nothing to show") -> None:
    ax.axis("off")
    ax.set_title(title, loc="left", fontsize=11, fontweight="bold")
    if df.empty:
        ax.text(0.0, 0.8, empty_note, fontsize=9, transform=ax.transAxes)
        return
    cells = [[f"{v:g}" if isinstance(v, float) else str(v) for v in row] for row in df.itertuples(index=False)]
    tbl = ax.table(cellText=cells, colLabels=list(df.columns), loc="upper center", cellLoc="left")
    tbl.auto_set_font_size(False)
    tbl.set_fontsize(8)
    tbl.scale(1, 1.3)


def _pie(ax: Axes, labels, values, title: str, colors, hole: float = 0.0) -> None:
    ax.set_title(title, fontsize=10)
    if sum(values) <= 0:
        ax.axis("off")
        ax.text(0.5, 0.5, "No load", ha="center", va="center", transform=ax.transAxes)
        return
    wedgeprops = dict(width=1 - hole) if hole else None
    ax.pie(values, labels=labels, colors=colors, autopct="%1.0f%%", wedgeprops=wedgeprops, textprops=dict(fontsize=7))


def _summary_pages(result: SizingResult, recs: Optional[Recommendations]):
    fig = _page("Solar System Summary")
    axes = fig.subplots(3, 1, gridspec_kw=dict(height_ratios=[4, 2, 3], top=0.9, bottom=0.06, hspace=0.35))
    _table(axes[0], tables.key_specs_table(result), "Key Specifications")
    _table(axes[1], tables.battery_table(result),
           f"Battery Capacity for Night Load ({result.days_of_autonomy:g} day(s) autonomy)")
    _table(axes[2], tables.device_table(result), "Load Analysis", "No devices entered")
    yield fig

    if recs is not None:
        fig = _page("Recommendations")
        axes = fig.subplots(3, 1, gridspec_kw=dict(height_ratios=[3, 2, 2], top=0.9, bottom=0.06, hspace=0.35))
        _table(axes[0], tables.panel_guide_table(recs.panels),
               f"Solar Panel Combination Guide ({recs.panels.required_watts:.0f} W summer, "
               f"{recs.panels.winter_required_watts:.0f} W winter)")
        _table(axes[1], tables.battery_guide_table(recs.battery),
               f"Battery Combination Guide ({recs.battery.battery_type}, ~{recs.battery.required_ah:.0f} Ah "
               f"@ {recs.battery.system_voltage}V)",
               f"No common {recs.battery.system_voltage}V battery sizes listed")
        _table(axes[2], tables.safe_specs_table(recs.safe_specs), "Safe Specs (worst case)")
        yield fig

    fig = _page("Charts")
    (ax1, ax2), (ax3, ax4), (ax5, ax6) = fig.subplots(
        3, 2, gridspec_kw=dict(top=0.9, bottom=0.08, hspace=0.55, wspace=0.45)
    )
    series = charts.chart_series(result)

    labels, values = series["system_balance"]
    ax1.bar(range(len(values)), values, color=charts.PALETTE[: len(values)])
    ax1.set_xticks(range(len(labels)), labels, rotation=30, ha="right", fontsize=7)
    ax1.set_title("System Component Balance", fontsize=10)

    labels, values = series["ac_dc"]
    _pie(ax2, labels, values, "AC vs. DC Load", charts.AC_DC_COLORS, hole=0.5)

    labels, values = series["day_night"]
    _pie(ax3, labels, values, "Day vs. Night Load", charts.DAY_NIGHT_COLORS)

    labels, values = series["battery_by_type"]
    ax4.barh(labels, values, color=charts.PALETTE[: len(values)])
    ax4.set_title("Required Battery Capacity (Wh)", fontsize=10)
    ax4.tick_params(labelsize=7)

    labels, values = series["load_per_device"]
    ax5.set_title("Load per Device (Wh/day)", fontsize=10)
    if values:
        ax5.bar(range(len(values)), values, color=charts.PALETTE)
        ax5.set_xticks(range(len(labels)), labels, rotation=30, ha="right", fontsize=7)
    else:
        ax5.axis("off")
        ax5.text(0.5, 0.5, "No devices", ha="center", va="center", transform=ax5.transAxes)

    labels, values = series["supply_demand"]
    ax6.bar(range(len(values)), values, color=["#22c55e", "#3b82f6", "#ef4444", "#a855f7"])
    ax6.set_xticks(range(len(labels)), labels, rotation=30, ha="right", fontsize=7)
    ax6.set_title("Energy Supply vs Demand", fontsize=10)
    yield fig


def write_summary_pdf(
    result: SizingResult,
    path: Union[str, Path],
    recs: Optional[Recommendations] = None,
) -> Path:
    """Write the calculation summary (tables, guides, charts) to ``path``."""
    path = Path(path)
    with PdfPages(path) as pdf:
        for fig in _summary_pages(result, recs):
            pdf.savefig(fig)
    return path


def write_custom_check_pdf(check: CustomCheckResult, path: Union[str, Path]) -> Path:
    path = Path(path)
    fig = _page("Custom System Check Report")
    ax_table, ax_status = fig.subplots(2, 1, gridspec_kw=dict(height_ratios=[3, 1], top=0.9, bottom=0.1))
    _table(ax_table, tables.custom_check_table(check), "System Specifications & Results")

    ax_status.axis("off")
    color = {CheckStatus.SUSTAINABLE: "green", CheckStatus.DEPLETING: "firebrick"}.get(check.status, "gray")
    ax_status.text(0.0, 0.9, f"Status: {check.message}", fontsize=10, color=color, wrap=True,
                   va="top", transform=ax_status.transAxes)

    with PdfPages(path) as pdf:
        pdf.savefig(fig)
    return path
