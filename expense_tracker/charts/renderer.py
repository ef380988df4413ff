"""
Pie Chart Renderer

Draws a precomputed ChartLayout. Nothing here decides angles or
colours: each wedge goes exactly where the layout says, so two renders of
the same layout are identical.
"""

from typing import Optional

import matplotlib
matplotlib.use("Agg")  # non-interactive backend, safe on headless machines
from matplotlib.figure import Figure
from matplotlib.patches import Patch, Wedge

from expense_tracker.config import ChartSettings, get_settings
from expense_tracker.models.chart import ChartLayout


NO_DATA_MESSAGE = "No expense data to display"
LEGEND_TITLE = "Expense distribution:"


def _new_figure(settings: ChartSettings) -> Figure:
    return Figure(
        figsize=(settings.width_inches, settings.height_inches),
        dpi=settings.dpi,
    )


def render_pie(
    layout: ChartLayout,
    settings: Optional[ChartSettings] = None,
) -> Figure:
    """
    Render the expense pie chart with its legend.

    Returns a matplotlib Figure. When the layout has no expense data the
    figure carries a placeholder message instead of wedges.
    """
    settings = settings or get_settings().chart
    fig = _new_figure(settings)
    ax = fig.add_subplot(1, 1, 1)
    ax.set_aspect("equal")
    ax.axis("off")

    if layout.no_expense_data:
        ax.text(
            0.5, 0.5, NO_DATA_MESSAGE,
            ha="center", va="center",
            fontsize=12, color="#555555",
            transform=ax.transAxes,
        )
        return fig

    for chart_slice in layout.slices:
        ax.add_patch(Wedge(
            center=(0, 0),
            r=1.0,
            theta1=chart_slice.start_angle,
            theta2=chart_slice.start_angle + chart_slice.sweep_angle,
            facecolor=chart_slice.color,
            edgecolor="white",
            linewidth=1.0,
            label=chart_slice.category,
        ))

    ax.set_xlim(-1.05, 1.05)
    ax.set_ylim(-1.05, 1.05)

    handles = [
        Patch(facecolor=s.color, label=s.legend_label)
        for s in layout.slices
    ]
    ax.legend(
        handles=handles,
        title=LEGEND_TITLE,
        loc="center left",
        bbox_to_anchor=(1.02, 0.5),
        frameon=False,
        fontsize=9,
    )
    fig.subplots_adjust(left=0.02, right=0.6)
    return fig
