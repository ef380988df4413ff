"""Chart rendering package."""

from expense_tracker.charts.renderer import NO_DATA_MESSAGE, render_pie

__all__ = ["NO_DATA_MESSAGE", "render_pie"]
