"""Aggregation queries over the record store."""

from expense_tracker.queries.aggregator import (
    build_chart_layout,
    category_color,
    category_totals,
    sweep_angle,
)

__all__ = [
    "build_chart_layout",
    "category_color",
    "category_totals",
    "sweep_angle",
]
