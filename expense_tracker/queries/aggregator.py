"""
Category Aggregation and Pie Chart Layout

DESIGN DECISION: The layout is computed here, not in the renderer.
The renderer only draws what it is given, so the same input always
gives the same wedges and the same colours.

ORDERING: categories appear in the order they are first seen among the
expense transactions. Grouping uses an insertion-ordered dict.

ROUNDING: each sweep angle is group_total / grand_total * 360 rounded to
a whole degree with ROUND_HALF_UP, multiplying before dividing so exact
half degrees stay exact. Drift is not corrected, so the sweeps
may add up to 359 or 361.
"""

import colorsys
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from expense_tracker.models.chart import ChartLayout, ChartSlice
from expense_tracker.models.transaction import Transaction, TransactionKind


HUE_STEP = 0.14
SATURATION = 0.6
BRIGHTNESS = 0.9
FULL_CIRCLE = Decimal(360)


def category_color(index: int) -> str:
    """
    Colour for the wedge at a 0-based position, as #rrggbb.

    Hue steps by 0.14 around the HSV circle at fixed saturation and
    brightness, so colours depend on position only.
    """
    hue = (index * HUE_STEP) % 1.0
    red, green, blue = colorsys.hsv_to_rgb(hue, SATURATION, BRIGHTNESS)
    return "#{:02x}{:02x}{:02x}".format(
        int(red * 255 + 0.5),
        int(green * 255 + 0.5),
        int(blue * 255 + 0.5),
    )


def category_totals(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """
    Sum expense amounts per category, in first-encounter order.

    Category keys are compared exactly: no case folding, no trimming.
    Income transactions are ignored.
    """
    totals: dict[str, Decimal] = {}

    for transaction in transactions:
        if transaction.kind != TransactionKind.EXPENSE:
            continue
        key = transaction.category
        if key not in totals:
            totals[key] = Decimal("0")
        totals[key] += transaction.amount

    return totals


def sweep_angle(group_total: Decimal, grand_total: Decimal) -> int:
    """Whole-degree share of the circle, rounded half up."""
    share = Decimal(group_total) * FULL_CIRCLE / Decimal(grand_total)
    return int(share.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_chart_layout(transactions: Iterable[Transaction]) -> ChartLayout:
    """
    Lay out the expense pie chart.

    Returns an empty layout (no_expense_data is True) when there are no
    expenses, or when they add up to zero or less.
    """
    totals = category_totals(transactions)
    grand_total = sum(totals.values(), Decimal("0"))

    if not totals or grand_total <= 0:
        return ChartLayout(grand_total=grand_total)

    slices = []
    start = 0
    for index, (category, total) in enumerate(totals.items()):
        sweep = sweep_angle(total, grand_total)
        slices.append(ChartSlice(
            category=category,
            total_amount=total,
            start_angle=start,
            sweep_angle=sweep,
            color=category_color(index),
        ))
        start += sweep

    return ChartLayout(slices=tuple(slices), grand_total=grand_total)
