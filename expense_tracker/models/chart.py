"""
Chart Layout Models

The aggregator produces these; the renderer and the UI only read them.
Angles are whole degrees, measured counter-clockwise from 3 o'clock.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ChartSlice(BaseModel):
    """One pie wedge: a category and where it sits on the circle."""
    model_config = ConfigDict(frozen=True)

    category: str
    total_amount: Decimal = Field(
        ...,
        description="Sum of expense amounts in this category"
    )
    start_angle: int = Field(
        ...,
        description="Degrees covered by all earlier wedges"
    )
    sweep_angle: int = Field(
        ...,
        description="Angular extent of this wedge in degrees"
    )
    color: str = Field(
        ...,
        pattern="^#[0-9a-f]{6}$",
        description="Fill colour as #rrggbb"
    )

    @property
    def legend_label(self) -> str:
        return f"{self.category} ({self.total_amount:.2f})"


class ChartLayout(BaseModel):
    """
    Ordered wedges for the expense pie chart.

    Slices appear in first-encounter order of their category.
    An empty layout means there is nothing to draw, which the UI
    shows as a placeholder message rather than an error.
    """
    model_config = ConfigDict(frozen=True)

    slices: tuple[ChartSlice, ...] = ()
    grand_total: Decimal = Decimal("0")

    @property
    def no_expense_data(self) -> bool:
        return not self.slices

    @property
    def total_sweep(self) -> int:
        return sum(s.sweep_angle for s in self.slices)

    def legend_labels(self) -> list[str]:
        return [s.legend_label for s in self.slices]
