"""Chart domain models.

Price history and bear/base/bull forecast points as produced by the
generation service, and the render-ready series built from them.

Point models accept any float, including NaN and negative values: the chart
transformer has to see bad samples to keep them off the axis while still
passing them through to the renderer.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, computed_field
from pydantic.alias_generators import to_camel


class ChartModel(BaseModel):
    """Base for chart models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# =============================================================================
# Input points
# =============================================================================


class HistoryPoint(ChartModel):
    """Observed price for one bar."""

    type: Literal["history"] = "history"
    date: str = Field(..., description="Bar label, e.g. 'MM-DD'")
    price: StrictFloat = Field(..., description="Observed price")


class ForecastPoint(ChartModel):
    """Bear/base/bull projection for one future bar."""

    type: Literal["forecast"] = "forecast"
    date: str = Field(..., description="Bar label, e.g. 'MM-DD'")
    bear: StrictFloat = Field(..., description="Forecast low")
    base: StrictFloat = Field(..., description="Forecast mid")
    bull: StrictFloat = Field(..., description="Forecast high")


ChartPoint = Annotated[Union[HistoryPoint, ForecastPoint], Field(discriminator="type")]


# =============================================================================
# Render output
# =============================================================================


class HistoryRender(ChartModel):
    """History bar rendered as a single line value."""

    type: Literal["history"] = "history"
    date: str
    price: float


class ForecastRender(ChartModel):
    """Forecast bar rendered as a stacked probability band.

    A stacked-area renderer draws an invisible layer of height ``bear`` and a
    visible ``spread`` layer on top of it, so the band spans bear to bull.
    """

    type: Literal["forecast"] = "forecast"
    date: str
    bear: float
    base: float
    bull: float
    spread: float = Field(..., ge=0, description="bull - bear, clamped at zero")

    @computed_field
    @property
    def stack_base(self) -> float:
        """Height of the invisible layer under the band."""
        return self.bear


RenderPoint = Annotated[Union[HistoryRender, ForecastRender], Field(discriminator="type")]


class ReferenceLine(ChartModel):
    """Horizontal marker drawn across the chart."""

    kind: Literal["current", "support", "resistance"]
    value: float
    label: str


class ChartFrame(ChartModel):
    """Render-ready chart: series, y-axis bounds and reference lines."""

    series: list[RenderPoint] = Field(default_factory=list)
    y_min: float = Field(..., description="Lower y-axis bound including padding")
    y_max: float = Field(..., description="Upper y-axis bound including padding")
    reference_lines: list[ReferenceLine] = Field(default_factory=list)
    warnings: list[str] = Field(
        default_factory=list, description="Data-quality notes raised while transforming"
    )

    def __len__(self) -> int:
        return len(self.series)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert the series to a pandas DataFrame.

        Returns:
            DataFrame with one row per point and columns date, type, price,
            bear, base, bull, spread. Columns that do not apply to a point
            hold NaN.
        """
        columns = ["date", "type", "price", "bear", "base", "bull", "spread"]
        if not self.series:
            return pd.DataFrame(columns=columns)

        rows = [point.model_dump(include=set(columns)) for point in self.series]
        return pd.DataFrame(rows, columns=columns)
