"""Forecast chart transform.

Turns history points and bear/base/bull forecast points into a
"probability cloud" a stacked-area renderer can draw:

- history bars keep their price as a single line value
- forecast bars get ``spread = bull - bear`` (never negative), stacked on an
  invisible layer of height ``bear`` so the visible band spans bear to bull

The y-axis range comes from every history price plus every forecast bear and
bull (base sits between them), padded by ``settings.chart_axis_padding`` on
both ends. Non-finite or negative values stay in the series but are kept off
the axis so one bad sample cannot stretch it.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Sequence

from pydantic import TypeAdapter

from omnipulse.core.config import settings
from omnipulse.core.exceptions import EmptySeriesError
from omnipulse.core.logging import get_logger
from omnipulse.domain.chart import (
    ChartFrame,
    ChartPoint,
    ForecastPoint,
    ForecastRender,
    HistoryPoint,
    HistoryRender,
    ReferenceLine,
)

logger = get_logger("services.chart")

_point_adapter: TypeAdapter[HistoryPoint | ForecastPoint] = TypeAdapter(ChartPoint)


def _is_plottable(value: float) -> bool:
    return math.isfinite(value) and value >= 0


def _as_point(point: HistoryPoint | ForecastPoint | Mapping[str, Any]) -> HistoryPoint | ForecastPoint:
    if isinstance(point, (HistoryPoint, ForecastPoint)):
        return point
    return _point_adapter.validate_python(point)


def render_forecast(point: ForecastPoint, warnings: list[str] | None = None) -> ForecastRender:
    """Build the stacked band for one forecast bar."""
    if not (math.isfinite(point.bear) and math.isfinite(point.bull)):
        spread = 0.0
        if warnings is not None:
            warnings.append(f"{point.date}: non-finite bear/bull, band collapsed")
    else:
        spread = point.bull - point.bear
        if spread < 0:
            if warnings is not None:
                warnings.append(
                    f"{point.date}: bull {point.bull} below bear {point.bear}, spread clamped to 0"
                )
            spread = 0.0

    return ForecastRender(
        date=point.date,
        bear=point.bear,
        base=point.base,
        bull=point.bull,
        spread=spread,
    )


def axis_bounds(values: Iterable[float], padding: float | None = None) -> tuple[float, float]:
    """
    Padded (min, max) over the plottable values.

    Raises:
        EmptySeriesError: no finite, non-negative value exists.
    """
    pad = settings.chart_axis_padding if padding is None else padding
    pool = [v for v in values if _is_plottable(v)]
    if not pool:
        raise EmptySeriesError()
    return min(pool) * (1 - pad), max(pool) * (1 + pad)


def reference_lines(
    reference_price: float | None = None,
    support_levels: Sequence[float] = (),
    resistance_levels: Sequence[float] = (),
) -> list[ReferenceLine]:
    """Horizontal markers for the current price and key levels."""
    lines = []
    if reference_price is not None and math.isfinite(reference_price):
        lines.append(ReferenceLine(kind="current", value=reference_price, label="NOW"))
    lines.extend(
        ReferenceLine(kind="support", value=level, label="SUP")
        for level in support_levels
        if math.isfinite(level)
    )
    lines.extend(
        ReferenceLine(kind="resistance", value=level, label="RES")
        for level in resistance_levels
        if math.isfinite(level)
    )
    return lines


def transform_chart(
    points: Sequence[HistoryPoint | ForecastPoint | Mapping[str, Any]],
    *,
    reference_price: float | None = None,
    support_levels: Sequence[float] = (),
    resistance_levels: Sequence[float] = (),
    padding: float | None = None,
) -> ChartFrame:
    """
    Build the render series and y-axis bounds for a price chart.

    Args:
        points: Ordered history/forecast points (models or raw mappings)
        reference_price: Current price, drawn as a reference line
        support_levels: Support prices, drawn as reference lines
        resistance_levels: Resistance prices, drawn as reference lines
        padding: Axis padding override (defaults to settings)

    Returns:
        ChartFrame with one render point per input point.

    Raises:
        EmptySeriesError: no point contributes a plottable value.
    """
    warnings: list[str] = []
    series: list[HistoryRender | ForecastRender] = []
    pool: list[float] = []

    for raw in points:
        point = _as_point(raw)
        if isinstance(point, HistoryPoint):
            series.append(HistoryRender(date=point.date, price=point.price))
            candidates = (point.price,)
        else:
            series.append(render_forecast(point, warnings))
            candidates = (point.bear, point.bull)

        for value in candidates:
            if _is_plottable(value):
                pool.append(value)
            else:
                warnings.append(f"{point.date}: value {value} left off the axis")

    y_min, y_max = axis_bounds(pool, padding)

    for note in warnings:
        logger.warning(f"Chart data quality: {note}")

    return ChartFrame(
        series=series,
        y_min=y_min,
        y_max=y_max,
        reference_lines=reference_lines(reference_price, support_levels, resistance_levels),
        warnings=warnings,
    )
