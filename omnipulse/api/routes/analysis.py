"""Analysis endpoints: generated text in, validated documents and charts out."""

from __future__ import annotations

from fastapi import APIRouter

from omnipulse.core.exceptions import EmptySeriesError
from omnipulse.core.logging import get_logger
from omnipulse.domain import ChartFrame
from omnipulse.schemas.analysis import (
    ChartRequest,
    PickParseRequest,
    PickParseResponse,
    ReportParseRequest,
    ReportParseResponse,
)
from omnipulse.services.chart import transform_chart
from omnipulse.services.pipeline import build_price_chart, parse_alpha_picks, parse_report


router = APIRouter()

logger = get_logger("api.analysis")


@router.post(
    "/report",
    response_model=ReportParseResponse,
    summary="Parse an asset report",
    description="Extract, validate and chart a generated single-asset analysis.",
)
async def parse_report_text(request: ReportParseRequest) -> ReportParseResponse:
    """
    Turn a complete generation response into a report and its price chart.

    Extraction and validation failures are returned as 422 responses; a
    report whose chart data has no plottable value is returned without a
    chart.
    """
    report = parse_report(
        request.text,
        grounding_urls=request.grounding_urls,
        strict_bounds=request.strict_bounds,
    )

    warnings = report.normalization_warnings
    try:
        chart = build_price_chart(report)
        warnings.extend(chart.warnings)
    except EmptySeriesError:
        logger.info(f"Report {report.ticker} has no plottable chart data")
        chart = None
        warnings.append("chart data has no plottable values")

    return ReportParseResponse(report=report, chart=chart, warnings=warnings)


@router.post(
    "/picks",
    response_model=PickParseResponse,
    summary="Parse a market scan",
    description="Extract and validate a generated list of trading opportunities.",
)
async def parse_pick_text(request: PickParseRequest) -> PickParseResponse:
    picks = parse_alpha_picks(request.text)
    return PickParseResponse(picks=picks, total_count=len(picks))


@router.post(
    "/chart",
    response_model=ChartFrame,
    summary="Build a probability-cloud chart",
    description="Convert history and forecast points into stacked-area series with axis bounds.",
)
async def build_chart(request: ChartRequest) -> ChartFrame:
    return transform_chart(
        request.points,
        reference_price=request.reference_price,
        support_levels=request.support_levels,
        resistance_levels=request.resistance_levels,
    )
