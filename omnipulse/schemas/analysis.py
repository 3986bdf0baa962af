"""Analysis schemas for API validation.

Request and response bodies for turning generated text into reports,
pick lists and chart frames.

Usage:
    from omnipulse.schemas.analysis import (
        ReportParseRequest,
        ReportParseResponse,
        ChartRequest,
    )
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from omnipulse.domain import AlphaPick, ChartFrame, ChartPoint, FinancialReport


class AnalysisSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# REQUESTS
# =============================================================================


class ReportParseRequest(AnalysisSchema):
    """Generated analysis text plus the sources the generator cited."""

    text: str = Field(..., min_length=1, description="Complete generation response text")
    grounding_urls: list[str] | None = Field(
        None, description="Source URIs from the generation response"
    )
    strict_bounds: bool | None = Field(
        None, description="Reject out-of-range readings instead of clamping"
    )


class PickParseRequest(AnalysisSchema):
    """Generated market-scan text."""

    text: str = Field(..., min_length=1, description="Complete generation response text")


class ChartRequest(AnalysisSchema):
    """Points to chart, with optional reference levels."""

    points: list[ChartPoint]
    reference_price: float | None = None
    support_levels: list[float] = Field(default_factory=list)
    resistance_levels: list[float] = Field(default_factory=list)


# =============================================================================
# RESPONSES
# =============================================================================


class ReportParseResponse(AnalysisSchema):
    report: FinancialReport
    chart: ChartFrame | None = Field(
        None, description="Null when the report carries no plottable chart data"
    )
    warnings: list[str] = Field(default_factory=list)


class PickParseResponse(AnalysisSchema):
    picks: list[AlphaPick]
    total_count: int
