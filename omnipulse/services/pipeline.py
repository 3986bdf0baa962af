"""
Generated text -> validated documents -> chart.

Thin composition of the extraction, validation and chart stages. Callers own
the generation request itself; they hand over the complete response text
(buffered if it was streamed) and, for reports, the response's grounding
sources.

Usage:
    from omnipulse.services.pipeline import build_price_chart, parse_report

    report = parse_report(text, grounding_urls=collect_grounding_urls(response))
    chart = build_price_chart(report)
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from omnipulse.core.logging import get_logger
from omnipulse.domain.chart import ChartFrame
from omnipulse.domain.report import AlphaPick, FinancialReport
from omnipulse.services.chart import transform_chart
from omnipulse.services.extraction import extract_payload
from omnipulse.services.validation import parse_json, validate_pick_data, validate_report_data

logger = get_logger("services.pipeline")


def collect_grounding_urls(response: Mapping[str, Any]) -> list[str]:
    """
    Pull source URIs out of a generation response.

    Reads ``candidates[0].groundingMetadata.groundingChunks[*].web.uri``
    (snake_case keys are accepted too). Order is preserved; de-duplication
    and capping happen during report validation.
    """
    candidates = response.get("candidates") or []
    if not candidates:
        return []

    first = candidates[0] or {}
    metadata = first.get("groundingMetadata") or first.get("grounding_metadata") or {}
    chunks = metadata.get("groundingChunks") or metadata.get("grounding_chunks") or []

    urls = []
    for chunk in chunks:
        web = (chunk or {}).get("web") or {}
        uri = web.get("uri")
        if uri:
            urls.append(uri)
    return urls


def parse_report(
    text: str,
    *,
    grounding_urls: Iterable[str] | None = None,
    strict_bounds: bool | None = None,
) -> FinancialReport:
    """Extract and validate a FinancialReport from generated text."""
    payload = extract_payload(text)
    report = validate_report_data(
        parse_json(payload),
        strict_bounds=strict_bounds,
        grounding_urls=grounding_urls,
    )
    logger.debug(
        f"Parsed report for {report.ticker}: {len(report.chart_data)} chart points, "
        f"{len(report.grounding_urls)} sources"
    )
    return report


def parse_alpha_picks(text: str) -> list[AlphaPick]:
    """Extract and validate a market-scan pick list from generated text."""
    picks = validate_pick_data(parse_json(extract_payload(text)))
    logger.debug(f"Parsed {len(picks)} alpha picks")
    return picks


def build_price_chart(report: FinancialReport) -> ChartFrame:
    """Chart a report's price history and forecast cone with its key levels."""
    return transform_chart(
        report.chart_data,
        reference_price=report.current_price,
        support_levels=report.technical_analysis.support_levels,
        resistance_levels=report.technical_analysis.resistance_levels,
    )
