"""Pipeline services: extraction, validation and chart transform.

Usage:
    from omnipulse.services import (
        extract_payload,
        validate_payload,
        transform_chart,
        parse_report,
    )
"""

from omnipulse.services.chart import axis_bounds, render_forecast, transform_chart
from omnipulse.services.extraction import ExtractedPayload, extract_payload, strip_code_fences
from omnipulse.services.pipeline import (
    build_price_chart,
    collect_grounding_urls,
    parse_alpha_picks,
    parse_report,
)
from omnipulse.services.validation import (
    PayloadShape,
    parse_json,
    translate_validation_error,
    validate_payload,
    validate_pick_data,
    validate_report_data,
)

__all__ = [
    # Extraction
    "ExtractedPayload",
    "extract_payload",
    "strip_code_fences",
    # Validation
    "PayloadShape",
    "parse_json",
    "translate_validation_error",
    "validate_payload",
    "validate_pick_data",
    "validate_report_data",
    # Chart
    "axis_bounds",
    "render_forecast",
    "transform_chart",
    # Pipeline
    "build_price_chart",
    "collect_grounding_urls",
    "parse_alpha_picks",
    "parse_report",
]
