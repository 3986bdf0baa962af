"""
Validation of extracted payloads against the report and pick-list shapes.

Parses the extractor's output and runs it through the pydantic domain
models. Pydantic errors are translated into the typed validation errors
callers handle:

- missing key            -> MissingFieldError(field_path)
- value outside its enum -> InvalidEnumError(field_path, got, expected)
- anything else          -> InvalidFieldError(field_path, reason)

Missing content is never synthesized. Bounded [0, 100] readings are clamped
(and reported in ``FinancialReport.normalization_warnings``) unless strict
bounds are requested, in which case they are rejected.
"""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Any, Iterable

from pydantic import TypeAdapter, ValidationError

from omnipulse.core.config import settings
from omnipulse.core.exceptions import (
    InvalidEnumError,
    InvalidFieldError,
    MalformedJSONError,
    MissingFieldError,
    ReportValidationError,
)
from omnipulse.core.logging import get_logger
from omnipulse.domain.report import AlphaPick, FinancialReport, PickList
from omnipulse.services.extraction import ExtractedPayload

logger = get_logger("services.validation")


class PayloadShape(str, Enum):
    """Document shapes the generation service returns."""

    REPORT = "report"
    PICK_LIST = "pickList"


ROOT_PATH = "$"

_MISSING_TYPES = {"missing", "union_tag_not_found"}
_ENUM_TYPES = {"enum", "literal_error", "union_tag_invalid"}

# Discriminated unions insert the matched tag into error locations
_UNION_TAGS = {"history", "forecast"}

_pick_list_adapter: TypeAdapter[list[AlphaPick]] = TypeAdapter(PickList)


# =============================================================================
# Parsing
# =============================================================================


def parse_json(payload: ExtractedPayload | str) -> Any:
    """Parse payload text as JSON, raising MalformedJSONError on failure."""
    text = payload.text if isinstance(payload, ExtractedPayload) else payload
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedJSONError(e.pos, e.msg, line=e.lineno, column=e.colno) from e


# =============================================================================
# Error translation
# =============================================================================


def _field_path(loc: tuple[Any, ...]) -> str:
    """Render a pydantic location as ``predictions[0].priceTarget``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif part in _UNION_TAGS:
            continue
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or ROOT_PATH


def _join(path: str, name: str) -> str:
    return name if path == ROOT_PATH else f"{path}.{name}"


def _quoted(text: str) -> list[str]:
    return re.findall(r"'([^']*)'", text)


def _error_rank(error: dict[str, Any]) -> int:
    if error["type"] in _MISSING_TYPES:
        return 0
    if error["type"] in _ENUM_TYPES:
        return 1
    return 2


def translate_validation_error(exc: ValidationError) -> ReportValidationError:
    """Map a pydantic ValidationError onto the typed validation errors.

    A missing field wins over an enum violation, which wins over any other
    problem. Every violation is listed under ``details["errors"]``.
    """
    errors = exc.errors(include_url=False)
    summary = [
        {"field": _field_path(err["loc"]), "type": err["type"], "message": err["msg"]}
        for err in errors
    ]
    details = {"errors": summary}

    first = min(errors, key=_error_rank)
    path = _field_path(first["loc"])
    ctx = first.get("ctx") or {}

    if first["type"] == "union_tag_not_found":
        return MissingFieldError(_join(path, ctx.get("discriminator", "'type'").strip("'")), details)
    if first["type"] == "missing":
        return MissingFieldError(path, details)
    if first["type"] == "union_tag_invalid":
        return InvalidEnumError(
            _join(path, ctx.get("discriminator", "'type'").strip("'")),
            ctx.get("tag"),
            _quoted(ctx.get("expected_tags", "")),
            details,
        )
    if first["type"] in _ENUM_TYPES:
        return InvalidEnumError(path, first.get("input"), _quoted(str(ctx.get("expected", ""))), details)
    return InvalidFieldError(path, first["msg"], details)


def _json_type(value: Any) -> str:
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if value is None:
        return "null"
    return type(value).__name__


# =============================================================================
# Validation
# =============================================================================


def validate_report_data(
    data: Any,
    *,
    strict_bounds: bool | None = None,
    grounding_urls: Iterable[str] | None = None,
) -> FinancialReport:
    """
    Validate already-parsed JSON as a FinancialReport.

    Args:
        data: Parsed JSON value
        strict_bounds: Reject out-of-range [0, 100] readings instead of
            clamping them. Defaults to ``settings.strict_bounds``.
        grounding_urls: Source references from the generation response.
            When given they replace any list inside the document.
    """
    if not isinstance(data, dict):
        raise InvalidFieldError(ROOT_PATH, f"expected a JSON object, got {_json_type(data)}")

    if grounding_urls is not None:
        data = {**data, "groundingUrls": list(grounding_urls)}

    notes: list[str] = []
    context = {
        "strict_bounds": settings.strict_bounds if strict_bounds is None else strict_bounds,
        "max_grounding_urls": settings.max_grounding_urls,
        "warnings": notes,
    }

    try:
        report = FinancialReport.model_validate(data, context=context)
    except ValidationError as e:
        raise translate_validation_error(e) from e

    for note in notes:
        logger.warning(f"Report {report.ticker} normalized: {note}")

    return report


def validate_pick_data(data: Any) -> list[AlphaPick]:
    """Validate already-parsed JSON as a ranked list of AlphaPick."""
    if not isinstance(data, list):
        raise InvalidFieldError(ROOT_PATH, f"expected a JSON array, got {_json_type(data)}")

    try:
        picks = _pick_list_adapter.validate_python(data)
    except ValidationError as e:
        raise translate_validation_error(e) from e

    if len(picks) > settings.recommended_max_picks:
        logger.warning(
            f"Market scan returned {len(picks)} picks "
            f"(recommended max {settings.recommended_max_picks})"
        )

    return picks


def validate_payload(
    payload: ExtractedPayload | str,
    shape: PayloadShape | str = PayloadShape.REPORT,
    *,
    strict_bounds: bool | None = None,
    grounding_urls: Iterable[str] | None = None,
) -> FinancialReport | list[AlphaPick]:
    """
    Parse and validate an extracted payload.

    Args:
        payload: Extractor output (or raw JSON text)
        shape: "report" or "pickList"
        strict_bounds: See validate_report_data
        grounding_urls: See validate_report_data

    Returns:
        FinancialReport for the report shape, list of AlphaPick otherwise.

    Raises:
        MalformedJSONError, MissingFieldError, InvalidEnumError, InvalidFieldError
    """
    shape = PayloadShape(shape)
    data = parse_json(payload)

    if shape is PayloadShape.REPORT:
        return validate_report_data(
            data, strict_bounds=strict_bounds, grounding_urls=grounding_urls
        )
    return validate_pick_data(data)
