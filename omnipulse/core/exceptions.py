"""Custom exceptions and centralized exception handlers.

Every pipeline stage fails with a subclass of ``AppException`` so callers can
catch one stage (``ExtractionError``), one condition (``MissingFieldError``) or
everything at once. None of these conditions resolve by re-running the same
stage on the same input.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class AppException(Exception):
    """Base application exception with structured error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_ERROR"
    message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.status_code = status_code or self.status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to RFC 7807 problem+json style response."""
        return {
            "error": self.error_code,
            "message": self.message,
            "status": self.status_code,
            **({"details": self.details} if self.details else {}),
        }


# =============================================================================
# Extraction
# =============================================================================


class ExtractionError(AppException):
    """No JSON document could be isolated from generated text."""

    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    error_code = "EXTRACTION_FAILED"
    message = "Could not locate a JSON document in the generated text"


class NoStructureFoundError(ExtractionError):
    """The text contains no opening bracket at all."""

    error_code = "NO_STRUCTURE_FOUND"
    message = "No JSON object or array found in the generated text"


class UnterminatedStructureError(ExtractionError):
    """An opening bracket exists but nothing closes it."""

    error_code = "UNTERMINATED_STRUCTURE"
    message = "JSON structure in the generated text is never closed"

    def __init__(self, start: int, end: int | None, message: str | None = None):
        self.start = start
        self.end = end
        super().__init__(message, details={"start": start, "end": end})


# =============================================================================
# Validation
# =============================================================================


class ReportValidationError(AppException):
    """The extracted payload does not match the expected shape."""

    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    error_code = "VALIDATION_FAILED"
    message = "Validation failed"


class MalformedJSONError(ReportValidationError):
    """The payload is not parseable JSON."""

    error_code = "MALFORMED_JSON"

    def __init__(self, position: int, reason: str, line: int | None = None, column: int | None = None):
        self.position = position
        self.reason = reason
        super().__init__(
            f"Malformed JSON at position {position}: {reason}",
            details={"position": position, "line": line, "column": column, "reason": reason},
        )


class FieldValidationError(ReportValidationError):
    """A violation tied to one field of the payload."""

    def __init__(
        self,
        field_path: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.field_path = field_path
        super().__init__(message, details={"field": field_path, **(details or {})})


class MissingFieldError(FieldValidationError):
    """A required field is absent."""

    error_code = "MISSING_FIELD"

    def __init__(self, field_path: str, details: dict[str, Any] | None = None):
        super().__init__(field_path, f"Missing required field: {field_path}", details)


class InvalidEnumError(FieldValidationError):
    """A field holds a value outside its closed set."""

    error_code = "INVALID_ENUM"

    def __init__(
        self,
        field_path: str,
        got: Any,
        expected: list[str],
        details: dict[str, Any] | None = None,
    ):
        self.got = got
        self.expected = expected
        super().__init__(
            field_path,
            f"Invalid value {got!r} for {field_path}; expected one of {', '.join(expected)}",
            {"got": got, "expected": expected, **(details or {})},
        )


class InvalidFieldError(FieldValidationError):
    """A field has the wrong type, cardinality or range."""

    error_code = "INVALID_FIELD"

    def __init__(self, field_path: str, reason: str, details: dict[str, Any] | None = None):
        self.reason = reason
        super().__init__(field_path, f"Invalid field {field_path}: {reason}", details)


# =============================================================================
# Chart transform
# =============================================================================


class TransformError(AppException):
    """Chart points cannot be turned into a renderable series."""

    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    error_code = "TRANSFORM_FAILED"
    message = "Chart transform failed"


class EmptySeriesError(TransformError):
    """No usable value exists to scale the axis."""

    error_code = "EMPTY_SERIES"
    message = "Chart series has no plottable values"


def register_exception_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request, exc: AppException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers={"X-Request-ID": getattr(request.state, "request_id", "unknown")},
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        import logging

        logger = logging.getLogger("omnipulse.error")
        logger.exception(
            "Unhandled exception",
            extra={
                "request_id": getattr(request.state, "request_id", "unknown"),
                "path": request.url.path,
                "method": request.method,
            },
        )

        from .config import settings

        if settings.debug:
            message = str(exc)
        else:
            message = "An unexpected error occurred"

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "INTERNAL_ERROR",
                "message": message,
                "status": 500,
            },
            headers={"X-Request-ID": getattr(request.state, "request_id", "unknown")},
        )
