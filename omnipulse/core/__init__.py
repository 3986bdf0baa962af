"""Core infrastructure: settings, logging, exceptions."""

from .config import settings
from .exceptions import (
    AppException,
    EmptySeriesError,
    ExtractionError,
    InvalidEnumError,
    InvalidFieldError,
    MalformedJSONError,
    MissingFieldError,
    NoStructureFoundError,
    ReportValidationError,
    TransformError,
    UnterminatedStructureError,
)


__all__ = [
    "AppException",
    "EmptySeriesError",
    "ExtractionError",
    "InvalidEnumError",
    "InvalidFieldError",
    "MalformedJSONError",
    "MissingFieldError",
    "NoStructureFoundError",
    "ReportValidationError",
    "TransformError",
    "UnterminatedStructureError",
    "settings",
]
