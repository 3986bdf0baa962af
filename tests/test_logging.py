"""Tests for structured and text log formatting."""

from __future__ import annotations

import json
import logging

from omnipulse.core.logging import (
    StructuredFormatter,
    TextFormatter,
    get_logger,
    request_id_var,
)


def make_record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="omnipulse.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_basic_fields(self):
        data = json.loads(StructuredFormatter().format(make_record("chart clamped")))
        assert data["level"] == "WARNING"
        assert data["logger"] == "omnipulse.test"
        assert data["message"] == "chart clamped"
        assert "timestamp" in data

    def test_extra_fields_are_included(self):
        data = json.loads(StructuredFormatter().format(make_record("req", path="/health", status_code=200)))
        assert data["path"] == "/health"
        assert data["status_code"] == 200

    def test_request_id_is_included(self):
        token = request_id_var.set("abc-123")
        try:
            data = json.loads(StructuredFormatter().format(make_record("req")))
        finally:
            request_id_var.reset(token)
        assert data["request_id"] == "abc-123"


class TestTextFormatter:
    def test_format(self):
        line = TextFormatter().format(make_record("score clamped"))
        assert "WARNING" in line
        assert line.endswith("omnipulse.test: score clamped")

    def test_request_id_prefix(self):
        token = request_id_var.set("0123456789abcdef")
        try:
            line = TextFormatter().format(make_record("x"))
        finally:
            request_id_var.reset(token)
        assert "[01234567]" in line


def test_get_logger_prefix():
    assert get_logger("services.chart").name == "omnipulse.services.chart"
