"""Tests for settings behavior and validation.

Tests verify:
- CORS origins from a comma-separated environment value
- log level and format validation
- pipeline tuning fields and their bounds
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from omnipulse.core.config import Settings


class TestCorsOrigins:
    """Tests for cors_origins parsing."""

    def test_comma_separated_string(self):
        settings = Settings(cors_origins="https://a.example, https://b.example,")
        assert settings.cors_origins == ["https://a.example", "https://b.example"]

    def test_list_passes_through(self):
        settings = Settings(cors_origins=["https://a.example"])
        assert settings.cors_origins == ["https://a.example"]


class TestLoggingSettings:
    """Tests for log_level and log_format validation."""

    def test_log_level_is_upper_cased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_log_format_is_lower_cased(self):
        assert Settings(log_format="TEXT").log_format == "text"

    def test_invalid_log_format(self):
        with pytest.raises(ValidationError):
            Settings(log_format="xml")


class TestPipelineSettings:
    """Tests for report and chart tuning."""

    def test_defaults(self):
        settings = Settings()
        assert settings.strict_bounds is False
        assert settings.max_grounding_urls == 5
        assert settings.recommended_max_picks == 5
        assert settings.chart_axis_padding == 0.05

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("STRICT_BOUNDS", "true")
        monkeypatch.setenv("MAX_GROUNDING_URLS", "3")
        settings = Settings()
        assert settings.strict_bounds is True
        assert settings.max_grounding_urls == 3

    @pytest.mark.parametrize("padding", [-0.1, 1.0])
    def test_padding_bounds(self, padding):
        with pytest.raises(ValidationError):
            Settings(chart_axis_padding=padding)

    def test_grounding_cap_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(max_grounding_urls=0)

    def test_environment_flags(self):
        assert Settings(environment="development").is_development
        assert Settings(environment="production").is_production
