"""Tests for locating JSON documents inside generated text."""

from __future__ import annotations

import json

import pytest

from omnipulse.core.exceptions import (
    ExtractionError,
    NoStructureFoundError,
    UnterminatedStructureError,
)
from omnipulse.services.extraction import ExtractedPayload, extract_payload, strip_code_fences


class TestStripCodeFences:
    """Tests for strip_code_fences."""

    def test_removes_language_fence(self):
        """```json markers go, the content stays."""
        assert strip_code_fences('```json\n{"a": 1}\n```') == '\n{"a": 1}\n'

    def test_removes_bare_fence(self):
        assert strip_code_fences('```\n[1, 2]\n```') == "\n[1, 2]\n"

    def test_removes_every_fence(self):
        """Fences in the middle of the text are removed too."""
        text = "intro ```python\nx = 1\n``` then ```json\n{}\n``` done"
        assert "```" not in strip_code_fences(text)
        assert "x = 1" in strip_code_fences(text)

    def test_leaves_text_without_fences_unchanged(self):
        assert strip_code_fences("plain {text}") == "plain {text}"


class TestExtractPayload:
    """Tests for extract_payload."""

    def test_bare_object(self):
        payload = extract_payload('{"ticker": "TSLA"}')
        assert payload.text == '{"ticker": "TSLA"}'
        assert payload.kind == "object"

    def test_fenced_object_with_prose(self):
        """Fences and surrounding chatter are dropped."""
        raw = 'Here you go:\n```json\n{"ticker": "TSLA", "levels": [1, 2]}\n```\nAnything else?'
        payload = extract_payload(raw)
        assert json.loads(payload.text) == {"ticker": "TSLA", "levels": [1, 2]}

    def test_array_payload(self):
        payload = extract_payload('Picks:\n[{"ticker": "PLTR"}, {"ticker": "SOL"}]\nGood luck.')
        assert payload.kind == "array"
        assert json.loads(payload.text) == [{"ticker": "PLTR"}, {"ticker": "SOL"}]

    def test_object_holding_arrays_starts_at_brace(self):
        """The earlier of the two opener kinds wins."""
        payload = extract_payload('{"levels": [1, 2, 3]}')
        assert payload.text.startswith("{")
        assert payload.end == len(payload.text) - 1

    def test_stray_brackets_outside_payload(self):
        """Closers before the payload and openers after it do not matter."""
        raw = (
            "Analysis] complete} with no issues.\n"
            '{"a": {"b": [1, 2]}, "c": "x"}\n'
            "Ask me for [more details or {context"
        )
        payload = extract_payload(raw)
        assert json.loads(payload.text) == {"a": {"b": [1, 2]}, "c": "x"}

    def test_brackets_inside_strings_are_kept(self):
        raw = 'prefix {"note": "range is [10, 20] and {braces}"} suffix'
        payload = extract_payload(raw)
        assert json.loads(payload.text) == {"note": "range is [10, 20] and {braces}"}

    def test_offsets_refer_to_fence_stripped_text(self):
        raw = "ab ```json{}```"
        payload = extract_payload(raw)
        assert payload == ExtractedPayload(text="{}", start=3, end=4)

    def test_str_returns_payload_text(self):
        assert str(extract_payload("x [1] y")) == "[1]"

    def test_trailing_bracket_in_prose_widens_span(self):
        """Known limitation: a closer after the payload extends the span."""
        payload = extract_payload('{"a": 1} and see note [1]')
        assert payload.text == '{"a": 1} and see note [1]'

    def test_no_json_raises_no_structure_found(self):
        with pytest.raises(NoStructureFoundError) as exc_info:
            extract_payload("no json here")
        assert exc_info.value.error_code == "NO_STRUCTURE_FOUND"

    def test_empty_text_raises_no_structure_found(self):
        with pytest.raises(NoStructureFoundError):
            extract_payload("")

    def test_fences_only_raise_no_structure_found(self):
        with pytest.raises(NoStructureFoundError):
            extract_payload("```json\n```")

    def test_unterminated_object(self):
        with pytest.raises(UnterminatedStructureError) as exc_info:
            extract_payload('{"a":1')
        assert exc_info.value.start == 0
        assert exc_info.value.end is None

    def test_closer_before_opener_is_unterminated(self):
        with pytest.raises(UnterminatedStructureError) as exc_info:
            extract_payload("} oops {")
        assert exc_info.value.start == 7
        assert exc_info.value.end == 0
        assert exc_info.value.details == {"start": 7, "end": 0}

    def test_failures_share_extraction_base(self):
        """Callers can catch every extraction failure at once."""
        for raw in ("nothing", "[1, 2"):
            with pytest.raises(ExtractionError):
                extract_payload(raw)

    def test_rejects_non_string_input(self):
        with pytest.raises(TypeError):
            extract_payload(b'{"a": 1}')
