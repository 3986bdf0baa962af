"""Locate the JSON document inside generated text.

Generation responses wrap their payload in markdown fences, lead-in prose or
trailing commentary. The extractor takes the widest bracketed span: from the
first ``{`` or ``[`` to the last ``}`` or ``]``. Brackets are not counted,
so JSON-looking prose after the real payload widens the span.

Usage:
    from omnipulse.services.extraction import extract_payload

    payload = extract_payload(response_text)
    data = json.loads(payload.text)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from omnipulse.core.exceptions import NoStructureFoundError, UnterminatedStructureError


# Opening fences may carry a language tag (```json, ```python); closing ones don't
FENCE_PATTERN = re.compile(r"```[A-Za-z0-9_+-]*")

OPENERS = ("{", "[")
CLOSERS = ("}", "]")


@dataclass(frozen=True)
class ExtractedPayload:
    """Candidate JSON document cut out of generated text.

    ``start`` and ``end`` are inclusive offsets into the fence-stripped text.
    The text is not guaranteed to parse; validation decides that.
    """

    text: str
    start: int
    end: int

    @property
    def kind(self) -> str:
        """'object' or 'array', judged by the opening bracket."""
        return "object" if self.text[0] == "{" else "array"

    def __str__(self) -> str:
        return self.text


def strip_code_fences(text: str) -> str:
    """Remove markdown fence markers, keeping whatever sits between them."""
    return FENCE_PATTERN.sub("", text)


def extract_payload(raw: str) -> ExtractedPayload:
    """
    Isolate the JSON object or array embedded in generated text.

    Raises:
        NoStructureFoundError: the text has no ``{`` or ``[``.
        UnterminatedStructureError: nothing closes after the first opener.
    """
    if not isinstance(raw, str):
        raise TypeError(f"Expected generated text as str, got {type(raw).__name__}")

    text = strip_code_fences(raw)

    openings = [pos for pos in (text.find(ch) for ch in OPENERS) if pos != -1]
    if not openings:
        raise NoStructureFoundError()
    start = min(openings)

    closings = [pos for pos in (text.rfind(ch) for ch in CLOSERS) if pos != -1]
    end = max(closings) if closings else None
    if end is None or end <= start:
        raise UnterminatedStructureError(
            start,
            end,
            f"JSON structure opened at position {start} is never closed",
        )

    return ExtractedPayload(text=text[start:end + 1], start=start, end=end)
