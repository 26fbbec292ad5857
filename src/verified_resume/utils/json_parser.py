"""Utility to extract JSON from LLM responses."""

from __future__ import annotations

import json
import logging
import re

logger = logging.getLogger(__name__)

# Raw text included in diagnostics is capped so logs stay bounded
EXCERPT_CHARS = 200

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


class JSONRecoveryError(ValueError):
    """Raised when no JSON value can be recovered from model text."""

    def __init__(self, text: str) -> None:
        self.excerpt = excerpt(text)
        suffix = "..." if len(text or "") > EXCERPT_CHARS else ""
        super().__init__(f"Could not extract JSON from text: {self.excerpt}{suffix}")


def excerpt(text: str, limit: int = EXCERPT_CHARS) -> str:
    return (text or "")[:limit]


def extract_json(text: str) -> dict | list:
    """Extract JSON from LLM response, handling ```json blocks.

    Tries in order, stopping at the first that parses:
    1. Contents of the first fenced code block (optionally tagged json)
    2. First '{' to last '}'
    3. The trimmed whole text
    """
    text = text or ""

    result = _parse_fenced(text)
    if result is not None:
        return result

    result = _extract_braces(text)
    if result is not None:
        return result

    try:
        return json.loads(text.strip())
    except json.JSONDecodeError:
        pass

    logger.warning("Failed to parse JSON from model response: %s", excerpt(text))
    raise JSONRecoveryError(text)


def _parse_fenced(text: str) -> dict | list | None:
    """Parse the first fenced code block, if any."""
    match = _FENCE_RE.search(text)
    if match is None:
        return None
    try:
        return json.loads(match.group(1).strip())
    except json.JSONDecodeError:
        return None


def _extract_braces(text: str) -> dict | None:
    """Try to extract JSON object from first '{' to last '}'."""
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        try:
            return json.loads(text[start : end + 1])
        except json.JSONDecodeError:
            pass
    return None
