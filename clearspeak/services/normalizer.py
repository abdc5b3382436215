"""
Recovery of the tone analysis object from raw provider text.

Parsing is two-staged: the text as-is, then the ``{...}`` span inside it
(models like to wrap JSON in prose or markdown fences). Only a text with
no recoverable object is an error; bad fields are replaced by defaults.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, List, Optional

from clearspeak.core.errors import UnparseableResponseError
from clearspeak.schemas.message import (
    DEFAULT_TONE_LABEL,
    MAX_SUGGESTIONS,
    TONE_LABELS,
    AnalysisResult,
)

logger = logging.getLogger(__name__)

_TONES_BY_KEY = {label.lower(): label for label in TONE_LABELS}


def _strip_markdown_code_blocks(text: str) -> str:
    """Remove markdown code blocks (```json ... ``` or ``` ... ```)."""
    stripped = text.strip()
    for pattern in (r"^```\s*json\s*\n?", r"^```\s*\n?"):
        stripped = re.sub(pattern, "", stripped, flags=re.IGNORECASE)
    stripped = re.sub(r"\n?```\s*$", "", stripped)
    return stripped.strip()


def _extract_json_object(text: str) -> Optional[str]:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    return text[start : end + 1]


def _loads_object(text: str) -> Optional[dict]:
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_json_object(raw_text: str) -> dict:
    """
    Parse ``raw_text`` into a JSON object, falling back to the outermost
    ``{...}`` span.

    Raises:
        UnparseableResponseError: neither stage produced a JSON object.
    """
    text = raw_text if isinstance(raw_text, str) else ""
    parsed = _loads_object(text)
    if parsed is not None:
        return parsed

    candidate = _extract_json_object(_strip_markdown_code_blocks(text))
    if candidate is not None:
        parsed = _loads_object(candidate)
        if parsed is not None:
            logger.debug("Recovered JSON object embedded in provider text")
            return parsed

    snippet = (text[:300] + "...") if len(text) > 300 else text
    logger.error("Provider output is not a JSON object; snippet: %s", snippet)
    raise UnparseableResponseError(snippet)


def coerce_tone(value: Any) -> str:
    if isinstance(value, str):
        label = _TONES_BY_KEY.get(value.strip().lower())
        if label:
            return label
    return DEFAULT_TONE_LABEL


def coerce_score(value: Any) -> int:
    """Return ``value`` as an int in [0, 100]; non-numeric values give 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        # JSON integers are unbounded; clamp before any float conversion.
        return max(0, min(100, value))
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0
    else:
        return 0
    if math.isnan(number):
        return 0
    if number >= 100:
        return 100
    if number <= 0:
        return 0
    return int(round(number))


def coerce_suggestions(value: Any) -> List[str]:
    """Return up to three suggestions; anything but a list of strings gives []."""
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        return []
    return value[:MAX_SUGGESTIONS]


def normalize_analysis(raw_text: str) -> AnalysisResult:
    """
    Turn raw provider text into a well-formed AnalysisResult.

    Raises:
        UnparseableResponseError: no JSON object could be recovered.
    """
    data = parse_json_object(raw_text)
    result = AnalysisResult(
        tone=coerce_tone(data.get("tone")),
        score=coerce_score(data.get("score")),
        suggestions=coerce_suggestions(data.get("suggestions")),
    )
    if result.tone != data.get("tone") or result.score != data.get("score"):
        logger.info(
            "Analysis fields corrected: tone=%s score=%s (raw score type %s)",
            result.tone,
            result.score,
            type(data.get("score")).__name__,
        )
    return result
