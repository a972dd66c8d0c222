"""
Recover a JSON object from free-form model output.

Models wrap answers in code fences, frame them with prose, or echo fragments
of the answer in an aside. The extractor tries a direct parse first and then
falls back to scanning for balanced ``{...}`` spans, preferring the longest
span that parses.
"""

import json
import logging
import re
from typing import List

from roamy.integrations.exceptions import ExtractionFailed

logger = logging.getLogger(__name__)

_OPENING_FENCE_RE = re.compile(r"^```(?:json|JSON)?\s*")
_CLOSING_FENCE_RE = re.compile(r"\s*```$")


def strip_fences(text: str) -> str:
    """Remove a leading opening fence and a trailing closing fence, nothing else."""
    cleaned = (text or "").strip()
    cleaned = _OPENING_FENCE_RE.sub("", cleaned, count=1)
    return _CLOSING_FENCE_RE.sub("", cleaned, count=1).strip()


def _parses_as_object(candidate: str) -> bool:
    try:
        return isinstance(json.loads(candidate), dict)
    except ValueError:
        return False


def find_brace_spans(text: str) -> List[str]:
    """Return every balanced ``{...}`` substring of text, outer spans included.

    Braces inside JSON string literals are ignored, honouring backslash
    escapes. Unbalanced closing braces are skipped.
    """
    spans = []
    starts = []
    in_string = False
    escaped = False

    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            # Quotes only delimit strings inside a brace span; prose quotes are ignored.
            if starts:
                in_string = True
        elif ch == "{":
            starts.append(i)
        elif ch == "}" and starts:
            start = starts.pop()
            spans.append(text[start:i + 1])

    return spans


def extract_json(raw_text: str) -> str:
    """Return the JSON object text contained in raw model output.

    Raises ExtractionFailed when no candidate parses.
    """
    cleaned = strip_fences(raw_text)
    if _parses_as_object(cleaned):
        return cleaned

    candidates = sorted(set(find_brace_spans(cleaned)), key=len, reverse=True)
    for candidate in candidates:
        if _parses_as_object(candidate):
            logger.warning(
                "Recovered JSON from noisy model output (%d of %d chars)",
                len(candidate), len(cleaned),
            )
            return candidate

    logger.error("No JSON object found in model output (%d candidates tried)", len(candidates))
    logger.debug("Unparseable model output: %s", raw_text)
    raise ExtractionFailed("No valid JSON object found in the model response", raw_text=raw_text)
