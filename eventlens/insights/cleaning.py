"""
Text cleaning and quality gate for generated summaries.

Remote backends return text in several shapes and of uneven quality. These
helpers pull the generated text out of a response payload, normalize it into
a single bounded sentence, and decide whether it is good enough to show.
"""

from __future__ import annotations

import re
from typing import Any

from eventlens.config import MIN_QUALITY_CHARS, SUMMARY_ELLIPSIS, SUMMARY_MAX_CHARS

# Keys that carry generated text, in lookup order
GENERATED_TEXT_KEYS = ("summary_text", "generated_text")

_LABEL_PREFIX = re.compile(
    r"^\s*(summary|event|description|birthday event)\s*:\s*", re.IGNORECASE
)
_SUGGESTIONS_MARKER = re.compile(r"\bSUGGESTIONS\s*:", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_TERMINAL_PUNCTUATION = (".", "!", "?")


def extract_generated_text(payload: Any) -> str:
    """
    Pull generated text out of a response payload.

    Handles:
        [{"summary_text": "..."}]            (summarization pipelines)
        [{"generated_text": "..."}]          (text2text / text generation)
        {"summary_text": "..."} / {"generated_text": "..."}
        {"choices": [{"message": {"content": "..."}}]}  (chat completions)

    Returns "" for anything else, including {"error": "..."} payloads.
    """
    if isinstance(payload, list):
        if not payload:
            return ""
        payload = payload[0]

    if not isinstance(payload, dict):
        return ""

    for key in GENERATED_TEXT_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value

    choices = payload.get("choices")
    if isinstance(choices, list) and choices:
        first = choices[0]
        if isinstance(first, dict):
            message = first.get("message") or {}
            content = message.get("content") if isinstance(message, dict) else None
            if isinstance(content, str):
                return content

    return ""


def passes_quality_gate(text: str | None) -> bool:
    """Minimum-length check applied to raw and assembled text."""
    return bool(text) and len(text.strip()) >= MIN_QUALITY_CHARS


def truncate_summary(text: str) -> str:
    """Bound a summary to SUMMARY_MAX_CHARS, marking the cut with an ellipsis."""
    if len(text) <= SUMMARY_MAX_CHARS:
        return text
    return text[: SUMMARY_MAX_CHARS - len(SUMMARY_ELLIPSIS)].rstrip() + SUMMARY_ELLIPSIS


def ensure_terminal_punctuation(text: str) -> str:
    if text.endswith(_TERMINAL_PUNCTUATION):
        return text
    return text + "."


def clean_summary(text: str | None) -> str | None:
    """
    Normalize generated text into a one-line summary.

    Strips a leading label ("Summary:", "Event:", ...), drops any trailing
    "SUGGESTIONS:" section, collapses whitespace, bounds the length, and
    ensures terminal punctuation. Returns None when what remains is too
    short or is a single run-on token.
    """
    if not text:
        return None

    summary = _LABEL_PREFIX.sub("", text, count=1)
    marker = _SUGGESTIONS_MARKER.search(summary)
    if marker:
        summary = summary[: marker.start()]
    summary = _WHITESPACE.sub(" ", summary).strip()

    if len(summary) < MIN_QUALITY_CHARS or " " not in summary:
        return None

    return truncate_summary(ensure_terminal_punctuation(summary))
