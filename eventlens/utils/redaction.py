"""
Shared helpers for keeping event text safe in logs and prompts.

Provides:
- redact_title(): Partially redact event titles for debugging
- sanitize_for_prompt(): Remove potential prompt injection patterns
"""

from __future__ import annotations

import re
from hashlib import sha256

# Patterns that could be used for prompt injection
INJECTION_PATTERNS = [
    r"ignore\s+(previous|above|all)\s+instructions?",
    r"disregard\s+(previous|above|all)\s+instructions?",
    r"forget\s+(previous|above|all)\s+instructions?",
    r"new\s+instructions?:",
    r"system\s*:",
    r"assistant\s*:",
    r"user\s*:",
    r"\[INST\]",
    r"\[/INST\]",
    r"<\|im_start\|>",
    r"<\|im_end\|>",
]
INJECTION_REGEX = re.compile("|".join(INJECTION_PATTERNS), re.IGNORECASE)


def redact_title(title: str | None, max_length: int = 30) -> str:
    """
    Partially redact an event title for logging while preserving debuggability.

    Shows first N characters + hash suffix for correlation. Birthday titles
    routinely carry people's names, so full titles never reach the logs.

    Example:
        "Grandma Rosalind's 90th birthday dinner" ->
        "Grandma Rosalind's 90th birthd... (h:<sha256[:6]>)"
    """
    if not title:
        return "(no title)"

    visible = title[:max_length] + "..." if len(title) > max_length else title
    digest = sha256(title.encode("utf-8")).hexdigest()[:6]
    return f"{visible} (h:{digest})"


def sanitize_for_prompt(text: str | None, max_length: int = 500) -> str:
    """
    Sanitize user-provided event text before including it in a generation prompt.

    Truncates, strips known injection phrases, and drops characters that
    could confuse prompt parsing.
    """
    if not text:
        return ""

    text = text[:max_length]
    text = INJECTION_REGEX.sub("[REDACTED]", text)
    text = re.sub(r"[<>{}|\\]", "", text)

    return text.strip()
