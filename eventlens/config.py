"""Centralized configuration for the EventLens backend.

Re-exports everything from eventlens.infrastructure.settings so callers have a
single import point, then adds typed constants for the insight pipeline,
remote summarization, and API settings.  Environment variable overrides use
safe defaults so the pipeline runs without extra env configuration.
"""

from __future__ import annotations

import os

from eventlens.infrastructure.settings import *  # noqa: F401, F403

# --- App ---
APP_VERSION: str = "1.0.0"

# --- Insight Pipeline ---
MIN_QUALITY_CHARS: int = 20
SUMMARY_MAX_CHARS: int = 200
SUMMARY_ELLIPSIS: str = "..."
MAX_SUGGESTIONS: int = 3
MIN_SUGGESTIONS: int = 2
UNTITLED_EVENT: str = "Untitled Event"

# --- Remote summarization ---
REMOTE_TIMEOUT_SECONDS: float = float(os.getenv("EVENTLENS_REMOTE_TIMEOUT", "15"))
PROMPT_TITLE_MAX_CHARS: int = 200
PROMPT_DESCRIPTION_MAX_CHARS: int = 1000

# --- API ---
API_BATCH_SIZE_MAX: int = 100
