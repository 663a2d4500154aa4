"""
Application-wide settings and environment configuration
"""

from __future__ import annotations

import os
from pathlib import Path

# Environment
ENV = os.getenv("EVENTLENS_ENV", "development")

# API Configuration
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# Hugging Face inference API
HUGGINGFACE_API_URL = os.getenv(
    "HUGGINGFACE_API_URL", "https://api-inference.huggingface.co/models"
)
HUGGINGFACE_KEY_PLACEHOLDER = "your_huggingface_api_key_here"
DEFAULT_HF_MODELS = (
    "facebook/bart-large-cnn",
    "microsoft/DialoGPT-medium",
    "google/flan-t5-base",
)

# OpenAI (optional)
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
OPENAI_KEY_PREFIX = "sk-"

# Generation parameters sent with every summarization request
GENERATION_PARAMETERS = {
    "max_length": 150,
    "min_length": 30,
    "do_sample": True,
    "temperature": 0.7,
    "top_p": 0.9,
}
OPENAI_MAX_TOKENS = 300
OPENAI_TEMPERATURE = 0.7


def get_huggingface_api_key() -> str | None:
    """Return the Hugging Face key, treating the template placeholder as unset."""
    key = os.getenv("HUGGINGFACE_API_KEY", "").strip()
    if not key or key == HUGGINGFACE_KEY_PLACEHOLDER:
        return None
    return key


def get_openai_api_key() -> str | None:
    """Return the OpenAI key only when it has the expected format."""
    key = os.getenv("OPENAI_API_KEY", "").strip()
    if not key.startswith(OPENAI_KEY_PREFIX):
        return None
    return key


def get_hf_models() -> tuple[str, ...]:
    """Model priority order, overridable with a comma-separated EVENTLENS_HF_MODELS."""
    raw = os.getenv("EVENTLENS_HF_MODELS", "")
    models = tuple(m.strip() for m in raw.split(",") if m.strip())
    return models or DEFAULT_HF_MODELS


def use_remote() -> bool:
    """Kill switch for the remote path (read at call time)."""
    return os.getenv("EVENTLENS_USE_REMOTE", "true").lower() == "true"


def get_log_level() -> str:
    """Log level name from EVENTLENS_LOG_LEVEL (read at call time)."""
    return os.getenv("EVENTLENS_LOG_LEVEL", "INFO").strip().upper() or "INFO"


def get_category_rules_path() -> Path | None:
    """Optional YAML override for the event category keyword table."""
    raw = os.getenv("EVENTLENS_CATEGORY_RULES")
    return Path(raw) if raw else None


def is_development() -> bool:
    """Check if running in development"""
    return ENV == "development"
