"""Health check endpoint for EventLens API.

Provides a liveness probe for container monitoring.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

from eventlens.config import APP_VERSION
from eventlens.infrastructure.settings import (
    get_huggingface_api_key,
    get_openai_api_key,
    use_remote,
)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Health check endpoint.

    Returns service status, version, and which remote summarization
    credentials are present (presence only, no API call is made).
    """
    has_hf_key = get_huggingface_api_key() is not None
    has_openai_key = get_openai_api_key() is not None

    return {
        "status": "healthy",
        "service": "EventLens API",
        "version": APP_VERSION,
        "timestamp": datetime.now(UTC).isoformat(),
        "remote": {
            "enabled": use_remote(),
            "ready": use_remote() and (has_hf_key or has_openai_key),
            "huggingface_api_key": has_hf_key,
            "openai_api_key": has_openai_key,
        },
    }
