"""
Hugging Face inference API client.

One POST per call, bearer auth, bounded by a timeout. No retries: the
remote summarizer moves on to its next candidate instead of hammering a
model that just failed.
"""

from __future__ import annotations

from typing import Any

import requests

from eventlens.config import REMOTE_TIMEOUT_SECONDS
from eventlens.infrastructure.settings import GENERATION_PARAMETERS, HUGGINGFACE_API_URL
from eventlens.observability.logging import get_logger

logger = get_logger(__name__)


class RemoteCandidateError(RuntimeError):
    """A candidate answered, but not with something usable."""


def model_endpoint(model: str, base_url: str = HUGGINGFACE_API_URL) -> str:
    return f"{base_url.rstrip('/')}/{model}"


class HuggingFaceClient:
    """Thin requests-based client for hosted summarization models."""

    def __init__(
        self,
        api_key: str,
        timeout: float = REMOTE_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()

    def generate(self, endpoint: str, prompt: str) -> Any:
        """
        Send one generation request and return the decoded JSON payload.

        Raises:
            requests.RequestException: transport failure or timeout
            RemoteCandidateError: non-2xx status or an {"error": ...} body
            ValueError: body is not JSON
        """
        response = self.session.post(
            endpoint,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={"inputs": prompt, "parameters": dict(GENERATION_PARAMETERS)},
            timeout=self.timeout,
        )

        if not response.ok:
            raise RemoteCandidateError(f"HTTP {response.status_code} from {endpoint}")

        payload = response.json()
        if isinstance(payload, dict) and payload.get("error"):
            # Cold models answer 200 with {"error": "...is currently loading"}
            raise RemoteCandidateError(str(payload["error"])[:120])

        return payload
