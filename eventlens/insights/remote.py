"""
Remote Summarizer Adapter - optional LLM-written summary for an event.

Tries an ordered list of candidate backends, one request each, and accepts
the first generated text that survives the quality gate and cleaning. The
remote side is only trusted for prose: suggestions always come from the
deterministic generator.

try_remote() never raises. None means "no usable remote result" and the
caller should run the deterministic fallback.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NamedTuple

import requests
from openai import OpenAIError

from eventlens.config import REMOTE_TIMEOUT_SECONDS
from eventlens.infrastructure.settings import (
    OPENAI_MODEL,
    get_hf_models,
    get_huggingface_api_key,
    get_openai_api_key,
    use_remote,
)
from eventlens.insights.classifier import classify_event
from eventlens.insights.cleaning import clean_summary, extract_generated_text, passes_quality_gate
from eventlens.insights.generator import build_suggestions
from eventlens.insights.models import Classification, Insight
from eventlens.insights.temporal import format_long, parse_start_time
from eventlens.llm.huggingface import HuggingFaceClient, RemoteCandidateError, model_endpoint
from eventlens.llm.prompts import build_chat_prompt, build_event_text, system_instruction_for
from eventlens.observability.logging import get_logger
from eventlens.observability.telemetry import counter, log_event, time_block
from eventlens.utils.redaction import redact_title

logger = get_logger(__name__)

# Failures that move the adapter on to the next candidate
CANDIDATE_ERRORS = (requests.RequestException, RemoteCandidateError, ValueError, OpenAIError)


class CandidateKind(str, Enum):
    HUGGINGFACE = "huggingface"
    OPENAI = "openai"


@dataclass(frozen=True)
class RemoteCandidate:
    """One backend configuration tried by the adapter."""

    name: str
    kind: CandidateKind
    endpoint: str  # Inference URL for Hugging Face, model id for OpenAI


class RemoteSummary(NamedTuple):
    insight: Insight
    candidate: str


def default_candidates() -> tuple[RemoteCandidate, ...]:
    """Hugging Face models in priority order, then the OpenAI chat model."""
    candidates = [
        RemoteCandidate(name=model, kind=CandidateKind.HUGGINGFACE, endpoint=model_endpoint(model))
        for model in get_hf_models()
    ]
    candidates.append(
        RemoteCandidate(name=OPENAI_MODEL, kind=CandidateKind.OPENAI, endpoint=OPENAI_MODEL)
    )
    return tuple(candidates)


class RemoteSummarizer:
    """
    Sequential, priority-ordered remote summarization.

    Credentials are read per call (not at construction) so a late .env load
    or a test patching os.environ is honored. HTTP resources are built once
    and shared across candidates and calls; close() releases the ones this
    instance created (injected sessions and clients belong to the caller).
    """

    def __init__(
        self,
        candidates: tuple[RemoteCandidate, ...] | None = None,
        timeout: float = REMOTE_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
        hf_client: HuggingFaceClient | None = None,
        openai_client=None,
    ):
        self._candidates = candidates
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.hf_client = hf_client
        self.openai_client = openai_client
        self._owned_openai_client = None
        self._owned_openai_key: str | None = None
        self._lock = threading.Lock()

    def close(self) -> None:
        """
        Release pooled HTTP connections owned by this summarizer.

        Side Effects:
            - Closes the requests.Session created in __init__
            - Closes the lazily built OpenAI client, if any
        """
        with self._lock:
            if self._owned_openai_client is not None:
                self._owned_openai_client.close()
                self._owned_openai_client = None
                self._owned_openai_key = None
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> RemoteSummarizer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def candidates(self) -> tuple[RemoteCandidate, ...]:
        return self._candidates if self._candidates is not None else default_candidates()

    def usable_candidates(self) -> list[RemoteCandidate]:
        """Candidates whose credential is configured, in priority order."""
        hf_ready = self.hf_client is not None or get_huggingface_api_key() is not None
        openai_ready = self.openai_client is not None or get_openai_api_key() is not None
        return [
            c
            for c in self.candidates
            if (c.kind is CandidateKind.HUGGINGFACE and hf_ready)
            or (c.kind is CandidateKind.OPENAI and openai_ready)
        ]

    def is_configured(self) -> bool:
        return use_remote() and bool(self.usable_candidates())

    def try_remote(
        self,
        title: str,
        description: str = "",
        start_time: object = None,
        classification: Classification | None = None,
        now: datetime | None = None,
    ) -> Insight | None:
        result = self.try_remote_with_source(
            title, description, start_time, classification=classification, now=now
        )
        return result.insight if result else None

    def try_remote_with_source(
        self,
        title: str,
        description: str = "",
        start_time: object = None,
        classification: Classification | None = None,
        now: datetime | None = None,
    ) -> RemoteSummary | None:
        """Like try_remote(), also naming the candidate that wrote the summary."""
        try:
            return self._run(title, description or "", start_time, classification, now)
        except Exception as e:
            counter("insights.remote.error")
            logger.error("Remote summarizer failed for %s: %s", redact_title(title), e)
            return None

    def _run(
        self,
        title: str,
        description: str,
        start_time: object,
        classification: Classification | None,
        now: datetime | None,
    ) -> RemoteSummary | None:
        if not use_remote():
            counter("insights.remote.disabled")
            return None

        candidates = self.usable_candidates()
        if not candidates:
            counter("insights.remote.skipped_unconfigured")
            logger.info("No remote summarization credentials configured, skipping remote path")
            return None

        classification = classification or classify_event(title, description)
        start = parse_start_time(start_time)
        event_text = build_event_text(
            title, description, format_long(start), classification.is_birthday
        )

        for candidate in candidates:
            logger.info("Trying remote candidate %s for %s", candidate.name, redact_title(title))
            try:
                with time_block("insights.remote.latency"):
                    raw_text = self._request(candidate, event_text, classification)
            except CANDIDATE_ERRORS as e:
                counter("insights.remote.candidate_error")
                logger.warning("Candidate %s failed: %s", candidate.name, e)
                continue

            if not passes_quality_gate(raw_text):
                counter("insights.remote.quality_rejected")
                logger.info(
                    "Candidate %s returned %d chars, below quality threshold",
                    candidate.name,
                    len(raw_text.strip()),
                )
                continue

            summary = clean_summary(raw_text)
            if summary is None:
                counter("insights.remote.quality_rejected")
                logger.info("Candidate %s output rejected after cleaning", candidate.name)
                continue

            suggestions = build_suggestions(start, classification, now=now)
            if not (passes_quality_gate(summary) and passes_quality_gate(suggestions)):
                counter("insights.remote.assembly_rejected")
                return None

            counter("insights.remote.accepted")
            log_event(
                "insights.remote.accepted",
                candidate=candidate.name,
                kind=candidate.kind.value,
                is_birthday=classification.is_birthday,
            )
            return RemoteSummary(
                insight=Insight(summary=summary, suggestions=suggestions),
                candidate=candidate.name,
            )

        logger.info("All %d remote candidates exhausted", len(candidates))
        return None

    def _request(
        self,
        candidate: RemoteCandidate,
        event_text: str,
        classification: Classification,
    ) -> str:
        if candidate.kind is CandidateKind.OPENAI:
            client = self.openai_client or self._openai_client()
            return client.generate(
                candidate.endpoint,
                build_chat_prompt(event_text),
                system_instruction_for(classification.is_birthday),
            )

        # Per-call wrapper over the shared session; no pool is created here
        client = self.hf_client or HuggingFaceClient(
            get_huggingface_api_key() or "", timeout=self.timeout, session=self.session
        )
        return extract_generated_text(client.generate(candidate.endpoint, event_text))

    def _openai_client(self):
        """Shared OpenAI client, rebuilt only when the configured key changes."""
        from eventlens.llm.openai_chat import OpenAIChatClient

        key = get_openai_api_key() or ""
        with self._lock:
            if self._owned_openai_client is None or self._owned_openai_key != key:
                if self._owned_openai_client is not None:
                    self._owned_openai_client.close()
                self._owned_openai_client = OpenAIChatClient(key, timeout=self.timeout)
                self._owned_openai_key = key
            return self._owned_openai_client
