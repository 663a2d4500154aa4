"""
Insight Pipeline - orchestrates remote summarization and deterministic fallback.

    remote_pending -> validated -> done     (remote summary accepted)
    remote_pending -> fallback  -> done     (anything else)

There is no error state. Every exception raised below this boundary turns
into the fallback transition, so callers always get a well-formed Insight.

Entry point: generate_insight()
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Iterable
from datetime import datetime

from eventlens.insights.classifier import classify_event
from eventlens.insights.cleaning import passes_quality_gate
from eventlens.insights.generator import ContentGenerator
from eventlens.insights.models import (
    Classification,
    EventDescriptor,
    Insight,
    PipelineOutcome,
    PipelineState,
)
from eventlens.insights.remote import RemoteSummarizer
from eventlens.observability.logging import get_logger
from eventlens.observability.telemetry import counter, log_event
from eventlens.utils.redaction import redact_title

logger = get_logger(__name__)


class InsightPipeline:
    """
    Remote-first, deterministic-always insight generation for one event.

    Stateless between runs: concurrent calls for different events share
    nothing but the (read-only) remote and generator collaborators.
    """

    def __init__(
        self,
        remote: RemoteSummarizer | None = None,
        generator: ContentGenerator | None = None,
    ):
        self.remote = remote or RemoteSummarizer()
        self.generator = generator or ContentGenerator()

    def close(self) -> None:
        """Release HTTP resources held by the remote summarizer."""
        close = getattr(self.remote, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> InsightPipeline:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def run(
        self,
        title: str,
        description: str = "",
        start_time: object = None,
        now: datetime | None = None,
    ) -> PipelineOutcome:
        states = [PipelineState.REMOTE_PENDING]
        description = description or ""
        classification: Classification | None = None

        try:
            classification = classify_event(title, description)
            remote = self.remote.try_remote_with_source(
                title, description, start_time, classification=classification, now=now
            )
            if remote is not None and _is_quality_insight(remote.insight):
                states.extend([PipelineState.VALIDATED, PipelineState.DONE])
                counter("insights.pipeline.validated")
                log_event("insights.pipeline.done", source=f"remote:{remote.candidate}")
                return PipelineOutcome(
                    insight=remote.insight, states=states, candidate=remote.candidate
                )
        except Exception as e:
            counter("insights.pipeline.error")
            logger.error("Insight pipeline error for %s: %s", redact_title(title), e)

        states.extend([PipelineState.FALLBACK, PipelineState.DONE])
        counter("insights.pipeline.fallback")
        insight = self.generator.generate(
            title, description, start_time, classification=classification, now=now
        )
        log_event("insights.pipeline.done", source="fallback")
        return PipelineOutcome(insight=insight, states=states)

    def run_event(self, event: EventDescriptor, now: datetime | None = None) -> PipelineOutcome:
        return self.run(event.title, event.description, event.start_time, now=now)

    def run_batch(
        self,
        events: Iterable[EventDescriptor],
        now: datetime | None = None,
    ) -> list[PipelineOutcome]:
        """Run each event independently, in order."""
        return [self.run_event(event, now=now) for event in events]


def _is_quality_insight(insight: Insight) -> bool:
    return passes_quality_gate(insight.summary) and passes_quality_gate(insight.suggestions)


_default_pipeline: InsightPipeline | None = None
_pipeline_lock = threading.Lock()


def get_pipeline() -> InsightPipeline:
    """Get or create the shared pipeline.

    Side Effects:
        - Modifies global variable `_default_pipeline` on first call
    """
    global _default_pipeline
    with _pipeline_lock:
        if _default_pipeline is None:
            _default_pipeline = InsightPipeline()
        return _default_pipeline


def close_pipeline() -> None:
    """Close the shared pipeline, if one was created.

    Side Effects:
        - Closes pooled HTTP connections of the shared pipeline
        - Resets global variable `_default_pipeline` so the next call rebuilds it
    """
    global _default_pipeline
    with _pipeline_lock:
        pipeline, _default_pipeline = _default_pipeline, None
    if pipeline is not None:
        pipeline.close()


def generate_insight(
    title: str,
    description: str = "",
    start_time: object = None,
    now: datetime | None = None,
) -> Insight:
    """Summary and suggestions for one event. Never raises."""
    return get_pipeline().run(title, description, start_time, now=now).insight


async def generate_insight_async(
    title: str,
    description: str = "",
    start_time: object = None,
    now: datetime | None = None,
) -> PipelineOutcome:
    """
    Async wrapper for callers batching many events.

    The blocking part is the remote HTTP call, so the whole run goes to a
    worker thread and the event loop stays free.
    """
    return await asyncio.to_thread(get_pipeline().run, title, description, start_time, now)
