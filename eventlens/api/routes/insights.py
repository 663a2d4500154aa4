"""Stateless insight endpoint for the EventLens API.

Runs a batch of calendar events through the insight pipeline and returns
summary + suggestions per event. No database writes; the caller persists.
"""

from __future__ import annotations

import asyncio
from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel, Field, field_validator

from eventlens.config import API_BATCH_SIZE_MAX
from eventlens.insights.pipeline import generate_insight_async
from eventlens.observability.logging import get_logger
from eventlens.observability.telemetry import log_event

router = APIRouter(prefix="/api", tags=["insights"])
logger = get_logger(__name__)


# ============================================================================
# Request/Response Models
# ============================================================================


class InsightEvent(BaseModel):
    """A single calendar event in an insight request."""

    event_id: str = Field(..., min_length=1, max_length=256)
    title: str = Field(default="", max_length=1000)
    description: str | None = Field(default="", max_length=8000)
    start_time: str | datetime | int | float | None = None

    @field_validator("description")
    @classmethod
    def description_default(cls, v: str | None) -> str:
        return v or ""


class InsightRequest(BaseModel):
    """Request to generate insights for a batch of events."""

    events: list[InsightEvent] = Field(..., max_length=API_BATCH_SIZE_MAX)


class InsightResultItem(BaseModel):
    """Insight for a single event in the batch."""

    event_id: str
    summary: str
    suggestions: str
    source: str  # "remote:<candidate>" | "fallback"


class InsightStats(BaseModel):
    total: int
    remote: int
    fallback: int


class InsightResponse(BaseModel):
    results: list[InsightResultItem]
    stats: InsightStats


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/insights", response_model=InsightResponse)
async def generate_insights(request: InsightRequest) -> InsightResponse:
    """
    Generate summary + suggestions for a batch of events.

    Events are independent and run concurrently; each always yields an
    insight (remote-written or deterministic fallback).
    """
    outcomes = await asyncio.gather(
        *(
            generate_insight_async(event.title, event.description or "", event.start_time)
            for event in request.events
        )
    )

    results = [
        InsightResultItem(
            event_id=event.event_id,
            summary=outcome.insight.summary,
            suggestions=outcome.insight.suggestions,
            source=outcome.source,
        )
        for event, outcome in zip(request.events, outcomes, strict=True)
    ]
    fallback = sum(1 for outcome in outcomes if outcome.used_fallback)
    stats = InsightStats(total=len(results), remote=len(results) - fallback, fallback=fallback)

    log_event("api.insights.batch", total=stats.total, remote=stats.remote, fallback=stats.fallback)
    return InsightResponse(results=results, stats=stats)
