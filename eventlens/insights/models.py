"""
Insight domain models for EventLens.

EventDescriptor is the caller's immutable input; Classification and Insight
are recomputed on every pipeline run and never persisted here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventCategory(str, Enum):
    """Keyword category of a non-birthday event."""

    MEETING = "meeting"
    INTERVIEW = "interview"
    PRESENTATION = "presentation"
    APPOINTMENT = "appointment"
    FITNESS = "fitness"
    SOCIAL = "social"
    TRAVEL = "travel"
    DEADLINE = "deadline"
    MEAL = "meal"
    GENERAL = "general"  # No keyword matched


class Urgency(str, Enum):
    """How soon the event happens, by calendar day."""

    TODAY = "today"
    TOMORROW = "tomorrow"
    UPCOMING = "upcoming"  # Later, earlier, or unknown date


class PipelineState(str, Enum):
    """States visited by one InsightPipeline run."""

    REMOTE_PENDING = "remote_pending"
    VALIDATED = "validated"
    FALLBACK = "fallback"
    DONE = "done"


class EventDescriptor(BaseModel):
    """
    A calendar event as handed to the pipeline.

    start_time is kept raw: an unparseable value must degrade to
    "unspecified time" at formatting, not fail here.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    title: str = Field(..., description="Event title as shown in the calendar")
    description: str = Field(default="", description="Optional free-text description")
    start_time: str | datetime | int | float | None = Field(
        default=None, description="ISO-8601 string, datetime, or epoch timestamp"
    )

    @field_validator("description", mode="before")
    @classmethod
    def description_default(cls, v: object) -> object:
        return "" if v is None else v


class Insight(BaseModel):
    """The summary + suggestions pair produced for one event."""

    summary: str
    suggestions: str

    @field_validator("summary", "suggestions")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("insight fields cannot be empty")
        return v


@dataclass(frozen=True)
class Classification:
    """Birthday flag, person name, and keyword category for one event."""

    is_birthday: bool
    person_name: str | None = None
    category: EventCategory = EventCategory.GENERAL


@dataclass
class PipelineOutcome:
    """Result of InsightPipeline.run(), with the states it passed through."""

    insight: Insight
    states: list[PipelineState] = field(default_factory=list)
    candidate: str | None = None  # Remote candidate that produced the summary

    @property
    def source(self) -> str:
        return f"remote:{self.candidate}" if self.candidate else "fallback"

    @property
    def used_fallback(self) -> bool:
        return PipelineState.FALLBACK in self.states
