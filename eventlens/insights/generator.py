"""
Deterministic Content Generator - rule-based summary and suggestions.

Terminal fallback of the insight pipeline: no network, no randomness, no
exceptions. Identical (title, description, start_time, now) always produce a
byte-identical Insight, and both fields are always non-empty.

Entry point: ContentGenerator.generate()
"""

from __future__ import annotations

from datetime import datetime

from eventlens.config import MAX_SUGGESTIONS, MIN_SUGGESTIONS, UNTITLED_EVENT
from eventlens.insights import category_data as data
from eventlens.insights.classifier import classify_event
from eventlens.insights.cleaning import truncate_summary
from eventlens.insights.models import Classification, EventCategory, Insight, Urgency
from eventlens.insights.temporal import format_date, format_time, parse_start_time, urgency_for
from eventlens.observability.logging import get_logger
from eventlens.observability.telemetry import counter

logger = get_logger(__name__)

_SAFE_SUMMARY = "Upcoming calendar event - review the details and prepare accordingly."


def _clean_title(title: object) -> str:
    text = str(title).strip() if title is not None else ""
    return text or UNTITLED_EVENT


def build_summary(
    title: str,
    start: datetime | None,
    classification: Classification,
) -> str:
    """One-line summary from the birthday or category template."""
    date_str = format_date(start)
    time_str = format_time(start)

    if classification.is_birthday:
        if classification.person_name:
            return data.BIRTHDAY_SUMMARY_WITH_NAME.format(
                name=classification.person_name, date=date_str, time=time_str
            )
        return data.BIRTHDAY_SUMMARY_GENERIC.format(title=title, date=date_str, time=time_str)

    template = data.SUMMARY_TEMPLATES.get(
        classification.category, data.SUMMARY_TEMPLATES[EventCategory.GENERAL]
    )
    return template.format(title=title, date=date_str, time=time_str)


def _birthday_suggestions(classification: Classification, urgency: Urgency) -> list[str]:
    name = classification.person_name
    gift = (
        data.BIRTHDAY_GIFT_WITH_NAME.format(name=name) if name else data.BIRTHDAY_GIFT_GENERIC
    )
    timing = data.BIRTHDAY_TIMING_SUGGESTIONS.get(urgency.value)
    if timing:
        # Close to the day, the timing tip is worth more than celebration ideas
        return [gift, timing]
    celebration = (
        data.BIRTHDAY_CELEBRATION_WITH_NAME.format(name=name)
        if name
        else data.BIRTHDAY_CELEBRATION_GENERIC
    )
    return [gift, celebration]


def build_suggestion_list(
    start: datetime | None,
    classification: Classification,
    now: datetime | None = None,
) -> list[str]:
    """
    Ordered suggestions, urgency first, at most MAX_SUGGESTIONS entries.
    """
    urgency = urgency_for(start, now=now)
    suggestions = [data.URGENCY_SUGGESTIONS[urgency.value]]

    if classification.is_birthday:
        suggestions.extend(_birthday_suggestions(classification, urgency))
        return suggestions[:MAX_SUGGESTIONS]

    suggestions.extend(data.CATEGORY_SUGGESTIONS.get(classification.category, ())[:2])

    for filler in data.FILLER_SUGGESTIONS:
        if len(suggestions) >= MIN_SUGGESTIONS:
            break
        suggestions.append(filler)

    return suggestions[:MAX_SUGGESTIONS]


def build_suggestions(
    start: datetime | None,
    classification: Classification,
    now: datetime | None = None,
) -> str:
    """Suggestion list joined with single spaces."""
    return " ".join(build_suggestion_list(start, classification, now=now))


class ContentGenerator:
    """
    Network-free producer of Insight.

    generate() is the correctness backstop for the whole system, so it
    guards its own body: if a template ever fails, a fixed safe insight is
    returned instead of an exception.
    """

    def generate(
        self,
        title: str,
        description: str = "",
        start_time: object = None,
        classification: Classification | None = None,
        now: datetime | None = None,
    ) -> Insight:
        clean_title = _clean_title(title)
        start = parse_start_time(start_time)

        try:
            if classification is None:
                classification = classify_event(clean_title, description or "")

            summary = truncate_summary(build_summary(clean_title, start, classification))
            suggestions = build_suggestions(start, classification, now=now)
        except Exception as e:
            counter("insights.generator.error")
            logger.error("Deterministic generator failed, using safe insight: %s", e)
            summary = _SAFE_SUMMARY
            suggestions = " ".join(
                [data.URGENCY_SUGGESTIONS[Urgency.UPCOMING.value], *data.FILLER_SUGGESTIONS]
            )

        counter("insights.generator.generated")
        return Insight(summary=summary, suggestions=suggestions)


_default_generator = ContentGenerator()


def generate_fallback_insight(
    title: str,
    description: str = "",
    start_time: object = None,
    classification: Classification | None = None,
    now: datetime | None = None,
) -> Insight:
    """Module-level convenience around the shared ContentGenerator."""
    return _default_generator.generate(
        title, description, start_time, classification=classification, now=now
    )
