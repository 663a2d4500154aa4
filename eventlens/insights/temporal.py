"""
Start-time parsing, human-readable formatting, and urgency.

Everything here is total: malformed timestamps come back as None and format
as "an unspecified date" / "an unspecified time" instead of raising. Dates are
compared in the local calendar and always rendered with English names,
whatever the process locale.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from eventlens.insights.models import Urgency

UNSPECIFIED_DATE = "an unspecified date"
UNSPECIFIED_TIME = "an unspecified time"

# Epoch values above this are taken as milliseconds
_MILLIS_THRESHOLD = 1e12
_COMPACT_ISO_DATE = re.compile(r"^\d{8}(T\d{2}(\d{2}(\d{2})?)?)?$")

_WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def _from_epoch(value: float) -> datetime | None:
    seconds = value / 1000.0 if abs(value) > _MILLIS_THRESHOLD else value
    try:
        return datetime.fromtimestamp(seconds).astimezone()
    except (OverflowError, OSError, ValueError):
        return None


def _to_local(candidate: datetime) -> datetime | None:
    # Naive values are taken as already local
    try:
        return candidate.astimezone()
    except (OverflowError, OSError, ValueError):
        return None


def _parse_iso(text: str) -> datetime | None:
    try:
        candidate = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return _to_local(candidate)


def parse_start_time(value: object) -> datetime | None:
    """
    Parse a start time into an aware local datetime.

    Accepts datetimes, epoch seconds/milliseconds (numbers or numeric
    strings), and ISO-8601 strings with optional trailing "Z", including the
    compact "20261020" / "20261020T150000" forms. Returns None for anything
    else.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _to_local(value)
    if isinstance(value, date):
        return _to_local(datetime(value.year, value.month, value.day))
    if isinstance(value, int | float):
        return _from_epoch(float(value))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        # An 8-digit string is a basic-format date, not an epoch value
        if _COMPACT_ISO_DATE.match(text):
            parsed = _parse_iso(text)
            if parsed is not None:
                return parsed
        try:
            return _from_epoch(float(text))
        except ValueError:
            pass
        return _parse_iso(text)
    return None


def format_date(dt: datetime | None) -> str:
    """'Tuesday, October 20' in the event's local calendar."""
    if dt is None:
        return UNSPECIFIED_DATE
    return f"{_WEEKDAY_NAMES[dt.weekday()]}, {_MONTH_NAMES[dt.month - 1]} {dt.day}"


def format_time(dt: datetime | None) -> str:
    """'3:00 PM' style 12-hour clock."""
    if dt is None:
        return UNSPECIFIED_TIME
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d} {meridiem}"


def format_long(dt: datetime | None) -> str:
    """'Tuesday, October 20, 2026 at 3:00 PM' for prompts."""
    if dt is None:
        return "Unspecified date and time"
    return f"{format_date(dt)}, {dt.year} at {format_time(dt)}"


def _local_today(now: datetime | None) -> date:
    if now is None:
        return datetime.now().astimezone().date()
    local_now = _to_local(now)
    return local_now.date() if local_now else datetime.now().astimezone().date()


def urgency_for(dt: datetime | None, now: datetime | None = None) -> Urgency:
    """
    Classify by calendar day, not elapsed time.

    An event at 00:05 tomorrow and one at 23:55 tomorrow are both TOMORROW;
    past events and unknown dates are UPCOMING (general reminder).
    """
    if dt is None:
        return Urgency.UPCOMING

    today = _local_today(now)
    event_day = dt.date()
    if event_day == today:
        return Urgency.TODAY
    if event_day == today + timedelta(days=1):
        return Urgency.TOMORROW
    return Urgency.UPCOMING
