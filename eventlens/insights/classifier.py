"""
Event classifier - birthday detection, name extraction, and keyword category.

Rule-based and network-free. classify_event() computes one Classification per
pipeline run; the summary and suggestion builders both read from it so they
can never disagree about what kind of event they are describing.
"""

from __future__ import annotations

import re

from eventlens.insights.categories import CategoryTable, get_category_table
from eventlens.insights.models import Classification
from eventlens.observability.logging import get_logger
from eventlens.utils.redaction import redact_title

logger = get_logger(__name__)

FAMILY_RELATIONS = (
    "mom",
    "dad",
    "mother",
    "father",
    "sister",
    "brother",
    "grandma",
    "grandpa",
    "wife",
    "husband",
    "friend",
)

# Substring checks against "title description" lower-cased
BIRTHDAY_LITERALS: tuple[str, ...] = (
    # Direct mentions
    "birthday",
    "bday",
    "b-day",
    "born",
    "birth day",
    # Possessive
    "'s birthday",
    "'s bday",
    "'s b-day",
    # Celebration terms
    "birthday party",
    "birthday celebration",
    "birthday dinner",
    "birthday lunch",
    "birthday cake",
    # Age
    "turns ",
    "turning ",
    " years old",
    "th birthday",
    "st birthday",
    "nd birthday",
    "rd birthday",
    # Anniversaries
    "anniversary",
    "annual celebration",
    # Common phrases
    "celebrate",
    "special day",
    "big day",
    # Family member + birthday
    *(f"{relation} birthday" for relation in FAMILY_RELATIONS),
)

BIRTHDAY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b\w+('s)?\s+(birthday|bday|day|celebration)\b", re.IGNORECASE),
    re.compile(r"\b(birthday|bday)\s+\w+\b", re.IGNORECASE),
    re.compile(r"\b\w+\s+turns?\s+\d+", re.IGNORECASE),
    re.compile(r"\b\w+\s+is\s+\d+", re.IGNORECASE),
)

NAME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^([a-zA-Z]+)'s\s+(birthday|bday)", re.IGNORECASE),
    re.compile(r"^([a-zA-Z]+)\s+(birthday|bday)", re.IGNORECASE),
    re.compile(r"(birthday|bday)\s+([a-zA-Z]+)$", re.IGNORECASE),
    re.compile(r"^([a-zA-Z]+)\s+turns?\s+\d+", re.IGNORECASE),
)

BIRTHDAY_KEYWORDS = frozenset({"birthday", "bday"})

# Words that sit next to "birthday" in titles but are not anyone's name
GENERIC_NAME_WORDS = frozenset(
    {
        "team",
        "office",
        "company",
        "family",
        "happy",
        "party",
        "bash",
        "celebration",
        "dinner",
        "lunch",
        "cake",
        "surprise",
        "annual",
        "my",
        "our",
        "the",
    }
)


class BirthdayClassifier:
    """Decides whether an event is a birthday or anniversary occasion."""

    def __init__(
        self,
        literals: tuple[str, ...] = BIRTHDAY_LITERALS,
        patterns: tuple[re.Pattern[str], ...] = BIRTHDAY_PATTERNS,
    ):
        self.literals = literals
        self.patterns = patterns

    def classify(self, title: str | None, description: str | None = "") -> bool:
        text = f"{(title or '').lower()} {(description or '').lower()}"

        for literal in self.literals:
            if literal in text:
                logger.debug(
                    "Birthday detected with pattern %r in event: %s", literal, redact_title(title)
                )
                return True

        for pattern in self.patterns:
            if pattern.search(text):
                logger.debug(
                    "Birthday detected with regex %r in event: %s",
                    pattern.pattern,
                    redact_title(title),
                )
                return True

        return False


_default_classifier = BirthdayClassifier()


def classify(title: str | None, description: str | None = "") -> bool:
    """True when the title/description read like a birthday or anniversary."""
    return _default_classifier.classify(title, description)


def _is_acceptable_name(candidate: str | None) -> bool:
    if not candidate or len(candidate) <= 1 or not candidate.isalpha():
        return False
    lowered = candidate.lower()
    return lowered not in BIRTHDAY_KEYWORDS and lowered not in GENERIC_NAME_WORDS


def extract_name(title: str | None) -> str | None:
    """
    Best-effort name of the person whose birthday the title refers to.

    "John's Birthday" -> "John", "birthday SARAH" -> "Sarah",
    "Team Birthday Bash" -> None. None means "use generic phrasing".
    """
    if not title:
        return None

    stripped = title.strip()
    for pattern in NAME_PATTERNS:
        match = pattern.search(stripped)
        if not match:
            continue
        for group in match.groups():
            if group and group.lower() not in BIRTHDAY_KEYWORDS and _is_acceptable_name(group):
                return group[0].upper() + group[1:].lower()

    return None


def classify_event(
    title: str | None,
    description: str | None = "",
    table: CategoryTable | None = None,
) -> Classification:
    """Birthday flag, person name, and keyword category, computed once."""
    table = table or get_category_table()
    is_birthday = classify(title, description)
    return Classification(
        is_birthday=is_birthday,
        person_name=extract_name(title) if is_birthday else None,
        category=table.categorize(title),
    )
