"""
Keyword category table for non-birthday events.

A priority-ordered {category: keywords} lookup evaluated in table order;
the first category with a keyword contained in the lower-cased title wins.
The built-in table can be replaced from YAML (EVENTLENS_CATEGORY_RULES):

    categories:
      meeting: [meeting, call, zoom, standup]
      deadline: [deadline, due]
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml

from eventlens.infrastructure.settings import get_category_rules_path
from eventlens.insights.category_data import DEFAULT_CATEGORY_KEYWORDS
from eventlens.insights.models import EventCategory
from eventlens.observability.logging import get_logger

logger = get_logger(__name__)


class CategoryTable:
    """Ordered keyword table mapping event titles to an EventCategory."""

    def __init__(self, keywords: dict[EventCategory, tuple[str, ...]] | None = None):
        source = keywords if keywords is not None else DEFAULT_CATEGORY_KEYWORDS
        # Copy so callers cannot mutate a shared table
        self.keywords: dict[EventCategory, tuple[str, ...]] = {
            category: tuple(k.lower() for k in words) for category, words in source.items()
        }

    @classmethod
    def from_yaml(cls, path: Path) -> CategoryTable:
        """
        Load a keyword table from YAML, falling back to the built-in table.

        Unknown category names are skipped with a warning. A missing,
        unreadable, or empty file yields the default table.
        """
        if not path.exists():
            logger.warning("Category rules not found at %s, using built-in table", path)
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to load category rules from %s: %s", path, e)
            return cls()

        raw = data.get("categories") if isinstance(data, dict) else None
        if not isinstance(raw, dict):
            logger.warning("Category rules at %s have no 'categories' mapping", path)
            return cls()

        keywords: dict[EventCategory, tuple[str, ...]] = {}
        for name, words in raw.items():
            try:
                category = EventCategory(str(name).lower())
            except ValueError:
                logger.warning("Ignoring unknown event category %r in %s", name, path)
                continue
            if category is EventCategory.GENERAL or not isinstance(words, list):
                continue
            keywords[category] = tuple(str(w) for w in words if str(w).strip())

        if not keywords:
            return cls()

        logger.info("Loaded %d event categories from %s", len(keywords), path)
        return cls(keywords)

    def categorize(self, title: str | None) -> EventCategory:
        """Return the first category whose keyword appears in the title."""
        title_lower = (title or "").lower()
        for category, words in self.keywords.items():
            for keyword in words:
                if keyword in title_lower:
                    return category
        return EventCategory.GENERAL


@lru_cache(maxsize=1)
def get_category_table() -> CategoryTable:
    """Shared table, built once from EVENTLENS_CATEGORY_RULES or the defaults."""
    path = get_category_rules_path()
    if path is None:
        return CategoryTable()
    return CategoryTable.from_yaml(path)


def categorize(title: str | None) -> EventCategory:
    return get_category_table().categorize(title)
