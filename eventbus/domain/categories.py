"""Static category graph used to match published events to subscriptions."""

from __future__ import annotations

from enum import Enum

try:
    from enum import StrEnum
except ImportError:  # pragma: no cover - fallback for older Python runtimes

    class StrEnum(str, Enum):
        pass


class EventCategory(StrEnum):
    TEMPERATURE = "temperature"
    WATER_LEVEL = "water_level"
    NEWS = "news"
    SPORTS_NEWS = "sports_news"
    POLITICAL_NEWS = "political_news"
    CULTURE_NEWS = "culture_news"


# Each category points at its direct parent; None marks a root.
CATEGORY_PARENTS: dict[EventCategory, EventCategory | None] = {
    EventCategory.TEMPERATURE: None,
    EventCategory.WATER_LEVEL: None,
    EventCategory.NEWS: None,
    EventCategory.SPORTS_NEWS: EventCategory.NEWS,
    EventCategory.POLITICAL_NEWS: EventCategory.NEWS,
    EventCategory.CULTURE_NEWS: EventCategory.NEWS,
}

# Categories that group other categories and are never published directly.
ABSTRACT_CATEGORIES: frozenset[EventCategory] = frozenset({EventCategory.NEWS})


def ancestors(category: EventCategory) -> list[EventCategory]:
    """Return the ancestor chain of *category*, nearest parent first."""
    chain: list[EventCategory] = []
    parent = CATEGORY_PARENTS[category]
    while parent is not None:
        chain.append(parent)
        parent = CATEGORY_PARENTS[parent]
    return chain


def matches(candidate: EventCategory, runtime: EventCategory) -> bool:
    """True when a subscription under *candidate* should see *runtime* events.

    The relation is reflexive (a category matches itself) and follows the
    parent links transitively; siblings and descendants never match.
    """
    return candidate == runtime or candidate in ancestors(runtime)


def descendants(category: EventCategory) -> list[EventCategory]:
    """Return every category that has *category* somewhere in its ancestor chain."""
    return [c for c in CATEGORY_PARENTS if category in ancestors(c)]
