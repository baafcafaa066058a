"""Events published by sensors and news agencies."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from eventbus.domain.categories import ABSTRACT_CATEGORIES, EventCategory
from eventbus.domain.errors import UnknownEventTypeError
from eventbus.domain.models import Producer


class BaseEvent(BaseModel):
    """Immutable event value tagged with its place in the category graph."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    category: ClassVar[EventCategory]

    source: Producer

    @model_validator(mode="after")
    def _concrete_only(self) -> BaseEvent:
        category = getattr(type(self), "category", None)
        if category is None or category in ABSTRACT_CATEGORIES:
            raise TypeError(f"{type(self).__name__} is abstract and cannot be published")
        return self


class TemperatureEvent(BaseEvent):
    """Fired when a temperature sensor takes a new reading (degrees Celsius)."""

    category: ClassVar[EventCategory] = EventCategory.TEMPERATURE

    temperature: int


class WaterLevelEvent(BaseEvent):
    """Fired when a water-level sensor takes a new reading."""

    category: ClassVar[EventCategory] = EventCategory.WATER_LEVEL

    level: int


class NewsEvent(BaseEvent):
    """Abstract news category; subscribe to it to receive every kind of news."""

    category: ClassVar[EventCategory] = EventCategory.NEWS
    prefix: ClassVar[str] = ""

    content: str

    @field_validator("content")
    @classmethod
    def _add_prefix(cls, value: str) -> str:
        if cls.prefix and not value.startswith(cls.prefix):
            return cls.prefix + value
        return value

    @property
    def agency(self) -> Producer:
        return self.source


class SportsNewsEvent(NewsEvent):
    category: ClassVar[EventCategory] = EventCategory.SPORTS_NEWS
    prefix: ClassVar[str] = "[Sports] "


class PoliticalNewsEvent(NewsEvent):
    category: ClassVar[EventCategory] = EventCategory.POLITICAL_NEWS
    prefix: ClassVar[str] = "[Political] "


class CultureNewsEvent(NewsEvent):
    category: ClassVar[EventCategory] = EventCategory.CULTURE_NEWS
    prefix: ClassVar[str] = "[Cultural] "


# ---------------------------------------------------------------------------
# Category lookup
# ---------------------------------------------------------------------------

EVENT_TYPES: dict[EventCategory, type[BaseEvent]] = {
    EventCategory.TEMPERATURE: TemperatureEvent,
    EventCategory.WATER_LEVEL: WaterLevelEvent,
    EventCategory.NEWS: NewsEvent,
    EventCategory.SPORTS_NEWS: SportsNewsEvent,
    EventCategory.POLITICAL_NEWS: PoliticalNewsEvent,
    EventCategory.CULTURE_NEWS: CultureNewsEvent,
}


def resolve_key(key: Any) -> EventCategory:
    """Turn a category, its string value, or an event class into a category."""
    if isinstance(key, EventCategory):
        return key
    if isinstance(key, str):
        try:
            return EventCategory(key)
        except ValueError:
            raise UnknownEventTypeError(key) from None
    if isinstance(key, type) and EVENT_TYPES.get(getattr(key, "category", None)) is key:
        return key.category
    raise UnknownEventTypeError(key)


def category_of(event: Any) -> EventCategory | None:
    """Return the category of a published object, or None if it is not an event."""
    if not isinstance(event, BaseEvent):
        return None
    return type(event).category
