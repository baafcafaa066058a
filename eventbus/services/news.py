"""News agencies publishing headlines in one of several categories."""

from __future__ import annotations

import logging
import random

from eventbus.domain.bus import EventBus
from eventbus.domain.events import (
    CultureNewsEvent,
    NewsEvent,
    PoliticalNewsEvent,
    SportsNewsEvent,
)
from eventbus.domain.models import Producer

logger = logging.getLogger(__name__)

HEADLINES = [
    "Breaking news!",
    "Big update!",
    "Shocking event!",
    "Important announcement!",
]

NEWS_KINDS: dict[str, type[NewsEvent]] = {
    "sports": SportsNewsEvent,
    "political": PoliticalNewsEvent,
    "culture": CultureNewsEvent,
}


class NewsAgency(Producer):
    def __init__(self, name: str, bus: EventBus, rng: random.Random | None = None) -> None:
        super().__init__(name)
        self.bus = bus
        self.rng = rng or random.Random()

    def publish_news(self, category: str) -> NewsEvent | None:
        """Publish a random headline; unknown categories publish nothing."""
        return self.publish_story(category, self.rng.choice(HEADLINES))

    def publish_story(self, category: str, content: str) -> NewsEvent | None:
        event_cls = NEWS_KINDS.get(category.lower())
        if event_cls is None:
            logger.warning("%s: unknown news category %r", self.name, category)
            return None

        event = event_cls(source=self, content=content)
        self.bus.publish(event)
        logger.info("%s published %s news: %s", self.name, category.upper(), content)
        return event
