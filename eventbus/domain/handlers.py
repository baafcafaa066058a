"""Displays and subscribers that react to published events."""

from __future__ import annotations

import logging

from eventbus.domain.bus import EventBus
from eventbus.domain.discovery import handles
from eventbus.domain.events import NewsEvent, TemperatureEvent, WaterLevelEvent
from eventbus.domain.models import FeedEntry
from eventbus.repos.memory import FeedRepository

logger = logging.getLogger(__name__)

COLD_BELOW = 20
SAFE_WATER_BELOW = 36


def classify_temperature(temperature: int) -> str:
    return "Cold" if temperature < COLD_BELOW else "Warm"


def classify_water_level(level: int) -> str:
    return "All good" if level < SAFE_WATER_BELOW else "Run for your lives"


class _Display:
    def __init__(self, name: str, feed: FeedRepository) -> None:
        self.name = name
        self.feed = feed

    def _show(self, text: str) -> None:
        logger.info(text)
        self.feed.add(FeedEntry(display=self.name, text=text))


class NumericDisplay(_Display):
    """Shows raw sensor readings."""

    @handles
    def on_temperature(self, event: TemperatureEvent) -> None:
        self._show(f"{self.name} - Temperature: {event.temperature}°C")

    @handles
    def on_water_level(self, event: WaterLevelEvent) -> None:
        self._show(f"{self.name} - Water Level: {event.level}")


class TextDisplay(_Display):
    """Shows a one-word verdict for each sensor reading."""

    @handles
    def on_water_level(self, event: WaterLevelEvent) -> None:
        self._show(f"{self.name} - {classify_water_level(event.level)}")

    @handles
    def on_temperature(self, event: TemperatureEvent) -> None:
        self._show(f"{self.name} - {classify_temperature(event.temperature)}")


class HumanSubscriber(_Display):
    """A person following every kind of news."""

    @handles
    def on_news(self, event: NewsEvent) -> None:
        kind = type(event).category.value.removesuffix("_news")
        self._show(
            f"{self.name} received {kind} news from {event.agency}: {event.content}"
        )


def wire_explicitly(
    bus: EventBus,
    displays: list[NumericDisplay | TextDisplay],
    humans: list[HumanSubscriber],
) -> None:
    """Table-driven alternative to ``bus.register_object`` for the same consumers."""
    for display in displays:
        bus.subscribe(TemperatureEvent, display.on_temperature)
        bus.subscribe(WaterLevelEvent, display.on_water_level)
    for human in humans:
        bus.subscribe(NewsEvent, human.on_news)
