"""Simulated sensors that publish a reading every time they are polled."""

from __future__ import annotations

import logging
import random

from eventbus.domain.bus import EventBus
from eventbus.domain.events import TemperatureEvent, WaterLevelEvent
from eventbus.domain.models import Producer

logger = logging.getLogger(__name__)

TEMPERATURE_RANGE = 40  # readings fall in [0, 40)
WATER_LEVEL_RANGE = 100  # readings fall in [0, 100)


class TemperatureSensor(Producer):
    def __init__(
        self, sensor_id: str, bus: EventBus, rng: random.Random | None = None
    ) -> None:
        super().__init__(sensor_id)
        self.bus = bus
        self.rng = rng or random.Random()
        self.temperature = self.rng.randrange(TEMPERATURE_RANGE)

    def generate_temperature(self) -> TemperatureEvent:
        """Take a new random reading and publish it."""
        return self.report(self.rng.randrange(TEMPERATURE_RANGE))

    def report(self, temperature: int) -> TemperatureEvent:
        """Publish a specific reading."""
        self.temperature = temperature
        logger.info("Sensor %s - New Temperature: %d", self.name, temperature)
        event = TemperatureEvent(source=self, temperature=temperature)
        self.bus.publish(event)
        return event


class WaterLevelSensor(Producer):
    def __init__(
        self, sensor_id: str, bus: EventBus, rng: random.Random | None = None
    ) -> None:
        super().__init__(sensor_id)
        self.bus = bus
        self.rng = rng or random.Random()
        self.level = self.rng.randrange(WATER_LEVEL_RANGE)

    def generate_water_level(self) -> WaterLevelEvent:
        """Take a new random reading and publish it."""
        return self.report(self.rng.randrange(WATER_LEVEL_RANGE))

    def report(self, level: int) -> WaterLevelEvent:
        """Publish a specific reading."""
        self.level = level
        logger.info("Sensor %s - New Water Level: %d", self.name, level)
        event = WaterLevelEvent(source=self, level=level)
        self.bus.publish(event)
        return event
