"""Drives the simulated producers one tick at a time."""

from __future__ import annotations

from eventbus.domain.events import BaseEvent, NewsEvent
from eventbus.services.news import NewsAgency
from eventbus.services.sensors import TemperatureSensor, WaterLevelSensor


class Simulation:
    """Holds the producers wired to one bus and polls them on demand."""

    def __init__(
        self,
        temperature_sensors: list[TemperatureSensor],
        water_sensors: list[WaterLevelSensor],
        agencies: list[NewsAgency],
    ) -> None:
        self.temperature_sensors = temperature_sensors
        self.water_sensors = water_sensors
        self.agencies = {agency.name: agency for agency in agencies}
        self.ticks = 0

    def tick(self) -> list[BaseEvent]:
        """Take one reading from every sensor, temperature sensors first."""
        events: list[BaseEvent] = []
        for sensor in self.temperature_sensors:
            events.append(sensor.generate_temperature())
        for sensor in self.water_sensors:
            events.append(sensor.generate_water_level())
        self.ticks += 1
        return events

    def run(self, ticks: int) -> list[BaseEvent]:
        events: list[BaseEvent] = []
        for _ in range(ticks):
            events.extend(self.tick())
        return events

    def publish_news(self, agency_name: str, category: str) -> NewsEvent | None:
        """Publish a random headline from *agency_name*.

        Raises KeyError for an agency this simulation does not know.
        """
        return self.agencies[agency_name].publish_news(category)

    def temperature_sensor(self, sensor_id: str) -> TemperatureSensor | None:
        return next((s for s in self.temperature_sensors if s.name == sensor_id), None)

    def water_sensor(self, sensor_id: str) -> WaterLevelSensor | None:
        return next((s for s in self.water_sensors if s.name == sensor_id), None)
