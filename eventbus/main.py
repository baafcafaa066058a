"""FastAPI application — drives the simulated sensors and news agencies."""

from __future__ import annotations

import random

from fastapi import FastAPI, HTTPException

from eventbus.config import Settings, configure_logging, load_settings
from eventbus.domain.bus import EventBus
from eventbus.domain.diagnostics import DiagnosticsCollector
from eventbus.domain.events import TemperatureEvent, WaterLevelEvent
from eventbus.domain.handlers import (
    HumanSubscriber,
    NumericDisplay,
    TextDisplay,
    wire_explicitly,
)
from eventbus.domain.models import (
    DiagnosticsReport,
    FeedEntry,
    PublishedNews,
    Reading,
    TemperatureReading,
    WaterLevelReading,
)
from eventbus.repos.memory import FeedRepository
from eventbus.services.news import NewsAgency
from eventbus.services.sensors import TemperatureSensor, WaterLevelSensor
from eventbus.services.simulation import Simulation


class Demo:
    """One bus with the demo producers and consumers attached to it."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.bus = EventBus(
            diagnostics=DiagnosticsCollector(history=settings.diagnostics_history)
        )
        self.feed = FeedRepository()
        rng = random.Random(settings.seed)

        self.displays = [
            NumericDisplay("Numeric Display", self.feed),
            TextDisplay("Text Display", self.feed),
        ]
        self.humans = [
            HumanSubscriber("Vasile", self.feed),
            HumanSubscriber("Ghita", self.feed),
        ]
        if settings.registration == "explicit":
            wire_explicitly(self.bus, self.displays, self.humans)
        else:
            for consumer in [*self.displays, *self.humans]:
                self.bus.register_object(consumer)

        self.simulation = Simulation(
            temperature_sensors=[
                TemperatureSensor("tS1", self.bus, rng),
                TemperatureSensor("tS2", self.bus, rng),
            ],
            water_sensors=[WaterLevelSensor("wS1", self.bus, rng)],
            agencies=[
                NewsAgency("ProTV", self.bus, rng),
                NewsAgency("Digi24", self.bus, rng),
            ],
        )


def _reading(event: TemperatureEvent | WaterLevelEvent) -> Reading:
    value = event.temperature if isinstance(event, TemperatureEvent) else event.level
    return Reading(sensor_id=event.source.name, category=event.category, value=value)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings)

    app = FastAPI(title="Event Bus Demo")
    demo = Demo(settings)
    app.state.demo = demo

    # ── Routes ────────────────────────────────────────────────────────

    @app.post("/tick")
    def tick() -> dict:
        """Take one reading from every sensor."""
        events = demo.simulation.tick()
        return {
            "tick": demo.simulation.ticks,
            "readings": [_reading(e).model_dump(mode="json") for e in events],
        }

    @app.post("/agencies/{agency_name}/news/{category}", response_model=PublishedNews)
    def publish_news(agency_name: str, category: str) -> PublishedNews:
        """Publish a random headline from an agency."""
        try:
            event = demo.simulation.publish_news(agency_name, category)
        except KeyError:
            raise HTTPException(status_code=404, detail="Agency not found")
        if event is None:
            raise HTTPException(
                status_code=400, detail=f"Unknown news category: {category}"
            )
        return PublishedNews(
            agency=agency_name, category=event.category, content=event.content
        )

    @app.post("/events/temperature", response_model=Reading)
    def publish_temperature(body: TemperatureReading) -> Reading:
        sensor = demo.simulation.temperature_sensor(body.sensor_id)
        if sensor is None:
            raise HTTPException(status_code=404, detail="Sensor not found")
        return _reading(sensor.report(body.temperature))

    @app.post("/events/water-level", response_model=Reading)
    def publish_water_level(body: WaterLevelReading) -> Reading:
        sensor = demo.simulation.water_sensor(body.sensor_id)
        if sensor is None:
            raise HTTPException(status_code=404, detail="Sensor not found")
        return _reading(sensor.report(body.level))

    @app.get("/feed", response_model=list[FeedEntry])
    def list_feed() -> list[FeedEntry]:
        """Return everything the displays and subscribers have shown."""
        return demo.feed.list_all()

    @app.get("/subscriptions")
    def list_subscriptions() -> dict[str, list[str]]:
        registry = demo.bus.registry
        return {
            key.value: [s.describe() for s in registry.list_for(key)]
            for key in registry.keys()
        }

    @app.get("/diagnostics", response_model=DiagnosticsReport)
    def diagnostics() -> DiagnosticsReport:
        collected = demo.bus.diagnostics
        return DiagnosticsReport(
            failures=[str(e) for e in collected.failures],
            registration_errors=[str(e) for e in collected.registration_errors],
            last_outcomes=collected.last_outcomes,
        )

    return app


app = create_app()
