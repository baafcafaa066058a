"""Tests for introspective registration of ``@handles`` methods."""

from __future__ import annotations

import pytest

from eventbus.domain.bus import EventBus
from eventbus.domain.categories import EventCategory
from eventbus.domain.discovery import discover_handlers, handles
from eventbus.domain.errors import RegistrationError, UnknownEventTypeError
from eventbus.domain.events import (
    NewsEvent,
    PoliticalNewsEvent,
    SportsNewsEvent,
    TemperatureEvent,
    WaterLevelEvent,
)
from eventbus.domain.models import Producer, SubscriptionKind

_SENSOR = Producer("T1")


class Mixed:
    """One usable handler and several that must be skipped."""

    def __init__(self) -> None:
        self.seen: list = []

    @handles
    def f(self, event: TemperatureEvent) -> None:
        self.seen.append(("f", event))

    @handles
    def g(self, event: TemperatureEvent, other: WaterLevelEvent) -> None:
        self.seen.append(("g", event))

    @handles
    def h(self, value: int) -> None:
        self.seen.append(("h", value))

    @handles
    def no_params(self) -> None:
        self.seen.append(("no_params", None))

    @handles
    def untyped(self, event) -> None:
        self.seen.append(("untyped", event))

    def not_marked(self, event: TemperatureEvent) -> None:
        self.seen.append(("not_marked", event))


def test_only_single_event_parameter_methods_are_registered():
    bus = EventBus()
    obj = Mixed()

    subs = bus.register_object(obj)

    assert len(subs) == 1
    assert subs[0].key is EventCategory.TEMPERATURE
    assert subs[0].kind == SubscriptionKind.METHOD
    assert len(bus.registry) == 1

    event = TemperatureEvent(source=_SENSOR, temperature=5)
    bus.publish(event)
    assert obj.seen == [("f", event)]


def test_skipped_methods_are_reported_not_raised():
    bus = EventBus()
    bus.register_object(Mixed())

    errors = bus.diagnostics.registration_errors
    assert {e.method_name for e in errors} == {"g", "h", "no_params", "untyped"}
    assert all(isinstance(e, RegistrationError) for e in errors)
    reasons = {e.method_name: e.reason for e in errors}
    assert "exactly one parameter" in reasons["g"]
    assert "not an event type" in reasons["h"]


def test_object_without_handlers_registers_nothing():
    bus = EventBus()
    assert bus.register_object(object()) == []
    assert len(bus.registry) == 0


def test_abstract_parameter_type_subscribes_to_all_subtypes():
    class Reader:
        def __init__(self) -> None:
            self.contents: list[str] = []

        @handles
        def read(self, event: NewsEvent) -> None:
            self.contents.append(event.content)

    bus = EventBus()
    reader = Reader()
    bus.register(reader)

    agency = Producer("Digi24")
    bus.publish(SportsNewsEvent(source=agency, content="Goal"))
    bus.publish(PoliticalNewsEvent(source=agency, content="Vote"))

    assert reader.contents == ["[Sports] Goal", "[Political] Vote"]


def test_explicit_key_on_marker_overrides_annotation():
    class Listener:
        def __init__(self) -> None:
            self.count = 0

        @handles(EventCategory.WATER_LEVEL)
        def any_reading(self, event) -> None:
            self.count += 1

    bus = EventBus()
    listener = Listener()
    subs = bus.register_object(listener)

    assert [s.key for s in subs] == [EventCategory.WATER_LEVEL]
    bus.publish(WaterLevelEvent(source=_SENSOR, level=3))
    assert listener.count == 1


def test_marker_rejects_unknown_key():
    with pytest.raises(UnknownEventTypeError):

        @handles(int)
        def nope(event) -> None:
            pass


def test_inherited_handlers_are_discovered_in_definition_order():
    class Base:
        @handles
        def on_temperature(self, event: TemperatureEvent) -> None:
            pass

    class Child(Base):
        @handles
        def on_water(self, event: WaterLevelEvent) -> None:
            pass

    found, skipped = discover_handlers(Child())

    assert [key for key, _ in found] == [
        EventCategory.TEMPERATURE,
        EventCategory.WATER_LEVEL,
    ]
    assert skipped == []


def test_registering_twice_delivers_twice():
    bus = EventBus()
    obj = Mixed()
    bus.register_object(obj)
    bus.register_object(obj)

    bus.publish(TemperatureEvent(source=_SENSOR, temperature=1))

    assert len(obj.seen) == 2


@pytest.mark.parametrize("wrapper", [staticmethod, classmethod])
def test_marker_above_descriptor_is_rejected(wrapper):
    def on_reading(event: TemperatureEvent) -> None:
        pass

    with pytest.raises(TypeError, match="innermost"):
        handles(wrapper(on_reading))
    with pytest.raises(TypeError, match="innermost"):
        handles(EventCategory.TEMPERATURE)(wrapper(on_reading))
