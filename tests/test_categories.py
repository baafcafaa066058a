"""Tests for the category graph and event models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from eventbus.domain.categories import EventCategory, ancestors, descendants, matches
from eventbus.domain.errors import UnknownEventTypeError
from eventbus.domain.events import (
    CultureNewsEvent,
    NewsEvent,
    PoliticalNewsEvent,
    SportsNewsEvent,
    TemperatureEvent,
    category_of,
    resolve_key,
)
from eventbus.domain.models import Producer

_AGENCY = Producer("ProTV")


def test_category_matches_itself():
    for category in EventCategory:
        assert matches(category, category)


def test_news_matches_every_kind_of_news():
    for category in (
        EventCategory.SPORTS_NEWS,
        EventCategory.POLITICAL_NEWS,
        EventCategory.CULTURE_NEWS,
    ):
        assert matches(EventCategory.NEWS, category)


def test_concrete_news_does_not_match_siblings_or_parent():
    assert not matches(EventCategory.SPORTS_NEWS, EventCategory.POLITICAL_NEWS)
    assert not matches(EventCategory.SPORTS_NEWS, EventCategory.NEWS)


def test_flat_categories_are_independent():
    assert not matches(EventCategory.TEMPERATURE, EventCategory.WATER_LEVEL)
    assert not matches(EventCategory.NEWS, EventCategory.TEMPERATURE)
    assert ancestors(EventCategory.TEMPERATURE) == []


def test_descendants_of_news():
    assert set(descendants(EventCategory.NEWS)) == {
        EventCategory.SPORTS_NEWS,
        EventCategory.POLITICAL_NEWS,
        EventCategory.CULTURE_NEWS,
    }


# ---------------------------------------------------------------------------
# Event models
# ---------------------------------------------------------------------------


def test_news_content_is_prefixed_once():
    sports = SportsNewsEvent(source=_AGENCY, content="Breaking news!")
    assert sports.content == "[Sports] Breaking news!"

    again = SportsNewsEvent(source=_AGENCY, content=sports.content)
    assert again.content == "[Sports] Breaking news!"

    assert PoliticalNewsEvent(source=_AGENCY, content="x").content == "[Political] x"
    assert CultureNewsEvent(source=_AGENCY, content="x").content == "[Cultural] x"


def test_abstract_news_cannot_be_built():
    with pytest.raises(TypeError):
        NewsEvent(source=_AGENCY, content="Nothing")


def test_events_are_immutable():
    event = TemperatureEvent(source=Producer("T1"), temperature=10)
    with pytest.raises(ValidationError):
        event.temperature = 30
    assert event.temperature == 10


def test_resolve_key_accepts_classes_categories_and_strings():
    assert resolve_key(SportsNewsEvent) is EventCategory.SPORTS_NEWS
    assert resolve_key(NewsEvent) is EventCategory.NEWS
    assert resolve_key(EventCategory.TEMPERATURE) is EventCategory.TEMPERATURE
    assert resolve_key("water_level") is EventCategory.WATER_LEVEL


@pytest.mark.parametrize("key", [int, "rainfall", object(), None])
def test_resolve_key_rejects_unknown_keys(key):
    with pytest.raises(UnknownEventTypeError):
        resolve_key(key)


def test_category_of_non_event_is_none():
    assert category_of("not an event") is None
    assert category_of(SportsNewsEvent(source=_AGENCY, content="x")) is EventCategory.SPORTS_NEWS
