"""Domain models for subscriptions, dispatch results and display output."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from eventbus.domain.categories import EventCategory, StrEnum


class SubscriptionKind(StrEnum):
    METHOD = "method"
    CALLBACK = "callback"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class Producer:
    """Anything that publishes events; events keep a reference to it."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------


class Subscription(BaseModel):
    """A registered pairing of a category key and a callable target."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    key: EventCategory
    kind: SubscriptionKind
    target: Callable[[Any], Any]
    created_at: datetime = Field(default_factory=_utcnow)

    def targets(self, handler: Callable[[Any], Any]) -> bool:
        # Bound methods are rebuilt on each attribute access, so compare with ==
        # (same function bound to the same object) rather than identity.
        return self.target == handler

    def describe(self) -> str:
        owner = getattr(self.target, "__self__", None)
        func = getattr(self.target, "__func__", None)
        if owner is not None and func is not None:
            return f"{type(owner).__name__}.{func.__name__}"
        return getattr(self.target, "__qualname__", repr(self.target))


class DispatchOutcome(BaseModel):
    """Result of invoking one subscription during a publish call."""

    subscription_id: str
    key: EventCategory
    target: str
    ok: bool
    error: str | None = None


# ---------------------------------------------------------------------------
# Display output
# ---------------------------------------------------------------------------


class FeedEntry(BaseModel):
    id: str = Field(default_factory=_new_id)
    display: str
    text: str
    timestamp: datetime = Field(default_factory=_utcnow)


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class TemperatureReading(BaseModel):
    sensor_id: str
    temperature: int


class WaterLevelReading(BaseModel):
    sensor_id: str
    level: int


class Reading(BaseModel):
    sensor_id: str
    category: EventCategory
    value: int


class PublishedNews(BaseModel):
    agency: str
    category: EventCategory
    content: str


class DiagnosticsReport(BaseModel):
    failures: list[str] = Field(default_factory=list)
    registration_errors: list[str] = Field(default_factory=list)
    last_outcomes: list[DispatchOutcome] = Field(default_factory=list)
