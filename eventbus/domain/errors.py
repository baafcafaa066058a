"""Errors raised or reported by the event bus."""

from __future__ import annotations

from typing import Any


class EventBusError(Exception):
    """Base class for event bus errors."""


class UnknownEventTypeError(EventBusError, KeyError):
    """An explicit registration named a key outside the category graph."""

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown event type: {self.key!r}"


class RegistrationError(EventBusError):
    """A tagged handler method could not be turned into a subscription.

    Introspective registration never raises this; it is handed to the
    diagnostics collector and the method is skipped.
    """

    def __init__(self, owner: Any, method_name: str, reason: str) -> None:
        super().__init__(f"{type(owner).__name__}.{method_name}: {reason}")
        self.owner = owner
        self.method_name = method_name
        self.reason = reason


class DispatchInvocationError(EventBusError):
    """A subscriber raised while handling a published event.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, subscription: Any, event: Any, original: BaseException) -> None:
        super().__init__(
            f"{subscription.describe()} failed on {type(event).__name__}: {original!r}"
        )
        self.subscription = subscription
        self.event = event
        self.original = original
        self.__cause__ = original
