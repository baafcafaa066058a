"""Synchronous in-process event bus with polymorphic dispatch."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable

from eventbus.domain.diagnostics import DiagnosticsCollector
from eventbus.domain.discovery import discover_handlers
from eventbus.domain.errors import DispatchInvocationError
from eventbus.domain.events import category_of, resolve_key
from eventbus.domain.models import DispatchOutcome, Subscription, SubscriptionKind
from eventbus.repos.memory import SubscriptionRegistry

logger = logging.getLogger(__name__)


class EventBus:
    """Publish/subscribe bus for sensor and news events.

    Handlers are called synchronously on the publisher's thread. An event is
    delivered to subscriptions under its own category first, then to those
    under each ancestor category, each subscription exactly once. A handler
    that raises is reported to the diagnostics collector and does not stop
    the remaining handlers.
    """

    def __init__(
        self,
        registry: SubscriptionRegistry | None = None,
        diagnostics: DiagnosticsCollector | None = None,
    ) -> None:
        self.registry = registry if registry is not None else SubscriptionRegistry()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticsCollector()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def subscribe(self, event_type: Any, handler: Callable[[Any], Any]) -> Subscription:
        key = resolve_key(event_type)
        if not callable(handler):
            raise TypeError(f"handler must be callable, got {type(handler).__name__}")
        kind = SubscriptionKind.METHOD if inspect.ismethod(handler) else SubscriptionKind.CALLBACK
        return self._add(Subscription(key=key, kind=kind, target=handler))

    def unsubscribe(self, event_type: Any, handler: Callable[[Any], Any]) -> None:
        key = resolve_key(event_type)
        removed = self.registry.remove(key, handler)
        logger.debug("Unsubscribed %d handler(s) from %s", removed, key)

    def register_handler(self, event_type: Any, callback: Callable[[Any], Any]) -> Subscription:
        """Register a plain function for one event type."""
        key = resolve_key(event_type)
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        return self._add(Subscription(key=key, kind=SubscriptionKind.CALLBACK, target=callback))

    def register_object(self, obj: Any) -> list[Subscription]:
        """Subscribe every ``@handles`` method of *obj*.

        Methods with an unusable signature are skipped and reported to the
        diagnostics collector. Returns the subscriptions that were created.
        """
        found, skipped = discover_handlers(obj)
        for error in skipped:
            self.diagnostics.report_registration(error)
        return [
            self._add(Subscription(key=key, kind=SubscriptionKind.METHOD, target=method))
            for key, method in found
        ]

    register = register_object

    def _add(self, subscription: Subscription) -> Subscription:
        self.registry.add(subscription)
        logger.debug("Registered %s for %s", subscription.describe(), subscription.key)
        return subscription

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def publish(self, event: Any) -> None:
        runtime = category_of(event)
        if runtime is None:
            logger.debug("No category for %s; nothing to deliver", type(event).__name__)
            self.diagnostics.record_outcomes([])
            return

        # entries_matching returns a copy, so handlers may (un)subscribe freely.
        subscriptions = self.registry.entries_matching(runtime)
        logger.debug(
            "Posting %s to %d subscriber(s)", type(event).__name__, len(subscriptions)
        )

        outcomes: list[DispatchOutcome] = []
        for sub in subscriptions:
            try:
                sub.target(event)
            except Exception as exc:
                self.diagnostics.report_failure(DispatchInvocationError(sub, event, exc))
                outcomes.append(
                    DispatchOutcome(
                        subscription_id=sub.id,
                        key=sub.key,
                        target=sub.describe(),
                        ok=False,
                        error=repr(exc),
                    )
                )
            else:
                outcomes.append(
                    DispatchOutcome(
                        subscription_id=sub.id,
                        key=sub.key,
                        target=sub.describe(),
                        ok=True,
                    )
                )
        self.diagnostics.record_outcomes(outcomes)
