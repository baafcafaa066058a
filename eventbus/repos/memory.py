"""In-memory stores for subscriptions and display output."""

from __future__ import annotations

import threading
from typing import Any, Callable

from eventbus.domain.categories import EventCategory, matches
from eventbus.domain.models import FeedEntry, Subscription


class SubscriptionRegistry:
    """Dict-backed store of subscriptions, keyed by event category.

    Keys iterate in the order they were first added; subscriptions under a
    key stay in registration order. All access goes through a lock and reads
    return copies, so callers may iterate while others register.
    """

    def __init__(self) -> None:
        self._store: dict[EventCategory, list[Subscription]] = {}
        self._lock = threading.RLock()

    def add(self, subscription: Subscription) -> None:
        with self._lock:
            self._store.setdefault(subscription.key, []).append(subscription)

    def remove(self, key: EventCategory, target: Callable[[Any], Any]) -> int:
        """Drop every subscription under *key* whose target equals *target*.

        Returns how many were removed; zero when nothing matched.
        """
        with self._lock:
            subs = self._store.get(key)
            if not subs:
                return 0
            kept = [s for s in subs if not s.targets(target)]
            removed = len(subs) - len(kept)
            if kept:
                self._store[key] = kept
            else:
                del self._store[key]
            return removed

    def entries_matching(self, runtime: EventCategory) -> list[Subscription]:
        """Subscriptions that should receive an event of category *runtime*.

        Exact-key subscriptions come first, then those under ancestor keys
        grouped by key in key order. Each subscription appears once.
        """
        with self._lock:
            result = list(self._store.get(runtime, []))
            for key, subs in self._store.items():
                if key != runtime and matches(key, runtime):
                    result.extend(subs)
            return result

    def list_for(self, key: EventCategory) -> list[Subscription]:
        with self._lock:
            return list(self._store.get(key, []))

    def keys(self) -> list[EventCategory]:
        with self._lock:
            return list(self._store)

    def list_all(self) -> list[Subscription]:
        with self._lock:
            return [s for subs in self._store.values() for s in subs]

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return sum(len(subs) for subs in self._store.values())


class FeedRepository:
    """List-backed store for what the displays and subscribers printed."""

    def __init__(self) -> None:
        self._entries: list[FeedEntry] = []

    def add(self, entry: FeedEntry) -> None:
        self._entries.append(entry)

    def list_all(self) -> list[FeedEntry]:
        return list(self._entries)

    def list_for_display(self, display: str) -> list[FeedEntry]:
        return [e for e in self._entries if e.display == display]

    def texts(self) -> list[str]:
        return [e.text for e in self._entries]

    def clear(self) -> None:
        self._entries.clear()
