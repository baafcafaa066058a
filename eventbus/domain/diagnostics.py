"""Collector for registration problems and failed handler invocations."""

from __future__ import annotations

import logging
from collections import deque

from eventbus.domain.errors import DispatchInvocationError, RegistrationError
from eventbus.domain.models import DispatchOutcome

logger = logging.getLogger(__name__)

DEFAULT_HISTORY = 1000


class DiagnosticsCollector:
    """Keeps what went wrong so callers can inspect it after the fact.

    The bus forwards every skipped registration and every failed handler
    here instead of raising to the producer. Only the most recent *history*
    entries of each kind are kept.
    """

    def __init__(self, history: int = DEFAULT_HISTORY) -> None:
        if history < 1:
            raise ValueError("history must be at least 1")
        self._registration_errors: deque[RegistrationError] = deque(maxlen=history)
        self._failures: deque[DispatchInvocationError] = deque(maxlen=history)
        self._last_outcomes: list[DispatchOutcome] = []

    def report_registration(self, error: RegistrationError) -> None:
        logger.warning("Skipped handler %s", error)
        self._registration_errors.append(error)

    def report_failure(self, error: DispatchInvocationError) -> None:
        logger.error("Handler failed: %s", error, exc_info=error.original)
        # Logged above; do not keep the handler's frames alive.
        error.original.__traceback__ = None
        self._failures.append(error)

    def record_outcomes(self, outcomes: list[DispatchOutcome]) -> None:
        self._last_outcomes = list(outcomes)

    @property
    def registration_errors(self) -> list[RegistrationError]:
        return list(self._registration_errors)

    @property
    def failures(self) -> list[DispatchInvocationError]:
        return list(self._failures)

    @property
    def last_outcomes(self) -> list[DispatchOutcome]:
        return list(self._last_outcomes)

    def clear(self) -> None:
        self._registration_errors.clear()
        self._failures.clear()
        self._last_outcomes.clear()
