"""Handler discovery for introspective registration.

Methods opt in with the :func:`handles` marker. The event type a method
wants is taken from the annotation of its single parameter, or from the key
given to the marker::

    class Display:
        @handles
        def on_temperature(self, event: TemperatureEvent) -> None: ...

        @handles(EventCategory.NEWS)
        def on_any_news(self, event) -> None: ...
"""

from __future__ import annotations

import inspect
import typing
from typing import Any, Callable

from eventbus.domain.categories import EventCategory
from eventbus.domain.errors import RegistrationError, UnknownEventTypeError
from eventbus.domain.events import resolve_key

_MARKER = "__eventbus_handles__"

# Marker value meaning "infer the key from the parameter annotation".
_INFER = object()

_NOT_INNERMOST = "@handles must be the innermost decorator, below @classmethod or @staticmethod"

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def handles(key: Any = None) -> Any:
    """Mark a method as an event handler, with or without an explicit key."""
    if inspect.isfunction(key):
        setattr(key, _MARKER, _INFER)
        return key
    if isinstance(key, (classmethod, staticmethod)):
        raise TypeError(_NOT_INNERMOST)

    explicit = resolve_key(key) if key is not None else _INFER

    def mark(func: Callable) -> Callable:
        if not inspect.isfunction(func):
            raise TypeError(_NOT_INNERMOST)
        setattr(func, _MARKER, explicit)
        return func

    return mark


def is_handler(func: Any) -> bool:
    return hasattr(func, _MARKER)


def _member_names(cls: type) -> list[str]:
    names: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        for name in vars(klass):
            names.setdefault(name, None)
    return list(names)


def _infer_key(owner: Any, name: str, func: Callable, bound: Callable) -> EventCategory:
    try:
        params = list(inspect.signature(bound).parameters.values())
    except (TypeError, ValueError) as exc:
        raise RegistrationError(owner, name, f"signature unavailable: {exc}") from exc

    if len(params) != 1:
        raise RegistrationError(
            owner, name, f"expected exactly one parameter, found {len(params)}"
        )
    param = params[0]
    if param.kind not in _POSITIONAL:
        raise RegistrationError(owner, name, "parameter must be positional")

    explicit = getattr(func, _MARKER)
    if explicit is not _INFER:
        return explicit

    try:
        hints = typing.get_type_hints(func)
    except Exception as exc:
        raise RegistrationError(
            owner, name, f"cannot resolve annotations: {exc}"
        ) from exc

    hint = hints.get(param.name)
    if hint is None:
        raise RegistrationError(owner, name, f"parameter {param.name!r} is not annotated")
    try:
        return resolve_key(hint)
    except UnknownEventTypeError as exc:
        raise RegistrationError(
            owner, name, f"{getattr(hint, '__name__', hint)} is not an event type"
        ) from exc


def discover_handlers(
    obj: Any,
) -> tuple[list[tuple[EventCategory, Callable]], list[RegistrationError]]:
    """Find the marked handler methods on *obj*.

    Returns ``(found, skipped)``: ``found`` holds ``(key, bound_method)`` pairs
    in definition order (base classes first), ``skipped`` the methods whose
    signature could not be used.
    """
    found: list[tuple[EventCategory, Callable]] = []
    skipped: list[RegistrationError] = []

    for name in _member_names(type(obj)):
        raw = inspect.getattr_static(obj, name)
        func = getattr(raw, "__func__", raw)
        if not is_handler(func):
            continue
        bound = getattr(obj, name)
        try:
            key = _infer_key(obj, name, func, bound)
        except RegistrationError as error:
            skipped.append(error)
            continue
        found.append((key, bound))

    return found, skipped
