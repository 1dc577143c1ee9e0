from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from ..libs.errors import EventDispatchError


class SearchEvent(str, Enum):
    TEXT_CHANGED = "text-changed"
    CANCEL = "cancel"
    CONFIRM = "confirm"
    FOCUS = "focus"
    BLUR = "blur"
    CLEAR = "clear"


Handler = Callable[[str | None], Any]


@dataclass
class EventDispatcher:
    """Synchronous routing of search-box events to their handlers."""

    _handlers: dict[SearchEvent, Handler] = field(default_factory=dict)

    def register(self, event: SearchEvent | str, handler: Handler) -> None:
        if not callable(handler):
            raise TypeError("handler must be callable")
        self._handlers[_coerce(event)] = handler

    def registered(self) -> list[SearchEvent]:
        return list(self._handlers)

    def dispatch(self, event: SearchEvent | str, value: str | None = None) -> Any:
        ev = _coerce(event)
        handler = self._handlers.get(ev)
        if handler is None:
            raise EventDispatchError(f"no handler registered for {ev.value!r}")
        return handler(value)


def _coerce(event: SearchEvent | str) -> SearchEvent:
    if isinstance(event, SearchEvent):
        return event
    try:
        return SearchEvent(event)
    except ValueError as exc:
        raise EventDispatchError(f"unknown event: {event!r}") from exc
