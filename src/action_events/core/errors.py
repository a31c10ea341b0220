"""Exception types raised by the action registry."""

from __future__ import annotations

from typing import Any


class ActionEventsError(Exception):
    """Base class for every failure raised by the core."""


class InvalidActionError(ActionEventsError, ValueError):
    """An argument is not an acceptable callable, id, priority, interval or limit."""


class ActionNotFoundError(ActionEventsError, LookupError):
    """The targeted action is not registered on the event."""

    def __init__(self, target: Any, event_name: str | None = None) -> None:
        self.target = target
        self.event_name = event_name
        super().__init__(target, event_name)

    def __str__(self) -> str:
        where = f"event {self.event_name!r}" if self.event_name else "this event"
        return f"Action {self.target!r} is not registered on {where}"
