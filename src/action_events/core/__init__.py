"""Core package initialization."""

from action_events.core.action import ActionKind, ActionSnapshot
from action_events.core.config import ActionEventsSettings
from action_events.core.errors import (
    ActionEventsError,
    ActionNotFoundError,
    InvalidActionError,
)
from action_events.core.event import Event, new_event
from action_events.core.identity import ActionId

__all__ = [
    "ActionEventsError",
    "ActionEventsSettings",
    "ActionId",
    "ActionKind",
    "ActionNotFoundError",
    "ActionSnapshot",
    "Event",
    "InvalidActionError",
    "new_event",
]
