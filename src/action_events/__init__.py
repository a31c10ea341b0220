"""Action Events.

A callback-dispatch engine:
- register functions, callable objects or generators on an event
- trigger the event to run them in priority order
- throttle actions by interval, cap them with trigger limits
- generators resume on every trigger and are retired when they finish
"""

__version__ = "0.1.0"

from action_events.core import (
    ActionEventsError,
    ActionEventsSettings,
    ActionId,
    ActionKind,
    ActionNotFoundError,
    ActionSnapshot,
    Event,
    InvalidActionError,
    new_event,
)
from action_events.logging import configure_logging

__all__ = [
    "__version__",
    "ActionEventsError",
    "ActionEventsSettings",
    "ActionId",
    "ActionKind",
    "ActionNotFoundError",
    "ActionSnapshot",
    "Event",
    "InvalidActionError",
    "configure_logging",
    "new_event",
]
