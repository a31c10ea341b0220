"""Events: a registry of actions that can be triggered together."""

from __future__ import annotations

import logging
import time
from typing import Any

from action_events.core.action import Action, ActionSnapshot, classify
from action_events.core.dispatcher import Clock, Dispatcher
from action_events.core.errors import ActionNotFoundError
from action_events.core.identity import ActionId, IdentityRegistry, default_registry
from action_events.core.validation import (
    validate_interval,
    validate_priority,
    validate_trigger_limit,
)

logger = logging.getLogger(__name__)


class Event:
    """A set of actions invoked together by :meth:`trigger`.

    Actions are addressed either by the callable that was registered or by the
    :class:`ActionId` returned from :meth:`add_action`. Every targeted method
    except :meth:`remove_action` and :meth:`has_action` raises
    :class:`ActionNotFoundError` when the action is not registered here.

    Example:
        on_click = Event("click")
        on_click.add_action(update_label)
        on_click.set_action_priority(update_label, 10)
        on_click.trigger(button)
    """

    __slots__ = ("_name", "_actions", "_clock", "_registry", "_dispatcher")

    def __init__(
        self,
        name: str | None = None,
        *,
        clock: Clock | None = None,
        registry: IdentityRegistry | None = None,
    ) -> None:
        self._name = name
        self._actions: dict[ActionId, Action] = {}
        self._clock: Clock = clock if clock is not None else time.monotonic
        self._registry = registry if registry is not None else default_registry
        self._dispatcher = Dispatcher(self._clock)

    @property
    def name(self) -> str | None:
        return self._name

    def __repr__(self) -> str:
        return f"Event(name={self._name!r}, actions={len(self._actions)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self._actions.keys() == other._actions.keys()

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return len(self._actions)

    def __contains__(self, target: object) -> bool:
        return self.has_action(target)

    # -- lookup ---------------------------------------------------------------

    def _lookup_id(self, target: object) -> ActionId | None:
        action_id = ActionId.parse(target)
        if action_id is not None:
            return action_id
        classify(target, allow_completed=True)
        return self._registry.lookup(target)

    def _find(self, target: object) -> Action | None:
        action_id = self._lookup_id(target)
        if action_id is None:
            return None
        return self._actions.get(action_id)

    def _get(self, target: object) -> Action:
        action = self._find(target)
        if action is None:
            raise ActionNotFoundError(target, self._name)
        return action

    def _is_registered(self, action: Action) -> bool:
        return self._actions.get(action.id) is action

    def _retire(self, action: Action) -> None:
        if self._is_registered(action):
            del self._actions[action.id]
            logger.debug(
                "Continuation retired",
                extra={"event": self._name, "action_id": action.id},
            )

    # -- registration ---------------------------------------------------------

    def add_action(self, target: Any, interval: float | None = None) -> ActionId:
        """Register ``target`` and return its id.

        Adding a callable that is already registered changes nothing and
        returns the existing id.

        Raises:
            InvalidActionError: ``target`` is not a function, callable object
                or unfinished generator, or ``interval`` is not a
                non-negative number.
        """

        kind = classify(target)
        seconds = validate_interval(interval) if interval is not None else 0.0

        action_id = self._registry.id_for(target)
        if action_id in self._actions:
            return action_id

        self._actions[action_id] = Action(
            target, kind, action_id, created_at=self._clock(), interval=seconds
        )
        logger.debug(
            "Action added",
            extra={"event": self._name, "action_id": action_id, "kind": kind.value},
        )
        return action_id

    def add_action_with_interval(self, target: Any, interval: float) -> ActionId:
        """Register ``target`` so it runs at most once every ``interval`` seconds."""

        return self.add_action(target, interval=interval)

    def remove_action(self, target: object) -> None:
        """Remove an action by callable or id; absent actions are ignored."""

        action = self._find(target)
        if action is None:
            return
        del self._actions[action.id]
        logger.debug("Action removed", extra={"event": self._name, "action_id": action.id})

    def remove_all_actions(self) -> None:
        self._actions = {}

    # -- queries --------------------------------------------------------------

    def get_action_count(self) -> int:
        """Number of registered actions, eligible to run or not."""

        return len(self._actions)

    def has_action(self, target: object) -> bool:
        return self._find(target) is not None

    def action_ids(self) -> list[ActionId]:
        return list(self._actions)

    def describe_action(self, target: object) -> ActionSnapshot:
        return self._get(target).snapshot()

    def is_action_enabled(self, target: object) -> bool:
        return self._get(target).enabled

    # -- per-action state -----------------------------------------------------

    def enable_action(self, target: object) -> None:
        self._get(target).enabled = True

    def disable_action(self, target: object) -> None:
        self._get(target).enabled = False

    def set_action_priority(self, target: object, priority: int) -> None:
        """Higher priorities run first; the default is 0, the lowest."""

        action = self._get(target)
        action.priority = validate_priority(priority)

    def remove_action_priority(self, target: object) -> None:
        self._get(target).priority = 0

    def set_action_trigger_limit(self, target: object, limit: int) -> None:
        """Disable the action after ``limit`` more invocations.

        Resets the invocation count. A limit of 0 disables it immediately.
        """

        action = self._get(target)
        action.set_trigger_limit(validate_trigger_limit(limit))

    def remove_action_trigger_limit(self, target: object) -> None:
        """Drop the limit, reset the invocation count and re-enable the action."""

        self._get(target).clear_trigger_limit()

    def set_action_interval(self, target: object, interval: float) -> None:
        action = self._get(target)
        action.interval = validate_interval(interval)

    def remove_action_interval(self, target: object) -> None:
        self._get(target).interval = 0.0

    # -- dispatch -------------------------------------------------------------

    def trigger(self, *args: Any) -> None:
        """Invoke every eligible action with ``args``, highest priority first.

        Return values are discarded. An exception raised by an action
        propagates immediately and the remaining actions are not invoked.
        Generators that finish during the pass are removed from the event.
        """

        self._dispatcher.dispatch(
            list(self._actions.values()),
            args,
            is_registered=self._is_registered,
            retire=self._retire,
            event_name=self._name,
        )


def new_event(name: str | None = None) -> Event:
    return Event(name)
