"""The trigger pass: ordering, eligibility, invocation and bookkeeping."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from action_events.core.action import Action

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class Dispatcher:
    """Runs one pass over a snapshot of an event's actions.

    Finished continuations are handed to the owning event through ``retire``
    as soon as they are seen, so an exception later in the pass cannot leave a
    closed generator registered. Actions may add or remove other actions while
    the pass is in progress.
    """

    def __init__(self, clock: Clock) -> None:
        self._clock = clock

    def dispatch(
        self,
        actions: Sequence[Action],
        args: tuple[Any, ...],
        *,
        is_registered: Callable[[Action], bool],
        retire: Callable[[Action], None],
        event_name: str | None = None,
    ) -> None:
        """Invoke every eligible action in ``actions`` once.

        Args:
            actions: Snapshot of the event's actions, in registration order.
            args: Positional arguments forwarded to each action.
            is_registered: Checks the live event, so actions removed earlier
                in this pass are skipped.
            retire: Removes a finished continuation from the event.
            event_name: Label for log records.
        """

        # sorted() is stable; equal priorities keep registration order.
        ordered = sorted(actions, key=lambda action: action.priority, reverse=True)
        for action in ordered:
            if not is_registered(action):
                continue
            if action.is_completed:
                retire(action)
                continue
            if not action.enabled or action.is_running:
                continue
            if action.is_throttled(self._clock()):
                continue

            try:
                finished = action.invoke(args)
            except BaseException:
                if action.is_completed:
                    retire(action)
                raise

            if finished:
                logger.debug(
                    "Continuation completed",
                    extra={"event": event_name, "action_id": action.id},
                )
                retire(action)
                continue

            if action.record_invocation(self._clock()):
                logger.debug(
                    "Trigger limit reached; action disabled",
                    extra={
                        "event": event_name,
                        "action_id": action.id,
                        "trigger_limit": action.trigger_limit,
                    },
                )

