"""Registered actions and the three kinds of callable they can wrap."""

from __future__ import annotations

import inspect
import types
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from action_events.core.errors import InvalidActionError
from action_events.core.identity import ActionId

_FUNCTION_TYPES = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.BuiltinMethodType,
)


class ActionKind(str, Enum):
    FUNCTION = "function"
    CALLABLE_OBJECT = "callable_object"
    CONTINUATION = "continuation"


def classify(target: object, *, allow_completed: bool = False) -> ActionKind:
    """Return the kind of ``target`` or raise InvalidActionError.

    Generators are continuations; a generator that has already finished is
    rejected unless ``allow_completed`` is set (lookups of a retired
    continuation must still resolve).
    """

    if isinstance(target, types.GeneratorType):
        if not allow_completed and inspect.getgeneratorstate(target) == inspect.GEN_CLOSED:
            raise InvalidActionError(f"Continuation {target!r} has already completed")
        return ActionKind.CONTINUATION
    if isinstance(target, _FUNCTION_TYPES):
        return ActionKind.FUNCTION
    if callable(target):
        return ActionKind.CALLABLE_OBJECT
    raise InvalidActionError(
        f"{target!r} is not a valid action: expected a function, "
        "a callable object or a generator"
    )


class ActionSnapshot(BaseModel):
    """Read-only view of an action's metadata."""

    model_config = ConfigDict(frozen=True)

    id: str
    kind: ActionKind
    enabled: bool
    priority: int = Field(ge=0)
    interval: float = Field(ge=0)
    trigger_limit: int | None = None
    invocation_count: int = Field(ge=0)
    last_invocation_time: float


class Action:
    """A callable plus its scheduling metadata.

    Created by ``Event.add_action``; never handed out to callers.
    """

    __slots__ = (
        "target",
        "kind",
        "id",
        "enabled",
        "priority",
        "interval",
        "last_invocation_time",
        "trigger_limit",
        "invocation_count",
    )

    def __init__(
        self,
        target: Any,
        kind: ActionKind,
        action_id: ActionId,
        *,
        created_at: float,
        interval: float = 0.0,
    ) -> None:
        self.target = target
        self.kind = kind
        self.id = action_id
        self.enabled = True
        self.priority = 0
        self.interval = interval
        self.last_invocation_time = created_at
        self.trigger_limit: int | None = None
        self.invocation_count = 0

    def __repr__(self) -> str:
        return f"Action(id={self.id!r}, kind={self.kind.value}, enabled={self.enabled})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Action):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def is_completed(self) -> bool:
        return (
            self.kind is ActionKind.CONTINUATION
            and inspect.getgeneratorstate(self.target) == inspect.GEN_CLOSED
        )

    @property
    def is_running(self) -> bool:
        return (
            self.kind is ActionKind.CONTINUATION
            and inspect.getgeneratorstate(self.target) == inspect.GEN_RUNNING
        )

    def is_throttled(self, now: float) -> bool:
        return self.interval > 0 and now - self.last_invocation_time < self.interval

    def invoke(self, args: tuple[Any, ...]) -> bool:
        """Run the action once; return True if a continuation has completed.

        A generator that has not started yet is primed with ``next()`` since
        Python cannot send a value into a fresh generator; afterwards the
        pending ``yield`` receives the trigger's argument tuple.
        """

        if self.kind is not ActionKind.CONTINUATION:
            self.target(*args)
            return False

        generator = self.target
        try:
            if inspect.getgeneratorstate(generator) == inspect.GEN_CREATED:
                next(generator)
            else:
                generator.send(args)
        except StopIteration:
            return True
        return False

    def record_invocation(self, now: float) -> bool:
        """Update accounting after a call; return True if the limit was just reached."""

        self.invocation_count += 1
        self.last_invocation_time = now
        if self.trigger_limit is not None and self.invocation_count >= self.trigger_limit:
            self.enabled = False
            return True
        return False

    def set_trigger_limit(self, limit: int) -> None:
        self.trigger_limit = limit
        self.invocation_count = 0
        if limit == 0:
            self.enabled = False

    def clear_trigger_limit(self) -> None:
        self.trigger_limit = None
        self.invocation_count = 0
        self.enabled = True

    def snapshot(self) -> ActionSnapshot:
        return ActionSnapshot(
            id=self.id,
            kind=self.kind,
            enabled=self.enabled,
            priority=self.priority,
            interval=self.interval,
            trigger_limit=self.trigger_limit,
            invocation_count=self.invocation_count,
            last_invocation_time=self.last_invocation_time,
        )
