"""Argument validation for action metadata.

Values are checked strictly: ``True`` is not a priority and ``2.0`` is not a
trigger limit. Invalid values are rejected, never clamped.
"""

from __future__ import annotations

from typing import Annotated, TypeVar

from pydantic import Field, TypeAdapter, ValidationError

from action_events.core.errors import InvalidActionError

T = TypeVar("T", int, float)

_NON_NEGATIVE_INT: TypeAdapter[int] = TypeAdapter(Annotated[int, Field(strict=True, ge=0)])
_NON_NEGATIVE_SECONDS: TypeAdapter[float] = TypeAdapter(
    Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]
)


def _validate(adapter: TypeAdapter[T], field: str, value: object) -> T:
    # bool is an int subclass; pydantic's strict mode is the only other guard.
    if isinstance(value, bool):
        raise InvalidActionError(f"Invalid {field} {value!r}: booleans are not accepted")
    try:
        return adapter.validate_python(value)
    except ValidationError as e:
        reason = e.errors()[0]["msg"]
        raise InvalidActionError(f"Invalid {field} {value!r}: {reason}") from e


def validate_priority(value: object) -> int:
    return _validate(_NON_NEGATIVE_INT, "priority", value)


def validate_trigger_limit(value: object) -> int:
    return _validate(_NON_NEGATIVE_INT, "trigger limit", value)


def validate_interval(value: object) -> float:
    """Validate a throttle interval in seconds (int or float, finite, >= 0)."""

    return float(_validate(_NON_NEGATIVE_SECONDS, "interval", value))
