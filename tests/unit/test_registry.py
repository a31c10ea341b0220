"""Unit tests for registering, finding and removing actions."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from action_events import (
    ActionId,
    ActionKind,
    ActionNotFoundError,
    Event,
    InvalidActionError,
    new_event,
)
from action_events.core.validation import (
    validate_interval,
    validate_priority,
    validate_trigger_limit,
)


def noop() -> None:
    pass


def echo(*args: object) -> None:
    print(*args)


class Sorter:
    def __call__(self, *values: int) -> list[int]:
        return sorted(values)


def test_new_event_starts_empty() -> None:
    event = new_event("startup")

    assert event.name == "startup"
    assert event.get_action_count() == 0
    assert len(event) == 0


def test_add_single_action(event: Event) -> None:
    event.add_action(noop)
    assert event.get_action_count() == 1


def test_adding_same_action_twice_is_a_no_op(event: Event) -> None:
    first = event.add_action(noop)
    second = event.add_action(noop)
    event.add_action(noop)

    assert first == second
    assert event.get_action_count() == 1


def test_adding_existing_action_keeps_its_interval(event: Event) -> None:
    event.add_action(noop, interval=5)
    event.add_action(noop, interval=1)

    assert event.describe_action(noop).interval == 5.0


def test_accepts_multiple_actions(event: Event) -> None:
    event.add_action(noop)
    event.add_action(noop)
    event.add_action(echo)

    assert event.get_action_count() == 2


def test_accepts_callable_objects(event: Event) -> None:
    sorter = Sorter()
    event.add_action(sorter)

    assert event.has_action(sorter)
    assert event.describe_action(sorter).kind == ActionKind.CALLABLE_OBJECT


def test_functions_and_methods_are_function_actions(event: Event) -> None:
    sorter = Sorter()
    event.add_action(echo)
    event.add_action(print)
    event.add_action(sorter.__call__)

    assert event.describe_action(echo).kind == ActionKind.FUNCTION
    assert event.describe_action(print).kind == ActionKind.FUNCTION
    assert event.describe_action(sorter.__call__).kind == ActionKind.FUNCTION


@pytest.mark.parametrize("value", [42, "not callable", object(), None, [noop]])
def test_rejects_non_callables(event: Event, value: object) -> None:
    with pytest.raises(InvalidActionError):
        event.add_action(value)
    assert event.get_action_count() == 0


def test_rejects_negative_interval(event: Event) -> None:
    with pytest.raises(InvalidActionError):
        event.add_action(noop, interval=-1)
    assert not event.has_action(noop)


def test_add_returns_action_id(event: Event) -> None:
    action_id = event.add_action(noop)

    assert isinstance(action_id, ActionId)
    assert isinstance(action_id, str)
    assert action_id.startswith("action-")


def test_remove_by_callable(event: Event) -> None:
    event.add_action(noop)
    event.add_action(echo)

    event.remove_action(noop)

    assert event.get_action_count() == 1
    assert not event.has_action(noop)
    assert event.has_action(echo)


def test_remove_by_id(event: Event) -> None:
    event.add_action(noop)
    action_id = event.add_action(lambda: None)
    assert event.get_action_count() == 2

    event.remove_action(action_id)

    assert event.get_action_count() == 1
    assert not event.has_action(action_id)


def test_remove_by_id_then_lookup_by_callable(event: Event) -> None:
    action_id = event.add_action(noop)
    event.remove_action(action_id)

    assert event.has_action(noop) is False


def test_remove_absent_action_is_safe(event: Event) -> None:
    event.remove_action(noop)
    event.remove_action("action-999999999")
    assert event.get_action_count() == 0


def test_remove_all_actions(event: Event) -> None:
    event.add_action(noop)
    event.add_action(echo)

    event.remove_all_actions()

    assert event.get_action_count() == 0
    assert not event.has_action(noop)


def test_has_action(event: Event) -> None:
    sorter = Sorter()
    event.add_action(noop)
    event.add_action(sorter)

    assert event.has_action(noop)
    assert event.has_action(sorter)
    assert not event.has_action(echo)
    assert noop in event
    assert echo not in event


def test_lookup_accepts_plain_string_ids(event: Event) -> None:
    action_id = event.add_action(noop)

    assert event.has_action(str(action_id))
    assert event.is_action_enabled(str(action_id))


def test_lookup_rejects_values_that_are_neither_ids_nor_callables(event: Event) -> None:
    with pytest.raises(InvalidActionError):
        event.has_action(42)
    with pytest.raises(InvalidActionError):
        event.remove_action("not-an-id")


def test_action_ids_lists_registered_ids(event: Event) -> None:
    a = event.add_action(noop)
    b = event.add_action(echo)

    assert event.action_ids() == [a, b]


@pytest.mark.parametrize(
    "operation",
    [
        lambda e, t: e.is_action_enabled(t),
        lambda e, t: e.enable_action(t),
        lambda e, t: e.disable_action(t),
        lambda e, t: e.set_action_priority(t, 1),
        lambda e, t: e.remove_action_priority(t),
        lambda e, t: e.set_action_trigger_limit(t, 1),
        lambda e, t: e.remove_action_trigger_limit(t),
        lambda e, t: e.set_action_interval(t, 1),
        lambda e, t: e.remove_action_interval(t),
        lambda e, t: e.describe_action(t),
    ],
)
def test_targeted_operations_require_a_registered_action(event: Event, operation) -> None:
    event.add_action(echo)

    with pytest.raises(ActionNotFoundError) as excinfo:
        operation(event, noop)
    assert excinfo.value.target is noop
    assert "test" in str(excinfo.value)


def test_unknown_id_is_not_found(event: Event) -> None:
    with pytest.raises(ActionNotFoundError):
        event.enable_action("action-999999999")


def test_disable_and_enable(event: Event) -> None:
    event.add_action(noop)
    assert event.is_action_enabled(noop)

    event.disable_action(noop)
    assert not event.is_action_enabled(noop)
    assert event.get_action_count() == 1

    event.enable_action(noop)
    assert event.is_action_enabled(noop)


def test_priority_set_and_remove(event: Event) -> None:
    event.add_action(noop)

    event.set_action_priority(noop, 7)
    assert event.describe_action(noop).priority == 7

    event.remove_action_priority(noop)
    assert event.describe_action(noop).priority == 0


@pytest.mark.parametrize("priority", [-1, 1.5, "3", True, None])
def test_invalid_priority_is_rejected_and_state_kept(event: Event, priority: object) -> None:
    event.add_action(noop)
    event.set_action_priority(noop, 3)

    with pytest.raises(InvalidActionError):
        event.set_action_priority(noop, priority)  # type: ignore[arg-type]
    assert event.describe_action(noop).priority == 3


def test_trigger_limit_zero_disables_immediately(event: Event) -> None:
    event.add_action(noop)

    event.set_action_trigger_limit(noop, 0)

    assert not event.is_action_enabled(noop)
    assert event.get_action_count() == 1


@pytest.mark.parametrize("limit", [-1, 2.0, "2"])
def test_invalid_trigger_limit_is_rejected(event: Event, limit: object) -> None:
    event.add_action(noop)

    with pytest.raises(InvalidActionError):
        event.set_action_trigger_limit(noop, limit)  # type: ignore[arg-type]
    assert event.describe_action(noop).trigger_limit is None


def test_remove_trigger_limit_re_enables(event: Event) -> None:
    event.add_action(noop)
    event.set_action_trigger_limit(noop, 0)

    event.remove_action_trigger_limit(noop)

    info = event.describe_action(noop)
    assert info.enabled is True
    assert info.trigger_limit is None
    assert info.invocation_count == 0


def test_interval_set_and_remove(event: Event) -> None:
    event.add_action(noop)
    event.disable_action(noop)

    event.set_action_interval(noop, 2)
    assert event.describe_action(noop).interval == 2.0

    event.remove_action_interval(noop)
    info = event.describe_action(noop)
    assert info.interval == 0.0
    assert info.enabled is False


@pytest.mark.parametrize("interval", [-0.5, "1", float("inf"), float("nan"), True])
def test_invalid_interval_is_rejected(event: Event, interval: object) -> None:
    event.add_action(noop)

    with pytest.raises(InvalidActionError):
        event.set_action_interval(noop, interval)  # type: ignore[arg-type]
    assert event.describe_action(noop).interval == 0.0


@pytest.mark.parametrize(
    ("validator", "field"),
    [
        (validate_priority, "priority"),
        (validate_trigger_limit, "trigger limit"),
        (validate_interval, "interval"),
    ],
)
@pytest.mark.parametrize("value", [True, -1])
def test_validation_errors_name_the_field(validator, field: str, value: object) -> None:
    with pytest.raises(InvalidActionError, match=f"^Invalid {field} "):
        validator(value)


def test_add_action_with_interval(event: Event) -> None:
    event.add_action_with_interval(noop, 1.5)
    assert event.describe_action(noop).interval == 1.5


def test_snapshot_is_read_only(event: Event) -> None:
    event.add_action(noop)
    info = event.describe_action(noop)

    with pytest.raises(ValidationError):
        info.priority = 5  # type: ignore[misc]
    assert event.describe_action(noop).priority == 0


def test_event_does_not_expose_attribute_assignment() -> None:
    event = Event()
    with pytest.raises(AttributeError):
        event.actions = []  # type: ignore[attr-defined]
