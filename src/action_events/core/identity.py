"""Stable, identity-derived action ids.

An action's id depends only on *which* object was registered, never on what it
looks like: the same function registered on two events yields the same id, two
equal-looking lambdas yield different ids.

Ids come from a process-wide counter instead of ``id()`` so that a recycled
memory address can never resurrect an old id. Registry entries are dropped when
the keyed object is garbage-collected; objects that cannot be weakly referenced
are kept alive by the registry instead.
"""

from __future__ import annotations

import itertools
import re
import types
import weakref
from typing import Any

_ID_PREFIX = "action-"
_ID_PATTERN = re.compile(rf"^{_ID_PREFIX}\d+$")

_IdentityKey = tuple[object, ...]


class ActionId(str):
    """Opaque action identifier of the form ``action-<n>``."""

    __slots__ = ()

    @classmethod
    def parse(cls, value: object) -> ActionId | None:
        """Return ``value`` as an ActionId if it has the id shape, else None."""

        if isinstance(value, ActionId):
            return value
        if isinstance(value, str) and _ID_PATTERN.match(value):
            return cls(value)
        return None

    def __repr__(self) -> str:
        return f"ActionId({str.__repr__(self)})"


def _identity(target: Any) -> tuple[_IdentityKey, tuple[object, ...]]:
    """Return (key, anchors) for ``target``.

    Bound methods are rebuilt on every attribute access, so they are keyed by
    the instance and function they bind rather than by the method object.
    """

    if isinstance(target, types.MethodType):
        return (id(target.__self__), id(target.__func__)), (target.__self__, target.__func__)
    if isinstance(target, types.BuiltinMethodType) and target.__self__ is not None:
        return (id(target.__self__), target.__name__), (target.__self__,)
    return (id(target),), (target,)


class IdentityRegistry:
    """Maps callable identity to ActionId across every Event that uses it.

    Entries for weakly referenceable callables disappear when the callable is
    collected. Callables that cannot be weakly referenced (instances of
    ``__slots__`` classes without ``__weakref__``, methods bound to a list or
    dict) are pinned: the registry keeps them alive for the rest of the process
    even after every event has removed them, so their id can never be reused.
    """

    def __init__(self) -> None:
        self._ids: dict[_IdentityKey, ActionId] = {}
        self._pinned: dict[_IdentityKey, list[object]] = {}
        self._counter = itertools.count(1)

    def __len__(self) -> int:
        return len(self._ids)

    def id_for(self, target: Any) -> ActionId:
        """Return the id for ``target``, allocating one on first sight."""

        key, anchors = _identity(target)
        existing = self._ids.get(key)
        if existing is not None:
            return existing

        action_id = ActionId(f"{_ID_PREFIX}{next(self._counter)}")
        self._ids[key] = action_id
        for anchor in anchors:
            try:
                weakref.finalize(anchor, self._forget, key, action_id)
            except TypeError:
                self._pinned.setdefault(key, []).append(anchor)
        return action_id

    def lookup(self, target: Any) -> ActionId | None:
        """Return the id already allocated for ``target`` without allocating."""

        key, _ = _identity(target)
        return self._ids.get(key)

    def _forget(self, key: _IdentityKey, action_id: ActionId) -> None:
        if self._ids.get(key) == action_id:
            del self._ids[key]
            self._pinned.pop(key, None)


default_registry = IdentityRegistry()
