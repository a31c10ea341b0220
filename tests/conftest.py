"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from action_events import Event
from action_events.core.identity import IdentityRegistry


class FakeClock:
    """Manually advanced replacement for ``time.monotonic``."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Provide a fake clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def registry() -> IdentityRegistry:
    """Provide an identity registry isolated from the process-wide one."""
    return IdentityRegistry()


@pytest.fixture
def event(clock: FakeClock) -> Event:
    """Provide an empty event driven by the fake clock."""
    return Event("test", clock=clock)


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Drop handlers a test added to the root logger and restore levels."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    package_level = logging.getLogger("action_events").level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    logging.getLogger("action_events").setLevel(package_level)
