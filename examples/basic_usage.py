#!/usr/bin/env python3
"""Programmatic usage example.

This demonstrates:

* load logging settings from `.env` / environment
* register a function, a callable object and a generator on one event
* priorities, a trigger limit and generator retirement
"""

from __future__ import annotations

import argparse
from collections.abc import Iterator
from typing import Any, Sequence

from action_events import ActionEventsSettings, Event


class Button:
    def __init__(self) -> None:
        self.click_count = 0
        self.label = ""


class LabelUpdater:
    def __call__(self, button: Button) -> None:
        button.label = f"Clicks: {button.click_count}"


def bump_counter(button: Button) -> None:
    button.click_count += 1


def countdown(steps: int) -> Iterator[None]:
    for remaining in range(steps, 0, -1):
        print(f"countdown: {remaining}")
        yield


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Trigger an event a few times (example).")
    parser.add_argument("--clicks", type=int, default=5, help="How many times to trigger")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Optional trigger limit for the label updater",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = ActionEventsSettings()
    settings.setup_logging()

    button = Button()
    updater = LabelUpdater()

    on_click = Event("click")
    on_click.add_action(bump_counter)
    on_click.add_action(updater)
    on_click.add_action(countdown(3))
    on_click.set_action_priority(bump_counter, 10)
    if args.limit is not None:
        on_click.set_action_trigger_limit(updater, args.limit)

    for _ in range(args.clicks):
        on_click.trigger(button)

    info: dict[str, Any] = on_click.describe_action(updater).model_dump()
    print(f"Button label: {button.label!r} after {button.click_count} clicks")
    print(f"Label updater: {info}")
    print(f"Registered actions: {on_click.get_action_count()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
