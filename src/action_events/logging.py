"""Logging output for dispatch records.

Core modules log registrations, removals, exhausted trigger limits and retired
continuations with ``event`` and ``action_id`` passed through ``extra=``. The
formatters here lift those two fields out of the record so every line names
the event and action it is about. The library never configures logging;
applications call :func:`configure_logging` (or
``ActionEventsSettings.setup_logging``) once at start-up.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, Literal, TextIO

LogFormat = Literal["json", "text"]

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}
_CONTEXT_FIELDS = ("event", "action_id")


def dispatch_context(record: logging.LogRecord) -> dict[str, Any]:
    """Return the ``event``/``action_id`` fields attached to ``record``."""

    return {field: getattr(record, field) for field in _CONTEXT_FIELDS if hasattr(record, field)}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and key not in _CONTEXT_FIELDS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    ``event`` and ``action_id`` become top-level keys; any other ``extra=``
    fields (``kind``, ``trigger_limit``) are nested under ``extra``.
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(dispatch_context(record))

        extra = _extra_fields(record)
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # ActionId and ActionKind values are str subclasses; default=str covers the rest.
        return json.dumps(payload, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines tagged with ``[event=... action_id=...]``."""

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        line = super().format(record)
        context = dispatch_context(record)
        if not context:
            return line
        tag = " ".join(f"{key}={value}" for key, value in context.items())
        # Keep the tag on the message line, ahead of any traceback.
        head, sep, rest = line.partition("\n")
        return f"{head} [{tag}]{sep}{rest}"


def configure_logging(level: str, *, fmt: LogFormat = "json", stream: TextIO | None = None) -> None:
    """Send root logging to ``stream`` (stdout by default) in the given format."""

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=stream if stream is not None else sys.stdout)
    handler.setFormatter(JsonFormatter() if fmt == "json" else TextFormatter())

    root.addHandler(handler)
    root.setLevel(level.upper())
