"""Plaintext block formatter for cmdp run logs."""

from __future__ import annotations

import json
import logging
from typing import Any

# Fields shown first for every event, then any listed for the event itself.
HEADER_KEYS = ("ts", "level")
FIELD_ORDER: dict[str, tuple[str, ...]] = {
    "processor_stop": ("reason", "lines", "uptime_ms"),
    "command_dispatch": ("command", "args"),
    "command_error": ("stage", "command", "error_type", "error"),
}


def _one_line(value: Any) -> str:
    return str(value).replace("\n", "\\n")


def _parse_payload(record: logging.LogRecord) -> dict[str, Any]:
    message = record.getMessage()
    try:
        payload = json.loads(message)
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        return payload
    return {"event": record.name, "message": message}


class StructuredTextFormatter(logging.Formatter):
    """Render each ``log_event`` payload as an ``=== event ===`` block."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._first_entry = True

    def format(self, record: logging.LogRecord) -> str:
        data = _parse_payload(record)
        event_name = str(data.pop("event", record.name))
        data["level"] = record.levelname

        preferred = HEADER_KEYS + FIELD_ORDER.get(event_name, ())
        keys = [k for k in preferred if k in data]
        keys += sorted(k for k in data if k not in preferred)

        lines = [f"=== {event_name} ==="]
        lines.extend(
            f"{key}: {_one_line(data[key])}"
            for key in keys
            if data[key] is not None
        )

        body = "\n".join(lines)
        if self._first_entry:
            self._first_entry = False
            return body
        return "\n" + body
