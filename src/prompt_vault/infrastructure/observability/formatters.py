from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from prompt_vault.models.events import DEFAULT_EVENT


def event_record(record: logging.LogRecord) -> dict[str, Any]:
    """Flatten a record stamped by VaultLogger into a vault event dict."""

    created = datetime.fromtimestamp(record.created, tz=timezone.utc)
    out: dict[str, Any] = {
        "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "session_id": getattr(record, "session_id", "") or "",
        "event_id": getattr(record, "event_id", "") or "",
        "level": record.levelname.lower(),
        "event": getattr(record, "event", None) or DEFAULT_EVENT,
        "message": record.getMessage(),
    }
    data = getattr(record, "data", None)
    if isinstance(data, Mapping) and data:
        out["data"] = dict(data)
    return out


class NdjsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        return json.dumps(event_record(record), ensure_ascii=False, default=str, separators=(",", ":"))


class TextFormatter(logging.Formatter):
    """``[timestamp] LEVEL event: message (key=value, ...)``"""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        item = event_record(record)
        line = f"[{item['timestamp']}] {item['level'].upper()} {item['event']}"
        if item["message"] and item["message"] != item["event"]:
            line += f": {item['message']}"
        data = item.get("data")
        if data:
            line += " (" + ", ".join(f"{key}={data[key]}" for key in sorted(data)) + ")"
        return line


__all__ = ["NdjsonFormatter", "TextFormatter", "event_record"]
