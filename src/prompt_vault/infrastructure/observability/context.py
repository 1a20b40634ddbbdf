from __future__ import annotations

import logging
import sys
import uuid
from contextlib import suppress
from dataclasses import dataclass
from typing import TextIO

from prompt_vault.infrastructure.observability.formatters import NdjsonFormatter, TextFormatter
from prompt_vault.infrastructure.observability.logger import VaultLogger
from prompt_vault.models.events import VALID_LOG_FORMATS


@dataclass
class LogContext:
    logger: VaultLogger
    _base_logger: logging.Logger
    _handlers: list[logging.Handler]

    def close(self) -> None:
        for h in list(self._handlers):
            self._base_logger.removeHandler(h)
            with suppress(Exception):
                h.close()

    def __enter__(self) -> "LogContext":
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:
        self.close()


def create_logger_context(
    *,
    log_format: str = "text",
    log_level: int = logging.WARNING,
    stream: TextIO | None = None,
) -> LogContext:
    """Build a session logger writing to ``stream`` (stderr by default)."""

    fmt = (log_format or "text").strip().lower()
    if fmt not in VALID_LOG_FORMATS:
        raise ValueError("log_format must be 'text' or 'ndjson' (or 'json')")

    formatter: logging.Formatter = TextFormatter() if fmt == "text" else NdjsonFormatter()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    session_id = uuid.uuid4().hex
    base_logger = logging.getLogger(f"prompt_vault.session.{session_id}")
    base_logger.setLevel(log_level)
    base_logger.handlers.clear()
    base_logger.propagate = False
    base_logger.addHandler(handler)

    logger = VaultLogger(base_logger, session_id=session_id)
    return LogContext(logger=logger, _base_logger=base_logger, _handlers=[handler])


__all__ = ["LogContext", "create_logger_context"]
