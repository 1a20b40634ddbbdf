"""Shared helpers/options for the prompt-vault CLI.

Keep this module dependency-light; it should be safe to import from any CLI command module.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from typer import BadParameter

from prompt_vault.infrastructure.settings import Settings


class LogFormat(str, Enum):
    """Supported log output formats."""

    text = "text"
    ndjson = "ndjson"


class OutputFormat(str, Enum):
    """Supported stdout formats for listings."""

    text = "text"
    json = "json"


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def resolve_log_level(log_level: Optional[str], default_level: int) -> int:
    """Resolve a string log level to a logging level constant."""
    if not log_level:
        return default_level

    mapping = logging.getLevelNamesMapping()
    resolved = mapping.get(str(log_level).upper())
    if isinstance(resolved, int):
        return resolved

    raise BadParameter(f"Invalid log level: {log_level}", param_hint="log_level")


def resolve_logging(
    *,
    log_format: Optional[LogFormat],
    log_level: Optional[str],
    debug: bool,
    quiet: bool,
    settings: Settings,
) -> tuple[str, int]:
    """Compute effective log format/level with explicit precedence.

    Precedence: --quiet > --debug > --log-level > settings.
    """
    effective_format = log_format.value if log_format else settings.log_format
    base_level = resolve_log_level(log_level, settings.log_level)

    if quiet:
        effective_level = logging.ERROR
    elif debug:
        effective_level = logging.DEBUG
    else:
        effective_level = base_level

    return effective_format, effective_level


# ---------------------------------------------------------------------------
# Common reusable Typer options
# ---------------------------------------------------------------------------

INPUT_OPTION = typer.Option(
    None,
    "--input",
    "-i",
    exists=True,
    file_okay=True,
    dir_okay=False,
    resolve_path=True,
    help="Read CSV from a local file instead of fetching the stored link.",
)

QUERY_OPTION = typer.Option(
    "",
    "--query",
    "-q",
    help="Case-insensitive text searched in titles, prompts and tags.",
)

TAG_OPTION = typer.Option(
    "",
    "--tag",
    "-t",
    help="Only entries carrying this tag (case-insensitive).",
)


def read_local_csv(path: Path) -> str:
    """Read a local CSV; undecodable bytes become U+FFFD instead of failing."""

    return path.read_bytes().decode("utf-8-sig", errors="replace")


__all__ = [
    "INPUT_OPTION",
    "LogFormat",
    "OutputFormat",
    "QUERY_OPTION",
    "TAG_OPTION",
    "read_local_csv",
    "resolve_log_level",
    "resolve_logging",
]
