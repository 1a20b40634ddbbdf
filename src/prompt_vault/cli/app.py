"""CLI entrypoint for :mod:`prompt_vault`.

Exposes the prompt vault with:

- `source`    show or set the published CSV link.
- `list`      list prompts, optionally filtered by text and tag.
- `tags`      list every distinct tag.
- `headers`   show parsed columns and which ones feed title/prompt/tags.
- `map`       pin title/prompt/tags to explicit columns.
- `copy`      copy one listed prompt to the clipboard.
- `share`     share one listed prompt (copies when sharing is unavailable).
- `open-chat` open the chat assistant in a browser.
- `version`   print the version.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from typer import BadParameter

from prompt_vault import __version__
from prompt_vault.application.vault import PromptVault, ShareOutcome
from prompt_vault.infrastructure.clipboard import SystemClipboard
from prompt_vault.infrastructure.observability.context import LogContext, create_logger_context
from prompt_vault.infrastructure.settings import Settings
from prompt_vault.infrastructure.storage import JsonFileStore
from prompt_vault.models.errors import FetchError, StoreError
from prompt_vault.models.table import PromptEntry

from .common import (
    INPUT_OPTION,
    QUERY_OPTION,
    TAG_OPTION,
    LogFormat,
    OutputFormat,
    read_local_csv,
    resolve_logging,
)

app = typer.Typer(
    help=(
        "Prompt Vault: browse prompts kept in a published Google Sheet.\n\n"
        "## Quick Start\n\n"
        "```bash\n"
        "prompt-vault source https://docs.google.com/spreadsheets/d/e/.../pub?output=csv\n"
        "prompt-vault list --query email --tag writing\n"
        "prompt-vault copy 2 --query email\n"
        "```\n"
    ),
    no_args_is_help=True,
    rich_markup_mode="markdown",
)


@dataclass
class CliState:
    settings: Settings
    log_context: LogContext


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_format: Optional[LogFormat] = typer.Option(None, "--log-format", case_sensitive=False, help="Log output format."),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        case_sensitive=False,
        help="Log level (debug, info, warning, error, critical).",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    quiet: bool = typer.Option(False, "--quiet", help="Only log errors."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the version and exit.",
    ),
) -> None:
    settings = Settings.load()
    effective_format, effective_level = resolve_logging(
        log_format=log_format,
        log_level=log_level,
        debug=debug,
        quiet=quiet,
        settings=settings,
    )
    log_context = create_logger_context(log_format=effective_format, log_level=effective_level)
    ctx.call_on_close(log_context.close)
    ctx.obj = CliState(settings=settings, log_context=log_context)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _open_vault(ctx: typer.Context) -> PromptVault:
    state: CliState = ctx.obj
    return PromptVault(
        JsonFileStore(state.settings.state_file),
        settings=state.settings,
        clipboard=SystemClipboard(),
        logger=state.log_context.logger,
    )


def _load(vault: PromptVault, input_file: Optional[Path]) -> None:
    if input_file is not None:
        vault.load_text(read_local_csv(input_file), source=str(input_file))
        return
    try:
        vault.refresh()
    except FetchError as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1) from exc


def _persist(action) -> None:
    try:
        action()
    except StoreError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _pick(vault: PromptVault, number: int, query: str, tag: str) -> PromptEntry:
    visible = vault.visible(query, tag)
    if not 1 <= number <= len(visible):
        raise BadParameter(f"No entry #{number}; {len(visible)} entries match.", param_hint="number")
    return visible[number - 1]


def _entry_payload(number: int, entry: PromptEntry) -> dict:
    return {
        "number": number,
        "title": entry.title,
        "prompt": entry.prompt,
        "tags": sorted(entry.tag_set),
    }


def _print_entries(entries: list[PromptEntry]) -> None:
    if not entries:
        typer.echo("No matches. Try clearing the search or tag filter.")
        return
    for number, entry in enumerate(entries, start=1):
        tokens = " ".join(f"#{t}" for t in sorted(entry.tag_set))
        typer.echo(f"{number}. {entry.title}" + (f"  {tokens}" if tokens else ""))
        for line in entry.prompt.splitlines() or [""]:
            typer.echo(f"   {line}")
        typer.echo("")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("source")
def source_command(
    ctx: typer.Context,
    url: Optional[str] = typer.Argument(None, help="New CSV link; omit to show the current one."),
) -> None:
    """Show or set the published CSV link."""

    vault = _open_vault(ctx)
    if url is None:
        typer.echo(vault.source_url)
        return
    if not url.strip():
        raise BadParameter("URL must not be empty.", param_hint="url")

    def _store() -> None:
        vault.source_url = url

    _persist(_store)
    typer.echo(vault.source_url)


@app.command("list")
def list_command(
    ctx: typer.Context,
    query: str = QUERY_OPTION,
    tag: str = TAG_OPTION,
    input_file: Optional[Path] = INPUT_OPTION,
    output_format: OutputFormat = typer.Option(
        OutputFormat.text,
        "--format",
        case_sensitive=False,
        help="stdout format (default text).",
    ),
) -> None:
    """List prompts, filtered by free text and/or tag."""

    vault = _open_vault(ctx)
    _load(vault, input_file)
    visible = vault.visible(query, tag)

    if output_format is OutputFormat.json:
        payload = [_entry_payload(n, e) for n, e in enumerate(visible, start=1)]
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    _print_entries(visible)


@app.command("tags")
def tags_command(ctx: typer.Context, input_file: Optional[Path] = INPUT_OPTION) -> None:
    """List every distinct tag, sorted."""

    vault = _open_vault(ctx)
    _load(vault, input_file)
    for tag in vault.tags():
        typer.echo(tag)


@app.command("headers")
def headers_command(ctx: typer.Context, input_file: Optional[Path] = INPUT_OPTION) -> None:
    """Show parsed columns and the column feeding each field."""

    vault = _open_vault(ctx)
    _load(vault, input_file)
    typer.echo("Columns: " + (", ".join(vault.headers) if vault.headers else "(none)"))
    effective = vault.effective_mapping()
    for name, header in effective.items():
        origin = "explicit" if vault.mapping.explicit(name) else "guessed"
        shown = header or "(not selected)"
        typer.echo(f"{name}: {shown} [{origin}]")


@app.command("map")
def map_command(
    ctx: typer.Context,
    title: Optional[str] = typer.Option(None, "--title", help="Column for titles ('' to auto-detect)."),
    prompt: Optional[str] = typer.Option(None, "--prompt", help="Column for prompt text ('' to auto-detect)."),
    tags: Optional[str] = typer.Option(None, "--tags", help="Column for tags ('' to auto-detect)."),
) -> None:
    """Pin fields to explicit columns; without options, print the stored mapping."""

    vault = _open_vault(ctx)
    updates = {name: value for name, value in (("title", title), ("prompt", prompt), ("tags", tags)) if value is not None}
    if updates:
        _persist(lambda: vault.update_mapping(**updates))
    for name in ("title", "prompt", "tags"):
        typer.echo(f"{name}: {vault.mapping.explicit(name) or '(auto)'}")


@app.command("copy")
def copy_command(
    ctx: typer.Context,
    number: int = typer.Argument(..., help="Entry number as shown by `list`."),
    query: str = QUERY_OPTION,
    tag: str = TAG_OPTION,
    input_file: Optional[Path] = INPUT_OPTION,
) -> None:
    """Copy a prompt to the clipboard."""

    vault = _open_vault(ctx)
    _load(vault, input_file)
    entry = _pick(vault, number, query, tag)
    if vault.copy(entry):
        typer.echo(f"Copied: {entry.title}")


@app.command("share")
def share_command(
    ctx: typer.Context,
    number: int = typer.Argument(..., help="Entry number as shown by `list`."),
    query: str = QUERY_OPTION,
    tag: str = TAG_OPTION,
    input_file: Optional[Path] = INPUT_OPTION,
) -> None:
    """Share a prompt; copies it instead when sharing is unavailable."""

    vault = _open_vault(ctx)
    _load(vault, input_file)
    entry = _pick(vault, number, query, tag)
    outcome = vault.share(entry)
    if outcome is ShareOutcome.SHARED:
        typer.echo(f"Shared: {entry.title}")
    elif outcome is ShareOutcome.COPIED:
        typer.echo("Sharing is not supported here; the text was copied instead.")


@app.command("open-chat")
def open_chat_command(ctx: typer.Context) -> None:
    """Open the chat assistant in a browser."""

    state: CliState = ctx.obj
    typer.launch(state.settings.chat_url)


@app.command("version")
def version_command() -> None:
    """Print the version."""
    typer.echo(__version__)


def main() -> None:
    """Entrypoint used by console scripts and `python -m prompt_vault`."""
    app()


__all__ = ["app", "main"]
