"""Session state for one vault: source link, parsed table, column mapping.

Derived views (entries, tags, visible subset) are pure functions of the
current table, mapping and query; they are memoized on those inputs and
recomputed whenever one of them changes.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import partial
from typing import Callable, Protocol

from prompt_vault.application.csv_parser import parse_csv
from prompt_vault.application.headers import effective_mapping
from prompt_vault.application.projector import project_entries
from prompt_vault.application.search import distinct_tags, visible_entries
from prompt_vault.infrastructure.clipboard import Clipboard, SystemClipboard
from prompt_vault.infrastructure.fetch import fetch_csv
from prompt_vault.infrastructure.observability.logger import NullLogger, VaultLogger
from prompt_vault.infrastructure.settings import Settings
from prompt_vault.infrastructure.storage import CSV_URL_KEY, MAPPING_KEY, KeyValueStore
from prompt_vault.models.errors import FetchError
from prompt_vault.models.table import FieldMapping, FieldName, PromptEntry, RawTable

Fetcher = Callable[[str], str]


class Sharer(Protocol):
    def __call__(self, title: str, text: str) -> bool: ...


class ShareOutcome(str, Enum):
    SHARED = "shared"
    COPIED = "copied"
    FAILED = "failed"


class PromptVault:
    """High-level facade over parse → project → filter for one user."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        settings: Settings | None = None,
        fetcher: Fetcher | None = None,
        clipboard: Clipboard | None = None,
        sharer: Sharer | None = None,
        logger: VaultLogger | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.store = store
        self.logger = logger or NullLogger()
        self.clipboard = clipboard or SystemClipboard()
        self.sharer = sharer
        self._fetcher = fetcher or partial(fetch_csv, timeout=self.settings.request_timeout, logger=self.logger)

        self.table = RawTable()
        self.last_error: str | None = None
        self._mapping = FieldMapping.from_json(store.get(MAPPING_KEY))

        self._entries_memo: tuple[RawTable, FieldMapping, list[PromptEntry]] | None = None
        self._visible_memo: tuple[list[PromptEntry], str, str, list[PromptEntry]] | None = None

    # ------------------------------------------------------------------
    # Persisted settings
    # ------------------------------------------------------------------

    @property
    def source_url(self) -> str:
        return self.store.get(CSV_URL_KEY) or self.settings.csv_url

    @source_url.setter
    def source_url(self, url: str) -> None:
        self.store.set(CSV_URL_KEY, url.strip())

    @property
    def mapping(self) -> FieldMapping:
        return self._mapping

    def update_mapping(self, **fields: str | None) -> FieldMapping:
        """Merge explicit column choices and persist; ``""`` returns a field to auto."""

        updated = self._mapping.merged(**fields)
        self._mapping = updated
        self.store.set(MAPPING_KEY, updated.to_json())
        self.logger.event("mapping.updated", message="Column mapping updated", data=updated.model_dump())
        return updated

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def refresh(self, url: str | None = None) -> RawTable:
        """Fetch and parse the source, replacing the table only on success.

        Overlapping refreshes are not cancelled; whichever completes last wins.
        """

        target = self.source_url if url is None else url
        try:
            text = self._fetcher(target)
        except FetchError as exc:
            self.last_error = exc.message
            raise
        self.last_error = None
        return self._replace(parse_csv(text), source=target)

    def load_text(self, text: str, *, source: str = "<text>") -> RawTable:
        return self._replace(parse_csv(text), source=source)

    def _replace(self, table: RawTable, *, source: str) -> RawTable:
        self.table = table
        self.logger.event(
            "table.loaded",
            message="Table loaded",
            data={
                "source": source,
                "header_count": len(table.headers),
                "record_count": len(table.records),
                "entry_count": len(self.entries()),
            },
        )
        return table

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def headers(self) -> tuple[str, ...]:
        return self.table.headers

    def effective_mapping(self) -> dict[FieldName, str]:
        return effective_mapping(self.table.headers, self._mapping)

    def entries(self) -> list[PromptEntry]:
        memo = self._entries_memo
        if memo is not None and memo[0] is self.table and memo[1] == self._mapping:
            return memo[2]
        entries = project_entries(self.table, self._mapping, untitled=self.settings.untitled_title)
        self._entries_memo = (self.table, self._mapping, entries)
        return entries

    def tags(self) -> list[str]:
        return distinct_tags(self.entries())

    def visible(self, query: str = "", tag: str | None = None) -> list[PromptEntry]:
        entries = self.entries()
        tag = tag or ""
        memo = self._visible_memo
        if memo is not None and memo[0] is entries and memo[1] == query and memo[2] == tag:
            return memo[3]
        result = visible_entries(entries, query, tag)
        self._visible_memo = (entries, query, tag, result)
        return result

    # ------------------------------------------------------------------
    # Clipboard / share
    # ------------------------------------------------------------------

    def copy(self, entry: PromptEntry) -> bool:
        copied = self.clipboard.copy(entry.prompt)
        if not copied:
            self.logger.event(
                "clipboard.failed",
                message="Clipboard unavailable",
                level=logging.DEBUG,
                data={"action": "copy", "reason": "clipboard unavailable"},
            )
        return copied

    def share(self, entry: PromptEntry) -> ShareOutcome:
        """Share through the injected sharer, falling back to copying."""

        if self.sharer is not None:
            try:
                if self.sharer(entry.title or "Prompt", entry.prompt):
                    return ShareOutcome.SHARED
            except Exception as exc:  # noqa: BLE001 - share failures are non-fatal
                self.logger.event(
                    "clipboard.failed",
                    message="Share failed",
                    level=logging.DEBUG,
                    data={"action": "share", "reason": str(exc) or type(exc).__name__},
                )
                return ShareOutcome.FAILED
        return ShareOutcome.COPIED if self.copy(entry) else ShareOutcome.FAILED


__all__ = ["Fetcher", "PromptVault", "ShareOutcome", "Sharer"]
