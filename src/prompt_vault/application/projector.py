"""Project raw CSV records onto display-ready prompt entries."""

from __future__ import annotations

from prompt_vault.application.headers import effective_header
from prompt_vault.models.table import FieldMapping, PromptEntry, RawTable

DEFAULT_UNTITLED = "(untitled)"


def _cell(record: dict[str, str], header: str) -> str:
    if not header:
        return ""
    value = record.get(header)
    return "" if value is None else str(value)


def project_entries(
    table: RawTable,
    mapping: FieldMapping | None = None,
    *,
    untitled: str = DEFAULT_UNTITLED,
) -> list[PromptEntry]:
    """Build one entry per record whose prompt cell is not blank."""

    mapping = mapping or FieldMapping()
    title_key = effective_header("title", table.headers, mapping)
    prompt_key = effective_header("prompt", table.headers, mapping)
    tags_key = effective_header("tags", table.headers, mapping)

    entries: list[PromptEntry] = []
    for record in table.records:
        prompt = _cell(record, prompt_key)
        if not prompt.strip():
            continue
        title = _cell(record, title_key).strip() or untitled
        entries.append(PromptEntry(title=title, prompt=prompt, tags=_cell(record, tags_key)))
    return entries


__all__ = ["DEFAULT_UNTITLED", "project_entries"]
