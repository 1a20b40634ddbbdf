"""Tag derivation and free-text filtering over prompt entries."""

from __future__ import annotations

from typing import Iterable, Sequence

from prompt_vault.models.table import PromptEntry, split_tags


def distinct_tags(entries: Iterable[PromptEntry]) -> list[str]:
    seen: set[str] = set()
    for entry in entries:
        seen.update(entry.tag_set)
    return sorted(seen)


def _has_tag(entry: PromptEntry, tag: str) -> bool:
    wanted = tag.lower()
    return any(token.lower() == wanted for token in split_tags(entry.tags))


def _matches_query(entry: PromptEntry, query: str) -> bool:
    return query in entry.title.lower() or query in entry.prompt.lower() or query in entry.tags.lower()


def visible_entries(
    entries: Sequence[PromptEntry],
    query: str = "",
    tag: str | None = None,
) -> list[PromptEntry]:
    """Order-preserving subset passing both the tag filter and the text filter."""

    needle = (query or "").strip().lower()
    out: list[PromptEntry] = []
    for entry in entries:
        if tag and not _has_tag(entry, tag):
            continue
        if needle and not _matches_query(entry, needle):
            continue
        out.append(entry)
    return out


__all__ = ["distinct_tags", "visible_entries"]
