"""Guess which spreadsheet column holds each logical prompt field."""

from __future__ import annotations

from typing import Callable, Mapping, Sequence

from prompt_vault.models.table import FieldMapping, FieldName

NO_MATCH = ""

FIELD_CANDIDATES: Mapping[FieldName, tuple[str, ...]] = {
    "title": ("title", "navn", "name"),
    "prompt": ("prompt", "tekst", "content", "message"),
    "tags": ("tags", "tag", "labels"),
}

HeaderMatcher = Callable[[str, str], bool]


def _exact(normalized_header: str, candidate: str) -> bool:
    return normalized_header == candidate


def _prefix(normalized_header: str, candidate: str) -> bool:
    return normalized_header.startswith(candidate)


# Tried in order; a later matcher only runs when every candidate missed the earlier one.
MATCHERS: tuple[HeaderMatcher, ...] = (_exact, _prefix)


def _normalize(header: object) -> str:
    return str(header or "").strip().lower()


def resolve_header(headers: Sequence[str], candidates: Sequence[str]) -> str:
    """Return the header best matching ``candidates``, or :data:`NO_MATCH`.

    Candidates are tried in priority order; within one candidate the first
    header in table order wins.
    """

    normalized = [(header, _normalize(header)) for header in headers]
    for matches in MATCHERS:
        for candidate in candidates:
            for header, low in normalized:
                if matches(low, candidate):
                    return header
    return NO_MATCH


def effective_header(name: FieldName, headers: Sequence[str], mapping: FieldMapping) -> str:
    """Explicit mapping wins unconditionally, even if the header is gone."""

    return mapping.explicit(name) or resolve_header(headers, FIELD_CANDIDATES[name])


def effective_mapping(headers: Sequence[str], mapping: FieldMapping) -> dict[FieldName, str]:
    return {name: effective_header(name, headers, mapping) for name in FIELD_CANDIDATES}


__all__ = [
    "FIELD_CANDIDATES",
    "MATCHERS",
    "NO_MATCH",
    "effective_header",
    "effective_mapping",
    "resolve_header",
]
