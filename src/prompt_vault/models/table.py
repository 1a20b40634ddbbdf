from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

FieldName = Literal["title", "prompt", "tags"]
FIELD_NAMES: tuple[FieldName, ...] = ("title", "prompt", "tags")


@dataclass(frozen=True, slots=True)
class RawTable:
    """Parsed CSV: trimmed header row plus one mapping per data row."""

    headers: tuple[str, ...] = ()
    records: tuple[dict[str, str], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.headers and not self.records


def split_tags(tags: str) -> list[str]:
    """Split a comma-separated tags cell into trimmed, non-empty tokens."""

    return [token for token in (part.strip() for part in tags.split(",")) if token]


@dataclass(frozen=True, slots=True)
class PromptEntry:
    title: str
    prompt: str
    tags: str = ""

    @property
    def tag_set(self) -> frozenset[str]:
        return frozenset(split_tags(self.tags))


class FieldMapping(BaseModel):
    """User-chosen header per logical field.

    ``None`` and ``""`` both mean "auto-resolve"; stored values are not
    checked against the current headers.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str | None = None
    prompt: str | None = None
    tags: str | None = None

    @field_validator("title", "prompt", "tags", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> str | None:
        if value is None:
            return None
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return str(value)
        return None

    def explicit(self, name: FieldName) -> str | None:
        value = getattr(self, name)
        return value or None

    def merged(self, **updates: str | None) -> "FieldMapping":
        unknown = sorted(set(updates) - set(FIELD_NAMES))
        if unknown:
            raise ValueError(f"Unknown mapping field(s): {', '.join(unknown)}")
        return self.model_copy(update=updates)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)

    @classmethod
    def from_json(cls, raw: str | None) -> "FieldMapping":
        """Parse persisted mapping JSON; anything malformed yields the empty mapping."""

        if not raw:
            return cls()
        try:
            return cls.model_validate_json(raw)
        except ValidationError:
            return cls()


__all__ = [
    "FIELD_NAMES",
    "FieldMapping",
    "FieldName",
    "PromptEntry",
    "RawTable",
    "split_tags",
]
