"""Event payload schemas for prompt-vault logging.

Payload models are strict: ``extra="forbid"`` keeps emitted NDJSON from
drifting, and validation runs with ``strict=True``.
"""

from __future__ import annotations

from typing import Annotated, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

VAULT_NAMESPACE = "vault"

VALID_LOG_FORMATS = {"text", "ndjson", "json"}  # "json" is an alias for ndjson
DEFAULT_EVENT = "log"  # fallback event for plain log lines

PayloadModel: TypeAlias = type[BaseModel] | None

NonNegativeInt = Annotated[int, Field(ge=0)]


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class FetchStartedPayload(StrictModel):
    url: str


class FetchCompletedPayload(StrictModel):
    url: str
    status_code: int
    byte_count: NonNegativeInt


class FetchFailedPayload(StrictModel):
    url: str
    status_code: int | None = None
    reason: str


class TableLoadedPayload(StrictModel):
    source: str
    header_count: NonNegativeInt
    record_count: NonNegativeInt
    entry_count: NonNegativeInt


class MappingUpdatedPayload(StrictModel):
    title: str | None = None
    prompt: str | None = None
    tags: str | None = None


class ClipboardFailedPayload(StrictModel):
    action: str
    reason: str


VAULT_EVENT_SCHEMAS: dict[str, PayloadModel] = {
    "vault.fetch.started": FetchStartedPayload,
    "vault.fetch.completed": FetchCompletedPayload,
    "vault.fetch.failed": FetchFailedPayload,
    "vault.table.loaded": TableLoadedPayload,
    "vault.mapping.updated": MappingUpdatedPayload,
    "vault.clipboard.failed": ClipboardFailedPayload,
}


__all__ = [
    "DEFAULT_EVENT",
    "VALID_LOG_FORMATS",
    "VAULT_EVENT_SCHEMAS",
    "VAULT_NAMESPACE",
    "ClipboardFailedPayload",
    "FetchCompletedPayload",
    "FetchFailedPayload",
    "FetchStartedPayload",
    "MappingUpdatedPayload",
    "TableLoadedPayload",
]
