"""Durable key-value storage for user settings (source link, column mapping)."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Protocol

from prompt_vault.models.errors import StoreError

CSV_URL_KEY = "pv_csv_url"
MAPPING_KEY = "pv_mapping"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...  # noqa: A003


class MemoryStore:
    """In-process store; contents vanish with the object."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:  # noqa: A003
        self._data[key] = value


class JsonFileStore:
    """Store backed by a single JSON object on disk.

    A missing, unreadable or corrupt file reads as empty. Writes replace the
    file atomically.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:  # noqa: A003
        data = self._read()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        except OSError as exc:
            raise StoreError(f"Failed to write settings store {self.path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StoreError(f"Failed to write settings store {self.path}: {exc}") from exc


__all__ = [
    "CSV_URL_KEY",
    "JsonFileStore",
    "KeyValueStore",
    "MAPPING_KEY",
    "MemoryStore",
]
