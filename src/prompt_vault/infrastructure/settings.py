"""Settings for :mod:`prompt_vault`.

Settings are defined in one place (this file) and loaded using `pydantic-settings`.

Supported sources (lowest → highest precedence):
1) `settings.toml` (current working directory)
2) `.env` (current working directory)
3) environment variables (prefix: `PROMPT_VAULT_`)
4) explicit overrides (`Settings(...)` / CLI)

`settings.toml` is flat: keys map 1:1 to `Settings` fields.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, TomlConfigSettingsSource

ENV_PREFIX = "PROMPT_VAULT_"

DEFAULT_CSV_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vRTD5myRZpckG-JW5TmkGgvAoyH38rEWIi-g0ha7iQfyDHUDxBAdVp3N9_YUAeKLFE7ErQNuHnopAi0"
    "/pub?output=csv"
)
DEFAULT_CHAT_URL = "https://chat.openai.com/"


def _coerce_log_level(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("log_level must be an int or a log level name")

    if isinstance(value, int):
        return value

    text = str(value).strip()
    if not text:
        return logging.INFO

    if text.isdigit():
        return int(text)

    mapped = logging.getLevelNamesMapping().get(text.upper())
    if isinstance(mapped, int):
        return mapped

    raise ValueError(f"Invalid log_level: {value!r}")


class Settings(BaseSettings):
    """Runtime settings for the vault."""

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix=ENV_PREFIX,
        env_file=".env",
    )

    # Source used until the user stores one of their own.
    csv_url: str = Field(default=DEFAULT_CSV_URL)
    chat_url: str = Field(default=DEFAULT_CHAT_URL)

    state_file: Path = Field(default_factory=lambda: Path.home() / ".prompt-vault" / "state.json")

    # None keeps the HTTP client's own default.
    request_timeout: float | None = Field(default=None, gt=0)

    untitled_title: str = Field(default="(untitled)", min_length=1)

    # Logging
    log_format: Literal["text", "ndjson"] = Field(default="text")
    log_level: int = Field(default=logging.WARNING)

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: Any) -> int:
        return _coerce_log_level(value)

    @field_validator("state_file", mode="after")
    @classmethod
    def _expand_state_file(cls, value: Path) -> Path:
        return value.expanduser()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_files = None
        if hasattr(init_settings, "init_kwargs"):
            toml_files = init_settings.init_kwargs.get("_vault_toml_files")  # type: ignore[attr-defined]

        if toml_files is None:
            toml_files = [Path.cwd() / "settings.toml"]

        toml_settings = TomlConfigSettingsSource(settings_cls, toml_file=toml_files)

        return (
            init_settings,
            env_settings,
            dotenv_settings,
            toml_settings,
            file_secret_settings,
        )

    @classmethod
    def load(cls, *, cwd: Path | None = None, **overrides: Any) -> "Settings":
        cwd_path = (cwd or Path.cwd()).expanduser().resolve()
        return cls(
            _vault_toml_files=[cwd_path / "settings.toml"],
            _env_file=cwd_path / ".env",
            **overrides,
        )


__all__ = ["DEFAULT_CHAT_URL", "DEFAULT_CSV_URL", "ENV_PREFIX", "Settings"]
