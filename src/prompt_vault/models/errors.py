"""Prompt vault error hierarchy."""

from __future__ import annotations

FETCH_FAILED_MESSAGE = "Could not fetch CSV. Check the link and that the sheet is published as CSV."


class PromptVaultError(Exception):
    """Base class for prompt-vault exceptions."""


class FetchError(PromptVaultError):
    """Raised when the CSV source cannot be retrieved."""

    def __init__(self, message: str = FETCH_FAILED_MESSAGE, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StoreError(PromptVaultError):
    """Raised when the settings store cannot be written."""


__all__ = [
    "FETCH_FAILED_MESSAGE",
    "FetchError",
    "PromptVaultError",
    "StoreError",
]
