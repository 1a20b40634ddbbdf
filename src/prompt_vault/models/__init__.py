from prompt_vault.models.errors import FETCH_FAILED_MESSAGE, FetchError, PromptVaultError, StoreError
from prompt_vault.models.table import FIELD_NAMES, FieldMapping, FieldName, PromptEntry, RawTable, split_tags

__all__ = [
    "FETCH_FAILED_MESSAGE",
    "FIELD_NAMES",
    "FetchError",
    "FieldMapping",
    "FieldName",
    "PromptEntry",
    "PromptVaultError",
    "RawTable",
    "StoreError",
    "split_tags",
]
