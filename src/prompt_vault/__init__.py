"""Public API for :mod:`prompt_vault`."""

from importlib import metadata
from pathlib import Path
from typing import TYPE_CHECKING
import tomllib

if TYPE_CHECKING:
    from prompt_vault.application.vault import PromptVault
    from prompt_vault.infrastructure.settings import Settings
    from prompt_vault.models import FieldMapping, PromptEntry, RawTable


def _pyproject_version() -> str | None:
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        parsed = tomllib.loads(pyproject.read_text(encoding="utf-8"))
        version = parsed.get("project", {}).get("version")
        if isinstance(version, str) and version:
            return version
    except (FileNotFoundError, OSError, tomllib.TOMLDecodeError):
        return None
    return None


def _resolve_version() -> str:
    # Prefer the local pyproject when running from a source checkout/editable install.
    version = _pyproject_version()
    if version is not None:
        return version

    try:
        return metadata.version("prompt-vault")
    except metadata.PackageNotFoundError:  # pragma: no cover
        return "unknown"


__version__ = _resolve_version()

_EXPORTS = {
    "PromptVault": ("prompt_vault.application.vault", "PromptVault"),
    "Settings": ("prompt_vault.infrastructure.settings", "Settings"),
    "FieldMapping": ("prompt_vault.models", "FieldMapping"),
    "PromptEntry": ("prompt_vault.models", "PromptEntry"),
    "RawTable": ("prompt_vault.models", "RawTable"),
    "parse_csv": ("prompt_vault.application.csv_parser", "parse_csv"),
    "resolve_header": ("prompt_vault.application.headers", "resolve_header"),
    "project_entries": ("prompt_vault.application.projector", "project_entries"),
    "distinct_tags": ("prompt_vault.application.search", "distinct_tags"),
    "visible_entries": ("prompt_vault.application.search", "visible_entries"),
}


def __getattr__(name: str):
    target = _EXPORTS.get(name)
    if target is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_name, attr_name = target
    module = __import__(module_name, fromlist=[attr_name])
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_EXPORTS.keys()))


__all__ = [
    "FieldMapping",
    "PromptEntry",
    "PromptVault",
    "RawTable",
    "Settings",
    "distinct_tags",
    "parse_csv",
    "project_entries",
    "resolve_header",
    "visible_entries",
    "__version__",
]
