from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_CSV = (
    "Title,Prompt,Tags\r\n"
    "Cold email,\"Write a short, friendly cold email to {name}.\",\"writing, sales\"\r\n"
    "Summarize,Summarize the text below in three bullets.,writing\r\n"
    ",Explain this code line by line.,Code\r\n"
    "Blank prompt,   ,writing\r\n"
)


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep settings.toml/.env lookups and the state file inside tmp_path."""

    for name in ("PROMPT_VAULT_STATE_FILE", "PROMPT_VAULT_CSV_URL", "PROMPT_VAULT_LOG_LEVEL", "PROMPT_VAULT_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    state_file = tmp_path / "state" / "state.json"
    monkeypatch.setenv("PROMPT_VAULT_STATE_FILE", str(state_file))
    return state_file


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def sample_csv_file(tmp_path: Path) -> Path:
    path = tmp_path / "prompts.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path
