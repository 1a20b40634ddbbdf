from __future__ import annotations

import json

import pytest

from prompt_vault.application.vault import PromptVault, ShareOutcome
from prompt_vault.infrastructure.clipboard import MemoryClipboard
from prompt_vault.infrastructure.settings import DEFAULT_CSV_URL, Settings
from prompt_vault.infrastructure.storage import CSV_URL_KEY, MAPPING_KEY, MemoryStore
from prompt_vault.models.errors import FETCH_FAILED_MESSAGE, FetchError
from prompt_vault.models.table import FieldMapping, PromptEntry


class FakeFetcher:
    def __init__(self, *responses: str | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[str] = []

    def __call__(self, url: str) -> str:
        self.calls.append(url)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _vault(store: MemoryStore | None = None, **kwargs) -> PromptVault:
    kwargs.setdefault("clipboard", MemoryClipboard())
    return PromptVault(store or MemoryStore(), settings=Settings(), **kwargs)


def test_source_url_defaults_and_persists():
    store = MemoryStore()
    vault = _vault(store)

    assert vault.source_url == DEFAULT_CSV_URL

    vault.source_url = "  https://example.test/sheet.csv "
    assert store.get(CSV_URL_KEY) == "https://example.test/sheet.csv"
    assert _vault(store).source_url == "https://example.test/sheet.csv"


def test_refresh_fetches_stored_source(sample_csv: str):
    fetcher = FakeFetcher(sample_csv)
    vault = _vault(MemoryStore({CSV_URL_KEY: "https://example.test/a.csv"}), fetcher=fetcher)

    table = vault.refresh()

    assert fetcher.calls == ["https://example.test/a.csv"]
    assert table.headers == ("Title", "Prompt", "Tags")
    assert len(vault.entries()) == 3
    assert vault.tags() == ["Code", "sales", "writing"]
    assert vault.last_error is None


def test_failed_refresh_keeps_previous_table(sample_csv: str):
    fetcher = FakeFetcher(sample_csv, FetchError(status_code=404))
    vault = _vault(fetcher=fetcher)
    first = vault.refresh()

    with pytest.raises(FetchError):
        vault.refresh()

    assert vault.table is first
    assert vault.last_error == FETCH_FAILED_MESSAGE
    assert len(vault.entries()) == 3


def test_successful_refresh_clears_error_and_replaces_table():
    fetcher = FakeFetcher(FetchError(), "prompt\none\n", "prompt\ntwo\nthree\n")
    vault = _vault(fetcher=fetcher)

    with pytest.raises(FetchError):
        vault.refresh()
    vault.refresh()
    vault.refresh()

    assert vault.last_error is None
    assert [e.prompt for e in vault.entries()] == ["two", "three"]


def test_mapping_is_loaded_and_persisted():
    store = MemoryStore({MAPPING_KEY: json.dumps({"prompt": "Body"})})
    vault = _vault(store)

    assert vault.mapping == FieldMapping(prompt="Body")

    vault.update_mapping(title="Heading")
    assert json.loads(store.get(MAPPING_KEY)) == {"title": "Heading", "prompt": "Body"}


def test_corrupt_persisted_mapping_degrades_to_empty():
    vault = _vault(MemoryStore({MAPPING_KEY: "{broken"}))

    assert vault.mapping == FieldMapping()


def test_mapping_change_recomputes_entries():
    vault = _vault()
    vault.load_text("Title,Prompt,Notes\nA,from prompt,from notes\n")

    before = vault.entries()
    assert [e.prompt for e in before] == ["from prompt"]
    assert vault.entries() is before

    vault.update_mapping(prompt="Notes")
    assert [e.prompt for e in vault.entries()] == ["from notes"]

    vault.update_mapping(prompt="")
    assert [e.prompt for e in vault.entries()] == ["from prompt"]


def test_stale_mapping_survives_reload_and_hides_entries():
    vault = _vault()
    vault.update_mapping(prompt="Old column")

    vault.load_text("Title,Prompt\nA,text\n")

    assert vault.entries() == []
    assert vault.effective_mapping()["prompt"] == "Old column"
    assert vault.mapping.prompt == "Old column"


def test_visible_is_memoized_on_inputs(sample_csv: str):
    vault = _vault()
    vault.load_text(sample_csv)

    first = vault.visible("email", "")
    assert vault.visible("email", "") is first
    assert vault.visible("email", "writing") == first
    assert vault.visible("", "code") == [vault.entries()[2]]


def test_effective_mapping_reports_guesses(sample_csv: str):
    vault = _vault()
    vault.load_text(sample_csv)

    assert vault.effective_mapping() == {"title": "Title", "prompt": "Prompt", "tags": "Tags"}


def test_untitled_placeholder_comes_from_settings():
    vault = PromptVault(MemoryStore(), settings=Settings(untitled_title="(uden titel)"), clipboard=MemoryClipboard())
    vault.load_text("title,prompt\n,hello\n")

    assert vault.entries()[0].title == "(uden titel)"


def test_copy_uses_clipboard():
    clipboard = MemoryClipboard()
    vault = _vault(clipboard=clipboard)

    assert vault.copy(PromptEntry(title="t", prompt="the prompt")) is True
    assert clipboard.text == "the prompt"


def test_copy_failure_is_swallowed():
    vault = _vault(clipboard=MemoryClipboard(available=False))

    assert vault.copy(PromptEntry(title="t", prompt="p")) is False


def test_share_uses_sharer_when_available():
    shared: list[tuple[str, str]] = []

    def sharer(title: str, text: str) -> bool:
        shared.append((title, text))
        return True

    clipboard = MemoryClipboard()
    vault = _vault(clipboard=clipboard, sharer=sharer)

    assert vault.share(PromptEntry(title="T", prompt="P")) is ShareOutcome.SHARED
    assert shared == [("T", "P")]
    assert clipboard.text is None


def test_share_falls_back_to_copy():
    clipboard = MemoryClipboard()
    vault = _vault(clipboard=clipboard)

    assert vault.share(PromptEntry(title="T", prompt="P")) is ShareOutcome.COPIED
    assert clipboard.text == "P"


def test_share_errors_are_swallowed():
    def sharer(title: str, text: str) -> bool:
        raise RuntimeError("cancelled")

    vault = _vault(sharer=sharer)

    assert vault.share(PromptEntry(title="T", prompt="P")) is ShareOutcome.FAILED


def test_share_without_any_capability_fails_quietly():
    vault = _vault(clipboard=MemoryClipboard(available=False))

    assert vault.share(PromptEntry(title="T", prompt="P")) is ShareOutcome.FAILED
