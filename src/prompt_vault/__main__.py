"""Module entrypoint for `python -m prompt_vault`."""

from prompt_vault.cli.app import main


if __name__ == "__main__":  # pragma: no cover - exercised via CLI tests
    main()
