"""Permissive CSV parsing for published spreadsheet exports.

The parser never raises: ragged rows, unterminated quotes and trailing blank
lines all degrade to best-effort field splitting.
"""

from __future__ import annotations

from prompt_vault.models.table import RawTable

QUOTE = '"'
DELIMITER = ","


def split_rows(text: str) -> list[list[str]]:
    """Split ``text`` into rows of raw (untrimmed) cells."""

    rows: list[list[str]] = []
    row: list[str] = []
    field: list[str] = []
    in_quotes = False

    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        if in_quotes:
            if ch == QUOTE:
                if i + 1 < length and text[i + 1] == QUOTE:
                    field.append(QUOTE)
                    i += 1
                else:
                    in_quotes = False
            else:
                field.append(ch)
        elif ch == QUOTE:
            in_quotes = True
        elif ch == DELIMITER:
            row.append("".join(field))
            field = []
        elif ch == "\n":
            row.append("".join(field))
            field = []
            rows.append(row)
            row = []
        elif ch != "\r":
            field.append(ch)
        i += 1

    # Flush unconditionally; an unterminated quote counts as closed.
    row.append("".join(field))
    rows.append(row)

    while rows and all(not cell.strip() for cell in rows[-1]):
        rows.pop()
    return rows


def parse_csv(text: str) -> RawTable:
    """Parse CSV text into a :class:`RawTable` keyed by the first row."""

    rows = split_rows(text)
    if not rows:
        return RawTable()

    headers = tuple(cell.strip() for cell in rows[0])
    records = tuple(
        {header: (row[idx] if idx < len(row) else "") for idx, header in enumerate(headers)}
        for row in rows[1:]
    )
    return RawTable(headers=headers, records=records)


__all__ = ["parse_csv", "split_rows"]
