from __future__ import annotations

import pytest

from prompt_vault.application.csv_parser import parse_csv, split_rows
from prompt_vault.models.table import RawTable


def _serialize(headers: list[str], rows: list[list[str]]) -> str:
    return "\n".join(",".join(row) for row in [headers, *rows]) + "\n"


def test_parse_basic_table():
    table = parse_csv("a,b\n1,2\n3,4\n")

    assert table.headers == ("a", "b")
    assert table.records == ({"a": "1", "b": "2"}, {"a": "3", "b": "4"})


def test_quoted_field_with_delimiter_and_escaped_quotes():
    table = parse_csv('h1,h2\n"x,""y""",z\n')

    assert table.records == ({"h1": 'x,"y"', "h2": "z"},)


def test_quoted_header_keeps_embedded_comma():
    table = parse_csv('a,"b,c",d\n1,2,3\n')

    assert table.headers == ("a", "b,c", "d")
    assert table.records[0] == {"a": "1", "b,c": "2", "d": "3"}


def test_quoted_field_keeps_newlines_and_carriage_returns():
    table = parse_csv('t,p\nx,"line one\r\nline two"\n')

    assert table.records == ({"t": "x", "p": "line one\r\nline two"},)


def test_crlf_line_endings_are_normalized():
    table = parse_csv("a,b\r\n1,2\r\n")

    assert table.headers == ("a", "b")
    assert table.records == ({"a": "1", "b": "2"},)


def test_trailing_blank_lines_are_dropped():
    table = parse_csv("h1,h2\n1,2\n\n\n")

    assert len(table.records) == 1


def test_whitespace_only_trailing_rows_are_dropped_but_inner_blank_rows_kept():
    table = parse_csv("h\n1\n\n2\n  ,  \n")

    assert [r["h"] for r in table.records] == ["1", "", "2"]


def test_missing_trailing_newline_still_yields_last_row():
    table = parse_csv("a,b\n1,2")

    assert table.records == ({"a": "1", "b": "2"},)


def test_short_rows_are_padded_and_long_rows_truncated():
    table = parse_csv("a,b,c\n1\n1,2,3,4,5\n")

    assert table.records == (
        {"a": "1", "b": "", "c": ""},
        {"a": "1", "b": "2", "c": "3"},
    )


def test_headers_are_trimmed_but_cells_are_not():
    table = parse_csv("  Title , Prompt \n  x  ,  y  \n")

    assert table.headers == ("Title", "Prompt")
    assert table.records == ({"Title": "  x  ", "Prompt": "  y  "},)


@pytest.mark.parametrize("text", ["", "\n", "\r\n\r\n", " , \n   \n"])
def test_blank_input_gives_empty_table(text: str):
    assert parse_csv(text) == RawTable()


def test_header_only_input():
    table = parse_csv("title,prompt\n")

    assert table.headers == ("title", "prompt")
    assert table.records == ()


def test_unterminated_quote_is_flushed_without_error():
    table = parse_csv('a,b\n1,"open ended, still going\nnext')

    assert table.records == ({"a": "1", "b": "open ended, still going\nnext"},)


def test_quote_in_middle_of_unquoted_field_toggles_quoting():
    rows = split_rows('ab"c,d"e,f\n')

    assert rows == [["abc,de", "f"]]


def test_duplicate_headers_keep_last_value():
    table = parse_csv("x,x\n1,2\n")

    assert table.headers == ("x", "x")
    assert table.records == ({"x": "2"},)


@pytest.mark.parametrize(
    "text",
    [
        '"',
        '""""',
        ',,,\n,,',
        '\r\r\r',
        'a\n"b\n"c"d"\n',
        '"a""',
        "\x00,\x01\n",
    ],
)
def test_malformed_input_never_raises(text: str):
    table = parse_csv(text)

    assert isinstance(table, RawTable)
    for record in table.records:
        assert tuple(record) == tuple(dict.fromkeys(table.headers))


def test_round_trip_of_plain_table():
    headers = ["title", "prompt", "tags"]
    rows = [["One", "Do the thing", "a"], ["Two", "Do another", ""], ["", "Third", "b"]]

    table = parse_csv(_serialize(headers, rows))

    assert list(table.headers) == headers
    assert [list(r.values()) for r in table.records] == rows
