from __future__ import annotations

import pytest

from parsers.value_normalizers import (
    entry_text,
    normalize_whitespace,
    parse_date,
    parse_money,
    split_tags,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("$450.00", 450.0),
        ("$1,102.03", 1102.03),
        ("1200", 1200.0),
        ("($12.00)", -12.0),
        ("-$5", -5.0),
        ("(12.00)", -12.0),
        ("(2 coats) $450", 450.0),
        ("Gutters (120 ft) $960.00", 960.0),
        ("(2 coats", 2.0),
        ("3 coats", 3.0),
        ("Paid in full", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_money(raw, expected):
    assert parse_money(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("01/02/2024", "2024-01-02"),
        ("1/2/24", "2024-01-02"),
        ("2024-03-26", "2024-03-26"),
        ("March 3, 2024", "2024-03-03"),
        ("Mar  3, 2024", "2024-03-03"),
        ("next tuesday", None),
        (None, None),
    ],
)
def test_parse_date(raw, expected):
    assert parse_date(raw) == expected


def test_entry_text_joins_lists():
    assert entry_text(["a", "b"]) == "a\nb"
    assert entry_text("a") == "a"
    assert entry_text(None) is None


def test_split_tags_and_whitespace():
    assert split_tags(" gutters, ,residential ") == ["gutters", "residential"]
    assert split_tags(None) == []
    assert normalize_whitespace("  a \t b\n") == "a b"
