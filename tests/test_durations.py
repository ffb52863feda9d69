"""Tests for the human-readable duration flags."""

import pytest

from metacritic_finder.utils.durations import parse_duration_ms


@pytest.mark.parametrize("value, expected", [
    ("1500", 1500),
    ("500ms", 500),
    ("15s", 15000),
    ("1.5s", 1500),
    ("2m", 120000),
    ("1h", 3600000),
    (" 10 sec ", 10000),
    ("3MIN", 180000),
])
def test_parse_duration_ms(value, expected) -> None:
    assert parse_duration_ms(value) == expected


@pytest.mark.parametrize("value", [None, "", "soon", "-5s", "5 days"])
def test_parse_duration_ms_rejects_garbage(value) -> None:
    assert parse_duration_ms(value) is None
