"""Tests for page range formatting."""

from __future__ import annotations

from csl_richtext.ranges import format_range


def test_expanded_restores_abbreviated_end() -> None:
    assert format_range("321-28", "expanded", "–") == "321–328"
    assert format_range("5-10", None, "–") == "5–10"


def test_minimal_formats() -> None:
    assert format_range("321-328", "minimal", "–") == "321–8"
    assert format_range("98-102", "minimal", "–") == "98–102"
    assert format_range("321-328", "minimal-two", "–") == "321–28"
    assert format_range("1-5", "minimal-two", "–") == "1–5"


def test_chicago_formats() -> None:
    assert format_range("71-72", "chicago-16", "–") == "71–72"
    assert format_range("100-104", "chicago-16", "–") == "100–104"
    assert format_range("101-108", "chicago-16", "–") == "101–8"
    assert format_range("321-328", "chicago-16", "–") == "321–28"
    assert format_range("1496-1504", "chicago-16", "–") == "1496–504"
    assert format_range("1496-1504", "chicago", "–") == "1496–1504"


def test_several_ranges_keep_separators() -> None:
    assert format_range("5-10, 12-15", "expanded", "–") == "5–10, 12–15"
    assert format_range("5-10 & 20-5", "expanded", "–") == "5–10 & 20–25"


def test_non_numeric_and_prefixed_ranges() -> None:
    assert format_range("iv-x", "minimal", "–") == "iv–x"
    assert format_range("S10-S15", "expanded", "–") == "S10–S15"
    assert format_range("42", "expanded", "–") == "42"
