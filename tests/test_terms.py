"""Tests for locale term lookup and form fallback."""

from __future__ import annotations

from csl_richtext.style import Term
from csl_richtext.terms import fallback_form, inflected_text, term_gender, term_text


def test_term_text_returns_first_match(make_context) -> None:
    context = make_context(
        terms=[Term(name="and", text="and"), Term(name="and", form="symbol", text="&")]
    )
    assert term_text("and", context) == "and"
    assert term_text("missing", context) is None


def test_single_entry_is_form_invariant(make_context) -> None:
    context = make_context(terms=[Term(name="ibid", text="ibid.")])
    assert inflected_text("ibid", "symbol", "multiple", context) == "ibid."
    assert inflected_text("nothing", "long", None, context) is None


def test_inflected_text_matches_form_and_number(make_context) -> None:
    context = make_context()
    assert inflected_text("page", "long", "single", context) == "page"
    assert inflected_text("page", "long", "plural", context) == "pages"
    assert inflected_text("page", "short", "multiple", context) == "pp."
    assert inflected_text("page", "short", "singular", context) == "p."


def test_entry_without_number_matches_any_number(make_context) -> None:
    context = make_context(
        terms=[Term(name="chapter", text="chapter"), Term(name="chapter", form="short", text="chap.")]
    )
    assert inflected_text("chapter", "short", "multiple", context) == "chap."


def test_symbol_falls_back_to_short(make_context) -> None:
    context = make_context(
        terms=[Term(name="section", text="section"), Term(name="section", form="short", text="sec.")]
    )
    assert inflected_text("section", "symbol", None, context) == "sec."


def test_verb_short_falls_back_through_verb_to_long(make_context) -> None:
    with_verb = make_context(
        terms=[Term(name="editor", text="editor"), Term(name="editor", form="verb", text="edited by")]
    )
    assert inflected_text("editor", "verb-short", None, with_verb) == "edited by"
    long_only = make_context(
        terms=[
            Term(name="editor", number="single", text="editor"),
            Term(name="editor", number="multiple", text="editors"),
        ]
    )
    assert inflected_text("editor", "verb-short", "multiple", long_only) == "editors"
    assert inflected_text("editor", "symbol", "single", long_only) == "editor"


def test_lookup_terminates_without_long_form(make_context) -> None:
    context = make_context(
        terms=[Term(name="x", form="short", text="a"), Term(name="x", form="symbol", text="b")]
    )
    assert inflected_text("x", "long", None, context) is None
    assert inflected_text("x", "verb", None, context) is None
    assert inflected_text("x", "symbol", None, context) == "b"


def test_fallback_form_chain() -> None:
    assert fallback_form("verb-short") == "verb"
    assert fallback_form("verb") == "long"
    assert fallback_form("symbol") == "short"
    assert fallback_form("short") == "long"
    assert fallback_form("long") == "long"


def test_term_gender_uses_long_entry_with_gender(make_context) -> None:
    context = make_context(
        terms=[
            Term(name="edition", form="short", gender="masculine", text="éd."),
            Term(name="edition", text="édition"),
            Term(name="edition", gender="feminine", text="édition"),
        ]
    )
    assert term_gender("edition", context) == "feminine"
    assert term_gender("page", make_context()) is None
