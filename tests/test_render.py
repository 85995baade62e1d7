"""Tests for rendering whole items."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from csl_richtext.context import Mode, create_context
from csl_richtext.elements import date, layout, text_macro, text_variable
from csl_richtext.formatters import to_plain
from csl_richtext.nodes import Attrs, Group, Leaf, plain_text
from csl_richtext.presets import AUTHOR_DATE
from csl_richtext.render import NO_LAYOUT, render_item, render_sort_key
from csl_richtext.result import ABORT
from csl_richtext.rich_text import find_first
from csl_richtext.style import DEFAULT_TERMS, StyleModel

ITEM = {
    "id": "doe2020",
    "type": "article-journal",
    "title": "Sample",
    "author": [{"family": "Doe", "given": "Jane"}],
    "issued": {"date-parts": [[2020]]},
    "container-title": "Journal",
    "volume": "3",
    "issue": "2",
    "page": "5-10",
    "citation-number": 1,
}


def title_of(tree):
    return find_first(tree, lambda group: group.attrs.rendered_var == "title")


def test_unresolved_item_returns_placeholder() -> None:
    missing = {"unprocessed-with-id": "X"}
    assert render_item(missing, AUTHOR_DATE, "bib") == (None, "NO_ITEM_DATA:X")
    assert render_item(missing, StyleModel(), Mode.CITE) == (None, "NO_ITEM_DATA:X")


def test_missing_layout_returns_diagnostic() -> None:
    assert render_item(ITEM, StyleModel(), Mode.BIB) == "[NO BIBLIOGRAPHY LAYOUT IN CSL STYLE]"
    assert render_item(ITEM, StyleModel(bib_layout=lambda context: "x"), Mode.CITE) == NO_LAYOUT


def test_bibliography_entry() -> None:
    tree = render_item(ITEM, AUTHOR_DATE, "bib")
    assert to_plain(tree) == "Jane Doe. (2020). “Sample”. Journal, 3(2), 5–10."


def test_citation_with_locator() -> None:
    tree = render_item({**ITEM, "locator": "5-10"}, AUTHOR_DATE, "cite")
    assert to_plain(tree) == "(Doe, 2020, pp. 5–10)"
    assert to_plain(render_item(ITEM, AUTHOR_DATE, "cite")) == "(Doe, 2020)"


def test_item_number_is_last_attribute() -> None:
    bib = render_item({**ITEM, "citation-number": 4}, AUTHOR_DATE, "bib")
    assert list(bib.attrs.items())[-1] == ("bib-item-no", 4)
    cite = render_item({**ITEM, "citation-number": 4}, AUTHOR_DATE, "cite")
    assert list(cite.attrs.items())[-1] == ("cited-item-no", 4)


def test_bare_string_result_is_wrapped() -> None:
    style = StyleModel(bib_layout=lambda context: "Plain entry")
    assert render_item({"citation-number": 2}, style, "bib") == Group(
        Attrs(bib_item_no=2), (Leaf("Plain entry"),)
    )


def test_abort_yields_no_content_for_that_item_only() -> None:
    style = StyleModel(bib_layout=layout(text_variable("title"), date("issued", required=True)))
    assert render_item({"title": "Undated"}, style, "bib") is None
    assert render_item(ITEM, style, "bib") is not None
    assert render_item(ITEM, StyleModel(bib_layout=lambda context: ABORT), "bib") is None


def test_title_linked_to_doi() -> None:
    tree = render_item({**ITEM, "DOI": "10.1000/xyz"}, AUTHOR_DATE, "bib")
    assert title_of(tree).attrs.href == "https://doi.org/10.1000/xyz"


def test_link_priority_and_full_urls() -> None:
    tree = render_item({**ITEM, "PMID": "123", "URL": "https://example.org"}, AUTHOR_DATE, "bib")
    assert title_of(tree).attrs.href == "https://www.ncbi.nlm.nih.gov/pubmed/123"
    tree = render_item({**ITEM, "DOI": "https://doi.org/10.1/x"}, AUTHOR_DATE, "bib")
    assert title_of(tree).attrs.href == "https://doi.org/10.1/x"


def test_no_link_when_variable_already_rendered() -> None:
    style = StyleModel(bib_layout=layout(text_variable("title"), text_variable("DOI", prefix=" ")))
    tree = render_item({**ITEM, "DOI": "10.1000/xyz"}, style, "bib")
    assert title_of(tree).attrs.href is None


def test_no_link_when_suppressed_or_citing() -> None:
    item = {**ITEM, "DOI": "10.1000/xyz"}
    assert title_of(render_item(item, AUTHOR_DATE, "bib", no_external_links=True)).attrs.href is None
    assert find_first(render_item(item, AUTHOR_DATE, "cite"), lambda group: group.attrs.href) is None


def test_year_suffix_inserted_after_date() -> None:
    tree = render_item({**ITEM, "year-suffix": "a"}, AUTHOR_DATE, "bib")
    assert to_plain(tree) == "Jane Doe. (2020a). “Sample”. Journal, 3(2), 5–10."
    assert list(tree.attrs.items())[-1] == ("bib-item-no", 1)


def test_year_suffix_not_duplicated_when_style_renders_it() -> None:
    style = StyleModel(
        bib_layout=layout(date("issued"), text_variable("year-suffix")),
        uses_year_suffix_variable=True,
    )
    tree = render_item({**ITEM, "year-suffix": "a"}, style, "bib")
    assert to_plain(tree) == "2020a"
    marker = find_first(
        tree,
        lambda group: group.attrs.rendered_var == "year-suffix" and plain_text(group) == "",
    )
    assert marker is not None


def test_rendering_is_idempotent() -> None:
    item = {**ITEM, "DOI": "10.1/x", "year-suffix": "b"}
    assert render_item(item, AUTHOR_DATE, "bib") == render_item(item, AUTHOR_DATE, "bib")


def test_sort_key_skips_quotes_and_links() -> None:
    assert render_sort_key({**ITEM, "DOI": "10.1/x"}, AUTHOR_DATE, "bib") == (
        "Jane Doe. (2020). Sample. Journal, 3(2), 5–10."
    )
    assert render_sort_key({"unprocessed-with-id": "X"}, AUTHOR_DATE, "bib") == ""


def test_context_selects_mode_options_and_is_frozen() -> None:
    style = StyleModel(
        global_opts={"a": "1", "b": "1"},
        cite_opts={"b": "2"},
        bib_opts={"b": "3"},
        uses_year_suffix_variable=True,
    )
    cite = create_context({"title": "x"}, style, "cite")
    bib = create_context({"title": "x"}, style, Mode.BIB)
    assert (cite.opt("a"), cite.opt("b"), bib.opt("b")) == ("1", "2", "3")
    assert cite.render_year_suffix is False
    assert create_context({}, StyleModel(), "bib").render_year_suffix is True
    with pytest.raises(FrozenInstanceError):
        cite.mode = Mode.BIB
    with pytest.raises(TypeError):
        cite.vars["title"] = "y"


def test_empty_layout_output_yields_none() -> None:
    assert render_item(ITEM, StyleModel(bib_layout=lambda context: ""), "bib") is None
    assert render_item({}, StyleModel(bib_layout=layout(text_variable("title"))), "bib") is None


def test_empty_macro_output_adds_no_delimiter() -> None:
    style = StyleModel(
        macros={"blank": lambda context: ""},
        bib_layout=layout(text_macro("blank"), text_variable("title"), delimiter=", "),
    )
    assert to_plain(render_item({"title": "T"}, style, "bib")) == "T"


def test_year_suffix_follows_year_in_numeric_date() -> None:
    style = StyleModel(
        terms=DEFAULT_TERMS,
        date_numeric=AUTHOR_DATE.date_numeric,
        bib_layout=layout(date("issued", form="numeric")),
    )
    item = {"issued": {"date-parts": [[2020, 1, 5]]}, "year-suffix": "a"}
    assert to_plain(render_item(item, style, "bib")) == "2020a-01-05"


def test_year_suffix_kept_for_undated_items() -> None:
    item = {**ITEM, "issued": None, "year-suffix": "a"}
    assert to_plain(render_item(item, AUTHOR_DATE, "cite")) == "(Doe, n.d.-a)"
    style = StyleModel(bib_layout=layout(text_variable("title")))
    assert to_plain(render_item({"title": "T", "year-suffix": "a"}, style, "bib")) == "T"
