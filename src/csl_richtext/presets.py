"""A compiled author-date style used by the command line and the tests."""

from __future__ import annotations

from .elements import (
    choose,
    date,
    group,
    if_type,
    if_variable,
    label,
    layout,
    names,
    text_macro,
    text_term,
    text_variable,
)
from .nodes import Attrs
from .style import DEFAULT_TERMS, DateFormat, DatePart, StyleModel

ITALIC = Attrs(font_style="italic")

MACROS = {
    "author": names(
        "author",
        substitute=[names("editor", suffix=" (ed.)")],
    ),
    "author-short": names("author", form="short", and_="symbol", substitute=[text_variable("title", form="short")]),
    "title": choose(
        (if_type("book", "report", "thesis"), text_variable("title", attrs=ITALIC)),
        otherwise=text_variable("title", attrs=Attrs(quotes=True)),
    ),
    "issued": choose(
        (if_variable("issued"), date("issued")),
        otherwise=text_term("no date", form="short"),
    ),
}

BIB_LAYOUT = layout(
    text_macro("author", suffix=". "),
    text_macro("issued", prefix="(", suffix="). "),
    text_macro("title"),
    group(
        text_variable("container-title", attrs=ITALIC),
        group(text_variable("volume"), text_variable("issue", prefix="(", suffix=")")),
        text_variable("page"),
        delimiter=", ",
        prefix=". ",
    ),
    text_variable("publisher", prefix=". "),
    suffix=".",
)

CITE_LAYOUT = layout(
    group(text_macro("author-short"), text_macro("issued"), delimiter=", "),
    group(label("locator", form="short"), text_variable("locator"), delimiter=" "),
    delimiter=", ",
    prefix="(",
    suffix=")",
)

AUTHOR_DATE = StyleModel(
    macros=MACROS,
    terms=DEFAULT_TERMS,
    date_text=DateFormat(
        parts=(DatePart(name="month"), DatePart(name="day", suffix=","), DatePart(name="year")),
        delimiter=" ",
    ),
    date_numeric=DateFormat(
        parts=(
            DatePart(name="year"),
            DatePart(name="month", form="numeric-leading-zeros"),
            DatePart(name="day", form="numeric-leading-zeros"),
        ),
        delimiter="-",
    ),
    global_opts={"page-range-format": "expanded"},
    cite_opts={"et-al-min": "3", "et-al-use-first": "1"},
    cite_layout=CITE_LAYOUT,
    bib_layout=BIB_LAYOUT,
)
