"""Style and locale models consumed by the rendering engine."""

from __future__ import annotations

import importlib
import json
from pathlib import Path
from typing import Any, Callable, Iterable, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import LocaleLoadError, StyleLoadError

TermForm = Literal["long", "short", "symbol", "verb", "verb-short"]

_NUMBER_ALIASES = {
    "singular": "single",
    "single": "single",
    "plural": "multiple",
    "multiple": "multiple",
}


def normalize_number(number: str | None) -> str | None:
    """Map ``singular``/``plural`` onto the CSL ``single``/``multiple``."""

    if number is None:
        return None
    return _NUMBER_ALIASES.get(number, number)


class Term(BaseModel):
    """A single locale term entry."""

    model_config = ConfigDict(frozen=True)

    name: str
    form: TermForm = "long"
    number: Literal["single", "multiple"] | None = None
    gender: Literal["masculine", "feminine", "neuter"] | None = None
    text: str = ""

    @field_validator("number", mode="before")
    @classmethod
    def _alias_number(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_number(value)
        return value


class DatePart(BaseModel):
    """One year, month or day component of a date format."""

    model_config = ConfigDict(frozen=True)

    name: Literal["year", "month", "day"]
    form: Literal["long", "short", "numeric", "numeric-leading-zeros"] | None = None
    prefix: str = ""
    suffix: str = ""


class DateFormat(BaseModel):
    """Ordered date parts; ``range_delimiter`` separates the ends of a date range."""

    model_config = ConfigDict(frozen=True)

    parts: tuple[DatePart, ...] = ()
    delimiter: str = ""
    range_delimiter: str = "–"


class StyleModel(BaseModel):
    """Compiled style: everything the engine needs, already validated.

    ``cite_layout`` and ``bib_layout`` are callables accepting a rendering
    context. Either may be missing.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    macros: dict[str, Callable[..., Any]] = Field(default_factory=dict)
    terms: tuple[Term, ...] = ()
    date_text: DateFormat | None = None
    date_numeric: DateFormat | None = None
    global_opts: dict[str, str] = Field(default_factory=dict)
    cite_opts: dict[str, str] = Field(default_factory=dict)
    bib_opts: dict[str, str] = Field(default_factory=dict)
    locale_opts: dict[str, str] = Field(default_factory=dict)
    cite_layout: Callable[..., Any] | None = None
    bib_layout: Callable[..., Any] | None = None
    uses_year_suffix_variable: bool = False


def terms_from_json(entry: dict[str, Any]) -> list[Term]:
    """Build terms from one locale JSON object.

    Besides the flat ``{"name", "form", "number", "text"}`` shape, objects
    carrying ``single`` and ``multiple`` texts expand into two terms.
    """

    if "single" in entry or "multiple" in entry:
        base = {
            key: value
            for key, value in entry.items()
            if key not in ("single", "multiple", "text", "number")
        }
        terms = []
        for number in ("single", "multiple"):
            if number in entry:
                terms.append(Term(**base, number=number, text=entry[number]))
        return terms
    return [Term(**entry)]


def load_terms(path: Path) -> tuple[Term, ...]:
    """Read a JSON list of term objects."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as error:
        raise LocaleLoadError(f"Cannot read locale file {path}: {error}") from error
    if not isinstance(payload, list):
        raise LocaleLoadError(f"Locale file {path} must contain a JSON list.")
    terms: list[Term] = []
    try:
        for entry in payload:
            terms.extend(terms_from_json(entry))
    except (TypeError, ValidationError) as error:
        raise LocaleLoadError(f"Invalid term in {path}: {error}") from error
    return tuple(terms)


def _months() -> Iterable[Term]:
    names = [
        "January", "February", "March", "April", "May", "June", "July",
        "August", "September", "October", "November", "December",
    ]
    for index, name in enumerate(names, start=1):
        key = f"month-{index:02d}"
        yield Term(name=key, text=name)
        yield Term(name=key, form="short", text=name if len(name) <= 4 else f"{name[:3]}.")


DEFAULT_TERMS: tuple[Term, ...] = (
    Term(name="open-quote", text="“"),
    Term(name="close-quote", text="”"),
    Term(name="open-inner-quote", text="‘"),
    Term(name="close-inner-quote", text="’"),
    Term(name="page-range-delimiter", text="–"),
    Term(name="and", text="and"),
    Term(name="and", form="symbol", text="&"),
    Term(name="et-al", text="et al."),
    Term(name="no date", text="no date"),
    Term(name="no date", form="short", text="n.d."),
    Term(name="accessed", text="accessed"),
    Term(name="ordinal", text="th"),
    Term(name="ordinal-01", text="st"),
    Term(name="ordinal-02", text="nd"),
    Term(name="ordinal-03", text="rd"),
    Term(name="ordinal-11", text="th"),
    Term(name="ordinal-12", text="th"),
    Term(name="ordinal-13", text="th"),
    Term(name="edition", text="edition"),
    Term(name="edition", form="short", text="ed."),
    Term(name="page", number="single", text="page"),
    Term(name="page", number="multiple", text="pages"),
    Term(name="page", form="short", number="single", text="p."),
    Term(name="page", form="short", number="multiple", text="pp."),
    Term(name="chapter", number="single", text="chapter"),
    Term(name="chapter", number="multiple", text="chapters"),
    Term(name="chapter", form="short", text="chap."),
    Term(name="editor", number="single", text="editor"),
    Term(name="editor", number="multiple", text="editors"),
    Term(name="editor", form="short", number="single", text="ed."),
    Term(name="editor", form="short", number="multiple", text="eds."),
    Term(name="editor", form="verb", text="edited by"),
    Term(name="editor", form="verb-short", text="ed. by"),
    *_months(),
)


def load_style(reference: str) -> StyleModel:
    """Import a style model given as ``package.module:attribute``."""

    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise StyleLoadError(f"Style reference {reference!r} must look like 'module:attribute'.")
    try:
        module = importlib.import_module(module_name)
    except ImportError as error:
        raise StyleLoadError(f"Cannot import {module_name!r}: {error}") from error
    style = getattr(module, attribute, None)
    if callable(style) and not isinstance(style, StyleModel):
        style = style()
    if not isinstance(style, StyleModel):
        raise StyleLoadError(f"{reference!r} is not a StyleModel.")
    return style
