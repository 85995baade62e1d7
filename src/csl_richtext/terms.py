"""Locale term lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .log import get_logger
from .style import Term, normalize_number

if TYPE_CHECKING:
    from .context import Context

logger = get_logger(__name__)

_FORM_FALLBACK = {
    "verb-short": "verb",
    "symbol": "short",
    "verb": "long",
    "short": "long",
    "long": "long",
}


def fallback_form(form: str) -> str:
    """Return the next more generic term form; ``long`` maps to itself."""

    return _FORM_FALLBACK.get(form, "long")


def _matching(name: str, context: Context) -> list[Term]:
    return [term for term in context.terms if term.name == name]


def term_text(name: str, context: Context) -> str | None:
    """Return the text of the first term called ``name``."""

    for term in context.terms:
        if term.name == name:
            return term.text
    return None


def inflected_text(
    name: str, form: str, number: str | None, context: Context
) -> str | None:
    """Return the term text for ``form`` and ``number``.

    A name with a single entry is form invariant. Otherwise missing forms
    degrade along ``verb-short → verb → long`` and ``symbol → short → long``.
    """

    matches = _matching(name, context)
    if not matches:
        return None
    if len(matches) == 1:
        return matches[0].text
    number = normalize_number(number)
    while True:
        for term in matches:
            if term.form == form and (term.number is None or term.number == number):
                return term.text
        next_form = fallback_form(form)
        if next_form == form:
            logger.debug("No %s form for term %r", form, name)
            return None
        form = next_form


def term_gender(name: str, context: Context) -> str | None:
    for term in context.terms:
        if term.name == name and term.form == "long" and term.gender is not None:
            return term.gender
    return None
