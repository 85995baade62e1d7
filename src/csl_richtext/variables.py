"""Recognized CSL variables and the variable resolver."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .log import get_logger
from .ranges import DEFAULT_RANGE_DELIMITER, DEFAULT_RANGE_FORMAT, format_range
from .terms import term_text

if TYPE_CHECKING:
    from .context import Context

logger = get_logger(__name__)

STANDARD_VARIABLES = frozenset(
    {
        "abstract", "annote", "archive", "archive_location", "archive-place",
        "authority", "call-number", "citation-label", "citation-number",
        "collection-title", "container-title", "container-title-short",
        "dimensions", "DOI", "event", "event-place", "first-reference-note-number",
        "genre", "ISBN", "ISSN", "jurisdiction", "keyword", "label", "locator",
        "medium", "note", "original-publisher", "original-publisher-place",
        "original-title", "page", "page-first", "PMCID", "PMID", "publisher",
        "publisher-place", "references", "reviewed-title", "scale", "section",
        "source", "status", "title", "title-short", "type", "URL", "version",
        "year-suffix",
    }
)
NUMBER_VARIABLES = frozenset(
    {
        "chapter-number", "collection-number", "edition", "issue", "number",
        "number-of-pages", "number-of-volumes", "volume", "citation-number",
        "first-reference-note-number", "locator", "page",
    }
)
DATE_VARIABLES = frozenset(
    {"accessed", "container", "event-date", "issued", "original-date", "submitted"}
)
NAME_VARIABLES = frozenset(
    {
        "author", "collection-editor", "composer", "container-author", "director",
        "editor", "editorial-director", "illustrator", "interviewer",
        "original-author", "recipient", "reviewed-author", "translator",
    }
)
# Keys set by item getters and the citation list manager, not by item data.
PROCESSING_VARIABLES = frozenset({"unprocessed-with-id", "position", "near-note"})

KNOWN_VARIABLES = (
    STANDARD_VARIABLES | NUMBER_VARIABLES | DATE_VARIABLES | NAME_VARIABLES
    | PROCESSING_VARIABLES
)

SHORT_FORMS = {
    "title": "title-short",
    "container-title": "container-title-short",
}


def is_known_variable(name: str) -> bool:
    return name in KNOWN_VARIABLES


def var_value(name: str, context: Context, form: str | None = None) -> Any:
    """Return the value of variable ``name`` or ``None``.

    Page values, and locators labelled as pages, come back range formatted.
    """

    if not is_known_variable(name):
        logger.debug("Lookup of unknown variable %r", name)
    if form == "short":
        short_name = SHORT_FORMS.get(name)
        if short_name is not None:
            short_value = context.var(short_name)
            if short_value is not None:
                return short_value
        return context.var(name)
    value = context.var(name)
    if value is None:
        return None
    if name == "page" or (
        name == "locator" and (context.var("label") or "page") == "page"
    ):
        range_format = context.opt("page-range-format", DEFAULT_RANGE_FORMAT)
        delimiter = term_text("page-range-delimiter", context)
        if delimiter is None:
            delimiter = DEFAULT_RANGE_DELIMITER
        return format_range(str(value), range_format, delimiter)
    return value
