"""Rendering context and rich-text composition for CSL styles."""

from __future__ import annotations

from .context import Context, Mode, RenderMode, create_context
from .nodes import Attrs, Group, Leaf, RichText, simplify
from .render import NO_ITEM_DATA, NO_LAYOUT, render_item, render_sort_key
from .result import ABORT, Abort, Continue
from .rich_text import (
    ContentType,
    TypedNode,
    add_year_suffix,
    format_single,
    join_formatted,
    quote,
    rendered_vars,
    typed_join,
)
from .style import DEFAULT_TERMS, DateFormat, DatePart, StyleModel, Term
from .terms import inflected_text, term_gender, term_text
from .variables import var_value

__all__ = [
    "ABORT",
    "Abort",
    "Attrs",
    "ContentType",
    "Context",
    "Continue",
    "DEFAULT_TERMS",
    "DateFormat",
    "DatePart",
    "Group",
    "Leaf",
    "Mode",
    "NO_ITEM_DATA",
    "NO_LAYOUT",
    "RenderMode",
    "RichText",
    "StyleModel",
    "Term",
    "TypedNode",
    "add_year_suffix",
    "create_context",
    "format_single",
    "inflected_text",
    "join_formatted",
    "quote",
    "render_item",
    "render_sort_key",
    "rendered_vars",
    "simplify",
    "term_gender",
    "term_text",
    "typed_join",
    "var_value",
]
