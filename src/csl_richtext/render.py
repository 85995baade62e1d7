"""Rendering of a single item into an unfinalized rich-text tree."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from .context import Context, Mode, RenderMode, create_context
from .formatters import to_plain
from .log import get_logger
from .nodes import Attrs, Group, Leaf, RichText, plain_text
from .result import Abort, to_result
from .rich_text import add_year_suffix, link_title, rendered_vars
from .style import StyleModel

logger = get_logger(__name__)

NO_LAYOUT = "[NO BIBLIOGRAPHY LAYOUT IN CSL STYLE]"
NO_ITEM_DATA = "NO_ITEM_DATA:{}"

# In priority order.
LINKED_VARS = ("DOI", "PMID", "PMCID", "URL")
LINK_PREFIXES = {
    "DOI": "https://doi.org/",
    "PMID": "https://www.ncbi.nlm.nih.gov/pubmed/",
    "PMCID": "https://www.ncbi.nlm.nih.gov/pmc/articles/",
    "URL": "",
}


def _layout_for(style: StyleModel, mode: Mode) -> Any:
    return style.cite_layout if mode is Mode.CITE else style.bib_layout


def _evaluate(layout: Any, context: Context) -> RichText | None:
    result = to_result(layout(context))
    if isinstance(result, Abort):
        logger.debug("Rendering aborted for item %r", context.var("id"))
        return None
    node = result.value.node
    if node is None or plain_text(node) == "":
        return None
    return node


def link_url(variable: str, value: Any) -> str:
    value = str(value)
    if value.startswith(("http://", "https://")):
        return value
    return LINK_PREFIXES.get(variable, "") + value


def _link(node: RichText, context: Context) -> RichText:
    for variable in LINKED_VARS:
        value = context.var(variable)
        if value is None:
            continue
        if variable in rendered_vars(node):
            return node
        return link_title(node, link_url(variable, value))
    return node


def _with_item_number(node: RichText, mode: Mode, item_number: Any) -> Group:
    key = "cited_item_no" if mode is Mode.CITE else "bib_item_no"
    if isinstance(node, Leaf):
        return Group(Attrs(**{key: item_number}), (node,))
    return Group(replace(node.attrs, **{key: item_number}), node.children)


def render_item(
    variables: Mapping[str, Any],
    style: StyleModel,
    mode: Mode | str,
    output_format: str | None = None,
    no_external_links: bool = False,
) -> RichText | str | tuple[None, str] | None:
    """Render one item with the layout of ``style`` for ``mode``.

    Returns the rich-text tree, ``None`` when the layout aborted or produced
    nothing, the ``NO_LAYOUT`` diagnostic when the style has no layout for
    ``mode``, and ``(None, "NO_ITEM_DATA:<id>")`` for items the item getter
    could not find. ``output_format`` is passed through untouched by the
    engine.
    """

    if variables.get("unprocessed-with-id") is not None:
        item_id = variables["unprocessed-with-id"]
        logger.debug("No item data for %r", item_id)
        return None, NO_ITEM_DATA.format(item_id)
    mode = Mode(mode)
    context = create_context(
        variables, style, mode, RenderMode.DISPLAY, no_external_links
    )
    layout = _layout_for(style, mode)
    if layout is None:
        logger.debug("Style has no %s layout (output format %s)", mode.value, output_format)
        return NO_LAYOUT
    rendered = _evaluate(layout, context)
    if rendered is None:
        return None
    if mode is Mode.BIB and not no_external_links:
        rendered = _link(rendered, context)
    rendered = _with_item_number(rendered, mode, context.var("citation-number"))
    year_suffix = context.var("year-suffix")
    if year_suffix is not None:
        suffix = "" if style.uses_year_suffix_variable else str(year_suffix)
        rendered, _ = add_year_suffix(rendered, suffix)
    return rendered


def render_sort_key(
    variables: Mapping[str, Any], style: StyleModel, mode: Mode | str
) -> str:
    """Plain text of the item rendered in the ``sort`` sub-mode.

    Used by sorting collaborators; quoting is skipped and no links or
    disambiguation marks are added.
    """

    mode = Mode(mode)
    layout = _layout_for(style, mode)
    if layout is None or variables.get("unprocessed-with-id") is not None:
        return ""
    context = create_context(variables, style, mode, RenderMode.SORT, True)
    return to_plain(_evaluate(layout, context))
