"""Composition of rich-text trees.

These are the primitives a compiled style calls while it walks its rules:
formatting and joining nodes, quoting, and the content classification that
lets groups decide afterwards whether they carried any variable data.
"""

from __future__ import annotations

import re
from dataclasses import replace
from enum import Enum
from typing import Callable, Iterable, NamedTuple

from .context import Context, RenderMode
from .nodes import EMPTY_ATTRS, Attrs, Group, Leaf, RichText, as_node, iter_groups, simplify
from .terms import term_text
from .text_case import apply_text_case

_QUOTE_DEFAULTS = {
    "open-quote": "“",
    "close-quote": "”",
    "open-inner-quote": "‘",
    "close-inner-quote": "’",
}

_EMPTY_LEAF = Leaf("")


class ContentType(str, Enum):
    TEXT_ONLY = "text-only"
    PRESENT_VAR = "present-var"
    EMPTY_VARS = "empty-vars"


class TypedNode(NamedTuple):
    """A composed node together with its content classification."""

    node: RichText | None
    content: ContentType


def _quote_marks(context: Context) -> dict[str, str]:
    marks = {}
    for name, default in _QUOTE_DEFAULTS.items():
        text = term_text(name, context)
        marks[name] = default if text is None else text
    return marks


def _swap_quotes(node: RichText, swaps: dict[str, str], pattern: re.Pattern[str]) -> RichText:
    if isinstance(node, Leaf):
        return Leaf(pattern.sub(lambda match: swaps[match.group(0)], node.text))
    return Group(node.attrs, tuple(_swap_quotes(child, swaps, pattern) for child in node.children))


def _quoted(nodes: list[RichText], context: Context) -> list[RichText]:
    marks = _quote_marks(context)
    swaps = {}
    for outer, inner in (("open-quote", "open-inner-quote"), ("close-quote", "close-inner-quote")):
        if marks[outer] and marks[inner]:
            swaps.setdefault(marks[outer], marks[inner])
            swaps.setdefault(marks[inner], marks[outer])
    if swaps:
        keys = sorted(swaps, key=len, reverse=True)
        # an inner closing mark followed by a letter is an apostrophe
        pattern = re.compile(
            "|".join(
                re.escape(key) + (r"(?!\w)" if key == marks["close-inner-quote"] else "")
                for key in keys
            )
        )
        nodes = [_swap_quotes(node, swaps, pattern) for node in nodes]
    return [Leaf(marks["open-quote"]), *nodes, Leaf(marks["close-quote"])]


def quote(node: RichText, context: Context) -> RichText:
    """Wrap ``node`` in the locale's quotes, swapping marks already inside.

    Outer marks found in ``node`` become inner marks and inner marks become
    outer ones, so nested quotations alternate.
    """

    return simplify(Group(EMPTY_ATTRS, tuple(_quoted([node], context))))


def strip_periods(node: RichText) -> RichText:
    if isinstance(node, Leaf):
        return Leaf(node.text.replace(".", ""))
    return Group(node.attrs, tuple(strip_periods(child) for child in node.children))


def join_formatted(
    attrs: Attrs, nodes: Iterable[RichText | str | None], context: Context
) -> RichText | None:
    """Join ``nodes`` into one formatted node.

    Absent and empty items are dropped first. Structural attributes are
    applied here. With a delimiter and at least three items the group keeps
    the delimiter for the serializer; two items get the delimiter inserted as
    text.
    """

    items = [as_node(node) for node in nodes if node is not None and node != ""]
    items = [item for item in items if item != _EMPTY_LEAF]
    if not items:
        return None
    if attrs.text_case:
        items = apply_text_case(items, attrs.text_case)
    if attrs.strip_periods:
        items = [strip_periods(item) for item in items]
    delimiter = attrs.delimiter
    if delimiter and len(items) == 2:
        items = [items[0], Leaf(delimiter), items[1]]
        delimiter = None
    elif len(items) < 2:
        delimiter = None
    if attrs.quotes and context.render_mode is RenderMode.DISPLAY:
        if delimiter:
            items = [Group(Attrs(delimiter=delimiter), tuple(items))]
            delimiter = None
        items = _quoted(items, context)
    group_attrs = attrs.format_only()
    if delimiter:
        group_attrs = replace(group_attrs, delimiter=delimiter)
    return simplify(Group(group_attrs, tuple(items)))


def format_single(
    attrs: Attrs, node: RichText | str | None, context: Context
) -> RichText | None:
    if node is None or node == "" or node == _EMPTY_LEAF:
        return None
    return join_formatted(attrs, [node], context)


def classify(contents: Iterable[ContentType]) -> ContentType:
    """Combine child classifications; ``present-var`` dominates."""

    contents = list(contents)
    if all(content is ContentType.TEXT_ONLY for content in contents):
        return ContentType.TEXT_ONLY
    if any(content is ContentType.PRESENT_VAR for content in contents):
        return ContentType.PRESENT_VAR
    return ContentType.EMPTY_VARS


def typed_join(attrs: Attrs, typed_nodes: Iterable[TypedNode], context: Context) -> TypedNode:
    typed_nodes = list(typed_nodes)
    content = classify(typed.content for typed in typed_nodes)
    node = join_formatted(attrs, [typed.node for typed in typed_nodes], context)
    return TypedNode(node, content)


def affixed(node: RichText | None, prefix: str = "", suffix: str = "") -> RichText | None:
    """Surround ``node`` with affixes placed outside its formatting."""

    if node is None or not (prefix or suffix):
        return node
    children = [Leaf(prefix)] if prefix else []
    children.append(node)
    if suffix:
        children.append(Leaf(suffix))
    return simplify(Group(EMPTY_ATTRS, tuple(children)))


def find_first(node: RichText | None, predicate: Callable[[Group], bool]) -> Group | None:
    if node is None:
        return None
    for group in iter_groups(node):
        if predicate(group):
            return group
    return None


def rendered_vars(node: RichText | None) -> set[str]:
    """Names of the variables that contributed content to ``node``."""

    if node is None:
        return set()
    return {
        group.attrs.rendered_var
        for group in iter_groups(node)
        if group.attrs.rendered_var is not None
    }


def replace_first(
    node: RichText,
    predicate: Callable[[Group], bool],
    transform: Callable[[Group], RichText],
) -> tuple[RichText, bool]:
    """Rebuild ``node`` with the first matching group transformed.

    Returns the new tree and whether a group matched. Only the path down to
    the match is copied.
    """

    if isinstance(node, Leaf):
        return node, False
    if predicate(node):
        return transform(node), True
    children = list(node.children)
    for index, child in enumerate(children):
        new_child, found = replace_first(child, predicate, transform)
        if found:
            children[index] = new_child
            return Group(node.attrs, tuple(children)), True
    return node, False


def link_title(node: RichText, url: str) -> RichText:
    """Attach ``url`` to the rendered title, if the tree has one."""

    linked, _ = replace_first(
        node,
        lambda group: group.attrs.rendered_var == "title",
        lambda group: Group(replace(group.attrs, href=url), group.children),
    )
    return linked


def add_year_suffix(node: RichText, suffix: str) -> tuple[RichText, bool]:
    """Insert ``suffix`` right after the first rendered year.

    Dates without a year part (literal or raw dates) take the suffix at their
    end. Undated items take it after the "no date" term, joined by a hyphen,
    and failing that after the first rendered names. The inserted group is
    tagged ``rendered_var="year-suffix"`` so later passes can find it even
    when ``suffix`` is empty.
    """

    marker = Group(Attrs(rendered_var="year-suffix"), (Leaf(suffix),))
    undated = Group(Attrs(rendered_var="year-suffix"), (Leaf(f"-{suffix}" if suffix else ""),))
    anchors = (
        (lambda group: group.attrs.rendered_year, marker),
        (lambda group: group.attrs.rendered_date, marker),
        (lambda group: group.attrs.rendered_term == "no date", undated),
        (lambda group: group.attrs.rendered_names, marker),
    )
    for predicate, inserted in anchors:
        spliced, found = replace_first(
            node,
            predicate,
            lambda group: Group(group.attrs, group.children + (inserted,)),
        )
        if found:
            return spliced, True
    return node, False
