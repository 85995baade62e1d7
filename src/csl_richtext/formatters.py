"""Finalizers turning rich-text trees into output text.

Full output formatting belongs to the caller; these cover plain text, a small
HTML subset and a JSON-friendly tree dump used by the command line.
"""

from __future__ import annotations

from html import escape
from typing import Any, Callable

from .nodes import Group, Leaf, RichText


def _children(node: Group, render: Callable[[RichText], str]) -> list[str]:
    parts = [render(child) for child in node.children]
    return [part for part in parts if part]


def to_plain(node: RichText | str | None) -> str:
    if node is None:
        return ""
    if isinstance(node, str):
        return node
    if isinstance(node, Leaf):
        return node.text
    return (node.attrs.delimiter or "").join(_children(node, to_plain))


_HTML_TAGS = {
    ("font_style", "italic"): ("<i>", "</i>"),
    ("font_style", "oblique"): ("<i>", "</i>"),
    ("font_weight", "bold"): ("<b>", "</b>"),
    ("font_variant", "small-caps"): ('<span style="font-variant:small-caps;">', "</span>"),
    ("text_decoration", "underline"): ('<span style="text-decoration:underline;">', "</span>"),
    ("vertical_align", "sup"): ("<sup>", "</sup>"),
    ("vertical_align", "sub"): ("<sub>", "</sub>"),
}


def to_html(node: RichText | str | None) -> str:
    if node is None:
        return ""
    if isinstance(node, str):
        return escape(node, quote=False)
    if isinstance(node, Leaf):
        return escape(node.text, quote=False)
    text = (escape(node.attrs.delimiter, quote=False) if node.attrs.delimiter else "").join(
        _children(node, to_html)
    )
    for (field, value), (opening, closing) in _HTML_TAGS.items():
        if getattr(node.attrs, field) == value:
            text = f"{opening}{text}{closing}"
    if node.attrs.href:
        text = f'<a href="{escape(node.attrs.href)}">{text}</a>'
    return text


def to_data(node: RichText | str | None) -> Any:
    """Nested lists: ``[{attrs}, child, ...]`` for groups, strings for leaves."""

    if node is None or isinstance(node, str):
        return node
    if isinstance(node, Leaf):
        return node.text
    return [dict(node.attrs.items()), *(to_data(child) for child in node.children)]
