"""Rich-text tree values and their normalization.

A rich-text tree is either a :class:`Leaf` holding text or a :class:`Group`
holding an :class:`Attrs` record and an ordered tuple of children. Trees are
never mutated; every transformation builds new nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Iterator, Union


@dataclass(frozen=True, slots=True)
class Attrs:
    """Attribute record of a group.

    The first four fields are structural and consumed during composition.
    The item number fields are declared last so they stay the last entries
    of any record.
    """

    text_case: str | None = None
    strip_periods: bool = False
    quotes: bool = False
    delimiter: str | None = None
    font_style: str | None = None
    font_variant: str | None = None
    font_weight: str | None = None
    text_decoration: str | None = None
    vertical_align: str | None = None
    display: str | None = None
    href: str | None = None
    nocase: bool = False
    rendered_var: str | None = None
    rendered_names: bool = False
    rendered_date: bool = False
    rendered_year: bool = False
    rendered_term: str | None = None
    cited_item_no: Any = None
    bib_item_no: Any = None

    def format_only(self) -> Attrs:
        """Drop the structural attributes."""

        return replace(
            self, text_case=None, strip_periods=False, quotes=False, delimiter=None
        )

    def items(self) -> Iterator[tuple[str, Any]]:
        """Yield ``(csl-key, value)`` for every set attribute, in order."""

        for item in fields(self):
            value = getattr(self, item.name)
            if value is None or value is False:
                continue
            yield item.name.replace("_", "-"), value

    def is_empty(self) -> bool:
        return next(self.items(), None) is None


EMPTY_ATTRS = Attrs()


@dataclass(frozen=True, slots=True)
class Leaf:
    text: str


@dataclass(frozen=True, slots=True)
class Group:
    attrs: Attrs
    children: tuple[RichText, ...]


RichText = Union[Leaf, Group]


def as_node(value: RichText | str | None) -> RichText | None:
    """Accept plain strings wherever a node is expected."""

    if isinstance(value, str):
        return Leaf(value)
    return value


def simplify(node: RichText | None) -> RichText | None:
    """Shallow normalization of a freshly built node.

    Adjacent leaves are merged unless the group applies a delimiter between
    its children, and an attribute-free group with a single child is replaced
    by that child.
    """

    if node is None or isinstance(node, Leaf):
        return node
    children = node.children
    if node.attrs.delimiter is None:
        children = _merge_leaves(children)
    if len(children) == 1 and node.attrs.is_empty():
        return children[0]
    if children is node.children:
        return node
    return Group(node.attrs, children)


def _merge_leaves(children: tuple[RichText, ...]) -> tuple[RichText, ...]:
    merged: list[RichText] = []
    changed = False
    for child in children:
        if isinstance(child, Leaf) and merged and isinstance(merged[-1], Leaf):
            merged[-1] = Leaf(merged[-1].text + child.text)
            changed = True
        else:
            merged.append(child)
    if not changed:
        return children
    return tuple(merged)


def iter_leaves(node: RichText) -> Iterator[Leaf]:
    if isinstance(node, Leaf):
        yield node
        return
    for child in node.children:
        yield from iter_leaves(child)


def iter_groups(node: RichText) -> Iterator[Group]:
    """Pre-order walk over the groups of ``node``."""

    if isinstance(node, Leaf):
        return
    yield node
    for child in node.children:
        yield from iter_groups(child)


def plain_text(node: RichText | None) -> str:
    """Concatenated leaf text, ignoring attributes and delimiters."""

    if node is None:
        return ""
    return "".join(leaf.text for leaf in iter_leaves(node))
