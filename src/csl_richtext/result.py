"""Evaluation results of style rules.

Every rule returns either ``Continue`` wrapping its value or ``ABORT`` when it
decides the item cannot be rendered. ``ABORT`` travels back through the
enclosing rules unchanged until the item renderer receives it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Union

from .nodes import Group, Leaf, as_node
from .rich_text import ContentType, TypedNode


@dataclass(frozen=True, slots=True)
class Continue:
    value: Any


@dataclass(frozen=True, slots=True)
class Abort:
    pass


ABORT = Abort()

Result = Union[Continue, Abort]


def collect(results: Iterable[Result]) -> Result:
    """Gather the values of ``results``, stopping at the first abort."""

    values = []
    for result in results:
        if isinstance(result, Abort):
            return result
        values.append(result.value)
    return Continue(values)


def to_result(value: Any) -> Result:
    """Normalize whatever a layout or macro returned into a typed result.

    Bare nodes and strings count as literal text.
    """

    if isinstance(value, Abort):
        return value
    if isinstance(value, Continue):
        value = value.value
    if isinstance(value, TypedNode):
        return Continue(value)
    if value is None or isinstance(value, (str, Leaf, Group)):
        return Continue(TypedNode(as_node(value), ContentType.TEXT_ONLY))
    raise TypeError(f"Unexpected rule result {value!r}")
