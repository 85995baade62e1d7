"""CSL ``text-case`` transforms over sequences of rich-text nodes.

Word boundaries are tracked across leaves, so ``capitalize-first`` touches
only the first word of the whole sequence even when it is split over several
nodes. Groups flagged ``nocase`` are left as they are.
"""

from __future__ import annotations

import re
from typing import Iterable

from .nodes import Group, Leaf, RichText, iter_leaves

TEXT_CASES = frozenset(
    {"lowercase", "uppercase", "capitalize-first", "capitalize-all", "sentence", "title"}
)

STOP_WORDS = frozenset(
    {
        "a", "an", "and", "as", "at", "but", "by", "down", "for", "from", "in",
        "into", "nor", "of", "on", "onto", "or", "over", "so", "the", "till",
        "to", "up", "via", "with", "yet",
    }
)

_TOKEN = re.compile(r"\w[\w'’]*|\s+|.", re.S)


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def _cased_text(node: RichText) -> str:
    if isinstance(node, Leaf):
        return node.text
    if node.attrs.nocase:
        return ""
    return "".join(_cased_text(child) for child in node.children)


class _CaseWalker:
    def __init__(self, case: str, all_upper: bool) -> None:
        self.case = case
        self.all_upper = all_upper
        self.seen_word = False
        self.after_colon = False

    def node(self, node: RichText) -> RichText:
        if isinstance(node, Leaf):
            return Leaf(self.text(node.text))
        if node.attrs.nocase:
            if any(leaf.text.strip() for leaf in iter_leaves(node)):
                self.seen_word = True
                self.after_colon = False
            return node
        return Group(node.attrs, tuple(self.node(child) for child in node.children))

    def text(self, text: str) -> str:
        if self.case == "uppercase":
            return text.upper()
        if self.case == "lowercase":
            return text.lower()
        return _TOKEN.sub(self._token, text)

    def _token(self, match: re.Match[str]) -> str:
        token = match.group(0)
        if token.isspace():
            return token
        if not (token[0].isalnum() or token[0] == "_"):
            if token == ":":
                self.after_colon = True
            return token
        first = not self.seen_word
        after_colon = self.after_colon
        self.seen_word = True
        self.after_colon = False
        return self._word(token, first, after_colon)

    def _word(self, word: str, first: bool, after_colon: bool) -> str:
        if self.case == "capitalize-first":
            return _capitalize(word) if first and word.islower() else word
        if self.case == "capitalize-all":
            return _capitalize(word) if word.islower() else word
        if self.case == "sentence":
            if self.all_upper:
                word = word.lower()
            return _capitalize(word) if first and word.islower() else word
        if self.case == "title":
            if self.all_upper:
                word = word.lower()
            if word.lower() in STOP_WORDS and not (first or after_colon):
                return word
            return _capitalize(word) if word.islower() else word
        return word


def apply_text_case(nodes: Iterable[RichText], case: str) -> list[RichText]:
    """Return ``nodes`` with the ``case`` transform applied."""

    nodes = list(nodes)
    if case not in TEXT_CASES:
        return nodes
    text = "".join(_cased_text(node) for node in nodes)
    all_upper = any(char.isalpha() for char in text) and text == text.upper()
    walker = _CaseWalker(case, all_upper)
    return [walker.node(node) for node in nodes]
