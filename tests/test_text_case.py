"""Tests for text-case transforms."""

from __future__ import annotations

from csl_richtext.nodes import Attrs, Group, Leaf, plain_text
from csl_richtext.text_case import apply_text_case


def cased(case: str, *texts: str) -> str:
    nodes = apply_text_case([Leaf(text) for text in texts], case)
    return "".join(plain_text(node) for node in nodes)


def test_upper_and_lower() -> None:
    assert cased("uppercase", "Hello world") == "HELLO WORLD"
    assert cased("lowercase", "Hello World") == "hello world"


def test_capitalize_first_spans_leaves() -> None:
    assert cased("capitalize-first", "the ", "origin of species") == "The origin of species"
    assert cased("capitalize-all", "the origin of species") == "The Origin Of Species"


def test_title_case() -> None:
    assert (
        cased("title", "the origin of species: a study of things")
        == "The Origin of Species: A Study of Things"
    )
    assert cased("title", "THE ORIGIN OF SPECIES") == "The Origin of Species"
    assert cased("title", "a history of DNA and iPhone") == "A History of DNA and iPhone"


def test_sentence_case() -> None:
    assert cased("sentence", "HOW TO READ") == "How to read"
    assert cased("sentence", "the Origin of Species") == "The Origin of Species"


def test_nocase_groups_are_untouched() -> None:
    nodes = [Leaf("the "), Group(Attrs(nocase=True), (Leaf("pH"),)), Leaf(" scale")]
    titled = apply_text_case(nodes, "title")
    assert "".join(plain_text(node) for node in titled) == "The pH Scale"
    upper = apply_text_case(nodes, "uppercase")
    assert "".join(plain_text(node) for node in upper) == "THE pH SCALE"


def test_unknown_case_is_ignored() -> None:
    assert cased("reverse", "Keep Me") == "Keep Me"
