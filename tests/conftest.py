"""Shared helpers for the csl-richtext tests."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

import pytest

from csl_richtext.context import Context, Mode, RenderMode, create_context
from csl_richtext.style import DEFAULT_TERMS, StyleModel, Term


def build_context(
    variables: Mapping[str, Any] | None = None,
    terms: Iterable[Term] = DEFAULT_TERMS,
    mode: Mode = Mode.BIB,
    render_mode: RenderMode = RenderMode.DISPLAY,
    **style_fields: Any,
) -> Context:
    style = StyleModel(terms=tuple(terms), **style_fields)
    return create_context(variables or {}, style, mode, render_mode)


@pytest.fixture
def make_context() -> Callable[..., Context]:
    return build_context
