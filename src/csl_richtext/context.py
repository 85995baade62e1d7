"""Immutable rendering context for a single item."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from .style import DateFormat, StyleModel, Term


class Mode(str, Enum):
    """Which layout of the style is rendered."""

    BIB = "bib"
    CITE = "cite"


class RenderMode(str, Enum):
    """Display output, or the comparison rendering used for sorting."""

    DISPLAY = "display"
    SORT = "sort"


@dataclass(frozen=True, slots=True)
class Context:
    vars: Mapping[str, Any]
    macros: Mapping[str, Callable[..., Any]]
    terms: tuple[Term, ...]
    date_text: DateFormat | None
    date_numeric: DateFormat | None
    opts: Mapping[str, str]
    locale_opts: Mapping[str, str]
    mode: Mode
    render_mode: RenderMode
    render_year_suffix: bool
    no_external_links: bool = False

    def var(self, name: str) -> Any:
        """Raw lookup; empty strings count as missing."""

        value = self.vars.get(name)
        if value == "" or value == []:
            return None
        return value

    def opt(self, name: str, default: str | None = None) -> str | None:
        return self.opts.get(name, default)


def create_context(
    variables: Mapping[str, Any],
    style: StyleModel,
    mode: Mode | str,
    render_mode: RenderMode | str = RenderMode.DISPLAY,
    no_external_links: bool = False,
) -> Context:
    """Bundle item data with the part of ``style`` valid for ``mode``."""

    mode = Mode(mode)
    mode_opts = style.cite_opts if mode is Mode.CITE else style.bib_opts
    return Context(
        vars=MappingProxyType(dict(variables)),
        macros=MappingProxyType(dict(style.macros)),
        terms=tuple(style.terms),
        date_text=style.date_text,
        date_numeric=style.date_numeric,
        opts=MappingProxyType({**style.global_opts, **mode_opts}),
        locale_opts=MappingProxyType(dict(style.locale_opts)),
        mode=mode,
        render_mode=RenderMode(render_mode),
        render_year_suffix=not style.uses_year_suffix_variable,
        no_external_links=no_external_links,
    )
