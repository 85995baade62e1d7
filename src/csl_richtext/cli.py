"""Typer CLI for csl-richtext."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer

from .config import Settings
from .context import Mode, RenderMode, create_context
from .errors import CslRichTextError
from .formatters import to_data, to_html, to_plain
from .log import configure_logging
from .ranges import DEFAULT_RANGE_DELIMITER, DEFAULT_RANGE_FORMAT, RANGE_FORMATS, format_range
from .render import render_item
from .source import ItemSource
from .style import DEFAULT_TERMS, StyleModel, load_style, load_terms
from .terms import inflected_text

app = typer.Typer(help="Render CSL citations and bibliography entries as rich text")

DEFAULT_STYLE = "csl_richtext.presets:AUTHOR_DATE"


def _settings() -> Settings:
    settings = Settings()
    configure_logging(settings.log_level)
    return settings


def _with_locale(style: StyleModel, locale: Optional[Path]) -> StyleModel:
    if locale is None:
        return style
    return style.model_copy(update={"terms": load_terms(locale)})


def _emit(result: object, output_format: str) -> str:
    if isinstance(result, tuple):
        return str(result[1])
    if output_format == "html":
        return to_html(result)
    if output_format == "tree":
        return json.dumps(to_data(result), ensure_ascii=False)
    return to_plain(result)


@app.command()
def render(
    items: Path = typer.Argument(..., help="CSL-JSON file with a list of items"),
    item_id: Optional[List[str]] = typer.Option(None, "--id", help="Item ids to render"),
    style: str = typer.Option(DEFAULT_STYLE, "--style", help="Style as module:attribute"),
    mode: Mode = typer.Option(Mode.BIB, "--mode", help="bib or cite"),
    output_format: Optional[str] = typer.Option(None, "--format", help="plain, html or tree"),
    no_links: bool = typer.Option(False, "--no-links", help="Do not link titles"),
) -> None:
    """Render items one per line."""

    settings = _settings()
    output_format = output_format or settings.output_format
    try:
        source = ItemSource.from_file(items)
        style_model = _with_locale(load_style(style), settings.locale_file)
    except CslRichTextError as error:
        typer.echo(str(error))
        raise typer.Exit(code=1) from error
    ids = item_id or [item["id"] for item in source]
    for key in ids:
        result = render_item(
            source.get_item(key),
            style_model,
            mode,
            output_format=output_format,
            no_external_links=no_links or settings.no_external_links,
        )
        typer.echo(_emit(result, output_format))


@app.command("range")
def range_(
    value: str,
    range_format: str = typer.Option(DEFAULT_RANGE_FORMAT, "--format", help="page-range-format"),
    delimiter: str = typer.Option(DEFAULT_RANGE_DELIMITER, "--delimiter"),
) -> None:
    """Format a page range."""

    if range_format not in RANGE_FORMATS:
        typer.echo(f"Unknown range format: {range_format}")
        raise typer.Exit(code=1)
    typer.echo(format_range(value, range_format, delimiter))


@app.command()
def term(
    name: str,
    form: str = typer.Option("long", "--form"),
    plural: bool = typer.Option(False, "--plural"),
    locale: Optional[Path] = typer.Option(None, "--locale", help="JSON term file"),
) -> None:
    """Look up a locale term with form fallback."""

    settings = _settings()
    locale = locale or settings.locale_file
    try:
        terms = load_terms(locale) if locale is not None else DEFAULT_TERMS
    except CslRichTextError as error:
        typer.echo(str(error))
        raise typer.Exit(code=1) from error
    context = create_context({}, StyleModel(terms=terms), Mode.BIB, RenderMode.DISPLAY)
    text = inflected_text(name, form, "multiple" if plural else "single", context)
    if text is None:
        typer.echo(f"No term named {name!r}.")
        raise typer.Exit(code=1)
    typer.echo(text)


def run() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    run()
