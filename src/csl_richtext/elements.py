"""Rule primitives for compiled styles.

Each factory returns an element: a callable taking a :class:`Context` and
returning ``Continue(TypedNode)`` or ``ABORT``. A compiled style is a tree of
such elements; its layout is the root.

    bib_layout = layout(
        names("author", suffix=". "),
        text_variable("title", attrs=Attrs(font_style="italic")),
        date("issued", prefix=" (", suffix=")"),
        suffix=".",
    )
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Any, Callable, Iterable

from .context import Context
from .log import get_logger
from .nodes import EMPTY_ATTRS, Attrs, Group, Leaf, RichText, simplify
from .result import ABORT, Abort, Continue, Result, collect, to_result
from .rich_text import (
    ContentType,
    TypedNode,
    affixed,
    format_single,
    join_formatted,
    typed_join,
)
from .style import DateFormat, DatePart
from .terms import inflected_text, term_gender
from .variables import var_value

logger = get_logger(__name__)

Element = Callable[[Context], Result]
Condition = Callable[[Context], bool]

_YEAR_ONLY = DateFormat(parts=(DatePart(name="year"),))
_PLURAL_VALUE = re.compile(r"\d\s*(?:-|–|—|&|,)\s*\d")
_NUMERIC_VALUE = re.compile(
    r"^[A-Za-z]*\d+[A-Za-z]*(?:\s*(?:-|–|&|,)\s*[A-Za-z]*\d+[A-Za-z]*)*$"
)


def _typed(node: Any, content: ContentType) -> Continue:
    return Continue(TypedNode(node, content))


def _nothing() -> Continue:
    return _typed(None, ContentType.TEXT_ONLY)


def _empty_vars() -> Continue:
    return _typed(None, ContentType.EMPTY_VARS)


def text_variable(
    name: str,
    form: str | None = None,
    attrs: Attrs = EMPTY_ATTRS,
    prefix: str = "",
    suffix: str = "",
) -> Element:
    def render(context: Context) -> Result:
        value = var_value(name, context, form)
        if value is None:
            return _empty_vars()
        node = format_single(replace(attrs, rendered_var=name), str(value), context)
        return _typed(affixed(node, prefix, suffix), ContentType.PRESENT_VAR)

    return render


def text_term(
    name: str,
    form: str = "long",
    plural: bool = False,
    attrs: Attrs = EMPTY_ATTRS,
    prefix: str = "",
    suffix: str = "",
) -> Element:
    def render(context: Context) -> Result:
        number = "multiple" if plural else "single"
        text = inflected_text(name, form, number, context)
        node = format_single(replace(attrs, rendered_term=name), text, context)
        return _typed(affixed(node, prefix, suffix), ContentType.TEXT_ONLY)

    return render


def text_value(
    value: str, attrs: Attrs = EMPTY_ATTRS, prefix: str = "", suffix: str = ""
) -> Element:
    def render(context: Context) -> Result:
        node = format_single(attrs, value, context)
        return _typed(affixed(node, prefix, suffix), ContentType.TEXT_ONLY)

    return render


def text_macro(
    name: str, attrs: Attrs = EMPTY_ATTRS, prefix: str = "", suffix: str = ""
) -> Element:
    def render(context: Context) -> Result:
        macro = context.macros.get(name)
        if macro is None:
            logger.debug("Style defines no macro %r", name)
            return _nothing()
        result = to_result(macro(context))
        if isinstance(result, Abort):
            return result
        typed = typed_join(attrs, [result.value], context)
        return _typed(affixed(typed.node, prefix, suffix), typed.content)

    return render


def _ordinal_suffix(value: int, name: str, context: Context) -> str:
    gender = term_gender(name, context)
    for key in (f"ordinal-{value % 100:02d}", f"ordinal-{value % 10:02d}", "ordinal"):
        candidates = [term for term in context.terms if term.name == key]
        if not candidates:
            continue
        for term in candidates:
            if term.gender == gender:
                return term.text
        return candidates[0].text
    return ""


def number(
    name: str,
    form: str = "numeric",
    attrs: Attrs = EMPTY_ATTRS,
    prefix: str = "",
    suffix: str = "",
) -> Element:
    """Render a number variable; ``form="ordinal"`` appends the ordinal term."""

    def render(context: Context) -> Result:
        value = var_value(name, context)
        if value is None:
            return _empty_vars()
        text = str(value)
        if form == "ordinal" and text.isdigit():
            text += _ordinal_suffix(int(text), name, context)
        node = format_single(replace(attrs, rendered_var=name), text, context)
        return _typed(affixed(node, prefix, suffix), ContentType.PRESENT_VAR)

    return render


def _is_plural(value: Any) -> bool:
    if isinstance(value, list):
        return len(value) > 1
    return bool(_PLURAL_VALUE.search(str(value)))


def label(
    name: str,
    form: str = "long",
    plural: str = "contextual",
    attrs: Attrs = EMPTY_ATTRS,
    prefix: str = "",
    suffix: str = "",
) -> Element:
    """Render the term labelling variable ``name``.

    For ``locator`` the term is the item's ``label`` variable. Labels of
    missing variables render nothing.
    """

    def render(context: Context) -> Result:
        value = context.var(name)
        if value is None:
            return _nothing()
        term = name
        if name == "locator":
            term = context.var("label") or "page"
        if plural == "always":
            multiple = True
        elif plural == "never":
            multiple = False
        else:
            multiple = _is_plural(value)
        text = inflected_text(term, form, "multiple" if multiple else "single", context)
        node = format_single(attrs, text, context)
        return _typed(affixed(node, prefix, suffix), ContentType.TEXT_ONLY)

    return render


def _person(name: Any, form: str) -> str:
    if isinstance(name, str):
        return name
    if not isinstance(name, dict):
        return ""
    if name.get("literal"):
        return str(name["literal"])
    family = " ".join(
        str(part)
        for part in (name.get("non-dropping-particle"), name.get("family"))
        if part
    )
    if form == "short":
        return family
    full = " ".join(
        str(part)
        for part in (name.get("given"), name.get("dropping-particle"), family)
        if part
    )
    if name.get("suffix"):
        full = f"{full}, {name['suffix']}"
    return full


def _name_list(people: list[Any], form: str, and_: str | None, delimiter: str, context: Context) -> str:
    rendered = [text for text in (_person(person, form) for person in people) if text]
    if not rendered:
        return ""
    et_al_min = int(context.opt("et-al-min") or 0)
    use_first = int(context.opt("et-al-use-first") or 1)
    if et_al_min and len(rendered) >= et_al_min:
        et_al = inflected_text("et-al", "long", None, context) or "et al."
        return f"{delimiter.join(rendered[:use_first])} {et_al}"
    if len(rendered) == 1:
        return rendered[0]
    and_text = None
    if and_ == "text":
        and_text = inflected_text("and", "long", None, context)
    elif and_ == "symbol":
        and_text = inflected_text("and", "symbol", None, context)
    if not and_text:
        return delimiter.join(rendered)
    if len(rendered) == 2:
        return f"{rendered[0]} {and_text} {rendered[1]}"
    return f"{delimiter.join(rendered[:-1])}{delimiter}{and_text} {rendered[-1]}"


def names(
    *variables: str,
    form: str = "long",
    and_: str | None = "text",
    name_delimiter: str = ", ",
    delimiter: str = "; ",
    substitute: Iterable[Element] = (),
    attrs: Attrs = EMPTY_ATTRS,
    prefix: str = "",
    suffix: str = "",
) -> Element:
    """Render the name lists of ``variables``.

    When every variable is empty the ``substitute`` elements are tried in
    order and the first one producing content is used.
    """

    substitute = tuple(substitute)

    def render(context: Context) -> Result:
        parts = []
        for variable in variables:
            people = context.var(variable)
            if not isinstance(people, list):
                continue
            text = _name_list(people, form, and_, name_delimiter, context)
            part = format_single(Attrs(rendered_var=variable, rendered_names=True), text, context)
            if part is not None:
                parts.append(part)
        if not parts:
            for alternative in substitute:
                result = alternative(context)
                if isinstance(result, Abort):
                    return result
                if result.value.node is not None:
                    typed = typed_join(attrs, [result.value], context)
                    return _typed(affixed(typed.node, prefix, suffix), typed.content)
            return _empty_vars()
        joined = join_formatted(Attrs(delimiter=delimiter), parts, context)
        node = format_single(attrs, joined, context)
        return _typed(affixed(node, prefix, suffix), ContentType.PRESENT_VAR)

    return render


def _to_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _date_part_text(part: DatePart, value: int, context: Context) -> str:
    if part.name == "year":
        return f"{-value}BC" if value < 0 else str(value)
    if part.form == "numeric-leading-zeros":
        return f"{value:02d}"
    if part.name == "month" and part.form in (None, "long", "short"):
        text = inflected_text(f"month-{value:02d}", part.form or "long", None, context)
        if text:
            return text
    return str(value)


def _date_part_nodes(
    parts: list[Any], date_format: DateFormat, context: Context
) -> list[RichText]:
    values = dict(zip(("year", "month", "day"), (_to_int(part) for part in parts)))
    nodes: list[RichText] = []
    for part in date_format.parts:
        value = values.get(part.name)
        if value is None:
            continue
        if nodes and date_format.delimiter:
            nodes.append(Leaf(date_format.delimiter))
        text = _date_part_text(part, value, context)
        if part.name != "year":
            nodes.append(Leaf(part.prefix + text + part.suffix))
            continue
        # the year is kept apart so a year suffix can follow it directly
        if part.prefix:
            nodes.append(Leaf(part.prefix))
        nodes.append(Group(Attrs(rendered_year=True), (Leaf(text),)))
        if part.suffix:
            nodes.append(Leaf(part.suffix))
    return nodes


def _render_date(value: Any, date_format: DateFormat, context: Context) -> RichText | None:
    if isinstance(value, str):
        return Leaf(value) if value else None
    if not isinstance(value, dict):
        return None
    if value.get("literal"):
        return Leaf(str(value["literal"]))
    date_parts = value.get("date-parts")
    if not date_parts:
        return Leaf(str(value["raw"])) if value.get("raw") else None
    ranges = [
        nodes
        for nodes in (_date_part_nodes(parts, date_format, context) for parts in date_parts[:2])
        if nodes
    ]
    if not ranges:
        return None
    children = list(ranges[0])
    for nodes in ranges[1:]:
        children.append(Leaf(date_format.range_delimiter))
        children.extend(nodes)
    return simplify(Group(EMPTY_ATTRS, tuple(children)))


def date(
    name: str,
    form: str | None = None,
    date_format: DateFormat | None = None,
    required: bool = False,
    attrs: Attrs = EMPTY_ATTRS,
    prefix: str = "",
    suffix: str = "",
) -> Element:
    """Render date variable ``name``.

    ``form`` selects the style's ``text`` or ``numeric`` date format; an
    explicit ``date_format`` wins, and the year alone is the fallback. A
    ``required`` date that is missing aborts the whole item.
    """

    def render(context: Context) -> Result:
        value = context.var(name)
        fmt = date_format
        if fmt is None and form == "text":
            fmt = context.date_text
        elif fmt is None and form == "numeric":
            fmt = context.date_numeric
        rendered = _render_date(value, fmt or _YEAR_ONLY, context) if value is not None else None
        if rendered is None:
            if required:
                logger.debug("Required date %r missing, aborting item", name)
                return ABORT
            return _empty_vars()
        node = format_single(
            replace(attrs, rendered_var=name, rendered_date=True), rendered, context
        )
        return _typed(affixed(node, prefix, suffix), ContentType.PRESENT_VAR)

    return render


def _join_children(
    children: tuple[Element, ...], attrs: Attrs, delimiter: str | None, context: Context
) -> Result:
    results = collect(child(context) for child in children)
    if isinstance(results, Abort):
        return results
    if delimiter is not None:
        attrs = replace(attrs, delimiter=delimiter)
    return Continue(typed_join(attrs, results.value, context))


def group(
    *children: Element,
    delimiter: str | None = None,
    attrs: Attrs = EMPTY_ATTRS,
    prefix: str = "",
    suffix: str = "",
) -> Element:
    """Join ``children``; suppressed when they only looked up empty variables."""

    def render(context: Context) -> Result:
        result = _join_children(children, attrs, delimiter, context)
        if isinstance(result, Abort):
            return result
        typed = result.value
        if typed.content is ContentType.EMPTY_VARS:
            return _empty_vars()
        return _typed(affixed(typed.node, prefix, suffix), typed.content)

    return render


def layout(
    *children: Element,
    delimiter: str | None = None,
    attrs: Attrs = EMPTY_ATTRS,
    prefix: str = "",
    suffix: str = "",
) -> Element:
    def render(context: Context) -> Result:
        result = _join_children(children, attrs, delimiter, context)
        if isinstance(result, Abort):
            return result
        typed = result.value
        return _typed(affixed(typed.node, prefix, suffix), typed.content)

    return render


def choose(
    *branches: tuple[Condition, Element], otherwise: Element | None = None
) -> Element:
    """Render the element of the first branch whose condition holds."""

    def render(context: Context) -> Result:
        for condition, element in branches:
            if condition(context):
                return element(context)
        if otherwise is not None:
            return otherwise(context)
        return _nothing()

    return render


def if_variable(*variables: str, match: str = "all") -> Condition:
    def condition(context: Context) -> bool:
        present = [context.var(variable) is not None for variable in variables]
        if match == "any":
            return any(present)
        if match == "none":
            return not any(present)
        return all(present)

    return condition


def if_type(*types: str) -> Condition:
    def condition(context: Context) -> bool:
        return context.var("type") in types

    return condition


def if_numeric(variable: str) -> Condition:
    def condition(context: Context) -> bool:
        value = context.var(variable)
        return value is not None and bool(_NUMERIC_VALUE.match(str(value).strip()))

    return condition
