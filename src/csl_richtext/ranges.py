"""Page and locator range formatting.

Implements the CSL ``page-range-format`` values. A value may hold several
ranges separated by commas or ampersands; each range is formatted on its own
and the separators are kept as written.
"""

from __future__ import annotations

import re

DEFAULT_RANGE_FORMAT = "expanded"
DEFAULT_RANGE_DELIMITER = "–"

RANGE_FORMATS = frozenset(
    {"expanded", "minimal", "minimal-two", "chicago", "chicago-15", "chicago-16"}
)

_SEPARATOR = re.compile(r"(\s*[,&]\s*)")
_RANGE = re.compile(r"^\s*(\S+?)\s*(?:-+|–|—)\s*(\S+?)\s*$")
_NUMBER = re.compile(r"^([^\d]*)(\d+)$")


def format_range(value: str, range_format: str | None, delimiter: str) -> str:
    """Return ``value`` with each contained range reformatted."""

    range_format = range_format or DEFAULT_RANGE_FORMAT
    parts = _SEPARATOR.split(str(value))
    rendered = []
    for index, part in enumerate(parts):
        if index % 2:
            rendered.append(part)
        else:
            rendered.append(_format_single_range(part, range_format, delimiter))
    return "".join(rendered)


def _format_single_range(text: str, range_format: str, delimiter: str) -> str:
    match = _RANGE.match(text)
    if match is None:
        return text
    first, last = match.group(1), match.group(2)
    first_num = _NUMBER.match(first)
    last_num = _NUMBER.match(last)
    if first_num is None or last_num is None:
        return f"{first}{delimiter}{last}"
    prefix = first_num.group(1)
    if last_num.group(1) and last_num.group(1) != prefix:
        return f"{first}{delimiter}{last}"
    start = first_num.group(2)
    end = _expand(start, last_num.group(2))
    if int(end) <= int(start):
        return f"{first}{delimiter}{last}"
    if range_format == "minimal":
        end = _minimal(start, end, 1)
    elif range_format == "minimal-two":
        end = _minimal(start, end, 2)
    elif range_format in ("chicago", "chicago-15"):
        end = _chicago(start, end, legacy=True)
    elif range_format == "chicago-16":
        end = _chicago(start, end, legacy=False)
    else:
        end = prefix + end
    return f"{first}{delimiter}{end}"


def _expand(start: str, end: str) -> str:
    """Expand an abbreviated range end such as ``321-28`` to ``328``."""

    if len(end) < len(start):
        return start[: len(start) - len(end)] + end
    return end


def _minimal(start: str, end: str, keep: int) -> str:
    if len(start) != len(end):
        return end
    index = 0
    while index < len(end) - 1 and start[index] == end[index]:
        index += 1
    reduced = end[index:]
    if len(reduced) < keep and len(end) >= keep:
        reduced = end[-keep:]
    return reduced


def _chicago(start: str, end: str, legacy: bool) -> str:
    first = int(start)
    if first < 100 or first % 100 == 0:
        return end
    if first % 100 < 10:
        return _minimal(start, end, 1)
    if legacy and len(start) == 4 and len(end) == 4:
        changed = sum(1 for a, b in zip(start, end) if a != b)
        if changed >= 3:
            return end
    return _minimal(start, end, 2)
