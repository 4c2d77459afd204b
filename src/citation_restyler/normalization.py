"""Normalization and punctuation helpers for parsing and rendering citations."""
from __future__ import annotations

import re
from typing import Iterable, Optional


EN_DASH = "–"

_WHITESPACE = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"\s*-+\s*")
_LEADING_GROUP = re.compile(r"^\{([^{}]*)\}")
_TRAILING_GROUP = re.compile(r"(?:^|(?<=\s))\{([^{}]*)\}$")
_TRAILING_PERIODS = re.compile(r"\.+$")
_DANGLING = re.compile(r"[\s,;:]+$")


def collapse_whitespace(value: str | None) -> str:
    """Collapse newlines and whitespace runs to single spaces and trim."""
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value).strip()


def strip_wrapping_braces(name: str) -> str:
    """Remove case-protection braces around the start or end of a name.

    ``{Doe}, K.`` becomes ``Doe, K.`` while groups inside a word such as
    ``Jos{\\'e}`` are left alone, even at the end of the name.
    """
    name = name.strip()
    match = _LEADING_GROUP.match(name)
    if match:
        name = match.group(1) + name[match.end():]
    match = _TRAILING_GROUP.search(name)
    if match:
        name = name[: match.start()] + match.group(1)
    while name.startswith("{") and name.endswith("}") and _balanced(name[1:-1]):
        name = name[1:-1].strip()
    opened, closed = name.count("{"), name.count("}")
    if opened > closed:
        name = name.lstrip("{")
    elif closed > opened:
        name = name.rstrip("}")
    return name.strip()


def _balanced(value: str) -> bool:
    depth = 0
    for char in value:
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def en_dash_ranges(pages: str) -> str:
    """Render ``436-444`` and ``436--444`` page ranges with a single en-dash."""
    return _HYPHEN_RUN.sub(EN_DASH, pages)


def strip_trailing_period(value: str) -> str:
    value = value.strip()
    return value[:-1].rstrip() if value.endswith(".") else value


def ensure_terminal_period(value: str) -> str:
    """Return ``value`` ending in exactly one period; empty stays empty."""
    value = _DANGLING.sub("", value)
    if not value:
        return ""
    return _TRAILING_PERIODS.sub("", value) + "."


def join_nonempty(parts: Iterable[Optional[str]], sep: str = " ") -> str:
    return sep.join(part for part in parts if part)
