"""Formatting utilities for structured records."""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from .models import ET_AL, StructuredRecord
from .normalization import (
    en_dash_ranges,
    ensure_terminal_period,
    join_nonempty,
    strip_trailing_period,
)

NameTransform = Callable[[str], str]


def initials_name(name: str) -> str:
    """``Hinton, Geoffrey E.`` or ``Geoffrey E. Hinton`` -> ``G. E. Hinton``."""
    if name == ET_AL:
        return name
    if "," in name:
        surname, _, given = name.partition(",")
    else:
        tokens = name.split()
        surname = tokens[-1] if tokens else ""
        given = " ".join(tokens[:-1])
    initials = " ".join(piece[0].upper() + "." for piece in given.split(" ") if piece)
    return join_nonempty([initials, surname.strip()])


def full_name(name: str) -> str:
    """``Hinton, Geoffrey`` -> ``Geoffrey Hinton``; given-first names pass through."""
    if name == ET_AL:
        return name
    if "," in name:
        surname, _, given = name.partition(",")
        return join_nonempty([given.strip(), surname.strip()])
    return name


def join_authors(authors: Sequence[str] | None, transform: NameTransform) -> str:
    """Join names with a serial comma; a trailing ``et al.`` gets no ``and``."""
    if not authors:
        return ""
    names = [transform(name) for name in authors]
    if names[-1] == ET_AL and len(names) > 1:
        return f"{', '.join(names[:-1])}, {ET_AL}"
    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return f"{names[0]} and {names[1]}"
    return f"{', '.join(names[:-1])}, and {names[-1]}"


class CitationFormatter:
    """Render structured records as IEEE-like (style A) and ACM-like (style B) strings.

    Both renderers are pure functions of the record.
    """

    SUPPORTED_STYLES = {"ieee", "acm"}
    STYLE_ALIASES = {"a": "ieee", "b": "acm"}

    def format(self, record: Optional[StructuredRecord], style: str = "ieee") -> str:
        style_key = style.lower().strip()
        style_key = self.STYLE_ALIASES.get(style_key, style_key)
        if style_key not in self.SUPPORTED_STYLES:
            style_key = "ieee"
        formatter = getattr(self, f"format_{style_key}")
        return formatter(record)

    def format_ieee(self, record: Optional[StructuredRecord]) -> str:
        if record is None:
            return ""
        authors = join_authors(record.authors, initials_name)
        venue = strip_trailing_period(record.venue)
        components: List[str] = [
            f"{authors}," if authors else "",
            f'"{record.title},"' if record.title else "",
            f"in {venue}," if venue else "",
            record.year,
            f"pp. {en_dash_ranges(record.pages)}." if record.pages else "",
        ]
        return ensure_terminal_period(join_nonempty(components))

    def format_acm(self, record: Optional[StructuredRecord]) -> str:
        if record is None:
            return ""
        authors = join_authors(record.authors, full_name)
        container = f"In {record.venue}" if record.venue else ""
        if container and record.pages:
            container = f"{container}, {record.pages}"
        components = [
            authors,
            ensure_terminal_period(record.year),
            ensure_terminal_period(record.title),
            ensure_terminal_period(container),
        ]
        return join_nonempty(components)


_default_formatter = CitationFormatter()


def render_style_a(record: Optional[StructuredRecord]) -> str:
    return _default_formatter.format_ieee(record)


def render_style_b(record: Optional[StructuredRecord]) -> str:
    return _default_formatter.format_acm(record)
