"""Data models for citation parsing and restyling workflows."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


ET_AL = "et al."
NO_DATE = "n.d."


@dataclass(frozen=True)
class StructuredRecord:
    """Canonical bibliographic record shared by both parsers and the formatter."""

    entry_type: str = "article"
    authors: Tuple[str, ...] = ()
    title: str = ""
    year: str = ""
    journal: str = ""
    book_title: str = ""
    volume: str = ""
    number: str = ""
    pages: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.authors, tuple):
            object.__setattr__(self, "authors", tuple(self.authors))

    @property
    def venue(self) -> str:
        return self.journal or self.book_title

    def citation_key(self) -> str:
        """Return a ``surnameYEAR`` key for exports."""
        lead = ""
        if self.authors and self.authors[0] != ET_AL:
            first = self.authors[0]
            if "," in first:
                lead = first.split(",")[0]
            elif first.split():
                lead = first.split()[-1]
        lead = "".join(ch for ch in lead if ch.isalnum()).lower()
        year = self.year if self.year.isdigit() else ""
        return f"{lead}{year}" or "ref"


@dataclass
class FieldRecord:
    """Intermediate key/value view of a brace-delimited field record."""

    entry_type: str
    cite_key: str = ""
    fields: Dict[str, str] = field(default_factory=dict)
    authors: List[str] = field(default_factory=list)

    def get(self, key: str) -> str:
        return self.fields.get(key, "")


@dataclass(frozen=True)
class ParseMiss:
    """A dialect rule could not find the pattern it anchors on."""

    dialect: str
    reason: str


@dataclass(frozen=True)
class RestyledCitation:
    """A parsed record together with its two rendered styles."""

    record: StructuredRecord
    style_a: str
    style_b: str
    source: str
