"""Heuristic parsers for rendered citation strings (APA, MLA, Chicago)."""
from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from .models import NO_DATE, ParseMiss, StructuredRecord

logger = logging.getLogger(__name__)

RuleResult = Union[StructuredRecord, ParseMiss]

MLA_JOURNAL_PLACEHOLDER = "Source (MLA)"


class Dialect(Enum):
    APA = "APA"
    MLA = "MLA"
    CHICAGO = "Chicago"

    @property
    def source_key(self) -> str:
        return self.value

    @classmethod
    def from_key(cls, key: str) -> Optional["Dialect"]:
        wanted = key.strip().lower()
        for dialect in cls:
            if dialect.value.lower() == wanted:
                return dialect
        return None


DEFAULT_PRIORITY = (Dialect.APA, Dialect.MLA, Dialect.CHICAGO)

# Chicago is fed through the APA rule. The layouts differ (year after the
# venue, quoted titles) so venue and year extraction is lossy on this path.
LOSSY_DIALECTS = frozenset({Dialect.CHICAGO})


class StructuredDialectRule:
    """``Surname, I. (Year). Title. Venue, Vol(Issue), Pages.``"""

    YEAR_PATTERN = re.compile(r"\((\d{4})\)\.")
    VENUE_DETAILS_PATTERN = re.compile(r"(\d+)\s*\((\d+)\),\s*([\d-]+)")
    AUTHOR_SEPARATOR = ".,"

    def __call__(self, text: str, dialect: Dialect) -> RuleResult:
        year_match = self.YEAR_PATTERN.search(text)
        if not year_match:
            return ParseMiss(dialect.source_key, "no '(YYYY).' year marker")

        authors = self._extract_authors(text[: year_match.start()])
        rest = text[year_match.end():].strip()
        title, venue_tail = self._split_title(rest)
        journal, volume, number, pages = self._extract_venue(venue_tail)
        return StructuredRecord(
            entry_type="article",
            authors=authors,
            title=title,
            year=year_match.group(1),
            journal=journal,
            volume=volume,
            number=number,
            pages=pages,
        )

    def _extract_authors(self, segment: str) -> Tuple[str, ...]:
        segment = segment.strip()
        if segment.endswith("."):
            segment = segment[:-1]
        authors = []
        for piece in segment.split(self.AUTHOR_SEPARATOR):
            piece = piece.strip()
            if piece.startswith("&"):
                piece = piece[1:].strip()
            if not piece:
                continue
            authors.append(piece if piece.endswith(".") else piece + ".")
        return tuple(authors)

    @staticmethod
    def _split_title(rest: str) -> Tuple[str, str]:
        split_at = rest.find(". ")
        if split_at == -1:
            return rest, ""
        return rest[:split_at], rest[split_at + 1:].strip()

    def _extract_venue(self, venue_tail: str) -> Tuple[str, str, str, str]:
        match = self.VENUE_DETAILS_PATTERN.search(venue_tail)
        if not match:
            return venue_tail, "", "", ""
        journal = venue_tail[: match.start()].strip()
        if journal.endswith(","):
            journal = journal[:-1].strip()
        return journal, match.group(1), match.group(2), match.group(3)


class FullNameDialectRule:
    """``Surname, First, and First Surname. "Title." Venue V.I (Year): Pages.``

    Venue, volume, issue and pages are not decomposed; the journal is a fixed
    placeholder naming the dialect.
    """

    YEAR_PATTERN = re.compile(r"\((\d{4})\):")
    TITLE_PATTERN = re.compile(r'"(.*?)\."')
    SERIAL_AND = re.compile(r",\s*and\s+")

    def __call__(self, text: str, dialect: Dialect) -> RuleResult:
        year_match = self.YEAR_PATTERN.search(text)
        if not year_match:
            return ParseMiss(dialect.source_key, "no '(YYYY):' year marker")

        title_match = self.TITLE_PATTERN.search(text)
        quote = text.find('"')
        author_segment = text[:quote].strip() if quote != -1 else ""
        return StructuredRecord(
            entry_type="article",
            authors=self._extract_authors(author_segment),
            title=title_match.group(1) if title_match else "",
            year=year_match.group(1),
            journal=MLA_JOURNAL_PLACEHOLDER,
        )

    def _extract_authors(self, segment: str) -> Tuple[str, ...]:
        if not segment:
            return ()
        segment = self.SERIAL_AND.sub(", ", segment)
        return tuple(
            piece if piece.endswith(".") else piece + "."
            for piece in (part.strip() for part in segment.split(", "))
            if piece
        )


Rule = Callable[[str, Dialect], RuleResult]

DIALECT_RULES: Dict[Dialect, Rule] = {
    Dialect.APA: StructuredDialectRule(),
    Dialect.MLA: FullNameDialectRule(),
    Dialect.CHICAGO: StructuredDialectRule(),
}


class ProseCitationParser:
    """Selects the best available rendered citation and recovers its fields."""

    def __init__(
        self,
        priority: Sequence[Dialect] = DEFAULT_PRIORITY,
        fallback_year: str = NO_DATE,
        assumed_entry_type: str = "article",
    ):
        self.priority = tuple(priority)
        self.fallback_year = fallback_year
        self.assumed_entry_type = assumed_entry_type

    def select_and_parse(self, sources: Mapping[str, str] | None) -> StructuredRecord:
        record, _ = self.parse_with_source(sources)
        return record

    def parse_with_source(self, sources: Mapping[str, str] | None) -> Tuple[StructuredRecord, str]:
        """Return ``(record, source_name)``; the source is ``"fallback"`` on a miss."""
        available = self._recognized_sources(sources or {})
        for dialect in self.priority:
            text = available.get(dialect)
            if not text:
                continue
            result = self.apply_rule(dialect, text)
            if isinstance(result, ParseMiss):
                logger.debug("%s rule missed: %s", result.dialect, result.reason)
                continue
            if dialect in LOSSY_DIALECTS:
                logger.warning(
                    "%s citation parsed with the APA rule; venue and year may be wrong",
                    dialect.source_key,
                )
            return result, dialect.source_key
        return self.fallback(self._fallback_text(available, sources or {})), "fallback"

    def apply_rule(self, dialect: Dialect, text: str) -> RuleResult:
        rule = DIALECT_RULES[dialect]
        try:
            return rule(text, dialect)
        except Exception as exc:  # heuristics must not escape the parser
            logger.warning("%s rule failed on %r", dialect.source_key, text, exc_info=True)
            return ParseMiss(dialect.source_key, f"rule raised {type(exc).__name__}")

    def fallback(self, text: str) -> StructuredRecord:
        return StructuredRecord(
            entry_type=self.assumed_entry_type,
            authors=(),
            title=text,
            year=self.fallback_year,
        )

    @staticmethod
    def _recognized_sources(sources: Mapping[str, str]) -> Dict[Dialect, str]:
        available: Dict[Dialect, str] = {}
        for key, text in sources.items():
            dialect = Dialect.from_key(key)
            if dialect and dialect not in available and text and text.strip():
                available[dialect] = text.strip()
        return available

    def _fallback_text(self, available: Mapping[Dialect, str], sources: Mapping[str, str]) -> str:
        for dialect in self.priority:
            if available.get(dialect):
                return available[dialect]
        return _first_nonempty(sources.values())


def _first_nonempty(values: Iterable[str]) -> str:
    for value in values:
        if value and value.strip():
            return value.strip()
    return ""


def parse_prose_citation(sources: Mapping[str, str] | None) -> StructuredRecord:
    """Parse the best available rendered citation, falling back to a minimal record."""
    return ProseCitationParser().select_and_parse(sources)
