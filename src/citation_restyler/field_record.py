"""Tolerant parser for brace-delimited (BibTeX-style) field records."""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from .models import FieldRecord, StructuredRecord
from .normalization import collapse_whitespace, strip_wrapping_braces

logger = logging.getLogger(__name__)


class InvalidEntryHeader(ValueError):
    """Raised when text does not start with an ``@type{`` header."""


class FieldRecordParser:
    """Scans a single field record into a flat key/value mapping.

    Only a missing or malformed ``@type{`` header is fatal. Segments that do
    not look like ``key = value`` are skipped so that hand-edited records still
    yield as many fields as possible.
    """

    HEADER_PATTERN = re.compile(r"^\s*@([A-Za-z]+)\s*\{")
    KEY_PATTERN = re.compile(r"[A-Za-z0-9_\-:]+")
    AUTHOR_SEPARATOR = " and "

    def parse(self, raw: str | None) -> Optional[StructuredRecord]:
        """Return a structured record, or ``None`` when the header is invalid."""
        try:
            field_record = self.scan(raw or "")
        except InvalidEntryHeader as exc:
            logger.info("Rejected field record: %s", exc)
            return None
        return self.to_structured(field_record)

    def scan(self, raw: str) -> FieldRecord:
        header = self.HEADER_PATTERN.match(raw)
        if not header:
            raise InvalidEntryHeader("input does not start with an @type{ header")

        record = FieldRecord(entry_type=header.group(1).lower())
        pos, closed = self._read_cite_key(raw, header.end(), record)
        while not closed:
            pos = self._skip_separators(raw, pos)
            if pos >= len(raw) or raw[pos] == "}":
                break
            pos = self._read_field(raw, pos, record)

        author = record.get("author")
        if author:
            record.authors = self.split_authors(author)
        return record

    def split_authors(self, value: str) -> List[str]:
        names = (strip_wrapping_braces(piece) for piece in value.split(self.AUTHOR_SEPARATOR))
        return [name for name in names if name]

    @staticmethod
    def to_structured(field_record: FieldRecord) -> StructuredRecord:
        journal = field_record.get("journal")
        return StructuredRecord(
            entry_type=field_record.entry_type,
            authors=tuple(field_record.authors),
            title=field_record.get("title"),
            year=field_record.get("year"),
            journal=journal,
            book_title="" if journal else field_record.get("booktitle"),
            volume=field_record.get("volume"),
            number=field_record.get("number"),
            pages=field_record.get("pages"),
        )

    def _read_cite_key(self, raw: str, pos: int, record: FieldRecord) -> Tuple[int, bool]:
        end = self._find_any(raw, pos, ",}")
        record.cite_key = raw[pos:end].strip()
        if end >= len(raw) or raw[end] == "}":
            return end, True
        return end + 1, False

    def _read_field(self, raw: str, pos: int, record: FieldRecord) -> int:
        key_match = self.KEY_PATTERN.match(raw, pos)
        if not key_match:
            logger.debug("Skipping unreadable segment at offset %d", pos)
            return self._skip_segment(raw, pos)

        key = key_match.group(0).lower()
        pos = self._skip_whitespace(raw, key_match.end())
        if pos >= len(raw) or raw[pos] != "=":
            logger.debug("Field %r has no '=' at offset %d; skipping", key, pos)
            return self._skip_segment(raw, pos)

        pos = self._skip_whitespace(raw, pos + 1)
        if pos >= len(raw):
            return pos
        opener = raw[pos]
        if opener == "{":
            value, pos = self._read_braced(raw, pos)
        elif opener == '"':
            value, pos = self._read_quoted(raw, pos)
        else:
            value, pos = self._read_bare(raw, pos)
        record.fields[key] = collapse_whitespace(value)
        return pos

    @staticmethod
    def _read_braced(raw: str, pos: int) -> Tuple[str, int]:
        depth = 0
        start = pos + 1
        for idx in range(pos, len(raw)):
            char = raw[idx]
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return raw[start:idx], idx + 1
        logger.debug("Unterminated braced value starting at offset %d", pos)
        return raw[start:], len(raw)

    @staticmethod
    def _read_quoted(raw: str, pos: int) -> Tuple[str, int]:
        start = pos + 1
        idx = start
        while idx < len(raw):
            char = raw[idx]
            if char == "\\":
                idx += 2
                continue
            if char == '"':
                return raw[start:idx], idx + 1
            idx += 1
        logger.debug("Unterminated quoted value starting at offset %d", pos)
        return raw[start:], len(raw)

    @staticmethod
    def _read_bare(raw: str, pos: int) -> Tuple[str, int]:
        idx = pos
        while idx < len(raw) and raw[idx] not in ",}" and not raw[idx].isspace():
            idx += 1
        return raw[pos:idx], idx

    def _skip_segment(self, raw: str, pos: int) -> int:
        """Advance to the next top-level comma or closing brace."""
        while pos < len(raw):
            char = raw[pos]
            if char == ",":
                return pos + 1
            if char == "}":
                return pos
            if char == "{":
                _, pos = self._read_braced(raw, pos)
            elif char == '"':
                _, pos = self._read_quoted(raw, pos)
            else:
                pos += 1
        return pos

    @staticmethod
    def _skip_separators(raw: str, pos: int) -> int:
        while pos < len(raw) and (raw[pos] == "," or raw[pos].isspace()):
            pos += 1
        return pos

    @staticmethod
    def _skip_whitespace(raw: str, pos: int) -> int:
        while pos < len(raw) and raw[pos].isspace():
            pos += 1
        return pos

    @staticmethod
    def _find_any(raw: str, pos: int, chars: str) -> int:
        while pos < len(raw) and raw[pos] not in chars:
            pos += 1
        return pos


_ENTRY_START = re.compile(r"^\s*@", re.MULTILINE)
_NON_ENTRY_HEADER = re.compile(r"@\s*(string|comment|preamble)\s*[{(]", re.IGNORECASE)


def split_entries(text: str) -> List[str]:
    """Split a bibliography file into one chunk per ``@`` entry.

    ``@string``, ``@comment`` and ``@preamble`` blocks are not references and
    are dropped.
    """
    if not text:
        return []
    starts = [match.start() for match in _ENTRY_START.finditer(text)]
    if not starts:
        return []
    bounds = starts[1:] + [len(text)]
    chunks = []
    for start, end in zip(starts, bounds):
        chunk = text[start:end].strip()
        if not chunk:
            continue
        non_entry = _NON_ENTRY_HEADER.match(chunk)
        if non_entry:
            logger.debug("Skipping @%s block", non_entry.group(1).lower())
            continue
        chunks.append(chunk)
    return chunks


def parse_field_record(text: str | None) -> Optional[StructuredRecord]:
    """Parse one field record; ``None`` signals a hard header failure."""
    return FieldRecordParser().parse(text)
