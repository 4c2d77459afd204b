"""High-level orchestrator for citation restyling workflows."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple

from .field_record import FieldRecordParser, InvalidEntryHeader, split_entries
from .formatter import CitationFormatter
from .models import RestyledCitation, StructuredRecord
from .prose_parser import ProseCitationParser
from .report import render_report

logger = logging.getLogger(__name__)

FIELD_RECORD_SOURCE = "field-record"


class CitationRestyler:
    """Coordinates parsing of field records or rendered citations and restyling."""

    def __init__(
        self,
        field_parser: FieldRecordParser | None = None,
        prose_parser: ProseCitationParser | None = None,
        formatter: CitationFormatter | None = None,
        styles: Sequence[str] = ("ieee", "acm"),
    ):
        self.field_parser = field_parser or FieldRecordParser()
        self.prose_parser = prose_parser or ProseCitationParser()
        self.formatter = formatter or CitationFormatter()
        self.styles = tuple(styles)

    def restyle_record(self, record: StructuredRecord, source: str) -> RestyledCitation:
        return RestyledCitation(
            record=record,
            style_a=self.formatter.format_ieee(record),
            style_b=self.formatter.format_acm(record),
            source=source,
        )

    def restyle_field_record(self, text: str) -> Optional[RestyledCitation]:
        record = self.field_parser.parse(text)
        if record is None:
            return None
        return self.restyle_record(record, FIELD_RECORD_SOURCE)

    def restyle_prose(self, sources: Mapping[str, str]) -> RestyledCitation:
        record, source = self.prose_parser.parse_with_source(sources)
        return self.restyle_record(record, source)

    def restyle_bibliography(self, text: str) -> Tuple[List[RestyledCitation], List[str]]:
        """Restyle every ``@`` entry in ``text``.

        Returns the restyled entries and the error message for each chunk whose
        header could not be read.
        """

        results: List[RestyledCitation] = []
        errors: List[str] = []
        chunks = split_entries(text)
        if not chunks and text.strip():
            errors.append("no field records found")
        for chunk in chunks:
            try:
                field_record = self.field_parser.scan(chunk)
            except InvalidEntryHeader as exc:
                preview = chunk.splitlines()[0][:60]
                errors.append(f"{exc}: {preview}")
                logger.debug("Skipping entry %r: %s", preview, exc)
                continue
            record = self.field_parser.to_structured(field_record)
            results.append(self.restyle_record(record, FIELD_RECORD_SOURCE))
        return results, errors

    def restyle_file(self, file_path: str | Path) -> Tuple[List[RestyledCitation], List[str]]:
        """Restyle a ``.json`` dialect mapping or a field-record file."""
        path = Path(file_path)
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            sources = json.loads(text)
            if not isinstance(sources, dict):
                raise ValueError(f"{path} must hold an object mapping dialect names to text")
            return [self.restyle_prose({str(k): str(v) for k, v in sources.items()})], []
        return self.restyle_bibliography(text)

    def report(self, results: List[RestyledCitation], rejected: int = 0) -> str:
        return render_report(results, rejected=rejected, styles=self.styles)
