"""Citation parsing and IEEE/ACM restyling toolkit."""

from .app import CitationRestyler
from .field_record import FieldRecordParser, InvalidEntryHeader, parse_field_record
from .formatter import CitationFormatter, render_style_a, render_style_b
from .models import FieldRecord, ParseMiss, RestyledCitation, StructuredRecord
from .prose_parser import Dialect, ProseCitationParser, parse_prose_citation

__all__ = [
    "CitationRestyler",
    "FieldRecordParser",
    "InvalidEntryHeader",
    "parse_field_record",
    "CitationFormatter",
    "render_style_a",
    "render_style_b",
    "FieldRecord",
    "ParseMiss",
    "RestyledCitation",
    "StructuredRecord",
    "Dialect",
    "ProseCitationParser",
    "parse_prose_citation",
]
