"""Exporters for structured citation data."""
from __future__ import annotations

import json
from dataclasses import asdict
from typing import Dict, List

from .models import RestyledCitation, StructuredRecord


def to_json(results: List[RestyledCitation]) -> str:
    return json.dumps(
        [
            {
                "source": result.source,
                "record": asdict(result.record),
                "ieee": result.style_a,
                "acm": result.style_b,
            }
            for result in results
        ],
        indent=2,
        ensure_ascii=False,
    )


def to_bibtex(records: List[StructuredRecord]) -> str:
    entries = []
    used_keys: Dict[str, int] = {}
    for record in records:
        key = _unique_key(record.citation_key(), used_keys)
        lines = [f"@{record.entry_type or 'misc'}{{{key},"]
        if record.authors:
            lines.append(f"  author = {{{' and '.join(record.authors)}}},")
        if record.title:
            lines.append(f"  title = {{{record.title}}},")
        if record.journal:
            lines.append(f"  journal = {{{record.journal}}},")
        if record.book_title:
            lines.append(f"  booktitle = {{{record.book_title}}},")
        if record.year:
            lines.append(f"  year = {{{record.year}}},")
        if record.volume:
            lines.append(f"  volume = {{{record.volume}}},")
        if record.number:
            lines.append(f"  number = {{{record.number}}},")
        if record.pages:
            lines.append(f"  pages = {{{_bibtex_pages(record.pages)}}},")
        lines.append("}")
        entries.append("\n".join(lines))
    return "\n\n".join(entries)


def _unique_key(key: str, used_keys: Dict[str, int]) -> str:
    count = used_keys.get(key, 0)
    used_keys[key] = count + 1
    if count == 0:
        return key
    return f"{key}{chr(ord('a') + count - 1)}" if count <= 26 else f"{key}_{count}"


def _bibtex_pages(pages: str) -> str:
    if "--" in pages or "-" not in pages:
        return pages
    start, end = pages.split("-", 1)
    return f"{start.strip()}--{end.strip()}"
