"""Plain-text reporting for restyled citations."""
from __future__ import annotations

from typing import List, Sequence

from .models import RestyledCitation


def render_report(
    results: List[RestyledCitation], rejected: int = 0, styles: Sequence[str] = ("ieee", "acm")
) -> str:
    """Return a human-readable summary of each restyled entry."""

    lines = ["Citation Restyling Report", f"Entries restyled: {len(results)}"]
    if rejected:
        lines.append(f"Entries rejected: {rejected}")
    if not results:
        lines.append("No citations could be parsed.")
        return "\n".join(lines)

    for idx, result in enumerate(results, start=1):
        record = result.record
        lines.append("")
        lines.append(f"[{idx}] source: {result.source} ({record.entry_type})")
        if result.source == "fallback":
            lines.append("  Note: no dialect matched; only the raw text was kept")
        if "ieee" in styles:
            lines.append(f"  IEEE: {result.style_a}")
        if "acm" in styles:
            lines.append(f"  ACM: {result.style_b}")
    return "\n".join(lines)
