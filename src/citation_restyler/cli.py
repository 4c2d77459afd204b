"""Command line interface for restyling citations."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List

from .app import CitationRestyler
from .exporters import to_bibtex, to_json
from .models import RestyledCitation
from .prose_parser import Dialect


def _parse_sources(pairs: List[str]) -> Dict[str, str]:
    sources: Dict[str, str] = {}
    for pair in pairs:
        key, sep, text = pair.partition("=")
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"expected KEY=TEXT, got {pair!r}")
        sources[key.strip()] = text
    return sources


def _print_results(results: List[RestyledCitation], style: str) -> None:
    for result in results:
        if style in {"ieee", "both"}:
            print(result.style_a)
        if style in {"acm", "both"}:
            print(result.style_b)


def main(argv: List[str] | None = None) -> int:
    dialects = ", ".join(dialect.source_key for dialect in Dialect)
    parser = argparse.ArgumentParser(description="Restyle citations into IEEE and ACM formats")
    parser.add_argument(
        "input",
        nargs="?",
        help="Path to a BibTeX file, or a JSON file mapping dialect names to citation text",
    )
    parser.add_argument(
        "--source",
        action="append",
        default=[],
        metavar="KEY=TEXT",
        help=f"Rendered citation text keyed by dialect ({dialects}); can be repeated",
    )
    parser.add_argument(
        "--style",
        default="both",
        choices=["ieee", "acm", "both"],
        help="Which restyled output to print",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Print a summary report instead of bare citation lines",
    )
    parser.add_argument(
        "--json-output",
        type=Path,
        help="Write parsed records and both styles to a JSON file",
    )
    parser.add_argument(
        "--bibtex-output",
        type=Path,
        help="Write parsed records as BibTeX",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log parser decisions (skipped segments, dialect misses)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.input and not args.source:
        parser.error("provide an input file or at least one --source")
    try:
        sources = _parse_sources(args.source)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    styles = ("ieee", "acm") if args.style == "both" else (args.style,)
    restyler = CitationRestyler(styles=styles)

    results: List[RestyledCitation] = []
    errors: List[str] = []
    if args.input:
        try:
            file_results, file_errors = restyler.restyle_file(args.input)
        except (OSError, ValueError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        results.extend(file_results)
        errors.extend(file_errors)
    if sources:
        results.append(restyler.restyle_prose(sources))

    for error in errors:
        print(f"error: {error}", file=sys.stderr)

    if args.report:
        print(restyler.report(results, rejected=len(errors)))
    else:
        _print_results(results, args.style)

    if args.json_output:
        args.json_output.write_text(to_json(results), encoding="utf-8")

    if args.bibtex_output:
        args.bibtex_output.write_text(to_bibtex([r.record for r in results]), encoding="utf-8")

    return 0 if results else 1


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())
