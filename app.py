from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List

import pandas as pd
import streamlit as st

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from citation_restyler.app import CitationRestyler  # noqa: E402
from citation_restyler.exporters import to_bibtex  # noqa: E402
from citation_restyler.models import RestyledCitation  # noqa: E402


INPUT_MODES = {
    "BibTeX": "bibtex",
    "Rendered citation (APA / MLA / Chicago)": "prose",
}


def _build_rows(results: List[RestyledCitation]) -> List[Dict[str, str]]:
    rows = []
    for result in results:
        record = result.record
        rows.append(
            {
                "Source": result.source,
                "Type": record.entry_type,
                "Authors": "; ".join(record.authors),
                "Title": record.title,
                "Venue": record.venue,
                "Year": record.year,
                "Volume": record.volume,
                "Number": record.number,
                "Pages": record.pages,
                "IEEE": result.style_a,
                "ACM": result.style_b,
            }
        )
    return rows


def _restyle(restyler: CitationRestyler, mode: str) -> tuple[List[RestyledCitation], List[str]] | None:
    if mode == "bibtex":
        bibtex = st.text_area(
            "BibTeX entries",
            placeholder="@article{lecun2015deep, author = {LeCun, Yann and ...}, ...}",
            height=260,
        )
        if not st.button("Restyle citations"):
            return None
        if not bibtex.strip():
            st.warning("Paste at least one BibTeX entry first.")
            return None
        return restyler.restyle_bibliography(bibtex)

    apa = st.text_area("APA", height=90)
    mla = st.text_area("MLA", height=90)
    chicago = st.text_area("Chicago", height=90)
    if not st.button("Restyle citation"):
        return None
    if not (apa.strip() or mla.strip() or chicago.strip()):
        st.warning("Paste the citation text for at least one style.")
        return None
    return [restyler.restyle_prose({"APA": apa, "MLA": mla, "Chicago": chicago})], []


def main() -> None:
    st.set_page_config(page_title="Citation Restyler", layout="wide")
    st.title("Citation Restyler")
    st.caption("Convert BibTeX entries or rendered citations into IEEE and ACM references.")

    mode_label = st.selectbox("Input", list(INPUT_MODES.keys()), index=0)
    restyler = CitationRestyler()

    outcome = _restyle(restyler, INPUT_MODES[mode_label])
    if outcome is None:
        return
    results, errors = outcome
    for error in errors:
        st.error(error)
    if not results:
        st.info("No citations could be parsed.")
        return
    if any(result.source == "fallback" for result in results):
        st.warning("No citation style could be read; only the raw text was kept as the title.")

    for result in results:
        st.code(result.style_a, language=None)
        st.code(result.style_b, language=None)

    df = pd.DataFrame(_build_rows(results))
    st.dataframe(df, use_container_width=True, hide_index=True)

    st.download_button(
        "Download table (CSV)",
        data=df.to_csv(index=False).encode("utf-8"),
        file_name="restyled_citations.csv",
        mime="text/csv",
    )
    st.download_button(
        "Download BibTeX",
        data=to_bibtex([result.record for result in results]).encode("utf-8"),
        file_name="restyled_citations.bib",
        mime="application/x-bibtex",
    )


if __name__ == "__main__":
    main()
