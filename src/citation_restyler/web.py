"""FastAPI + Tailwind interface for the citation restyler.

Run with:
    uvicorn citation_restyler.web:app --reload
"""
from __future__ import annotations

from dataclasses import asdict
from html import escape
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .app import CitationRestyler
from .models import RestyledCitation

app = FastAPI(title="Citation Restyler", description="Convert citations to IEEE and ACM styles")

restyler = CitationRestyler()


class RestyleRequest(BaseModel):
    bibtex: Optional[str] = Field(None, description="One or more BibTeX entries")
    sources: Dict[str, str] = Field(
        default_factory=dict, description="Rendered citations keyed by dialect (APA, MLA, Chicago)"
    )


def _serialize(result: RestyledCitation) -> Dict[str, Any]:
    return {
        "source": result.source,
        "record": asdict(result.record),
        "ieee": result.style_a,
        "acm": result.style_b,
    }


def _layout(content: str) -> str:
    """Wrap provided content in a Tailwind-powered HTML page."""

    return f"""
    <!doctype html>
    <html lang=\"en\" class=\"h-full bg-gray-50\">
    <head>
        <meta charset=\"utf-8\" />
        <title>Citation Restyler</title>
        <link href=\"https://cdn.jsdelivr.net/npm/tailwindcss@3.4.4/dist/tailwind.min.css\" rel=\"stylesheet\" />
    </head>
    <body class=\"min-h-full py-10\">
        <div class=\"max-w-5xl mx-auto px-4\">
            <div class=\"bg-white shadow rounded-lg p-6\">
                <h1 class=\"text-3xl font-semibold text-gray-900\">Citation Restyler</h1>
                <p class=\"text-gray-600 mt-2\">Paste a BibTeX entry or the APA/MLA/Chicago text from a citation dialog to get IEEE and ACM versions.</p>
                {content}
            </div>
        </div>
    </body>
    </html>
    """


def _results_block(results: List[RestyledCitation], errors: List[str]) -> str:
    rows = []
    for result in results:
        rows.append(
            f"""
            <div class=\"border border-gray-200 rounded-md p-3 mt-3\">
                <p class=\"text-xs text-gray-500\">Source: {escape(result.source)}</p>
                <p class=\"mt-1\"><span class=\"font-semibold\">IEEE:</span> {escape(result.style_a)}</p>
                <p class=\"mt-1\"><span class=\"font-semibold\">ACM:</span> {escape(result.style_b)}</p>
            </div>
            """
        )
    for error in errors:
        rows.append(f"<p class=\"text-red-700 text-sm mt-3\">Error: {escape(error)}</p>")
    if not rows:
        rows.append("<p class=\"text-gray-600 mt-3\">No citations could be parsed.</p>")
    return f"""
    <div class=\"mt-8\">
        <h2 class=\"text-xl font-semibold text-gray-800\">Restyled Citations</h2>
        {''.join(rows)}
    </div>
    """


def _form_page(results_html: str = "") -> str:
    """Render the landing page with optional results."""

    bibtex_form = """
    <form action=\"/restyle-bibtex\" method=\"post\" class=\"bg-gray-50 border border-gray-200 rounded-lg p-4 mt-6\">
        <h2 class=\"text-xl font-semibold text-gray-800\">BibTeX</h2>
        <label class=\"block text-sm font-medium text-gray-700 mb-2\" for=\"bibtex\">BibTeX entries</label>
        <textarea name=\"bibtex\" required placeholder=\"@article{key, author = {...}, title = {...}}\" class=\"w-full h-44 border border-gray-300 rounded-md p-3 text-sm font-mono\"></textarea>
        <button type=\"submit\" class=\"mt-4 inline-flex items-center px-4 py-2 bg-indigo-600 text-white rounded-md shadow hover:bg-indigo-700\">Restyle BibTeX</button>
    </form>
    """

    citation_form = """
    <form action=\"/restyle-citation\" method=\"post\" class=\"bg-gray-50 border border-gray-200 rounded-lg p-4 mt-6\">
        <h2 class=\"text-xl font-semibold text-gray-800\">Rendered Citation</h2>
        <p class=\"text-gray-600 text-sm mb-3\">APA is preferred; MLA and Chicago are used when APA is missing or unreadable.</p>
        <label class=\"block text-sm font-medium text-gray-700 mb-1\" for=\"apa\">APA</label>
        <textarea name=\"apa\" class=\"w-full h-16 border border-gray-300 rounded-md p-2 text-sm\"></textarea>
        <label class=\"block text-sm font-medium text-gray-700 mb-1 mt-2\" for=\"mla\">MLA</label>
        <textarea name=\"mla\" class=\"w-full h-16 border border-gray-300 rounded-md p-2 text-sm\"></textarea>
        <label class=\"block text-sm font-medium text-gray-700 mb-1 mt-2\" for=\"chicago\">Chicago</label>
        <textarea name=\"chicago\" class=\"w-full h-16 border border-gray-300 rounded-md p-2 text-sm\"></textarea>
        <button type=\"submit\" class=\"mt-4 inline-flex items-center px-4 py-2 bg-indigo-600 text-white rounded-md shadow hover:bg-indigo-700\">Restyle Citation</button>
    </form>
    """

    return _layout(bibtex_form + citation_form + results_html)


@app.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    """Serve the BibTeX and rendered-citation forms."""

    return HTMLResponse(_form_page())


@app.post("/restyle-bibtex", response_class=HTMLResponse)
async def restyle_bibtex(bibtex: str = Form(...)) -> HTMLResponse:
    results, errors = restyler.restyle_bibliography(bibtex)
    return HTMLResponse(_form_page(_results_block(results, errors)))


@app.post("/restyle-citation", response_class=HTMLResponse)
async def restyle_citation(
    apa: str = Form(""), mla: str = Form(""), chicago: str = Form("")
) -> HTMLResponse:
    result = restyler.restyle_prose({"APA": apa, "MLA": mla, "Chicago": chicago})
    return HTMLResponse(_form_page(_results_block([result], [])))


@app.post("/api/restyle")
async def restyle_api(payload: RestyleRequest) -> Dict[str, Any]:
    """Restyle BibTeX entries or rendered citations and return JSON."""

    if payload.bibtex:
        results, errors = restyler.restyle_bibliography(payload.bibtex)
        if not results:
            raise HTTPException(status_code=400, detail=errors or ["no field records found"])
        return {"results": [_serialize(r) for r in results], "errors": errors}
    if payload.sources:
        return {"results": [_serialize(restyler.restyle_prose(payload.sources))], "errors": []}
    raise HTTPException(status_code=422, detail="Provide 'bibtex' or 'sources'")


def main() -> None:
    """Run the FastAPI app using uvicorn."""

    import uvicorn

    uvicorn.run("citation_restyler.web:app", host="0.0.0.0", port=8000, reload=False)


__all__ = ["app", "main"]
