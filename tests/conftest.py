import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

import pytest

from citation_restyler.models import StructuredRecord


@pytest.fixture()
def lecun_bibtex() -> str:
    """A Scholar-style BibTeX export with nested braces and mixed delimiters."""

    return """@Article{lecun2015deep,
  title = {Deep {Learning} for
           {IEEE} Readers},
  author = "LeCun, Yann and {Bengio}, Yoshua and Hinton, Geoffrey",
  journal = {nature},
  volume = {521},
  number = 7553,
  pages = {436--444},
  year = {2015},
  publisher = {Nature Publishing Group}
}"""


@pytest.fixture()
def lecun_record() -> StructuredRecord:
    return StructuredRecord(
        entry_type="article",
        authors=("LeCun, Yann", "Bengio, Yoshua", "Hinton, Geoffrey"),
        title="Deep learning",
        year="2015",
        journal="nature",
        volume="521",
        number="7553",
        pages="436-444",
    )


@pytest.fixture()
def bibliography_path(tmp_path: Path, lecun_bibtex: str) -> Path:
    text = lecun_bibtex + """

@inproceedings{he2016deep,
  author = {He, Kaiming and Zhang, Xiangyu and Ren, Shaoqing and Sun, Jian},
  title = {Deep Residual Learning for Image Recognition},
  booktitle = {Proceedings of the IEEE Conference on Computer Vision and Pattern Recognition.},
  pages = {770--778},
  year = {2016}
}
"""
    path = tmp_path / "refs.bib"
    path.write_text(text, encoding="utf-8")
    return path
