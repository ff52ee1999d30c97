"""Write the current draft to .txt, .md or .pdf."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from fpdf import FPDF

logger = logging.getLogger(__name__)

PDF_HEADER = "WRITEMOTION // GENERATED DRAFT"
SUPPORTED_SUFFIXES = (".txt", ".md", ".pdf")

# Core PDF fonts are latin-1 only.
_PDF_REPLACEMENTS = {
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "–": "-",
    "—": "-",
    "…": "...",
}


def _latin1(text: str) -> str:
    for src, dst in _PDF_REPLACEMENTS.items():
        text = text.replace(src, dst)
    return text.encode("latin-1", errors="replace").decode("latin-1")


class _DraftPDF(FPDF):
    def header(self) -> None:
        self.set_font("Courier", size=8)
        self.cell(0, 5, PDF_HEADER, new_x="LMARGIN", new_y="NEXT")
        if self.page_no() == 1:
            self.cell(0, 5, f"DATE: {date.today().isoformat()}", new_x="LMARGIN", new_y="NEXT")
        self.ln(5)
        self.set_font("Courier", size=11)


def render_pdf(text: str) -> bytes:
    """Render a plain-text draft to PDF bytes, one block per paragraph."""
    pdf = _DraftPDF()
    pdf.set_margins(20, 20, 20)
    pdf.set_auto_page_break(auto=True, margin=20)
    pdf.add_page()
    for paragraph in text.split("\n\n"):
        pdf.multi_cell(0, 6, _latin1(paragraph.strip()), new_x="LMARGIN", new_y="NEXT")
        pdf.ln(3)
    return bytes(pdf.output())


def export_draft(text: str, path: str | Path) -> Path:
    """Write ``text`` to ``path``; the format follows the file suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported export format {suffix!r}; use one of {', '.join(SUPPORTED_SUFFIXES)}")

    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".pdf":
        path.write_bytes(render_pdf(text))
    else:
        path.write_text(text, encoding="utf-8")
    logger.debug("Exported %d chars to %s", len(text), path)
    return path
