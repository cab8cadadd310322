"""
Plain text out of résumé files.

DOCX paragraphs come from python-docx, PDF text layers from pdfplumber (no
OCR), TXT/MD is decoded as UTF-8. Blank lines are kept where the source has
them because entry extraction splits on them.
"""

import logging
from io import BytesIO
from statistics import median
from typing import Any, List

import pdfplumber
from docx import Document

from jobfill.core.errors import EmptyDocumentError, UnsupportedFormatError

logger = logging.getLogger(__name__)


DOCX_CONTENT_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
PDF_CONTENT_TYPES = {"application/pdf"}
TEXT_CONTENT_TYPES = {"text/plain", "text/markdown"}
TEXT_EXTENSIONS = (".txt", ".md")

# A vertical gap this many times the usual line spacing reads as a paragraph break
PARAGRAPH_GAP_FACTOR = 1.6


def extract_docx_text(docx_bytes: bytes) -> str:
    """Paragraph texts, one per line; empty paragraphs become blank lines."""
    doc = Document(BytesIO(docx_bytes))
    return "\n".join((p.text or "").strip() for p in doc.paragraphs).strip()


def _page_lines(page: Any, *, x_tolerance: float = 3, y_tolerance: float = 2, line_y_tolerance: float = 3) -> List[str]:
    """
    Group the words of a PDF page into lines by their top coordinate.

    A blank line is inserted wherever the gap to the previous line is clearly
    wider than the page's usual line spacing.
    """
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=y_tolerance,
        keep_blank_chars=False,
        use_text_flow=True,
    )
    if not words:
        return []

    words.sort(key=lambda w: (round(w["top"] / line_y_tolerance), w["x0"]))
    rows = []  # (top, [texts])
    current_key = None
    for w in words:
        key = round(w["top"] / line_y_tolerance)
        if key != current_key:
            rows.append((w["top"], []))
            current_key = key
        rows[-1][1].append(w["text"])

    gaps = [b[0] - a[0] for a, b in zip(rows, rows[1:])]
    usual_gap = median(gaps) if gaps else 0

    lines = [" ".join(rows[0][1])]
    for gap, (_, texts) in zip(gaps, rows[1:]):
        if usual_gap and gap > usual_gap * PARAGRAPH_GAP_FACTOR:
            lines.append("")
        lines.append(" ".join(texts))
    return lines


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """Text layer of every page, pages separated by a blank line."""
    pages = []
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        for page_i, page in enumerate(pdf.pages, start=1):
            lines = _page_lines(page)
            logger.debug(f"PDF page {page_i}: {len(lines)} lines")
            pages.append("\n".join(lines))
    return "\n\n".join(p for p in pages if p.strip())


def extract_resume_text(data: bytes, filename: str = "", content_type: str = "") -> str:
    """
    Dispatch on file name and content type.

    Raises EmptyDocumentError for empty input or a file without text, and
    UnsupportedFormatError for anything other than DOCX, PDF, TXT or MD.
    """
    if not data:
        raise EmptyDocumentError("Empty file")

    filename = (filename or "").lower()
    content_type = (content_type or "").lower()

    if filename.endswith(".docx") or content_type in DOCX_CONTENT_TYPES:
        text = extract_docx_text(data)
    elif filename.endswith(".pdf") or content_type in PDF_CONTENT_TYPES:
        text = extract_pdf_text(data)
        if not text.strip():
            raise EmptyDocumentError("PDF appears to have no extractable text. Scanned documents are not supported.")
    elif filename.endswith(TEXT_EXTENSIONS) or content_type in TEXT_CONTENT_TYPES:
        text = data.decode("utf-8", errors="replace")
    else:
        raise UnsupportedFormatError(f"Unsupported résumé format: {filename or content_type or 'unknown'}")

    if not text.strip():
        raise EmptyDocumentError(f"No text found in {filename or 'document'}")
    return text
