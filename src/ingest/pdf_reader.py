"""Best-effort PDF text extraction.

Extraction order:
  1. Text-object scrape — decode the raw bytes as (lossy) UTF-8 and pick up
     the glyph-show lines (``Tj`` / ``TJ``) between ``BT`` and ``ET``.
     Works for simple, uncompressed PDFs and needs no parser.
  2. pdfplumber — used only when the scrape recovers nothing, which is the
     usual case for compressed content streams.

When neither yields text the file is most likely a scanned image and a
placeholder asking for OCR is returned.  Nothing in this module raises for
the caller.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

import pdfplumber

logger = logging.getLogger(__name__)

SCANNED_PDF_PLACEHOLDER = "[PDF file] - เอกสาร PDF นี้อาจเป็น scan ต้องใช้ OCR ในการอ่าน"
PDF_FAILURE_PLACEHOLDER = "[PDF file] - ไม่สามารถอ่านเนื้อหา PDF ได้"

# Everything outside printable ASCII and the Thai block
_UNPRINTABLE = re.compile(r"[^\u0020-\u007E\u0E00-\u0E7F]")


def scrape_text_objects(raw: bytes) -> str:
    """Collect cleaned ``Tj``/``TJ`` lines found inside ``BT`` … ``ET`` blocks."""
    text = raw.decode("utf-8", errors="replace")
    collected: List[str] = []
    in_text_block = False

    for line in text.split("\n"):
        if "BT" in line:
            in_text_block = True
        if in_text_block and ("Tj" in line or "TJ" in line):
            clean = _UNPRINTABLE.sub(" ", line).strip()
            if clean:
                collected.append(clean)
        if "ET" in line:
            in_text_block = False

    return "\n".join(collected)


def _extract_with_pdfplumber(file_path: str) -> str:
    try:
        with pdfplumber.open(file_path) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as exc:
        logger.debug("pdfplumber could not open %s: %s", file_path, exc)
        return ""
    return "\n\n".join(p.strip() for p in pages if p.strip())


def extract_pdf(file_path: str) -> str:
    """Return the recoverable text of a PDF, or a placeholder."""
    try:
        raw = Path(file_path).read_bytes()
        text = scrape_text_objects(raw)
        if not text.strip():
            text = _extract_with_pdfplumber(file_path)
            if text:
                logger.info("pdfplumber recovered %d chars from %s", len(text), file_path)
        if not text.strip():
            logger.warning("No text recovered from PDF (likely scanned): %s", file_path)
            return SCANNED_PDF_PLACEHOLDER
        return text
    except Exception as exc:
        logger.warning("PDF extraction failed for %s: %s", file_path, exc)
        return PDF_FAILURE_PLACEHOLDER
