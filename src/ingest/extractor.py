"""Main dispatcher for text extraction.

Classifies a stored file by content type and extension, then either reads
it verbatim, scrapes it as a PDF, or returns a placeholder.

Classification (first match wins)
---------------------------------
* content type contains ``text`` / ``json`` / ``xml``, or the extension is
  in :data:`TEXT_EXTENSIONS` — read as UTF-8.
* content type contains ``pdf`` or the extension is ``.pdf`` — via
  :func:`~src.ingest.pdf_reader.extract_pdf`.
* anything else — :data:`UNSUPPORTED_TEMPLATE`.

Usage::

    from src.ingest import extract_text

    text = extract_text("uploads/1234_report.pdf", "application/pdf")

Extraction is best-effort: callers never see an exception, only text or a
human-readable placeholder.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from .pdf_reader import extract_pdf

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = frozenset({
    ".txt", ".md", ".csv", ".json", ".xml",
    ".html", ".htm", ".log", ".yaml", ".yml",
})

_TEXT_CONTENT_MARKERS = ("text", "json", "xml")

UNSUPPORTED_TEMPLATE = (
    "[File: {name}] - ไม่สามารถอ่านเนื้อหาได้โดยอัตโนมัติ "
    "กรุณาใช้ OCR หรือใส่ข้อมูลเอง"
)
READ_FAILURE_TEMPLATE = "[File: {name}] - ไม่สามารถอ่านเนื้อหาไฟล์ได้"


def _is_text_based(content_type: str, extension: str) -> bool:
    if any(marker in content_type for marker in _TEXT_CONTENT_MARKERS):
        return True
    return extension in TEXT_EXTENSIONS


def _is_pdf(content_type: str, extension: str) -> bool:
    return "pdf" in content_type or extension == ".pdf"


def can_extract(content_type: Optional[str], file_name: str) -> bool:
    """Whether :func:`extract_text` would read or scrape this file."""
    ctype = (content_type or "").lower()
    extension = Path(file_name).suffix.lower()
    return _is_text_based(ctype, extension) or _is_pdf(ctype, extension)


def _read_text_verbatim(file_path: str) -> str:
    # newline="" keeps the file's own line endings
    with open(file_path, "r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read()


def extract_text(file_path: str, content_type: Optional[str] = None) -> str:
    """Extract plain text from the file at *file_path*.

    Parameters
    ----------
    file_path : str
        Path of the stored upload.
    content_type : str, optional
        MIME type reported at upload time.

    Returns
    -------
    str
        The file's text, or a placeholder explaining why none is available.
    """
    name = Path(file_path).name
    ctype = (content_type or "").lower()
    extension = Path(file_path).suffix.lower()

    try:
        if _is_text_based(ctype, extension):
            logger.info("Extracting text from text-based file: %s", file_path)
            return _read_text_verbatim(file_path)

        if _is_pdf(ctype, extension):
            logger.info("Extracting text from PDF: %s", file_path)
            return extract_pdf(file_path)
    except Exception as exc:
        logger.error("Error extracting text from %s: %s", file_path, exc)
        return READ_FAILURE_TEMPLATE.format(name=name)

    logger.warning("Unsupported file format: %s, %s", content_type, extension)
    return UNSUPPORTED_TEMPLATE.format(name=name)


async def extract_text_async(file_path: str, content_type: Optional[str] = None) -> str:
    """:func:`extract_text` on a worker thread; cancellation propagates."""
    return await asyncio.to_thread(extract_text, file_path, content_type)
