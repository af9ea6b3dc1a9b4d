"""Extract raw text from uploaded résumé files (PDF, DOCX, TXT). In-memory only."""

import asyncio
import re
import unicodedata
from io import BytesIO
from pathlib import PurePath
from typing import BinaryIO, Callable, Dict, Optional, Union

from resume_form_ai.config import (
    DOCX_MIME_TYPE,
    MAX_RESUME_CHARS,
    PDF_MIME_TYPE,
    SUFFIX_MIME_TYPES,
    SUPPORTED_MIME_TYPES,
    TEXT_MIME_TYPE,
)
from resume_form_ai.utils.exceptions import ExtractionError, UnsupportedFormatError
from resume_form_ai.utils.logger import get_logger

logger = get_logger(__name__)

FileSource = Union[bytes, bytearray, BinaryIO]


def _normalize_unicode(text: str) -> str:
    """Normalize unicode (NFC)."""
    if not text:
        return ""
    return unicodedata.normalize("NFC", text)


def _clean_resume_text(text: str, max_chars: int = MAX_RESUME_CHARS) -> str:
    """Remove excessive whitespace and normalize unicode for résumé content."""
    if not text or not text.strip():
        return ""
    t = _normalize_unicode(text)
    t = re.sub(r"[ \t]+", " ", t)
    t = re.sub(r"\n\s*\n\s*\n", "\n\n", t)
    t = t.strip()
    if len(t) > max_chars:
        t = t[:max_chars] + "\n\n[Content truncated.]"
    return t


def _extract_pdf(data: bytes) -> str:
    """Extract text from PDF using pdfplumber: words joined by spaces, one line per page."""
    import pdfplumber

    pages = []
    with pdfplumber.open(BytesIO(data)) as pdf:
        for number, page in enumerate(pdf.pages, start=1):
            try:
                words = page.extract_words()
            except Exception as e:
                # A broken page should not cost the rest of the document
                logger.warning("Skipping unreadable PDF page %s: %s", number, e)
                continue
            pages.append(" ".join(w["text"] for w in words))
    return "\n".join(pages)


def _extract_docx(data: bytes) -> str:
    """Extract raw text from DOCX using python-docx (paragraphs, then table rows)."""
    from docx import Document

    doc = Document(BytesIO(data))
    parts = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            # Merged cells are repeated by python-docx
            cells = list(dict.fromkeys(c.text.strip() for c in row.cells if c.text.strip()))
            if cells:
                parts.append(" ".join(cells))
    return "\n\n".join(parts)


def _extract_plain_text(data: bytes) -> str:
    """Decode a text file as UTF-8 (BOM tolerated, bad bytes replaced)."""
    return data.decode("utf-8-sig", errors="replace")


_EXTRACTORS: Dict[str, Callable[[bytes], str]] = {
    PDF_MIME_TYPE: _extract_pdf,
    DOCX_MIME_TYPE: _extract_docx,
    TEXT_MIME_TYPE: _extract_plain_text,
}


def mime_type_for_filename(filename: str) -> Optional[str]:
    """Declared type for a file name, based on its suffix. None if unsupported."""
    return SUFFIX_MIME_TYPES.get(PurePath(filename or "").suffix.lower())


async def _read_bytes(file: FileSource) -> bytes:
    """Read the whole upload off the event loop."""
    if isinstance(file, (bytes, bytearray)):
        return bytes(file)
    try:
        if hasattr(file, "seek") and getattr(file, "seekable", lambda: True)():
            file.seek(0)
        data = await asyncio.to_thread(file.read)
    except (OSError, ValueError) as e:
        raise ExtractionError(f"Failed to read uploaded file: {e}") from e
    if isinstance(data, str):
        data = data.encode("utf-8")
    return data or b""


async def extract_text_from_file(file: FileSource, mime_type: Optional[str]) -> str:
    """
    Extract and clean text from an uploaded résumé, dispatching on declared MIME type.
    Raises UnsupportedFormatError before reading anything if the type is not
    PDF, DOCX or plain text; raises ExtractionError if no text can be produced.
    """
    declared = (mime_type or "").split(";")[0].strip().lower()
    if declared not in SUPPORTED_MIME_TYPES:
        logger.warning("Unsupported file type: %s", mime_type)
        raise UnsupportedFormatError(mime_type)

    data = await _read_bytes(file)
    extractor = _EXTRACTORS[declared]
    try:
        raw = await asyncio.to_thread(extractor, data)
    except ImportError as e:
        logger.error("Text extraction library missing for %s: %s", declared, e)
        raise ExtractionError(f"Extraction library unavailable for {declared}") from e
    except Exception as e:
        logger.exception("Text extraction failed for %s: %s", declared, e)
        raise ExtractionError(f"Failed to extract text from {declared} file: {e}") from e

    text = _clean_resume_text(raw)
    if not text:
        raise ExtractionError(f"No text found in {declared} file")
    logger.info("Extracted %s chars from %s upload", len(text), declared)
    return text
