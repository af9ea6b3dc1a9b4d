import asyncio
import io
from io import BytesIO

import pytest
from docx import Document

from resume_form_ai.config import DOCX_MIME_TYPE, PDF_MIME_TYPE, TEXT_MIME_TYPE
from resume_form_ai.resume_pipeline.text_extractor import extract_text_from_file, mime_type_for_filename
from resume_form_ai.utils.exceptions import ExtractionError, UnsupportedFormatError


class ExplodingFile:
    """File handle that must never be read."""

    def read(self):
        raise AssertionError("file should not be read")


class FakePage:
    def __init__(self, words=None, error=None):
        self._words = words or []
        self._error = error

    def extract_words(self):
        if self._error:
            raise self._error
        return [{"text": w} for w in self._words]


class FakePdf:
    def __init__(self, pages):
        self.pages = pages

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _extract(file, mime_type):
    return asyncio.run(extract_text_from_file(file, mime_type))


def _docx_bytes() -> bytes:
    doc = Document()
    doc.add_paragraph("Jane Doe")
    doc.add_paragraph("")
    doc.add_paragraph("Senior Data Engineer")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Skills"
    table.rows[0].cells[1].text = "Python, SQL"
    out = BytesIO()
    doc.save(out)
    return out.getvalue()


def test_plain_text_from_bytes():
    assert _extract(b"Jane Doe\nPython developer", TEXT_MIME_TYPE) == "Jane Doe\nPython developer"


def test_plain_text_from_file_handle_with_bom():
    handle = BytesIO("\ufeffJos\u00e9 N\u00fa\u00f1ez\n".encode("utf-8"))
    handle.read()  # already consumed by an earlier reader
    assert _extract(handle, "text/plain; charset=utf-8") == "Jos\u00e9 N\u00fa\u00f1ez"


def test_unsupported_type_rejected_before_reading():
    with pytest.raises(UnsupportedFormatError) as excinfo:
        _extract(ExplodingFile(), "image/png")
    assert excinfo.value.user_message == "Unsupported file type. Please upload a PDF, DOCX, or TXT file."


def test_missing_type_rejected():
    with pytest.raises(UnsupportedFormatError):
        _extract(b"hello", None)


def test_read_error_becomes_extraction_error():
    class BrokenFile:
        def read(self):
            raise OSError("disk gone")

    with pytest.raises(ExtractionError):
        _extract(BrokenFile(), TEXT_MIME_TYPE)


def test_non_seekable_handle_is_read_without_rewinding():
    class PipeFile:
        def seekable(self):
            return False

        def seek(self, offset):
            raise io.UnsupportedOperation("seek")

        def read(self):
            return b"Jane Doe\nPython developer"

    assert _extract(PipeFile(), TEXT_MIME_TYPE) == "Jane Doe\nPython developer"


def test_blank_document_is_rejected_rather_than_sent_to_model():
    with pytest.raises(ExtractionError):
        _extract(b"   \n\n", TEXT_MIME_TYPE)


def test_docx_paragraphs_and_tables():
    text = _extract(_docx_bytes(), DOCX_MIME_TYPE)
    assert text == "Jane Doe\n\nSenior Data Engineer\n\nSkills Python, SQL"


def test_corrupt_docx_raises_extraction_error():
    with pytest.raises(ExtractionError):
        _extract(b"not a zip archive", DOCX_MIME_TYPE)


def test_pdf_pages_in_order_with_words_space_joined(monkeypatch):
    import pdfplumber

    pages = [FakePage(["Jane", "Doe"]), FakePage(error=ValueError("bad page")), FakePage(["Python", "SQL"])]
    monkeypatch.setattr(pdfplumber, "open", lambda _stream: FakePdf(pages))
    assert _extract(b"%PDF-1.7", PDF_MIME_TYPE) == "Jane Doe\nPython SQL"


def test_pdf_library_failure_raises_extraction_error(monkeypatch):
    import pdfplumber

    def fail(_stream):
        raise RuntimeError("no /Root object")

    monkeypatch.setattr(pdfplumber, "open", fail)
    with pytest.raises(ExtractionError) as excinfo:
        _extract(b"garbage", PDF_MIME_TYPE)
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_long_text_is_truncated():
    from resume_form_ai.resume_pipeline.text_extractor import _clean_resume_text

    assert _clean_resume_text("abc   def\n\n\n\nghijklmnop", max_chars=12) == "abc def\n\nghi\n\n[Content truncated.]"


@pytest.mark.parametrize(
    "name,expected",
    [
        ("cv.PDF", PDF_MIME_TYPE),
        ("resume.docx", DOCX_MIME_TYPE),
        ("notes.txt", TEXT_MIME_TYPE),
        ("photo.png", None),
        ("", None),
    ],
)
def test_mime_type_for_filename(name, expected):
    assert mime_type_for_filename(name) == expected
