"""Error taxonomy for résumé upload attempts."""

from typing import Optional

GENERIC_EXTRACTION_MESSAGE = (
    "Could not read text from the uploaded file. Please fill the form manually or try another file."
)
GENERIC_STREAM_MESSAGE = "Failed to parse resume text. Please check the content or try again."


class ResumeFormError(Exception):
    """Base class for errors that abort an upload attempt."""

    user_message: str = "An unknown error occurred."

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        if user_message is not None:
            self.user_message = user_message


class UnsupportedFormatError(ResumeFormError):
    """Declared file type is not PDF, DOCX or plain text. Shown to the user as is."""

    def __init__(self, mime_type: Optional[str]):
        message = "Unsupported file type. Please upload a PDF, DOCX, or TXT file."
        super().__init__(f"{message} (got {mime_type or 'unknown'})", user_message=message)
        self.mime_type = mime_type


class ExtractionError(ResumeFormError):
    """A format library or file read failed to produce text."""

    user_message = GENERIC_EXTRACTION_MESSAGE


class StreamError(ResumeFormError):
    """The model backend call failed or its stream ended abnormally."""

    user_message = GENERIC_STREAM_MESSAGE


class MalformedRecordError(ValueError):
    """One response line failed schema validation. Never leaves the parser."""

    def __init__(self, line: str, reason: str):
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason
