"""Utility exports."""

from .exceptions import (
    ExtractionError,
    MalformedRecordError,
    ResumeFormError,
    StreamError,
    UnsupportedFormatError,
)
from .logger import get_logger

__all__ = [
    "get_logger",
    "ResumeFormError",
    "UnsupportedFormatError",
    "ExtractionError",
    "StreamError",
    "MalformedRecordError",
]
