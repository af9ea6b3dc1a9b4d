"""Résumé pipeline: text extraction (PDF/DOCX/TXT), streamed LLM extraction, form merging."""

from .form_controller import FillMode, ResumeFormController, UploadState
from .merger import MERGE_STRATEGIES, merge_update, register_merge_strategy
from .prompt_builder import build_extraction_prompt
from .record_parser import parse_record
from .resume_streamer import StreamStats, openai_text_stream, stream_form_updates
from .stream_tokenizer import LineBuffer, iter_lines
from .text_extractor import extract_text_from_file, mime_type_for_filename

__all__ = [
    "extract_text_from_file",
    "mime_type_for_filename",
    "build_extraction_prompt",
    "LineBuffer",
    "iter_lines",
    "parse_record",
    "merge_update",
    "register_merge_strategy",
    "MERGE_STRATEGIES",
    "stream_form_updates",
    "openai_text_stream",
    "StreamStats",
    "ResumeFormController",
    "UploadState",
    "FillMode",
]
