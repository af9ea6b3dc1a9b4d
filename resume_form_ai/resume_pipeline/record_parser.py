"""Parse one ``key::value`` response line into a typed partial form update."""

from typing import Callable, Dict, List, Optional

from pydantic import ValidationError

from resume_form_ai.resume_pipeline.prompt_builder import RECORD_SEPARATOR
from resume_form_ai.schemas.form_record import EMPLOYMENT_STATUS_VALUES, FORM_FIELD_KEYS, FormUpdate
from resume_form_ai.utils.exceptions import MalformedRecordError
from resume_form_ai.utils.logger import get_logger

logger = get_logger(__name__)


def _coerce_skills(value: str) -> List[str]:
    return [s.strip() for s in value.split(",") if s.strip()]


def _coerce_languages(value: str) -> str:
    return value.split(",")[0].strip()


def _coerce_employment_status(value: str) -> str:
    if value not in EMPLOYMENT_STATUS_VALUES:
        raise MalformedRecordError(value, "invalid employmentStatus")
    return value


# Wire key -> value coercion; keys not listed keep the trimmed string
VALUE_COERCERS: Dict[str, Callable[[str], object]] = {
    "skills": _coerce_skills,
    "languages": _coerce_languages,
    "employmentStatus": _coerce_employment_status,
}


def parse_record_strict(line: str) -> FormUpdate:
    """Parse a line or raise MalformedRecordError."""
    parts = line.split(RECORD_SEPARATOR)
    if len(parts) != 2:
        raise MalformedRecordError(line, f"expected one '{RECORD_SEPARATOR}' separator")
    key = parts[0].strip()
    value = parts[1].strip()
    if key not in FORM_FIELD_KEYS:
        raise MalformedRecordError(line, "unrecognized key")

    coerce = VALUE_COERCERS.get(key)
    try:
        coerced = coerce(value) if coerce else value
        return FormUpdate.model_validate({key: coerced})
    except MalformedRecordError as e:
        raise MalformedRecordError(line, e.reason) from e
    except ValidationError as e:
        raise MalformedRecordError(line, "schema validation failed") from e


def parse_record(line: str) -> Optional[FormUpdate]:
    """
    Parse one trimmed response line. Returns None for malformed lines, unknown
    keys and invalid employment statuses; nothing is surfaced to the caller.
    """
    if not line or not line.strip():
        return None
    try:
        return parse_record_strict(line.strip())
    except MalformedRecordError as e:
        logger.debug("Dropped response line (%s): %r", e.reason, e.line)
        return None
