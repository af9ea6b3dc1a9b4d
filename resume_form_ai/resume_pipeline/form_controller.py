"""
Form controller: owns the registration form state and runs résumé upload attempts.

Attempt lifecycle: IDLE -> EXTRACTING -> STREAMING -> COMPLETE, with ERRORED
reachable from EXTRACTING or STREAMING. Every upload gets a new attempt id;
anything produced by an attempt that is no longer current is discarded.
"""

from enum import Enum
from typing import Any, Callable, Optional

from resume_form_ai.resume_pipeline.merger import merge_update, union_preserving_order
from resume_form_ai.resume_pipeline.resume_streamer import StreamStats, TextStream, stream_form_updates
from resume_form_ai.resume_pipeline.text_extractor import FileSource, extract_text_from_file
from resume_form_ai.schemas.form_record import FORM_FIELD_KEYS, FormRecord, FormUpdate
from resume_form_ai.utils.exceptions import ResumeFormError
from resume_form_ai.utils.logger import get_logger

logger = get_logger(__name__)


class UploadState(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    STREAMING = "streaming"
    COMPLETE = "complete"
    ERRORED = "errored"


class FillMode(str, Enum):
    MANUAL = "manual"
    RESUME = "resume"


class ResumeFormController:
    """Authoritative form state plus the upload pipeline that fills it."""

    def __init__(
        self,
        text_stream: Optional[TextStream] = None,
        on_change: Optional[Callable[[FormRecord], None]] = None,
    ) -> None:
        self.record = FormRecord()
        self.state = UploadState.IDLE
        self.fill_mode = FillMode.MANUAL
        self.error: Optional[str] = None
        self.attempt_id = 0
        self.last_stats: Optional[StreamStats] = None
        self._text_stream = text_stream
        self.on_change = on_change

    @property
    def is_loading(self) -> bool:
        return self.state in (UploadState.EXTRACTING, UploadState.STREAMING)

    def is_current(self, attempt_id: int) -> bool:
        return attempt_id == self.attempt_id

    def reset(self) -> None:
        """Supersede any in-flight attempt and clear the form."""
        self.attempt_id += 1
        self.record = FormRecord()
        self.state = UploadState.IDLE
        self.error = None
        self.last_stats = None

    def _begin_attempt(self) -> int:
        self.reset()
        self.fill_mode = FillMode.RESUME
        self.state = UploadState.EXTRACTING
        return self.attempt_id

    def _fail(self, attempt_id: int, error: ResumeFormError) -> None:
        if not self.is_current(attempt_id):
            return
        self.state = UploadState.ERRORED
        self.error = error.user_message
        self.fill_mode = FillMode.MANUAL

    def apply_update(self, attempt_id: int, update: FormUpdate) -> bool:
        """Merge one streamed update if its attempt is still current."""
        if not self.is_current(attempt_id):
            logger.debug("Discarding update from stale attempt %s (current %s)", attempt_id, self.attempt_id)
            return False
        self.record = merge_update(self.record, update)
        if self.on_change is not None:
            self.on_change(self.record)
        return True

    async def handle_upload(self, file: FileSource, mime_type: Optional[str]) -> FormRecord:
        """
        Run one upload attempt end to end. Failures are recorded on ``error``
        and ``state`` rather than raised; fields merged before a stream failure
        stay on the form.
        """
        attempt_id = self._begin_attempt()
        logger.info("Upload attempt %s started: type=%s", attempt_id, mime_type)
        try:
            resume_text = await extract_text_from_file(file, mime_type)
            if not self.is_current(attempt_id):
                return self.record
            self.state = UploadState.STREAMING
            stats = await stream_form_updates(
                resume_text,
                lambda update: self.apply_update(attempt_id, update),
                text_stream=self._text_stream,
            )
        except ResumeFormError as e:
            logger.warning("Upload attempt %s failed: %s", attempt_id, e)
            self._fail(attempt_id, e)
            return self.record

        if self.is_current(attempt_id):
            self.state = UploadState.COMPLETE
            self.last_stats = stats
            logger.info("Upload attempt %s complete: records=%s", attempt_id, stats.records)
        return self.record

    # ----- Direct user edits -----

    def set_mode(self, mode: FillMode) -> None:
        """Switch fill mode. Going back to manual clears the error and the form."""
        mode = FillMode(mode)
        if mode is FillMode.MANUAL:
            self.reset()
        self.fill_mode = mode

    def set_field(self, name: str, value: Any) -> FormRecord:
        """Set one field by wire key or attribute name, validated by FormRecord."""
        attr = FORM_FIELD_KEYS.get(name, name)
        if attr not in FormRecord.model_fields:
            raise KeyError(f"Unknown form field: {name}")
        self.record = FormRecord.model_validate({**self.record.model_dump(), attr: value})
        return self.record

    def add_skills(self, text: str) -> FormRecord:
        """Add comma-separated skills typed by the user, skipping ones already present."""
        new_skills = [s.strip() for s in (text or "").split(",") if s.strip()]
        if new_skills:
            skills = union_preserving_order(self.record.skills, new_skills)
            self.record = self.record.model_copy(update={"skills": skills})
        return self.record

    def remove_skill(self, skill: str) -> FormRecord:
        skills = [s for s in self.record.skills if s != skill]
        self.record = self.record.model_copy(update={"skills": skills})
        return self.record
