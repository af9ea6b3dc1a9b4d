"""Schema exports."""

from .form_record import (
    EMPLOYMENT_STATUS_VALUES,
    FORM_FIELD_KEYS,
    FormRecord,
    FormUpdate,
)

__all__ = ["FormRecord", "FormUpdate", "FORM_FIELD_KEYS", "EMPLOYMENT_STATUS_VALUES"]
