"""Fold partial form updates into the accumulated form record."""

from typing import Any, Callable, Dict, List

from resume_form_ai.schemas.form_record import FormRecord, FormUpdate, dedupe_preserving_order

MergeStrategy = Callable[[Any, Any], Any]


def overwrite(_old: Any, new: Any) -> Any:
    """Last write wins."""
    return new


def union_preserving_order(old: List[str], new: List[str]) -> List[str]:
    """Set union of both lists, first-seen order kept."""
    return dedupe_preserving_order(list(old or []) + list(new or []))


# FormRecord attribute -> merge strategy. Fields not listed are overwritten.
MERGE_STRATEGIES: Dict[str, MergeStrategy] = {
    "skills": union_preserving_order,
}


def register_merge_strategy(field_name: str, strategy: MergeStrategy) -> None:
    """Register the merge strategy for a FormRecord attribute."""
    if field_name not in FormRecord.model_fields:
        raise KeyError(f"Unknown form field: {field_name}")
    MERGE_STRATEGIES[field_name] = strategy


def merge_update(record: FormRecord, update: FormUpdate) -> FormRecord:
    """
    Return a new record with ``update`` folded in. Fields the update does not
    carry are left untouched; the input record is not mutated.
    """
    changes = update.changes()
    if not changes:
        return record
    merged = {
        name: MERGE_STRATEGIES.get(name, overwrite)(getattr(record, name), value)
        for name, value in changes.items()
    }
    return record.model_copy(update=merged)
