"""Turn working records into canonical records and order them."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, TypeVar

from linkedin_reports.demographics import apply_demographic_rows
from linkedin_reports.normalize import is_missing
from linkedin_reports.reconcile import WorkingRecord, apply_performance_rows
from linkedin_reports.schema import FIELD_DEFAULTS, SHEET_PERFORMANCE, SHEET_TOP_DEMOGRAPHICS, CanonicalRecord

T = TypeVar("T")


def assemble_record(record: WorkingRecord) -> CanonicalRecord:
    """Fit a working record to the canonical schema.

    Falsy values (0, "", nan) count as missing and take the field default,
    so a genuine zero count is indistinguishable from an absent one.
    """
    values: dict[str, Any] = {}
    for field_name, default in FIELD_DEFAULTS.items():
        value = record.get(field_name)
        values[field_name.value] = default if is_missing(value) else value
    return CanonicalRecord(**values)


def build_record(sheets: Mapping[str, Sequence[Sequence[Any]]]) -> CanonicalRecord:
    """Build one canonical record from a document's decoded sheet grids.

    Args:
        sheets: Sheet name -> rows of cell values. Either sheet may be absent;
            a document with neither yields an all-default record.
    """
    record = WorkingRecord()
    performance = sheets.get(SHEET_PERFORMANCE)
    if performance:
        record = apply_performance_rows(record, performance)
    demographics = sheets.get(SHEET_TOP_DEMOGRAPHICS)
    if demographics:
        record = apply_demographic_rows(record, demographics)
    return assemble_record(record)


def recency_key(item: Any) -> str:
    return item.post_date or ""


def sort_by_recent_date(items: Iterable[T]) -> list[T]:
    """Most recent post_date first; undated items last.

    Works on anything with a post_date attribute: canonical records or the
    processed documents that carry them.
    """
    return sorted(items, key=recency_key, reverse=True)
