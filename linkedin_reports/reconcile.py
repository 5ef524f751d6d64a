"""Map PERFORMANCE sheet labels onto the canonical schema.

The PERFORMANCE sheet is a key-value layout. A few labels are plural/singular
variants of the same metric, two are date/time cells that need reformatting,
and three ("Top job title", "Top location", "Top industry") appear twice:
once in the reactions block and once in the comments block, with nothing but
their order to tell them apart.
"""

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from linkedin_reports.normalize import clean_label, clean_value, format_date, format_time, is_valid_row
from linkedin_reports.schema import CanonicalField

logger = logging.getLogger(__name__)

SYNONYMS: dict[str, CanonicalField] = {
    "comment": CanonicalField.COMMENTS,
    "comments": CanonicalField.COMMENTS,
    "impression": CanonicalField.IMPRESSIONS,
    "impressions": CanonicalField.IMPRESSIONS,
    "reaction": CanonicalField.REACTIONS,
    "reactions": CanonicalField.REACTIONS,
    "repost": CanonicalField.REPOSTS,
    "reposts": CanonicalField.REPOSTS,
}

FORMATTERS: dict[str, tuple[CanonicalField, Callable[[Any], str]]] = {
    "post_publish_time": (CanonicalField.POST_PUBLISH_TIME, format_time),
    "post_date": (CanonicalField.POST_DATE, format_date),
}

# label -> (first occurrence, second and later occurrences)
# The slot depends on how often the label was seen, not on the value already
# stored: a first value of 0 still fills the reactions slot.
AMBIGUOUS_LABELS: dict[str, tuple[CanonicalField, CanonicalField]] = {
    "top_job_title": (
        CanonicalField.REACTIONS_TOP_JOB_TITLE,
        CanonicalField.COMMENTS_TOP_JOB_TITLE,
    ),
    "top_location": (
        CanonicalField.REACTIONS_TOP_LOCATION,
        CanonicalField.COMMENTS_TOP_LOCATION,
    ),
    "top_industry": (
        CanonicalField.REACTIONS_TOP_INDUSTRY,
        CanonicalField.COMMENTS_TOP_INDUSTRY,
    ),
}


@dataclass
class WorkingRecord:
    """Fields collected for one export before they are fitted to the schema.

    Keys are plain strings: canonical field names plus any pass-through
    labels the export happens to contain (e.g. "saves"), which the
    assembler later drops.
    """

    values: dict[str, Any] = field(default_factory=dict)
    occurrences: Counter = field(default_factory=Counter)

    def set(self, key: CanonicalField | str, value: Any) -> None:
        name = key.value if isinstance(key, CanonicalField) else key
        self.values[name] = value

    def get(self, key: CanonicalField | str, default: Any = None) -> Any:
        name = key.value if isinstance(key, CanonicalField) else key
        return self.values.get(name, default)

    def __contains__(self, key: object) -> bool:
        name = key.value if isinstance(key, CanonicalField) else key
        return name in self.values

    def resolve_slot(self, label: str) -> CanonicalField:
        """Return the slot for this occurrence of an ambiguous label and count it."""
        first, second = AMBIGUOUS_LABELS[label]
        slot = first if self.occurrences[label] == 0 else second
        self.occurrences[label] += 1
        return slot


def reconcile_pair(record: WorkingRecord, label: str, value: str | float) -> None:
    """Store one cleaned (label, value) pair, first matching rule wins."""
    synonym = SYNONYMS.get(label)
    if synonym is not None:
        record.set(synonym, value)
        return

    if label in FORMATTERS:
        target, formatter = FORMATTERS[label]
        record.set(target, formatter(value))
        return

    if label in AMBIGUOUS_LABELS:
        record.set(record.resolve_slot(label), value)
        return

    record.set(label, value)


def apply_performance_rows(record: WorkingRecord, rows: Iterable[Sequence[Any]]) -> WorkingRecord:
    """Fold PERFORMANCE sheet rows (label | value | ...) into the record."""
    skipped = 0
    for row in rows:
        raw_label, raw_value = (list(row) + [None, None])[:2]
        label = clean_label(raw_label)
        value = clean_value(raw_value)
        if not is_valid_row(label, value):
            skipped += 1
            continue
        reconcile_pair(record, label, value)
    if skipped:
        logger.debug("Skipped %d empty PERFORMANCE rows", skipped)
    return record
