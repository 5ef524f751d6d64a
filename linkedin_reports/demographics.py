"""Map TOP DEMOGRAPHICS "Company size" rows onto employee-count buckets.

Rows look like: Company size | 1001-5000 employees | 0.18
The size label is reduced to a range token ("1001_to_5000", "10001") and
prefixed with "employees_"; the open-ended top bucket gets "_or_more".
"""

import re
from collections.abc import Iterable, Sequence
from typing import Any

from linkedin_reports.normalize import clean_label, clean_value
from linkedin_reports.reconcile import WorkingRecord

COMPANY_SIZE = "company_size"
OPEN_ENDED_BUCKET = "10001"

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"\W")


def range_token(raw: Any) -> str:
    """Reduce a size label to its range token.

    "1-10 employees" -> "1_to_10", "10,001+ employees" -> "10001".
    """
    token = _WHITESPACE.sub("_", str(raw or "").strip().lower())
    token = token.replace("-", "_to_")
    token = _NON_WORD.sub("", token)
    return token.replace("_employees", "", 1)


def bucket_field_name(raw: Any) -> str:
    key = f"employees_{range_token(raw)}"
    if key.endswith(OPEN_ENDED_BUCKET):
        key = f"{key}_or_more"
    return key


def map_demographic_row(record: WorkingRecord, category: Any, size_label: Any, value: Any) -> str | None:
    """Store a company-size row in the record.

    Returns the field name written, or None when the row is another category.
    """
    if clean_label(category) != COMPANY_SIZE:
        return None
    name = bucket_field_name(size_label)
    record.set(name, clean_value(value))
    return name


def apply_demographic_rows(record: WorkingRecord, rows: Iterable[Sequence[Any]]) -> WorkingRecord:
    """Fold TOP DEMOGRAPHICS rows (category | label | value | ...) into the record."""
    for row in rows:
        category, size_label, value = (list(row) + [None, None, None])[:3]
        map_demographic_row(record, category, size_label, value)
    return record
