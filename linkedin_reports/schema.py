"""Canonical output schema for consolidated LinkedIn post reports.

Every source export collapses into exactly one CanonicalRecord. The field
order below is the column order of every output file.
"""

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any

# Sheet names in the per-post export
SHEET_PERFORMANCE = "PERFORMANCE"
SHEET_TOP_DEMOGRAPHICS = "TOP DEMOGRAPHICS"


class CanonicalField(str, Enum):
    POST_DATE = "post_date"
    POST_PUBLISH_TIME = "post_publish_time"
    IMPRESSIONS = "impressions"
    MEMBERS_REACHED = "members_reached"
    REACTIONS = "reactions"
    COMMENTS = "comments"
    REPOSTS = "reposts"
    EMPLOYEES_1_TO_10 = "employees_1_to_10"
    EMPLOYEES_51_TO_200 = "employees_51_to_200"
    EMPLOYEES_201_TO_500 = "employees_201_to_500"
    EMPLOYEES_501_TO_1000 = "employees_501_to_1000"
    EMPLOYEES_1001_TO_5000 = "employees_1001_to_5000"
    EMPLOYEES_5001_TO_10000 = "employees_5001_to_10000"
    EMPLOYEES_10001_OR_MORE = "employees_10001_or_more"
    REACTIONS_TOP_JOB_TITLE = "reactions_top_job_title"
    REACTIONS_TOP_LOCATION = "reactions_top_location"
    REACTIONS_TOP_INDUSTRY = "reactions_top_industry"
    COMMENTS_TOP_JOB_TITLE = "comments_top_job_title"
    COMMENTS_TOP_LOCATION = "comments_top_location"
    COMMENTS_TOP_INDUSTRY = "comments_top_industry"
    POST_URL = "post_url"


@dataclass(frozen=True)
class CanonicalRecord:
    """One consolidated row per source export, in output column order."""

    post_date: str | None = None
    post_publish_time: str | None = None
    impressions: float | str = 0
    members_reached: float | str = 0
    reactions: float | str = 0
    comments: float | str = 0
    reposts: float | str = 0
    employees_1_to_10: float | str = 0
    employees_51_to_200: float | str = 0
    employees_201_to_500: float | str = 0
    employees_501_to_1000: float | str = 0
    employees_1001_to_5000: float | str = 0
    employees_5001_to_10000: float | str = 0
    employees_10001_or_more: float | str = 0
    reactions_top_job_title: Any = None
    reactions_top_location: Any = None
    reactions_top_industry: Any = None
    comments_top_job_title: Any = None
    comments_top_location: Any = None
    comments_top_industry: Any = None
    post_url: Any = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# Ordered (field, default) pairs, derived from the dataclass so the two can never drift.
FIELD_DEFAULTS: dict[CanonicalField, Any] = {
    CanonicalField(f.name): f.default for f in fields(CanonicalRecord)
}

FIELD_NAMES: list[str] = [f.value for f in FIELD_DEFAULTS]
