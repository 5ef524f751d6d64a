"""Cell-level cleaning for LinkedIn per-post exports.

Labels become snake_case keys ("Members reached" -> "members_reached"),
values become collapsed strings or floats ("1,316" -> 1316.0), and the
date/time cells are rendered as YYYY-MM-DD and HH:MM.
"""

import math
import re
from datetime import datetime
from typing import Any

NUMBER_PATTERN = re.compile(r"[0-9,.]+")
_NUMERIC_PREFIX = re.compile(r"\d*\.?\d*")
_WHITESPACE = re.compile(r"\s+")

# "%m/%d/%y" precedes "%m/%d/%Y": %Y would read "2/25/26" as year 26.
DATE_FORMATS = (
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%a %b %d %Y",
    "%a, %b %d, %Y",
    "%m/%d/%y",
    "%m/%d/%Y",
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%d %b %Y",
)

TIME_FORMATS = (
    "%I:%M %p",
    "%I:%M:%S %p",
    "%I %p",
    "%I:%M%p",
    "%I:%M:%S%p",
    "%I%p",
    "%H:%M",
    "%H:%M:%S",
)


def clean_label(raw: Any) -> str:
    """Lower-case a label and join its words with underscores."""
    return _WHITESPACE.sub("_", str(raw or "").strip().lower())


def clean_text(raw: Any) -> str:
    """Stringify a cell, trim it and collapse internal whitespace."""
    if raw is None:
        return ""
    return _WHITESPACE.sub(" ", str(raw).strip())


def parse_number(text: str) -> float:
    """Parse a numeric-looking string with thousands separators.

    Only the leading number is read when the text holds more than one
    decimal point. Text without any digits ("," or ".") yields nan.
    """
    digits = text.replace(",", "")
    try:
        return float(digits)
    except ValueError:
        prefix = _NUMERIC_PREFIX.match(digits).group(0)
        try:
            return float(prefix)
        except ValueError:
            return math.nan


def clean_value(raw: Any) -> str | float:
    """Clean a cell value, coercing it to float when it looks numeric."""
    text = clean_text(raw)
    if NUMBER_PATTERN.fullmatch(text):
        return parse_number(text)
    return text


def is_valid_row(label: str, value: str | float) -> bool:
    if not label:
        return False
    return isinstance(value, float) or bool(value)


def _strptime_any(text: str, formats: tuple[str, ...]) -> datetime | None:
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_date(value: Any) -> str:
    """Render a date cell as YYYY-MM-DD.

    Unrecognised input is returned as its cleaned text.
    """
    text = clean_text(value)
    parsed = _strptime_any(text, DATE_FORMATS)
    if parsed is None:
        return text
    return f"{parsed.year:04d}-{parsed.month:02d}-{parsed.day:02d}"


def format_time(value: Any) -> str:
    """Render a time-of-day cell as 24-hour HH:MM.

    Unrecognised input is returned as its cleaned text.
    """
    text = clean_text(value).upper()
    parsed = _strptime_any(text, TIME_FORMATS)
    if parsed is None:
        return clean_text(value)
    return f"{parsed.hour:02d}:{parsed.minute:02d}"


def is_missing(value: Any) -> bool:
    """True for values the assembler treats as never seen (falsy or nan)."""
    if isinstance(value, float) and math.isnan(value):
        return True
    return not value
