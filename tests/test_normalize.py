"""Tests for cell cleaning, numeric coercion and date/time formatting."""

import math
from datetime import datetime, time

import pytest

from linkedin_reports.normalize import (
    clean_label,
    clean_text,
    clean_value,
    format_date,
    format_time,
    is_missing,
    is_valid_row,
    parse_number,
)


# ---------------------------------------------------------------------------
# Labels and text
# ---------------------------------------------------------------------------


class TestCleanLabel:
    def test_snake_cases_words(self):
        assert clean_label("Members reached") == "members_reached"

    def test_collapses_whitespace_runs(self):
        assert clean_label("  Post   Publish\tTime ") == "post_publish_time"

    def test_none_and_empty(self):
        assert clean_label(None) == ""
        assert clean_label("   ") == ""


class TestCleanText:
    def test_trims_and_collapses(self):
        assert clean_text("  Greater   Toronto\nArea ") == "Greater Toronto Area"

    def test_none_is_empty(self):
        assert clean_text(None) == ""

    def test_zero_is_kept(self):
        assert clean_text(0) == "0"


# ---------------------------------------------------------------------------
# Numeric coercion
# ---------------------------------------------------------------------------


class TestCleanValue:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1,316", 1316.0),
            ("42", 42.0),
            ("1,234,567.5", 1234567.5),
            (" 0.31 ", 0.31),
            (940, 940.0),
        ],
    )
    def test_numeric_strings_become_floats(self, raw, expected):
        value = clean_value(raw)
        assert isinstance(value, float)
        assert value == pytest.approx(expected)

    def test_text_is_kept(self):
        assert clean_value("Security  Engineer") == "Security Engineer"

    def test_mixed_text_is_not_numeric(self):
        assert clean_value("1.2K") == "1.2K"
        assert clean_value("-5") == "-5"
        assert clean_value("< 1%") == "< 1%"

    def test_punctuation_only_parses_to_nan(self):
        assert math.isnan(clean_value(","))
        assert math.isnan(clean_value("."))

    def test_multiple_decimal_points_use_leading_number(self):
        assert parse_number("1.2.3") == pytest.approx(1.2)


class TestIsValidRow:
    def test_requires_label(self):
        assert not is_valid_row("", "value")

    def test_requires_non_empty_text(self):
        assert not is_valid_row("reactions_ranked_by", "")

    def test_numbers_are_valid_even_when_zero(self):
        assert is_valid_row("comments", 0.0)
        assert is_valid_row("comments", math.nan)

    def test_text_is_valid(self):
        assert is_valid_row("top_location", "Canada")


class TestIsMissing:
    @pytest.mark.parametrize("value", [None, "", 0, 0.0, math.nan])
    def test_missing(self, value):
        assert is_missing(value)

    @pytest.mark.parametrize("value", [1.0, "USA", "0"])
    def test_present(self, value):
        assert not is_missing(value)


# ---------------------------------------------------------------------------
# Dates and times
# ---------------------------------------------------------------------------


class TestFormatDate:
    @pytest.mark.parametrize(
        "raw",
        [
            "Feb 5, 2026",
            "February 5, 2026",
            "2/5/2026",
            "2026-02-05",
            "2026/02/05",
            "5 Feb 2026",
            "Feb 5 2026",
            "February 5 2026",
            "Thu Feb 5 2026",
            "Thu, Feb 5, 2026",
            "2/5/26",
            "02/05/26",
            "2026-02-05T00:00:00",
            "2026-02-05T14:30:00.250000",
            datetime(2026, 2, 5),
        ],
    )
    def test_formats_as_iso(self, raw):
        assert format_date(raw) == "2026-02-05"

    def test_unparseable_is_passed_through(self):
        assert format_date("  sometime   soon ") == "sometime soon"

    def test_two_digit_and_four_digit_years_agree(self):
        assert format_date("12/31/24") == "2024-12-31"
        assert format_date("12/31/2024") == "2024-12-31"


class TestFormatTime:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("11:53 AM", "11:53"),
            ("2:05 PM", "14:05"),
            ("12:00 AM", "00:00"),
            ("12:30 pm", "12:30"),
            ("9 AM", "09:00"),
            ("23:07", "23:07"),
            ("11:53AM", "11:53"),
            ("2:05pm", "14:05"),
            ("2:05:30PM", "14:05"),
            ("9AM", "09:00"),
            (time(8, 4), "08:04"),
        ],
    )
    def test_formats_as_24_hour(self, raw, expected):
        assert format_time(raw) == expected

    def test_unparseable_is_passed_through(self):
        assert format_time("lunchtime") == "lunchtime"
