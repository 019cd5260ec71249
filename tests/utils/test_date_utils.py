# tests/utils/test_date_utils.py
"""Tests for date parsing and calendar helpers."""

from datetime import date

import pytest

from plancompare.services.exceptions import DateParseError
from plancompare.utils.date_utils import (
    clamped_day,
    format_api_date,
    iter_months,
    last_day_of_month,
    month_end_or_today,
    next_month,
    parse_api_date,
    parse_iso_date,
    years_between,
)


# =============================================================================
# PARSING
# =============================================================================

class TestParsing:
    """Tests for the strict date parsers."""

    def test_parse_api_date(self):
        assert parse_api_date("05-03-2024") == date(2024, 3, 5)

    def test_parse_api_date_strips_whitespace(self):
        assert parse_api_date(" 31-12-2023 ") == date(2023, 12, 31)

    @pytest.mark.parametrize("value", ["2024-03-05", "5-3-2024", "31-02-2024", "", "05/03/2024"])
    def test_parse_api_date_rejects(self, value):
        with pytest.raises(DateParseError) as exc_info:
            parse_api_date(value)

        assert exc_info.value.expected_format == "DD-MM-YYYY"

    def test_parse_api_date_rejects_non_string(self):
        with pytest.raises(DateParseError):
            parse_api_date(20240305)

    def test_parse_iso_date(self):
        assert parse_iso_date("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["2023-02-29", "29-02-2024", "2024-2-9", "2024-02-29T10:00"])
    def test_parse_iso_date_rejects(self, value):
        with pytest.raises(DateParseError):
            parse_iso_date(value)

    def test_format_api_date(self):
        assert format_api_date(date(2024, 3, 5)) == "05-03-2024"


# =============================================================================
# CALENDAR MONTHS
# =============================================================================

class TestCalendarHelpers:
    """Tests for month arithmetic."""

    @pytest.mark.parametrize("year, month, expected", [
        (2024, 2, date(2024, 2, 29)),
        (2023, 2, date(2023, 2, 28)),
        (2024, 4, date(2024, 4, 30)),
        (2024, 12, date(2024, 12, 31)),
    ])
    def test_last_day_of_month(self, year, month, expected):
        assert last_day_of_month(year, month) == expected

    @pytest.mark.parametrize("year, month, day, expected", [
        (2023, 2, 31, date(2023, 2, 28)),
        (2024, 2, 30, date(2024, 2, 29)),
        (2024, 4, 31, date(2024, 4, 30)),
        (2024, 5, 15, date(2024, 5, 15)),
    ])
    def test_clamped_day(self, year, month, day, expected):
        assert clamped_day(year, month, day) == expected

    def test_next_month_wraps_year(self):
        assert next_month(2023, 12) == (2024, 1)
        assert next_month(2024, 1) == (2024, 2)

    def test_iter_months_inclusive(self):
        months = list(iter_months(date(2023, 11, 20), date(2024, 1, 3)))

        assert months == [(2023, 11), (2023, 12), (2024, 1)]

    def test_iter_months_same_month(self):
        assert list(iter_months(date(2024, 5, 31), date(2024, 5, 1))) == [(2024, 5)]

    def test_iter_months_reversed_is_empty(self):
        assert list(iter_months(date(2024, 6, 1), date(2024, 5, 31))) == []

    def test_month_end_or_today(self):
        today = date(2024, 6, 12)

        assert month_end_or_today(2024, 5, today) == date(2024, 5, 31)
        assert month_end_or_today(2024, 6, today) == today

    def test_years_between(self):
        assert years_between(date(2023, 1, 1), date(2024, 1, 1)) == 1.0
        assert years_between(date(2024, 1, 1), date(2023, 1, 1)) == -1.0
