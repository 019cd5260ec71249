# plancompare/utils/date_utils.py
"""
Date utility functions for the plan comparison engine.

This module provides the calendar helpers shared by the simulator and the
monthly aggregator, and the two strict date parsers used at collaborator
boundaries.

All dates are naive local calendar dates (datetime.date). No time zones,
no time-of-day.

Usage:
    from plancompare.utils.date_utils import parse_api_date, iter_months

    d = parse_api_date("31-01-2024")
    for year, month in iter_months(date(2024, 1, 15), date(2024, 6, 1)):
        ...
"""

import calendar
from collections.abc import Iterator
from datetime import date, datetime

from plancompare.services.constants import (
    CALENDAR_DAYS_PER_YEAR,
    ISO_DATE_FORMAT,
    PROVIDER_DATE_FORMAT,
)
from plancompare.services.exceptions import DateParseError


# =============================================================================
# PARSING
# =============================================================================

def parse_api_date(value: str) -> date:
    """
    Parse a provider date in DD-MM-YYYY format.

    Args:
        value: Date string, e.g. "05-03-2024" (5 March 2024)

    Returns:
        The calendar date

    Raises:
        DateParseError: If the string is not a valid DD-MM-YYYY date
    """
    return _parse(value, PROVIDER_DATE_FORMAT, "DD-MM-YYYY")


def parse_iso_date(value: str) -> date:
    """
    Parse a user-entered date in YYYY-MM-DD format.

    Raises:
        DateParseError: If the string is not a valid YYYY-MM-DD date
    """
    return _parse(value, ISO_DATE_FORMAT, "YYYY-MM-DD")


def format_api_date(d: date) -> str:
    """Format a date the way the provider does (DD-MM-YYYY)."""
    return d.strftime(PROVIDER_DATE_FORMAT)


def _parse(value: str, fmt: str, label: str) -> date:
    if not isinstance(value, str):
        raise DateParseError(repr(value), label)
    text = value.strip()
    # strptime accepts single-digit fields; the provider always zero-pads,
    # so a short string means a different format was sent.
    if len(text) != 10:
        raise DateParseError(value, label)
    try:
        return datetime.strptime(text, fmt).date()
    except ValueError:
        raise DateParseError(value, label) from None


# =============================================================================
# CALENDAR MONTHS
# =============================================================================

def last_day_of_month(year: int, month: int) -> date:
    """
    Get the last calendar day of a month.

    Example:
        >>> last_day_of_month(2024, 2)
        date(2024, 2, 29)
    """
    return date(year, month, calendar.monthrange(year, month)[1])


def clamped_day(year: int, month: int, day: int) -> date:
    """
    Build a date, clamping the day to the month's length.

    A day-31 schedule lands on 30 April and on 28/29 February.

    Example:
        >>> clamped_day(2023, 2, 31)
        date(2023, 2, 28)
    """
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last))


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) of the following calendar month."""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def iter_months(start: date, end: date) -> Iterator[tuple[int, int]]:
    """
    Iterate (year, month) pairs from start's month through end's month.

    Both endpoints are inclusive. Yields nothing if start's month is after
    end's month.

    Example:
        >>> list(iter_months(date(2023, 11, 20), date(2024, 1, 3)))
        [(2023, 11), (2023, 12), (2024, 1)]
    """
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield year, month
        year, month = next_month(year, month)


def month_end_or_today(year: int, month: int, today: date) -> date:
    """
    Get the valuation date for a month: its last day, or today if the
    month is still in progress.
    """
    return min(last_day_of_month(year, month), today)


def years_between(start: date, end: date) -> float:
    """
    Elapsed years between two dates on a 365-day basis.

    Negative when end precedes start.
    """
    return (end - start).days / CALENDAR_DAYS_PER_YEAR
