# plancompare/services/navseries/lookup.py
"""
Date/value lookup against a valuation series.

Two policies:

    PURCHASE  - value at the earliest sample dated on/after the target.
                If the target is beyond the newest sample, the newest value.
                Approximates settlement: an order placed on a holiday fills
                at the next published NAV.

    VALUATION - value at the latest sample dated on/before the target.
                None if the target precedes the oldest sample.
                Approximates mark-to-market at a reporting date.

The asymmetry is deliberate: PURCHASE falls back to the newest value past
the end of the series, VALUATION has no fallback before its start.

Both are O(log n) thanks to NAVSeries keeping its samples ascending.
"""

import bisect
from datetime import date
from decimal import Decimal

from plancompare.services.navseries.types import LookupMode, NAVSeries


def lookup_nav(
        series: NAVSeries | None,
        target_date: date,
        mode: LookupMode,
) -> Decimal | None:
    """
    Resolve the per-unit value applicable at a date.

    Args:
        series: Valuation series (None or empty means no data)
        target_date: Date to resolve
        mode: LookupMode.PURCHASE or LookupMode.VALUATION

    Returns:
        Per-unit value, or None if the series has no applicable sample

    Example:
        >>> series = NAVSeries.from_pairs([(date(2024, 1, 1), "10"), (date(2024, 1, 5), "11")])
        >>> lookup_nav(series, date(2024, 1, 3), LookupMode.PURCHASE)
        Decimal('11')
        >>> lookup_nav(series, date(2024, 1, 3), LookupMode.VALUATION)
        Decimal('10')
    """
    if not series:
        return None

    dates = series.dates

    if mode == LookupMode.PURCHASE:
        i = bisect.bisect_left(dates, target_date)
        if i < len(dates):
            return series.samples[i].value
        # Target is beyond the newest sample
        return series.samples[-1].value

    # VALUATION: last sample with date <= target
    i = bisect.bisect_right(dates, target_date)
    if i == 0:
        return None
    return series.samples[i - 1].value


def purchase_nav(series: NAVSeries | None, target_date: date) -> Decimal | None:
    """Shorthand for lookup_nav(..., LookupMode.PURCHASE)."""
    return lookup_nav(series, target_date, LookupMode.PURCHASE)


def valuation_nav(series: NAVSeries | None, target_date: date) -> Decimal | None:
    """Shorthand for lookup_nav(..., LookupMode.VALUATION)."""
    return lookup_nav(series, target_date, LookupMode.VALUATION)


def latest_nav(series: NAVSeries | None) -> Decimal | None:
    """Value of the newest sample, or None for an empty series."""
    if not series:
        return None
    return series.samples[-1].value
