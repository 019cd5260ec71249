# plancompare/services/navseries/__init__.py
"""
Valuation series package.

Holds per-instrument NAV series and resolves the value applicable at an
arbitrary date.

Architecture:
    navseries/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # NAVSample, NAVSeries, NAVStore, LookupMode
    └── lookup.py                # Purchase / valuation lookups

Usage:
    from plancompare.services.navseries import NAVSeries, LookupMode, lookup_nav

    series = NAVSeries.from_api(payload["data"])
    nav = lookup_nav(series, date(2024, 3, 31), LookupMode.VALUATION)
"""

from plancompare.services.navseries.lookup import (
    latest_nav,
    lookup_nav,
    purchase_nav,
    valuation_nav,
)
from plancompare.services.navseries.types import (
    LookupMode,
    NAVSample,
    NAVSeries,
    NAVStore,
    parse_nav,
)

__all__ = [
    # Types
    "LookupMode",
    "NAVSample",
    "NAVSeries",
    "NAVStore",
    "parse_nav",

    # Lookups
    "lookup_nav",
    "purchase_nav",
    "valuation_nav",
    "latest_nav",
]
