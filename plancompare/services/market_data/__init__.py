# plancompare/services/market_data/__init__.py
"""
Valuation series provider package.

This package contains:
- Abstract interface for NAV providers (base.py)
- mfapi.in implementation (mfapi.py)
- Direct/Regular plan pairing heuristics (plan_matching.py)

Usage:
    from plancompare.services.market_data import MFApiProvider, find_counterpart_scheme

    with MFApiProvider() as provider:
        history = provider.get_scheme_history("119551")
        sibling = find_counterpart_scheme(provider, history.code, history.name)

Architecture:
    NAVProvider (ABC)
    └── MFApiProvider (concrete)
"""

from plancompare.services.market_data.base import (
    BatchHistoryResult,
    NAVProvider,
    SchemeHistory,
    SchemeSearchResult,
)
from plancompare.services.market_data.mfapi import MFApiProvider
from plancompare.services.market_data.plan_matching import (
    find_best_matching_scheme,
    find_counterpart_scheme,
    is_direct_plan,
)

__all__ = [
    # Abstract interface
    "NAVProvider",
    # Data classes
    "SchemeSearchResult",
    "SchemeHistory",
    "BatchHistoryResult",
    # Concrete implementations
    "MFApiProvider",
    # Plan pairing
    "is_direct_plan",
    "find_best_matching_scheme",
    "find_counterpart_scheme",
]
