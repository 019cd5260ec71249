# tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- NAV series builders (explicit points, compounding daily growth)
- Investment record factory
- Fake scheme search provider
- A fixed "today" so date-dependent results never drift
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from plancompare.services.market_data.base import SchemeSearchResult
from plancompare.services.navseries import NAVSeries
from plancompare.services.simulation import ContributionType, InvestmentRecord


# =============================================================================
# DATE FIXTURES
# =============================================================================

@pytest.fixture
def as_of() -> date:
    """Fixed valuation date used by engine tests."""
    return date(2024, 6, 30)


# =============================================================================
# NAV SERIES BUILDERS
# =============================================================================

def _growth_series(
        start: date,
        days: int,
        start_value: str,
        daily_rate: str,
        wobble: str = "0",
) -> NAVSeries:
    """
    One sample per calendar day, compounding at daily_rate.

    wobble alternates +/- on top of the growth so returns are not constant.
    """
    value = Decimal(start_value)
    rate = Decimal(daily_rate)
    swing = Decimal(wobble)
    pairs = []
    for i in range(days):
        bump = swing if i % 2 else -swing
        pairs.append((start + timedelta(days=i), (value * (1 + bump)).quantize(Decimal("0.0001"))))
        value = value * (1 + rate)
    return NAVSeries.from_pairs(pairs)


@pytest.fixture
def make_series():
    """Factory: series from (date, value) pairs."""

    def _make(pairs: list[tuple[date, str]]) -> NAVSeries:
        return NAVSeries.from_pairs(pairs)

    return _make


@pytest.fixture
def growth_series():
    """Factory: daily compounding series (see _growth_series)."""
    return _growth_series


@pytest.fixture
def direct_series() -> NAVSeries:
    """Direct plan: ~0.05% a day from 2023-01-01 through 2024-06-30."""
    return _growth_series(date(2023, 1, 1), 547, "100", "0.0005", wobble="0.002")


@pytest.fixture
def regular_series() -> NAVSeries:
    """Regular plan of the same fund: ~0.045% a day (commission drag)."""
    return _growth_series(date(2023, 1, 1), 547, "100", "0.00045", wobble="0.002")


@pytest.fixture
def benchmark_series() -> NAVSeries:
    """Index fund benchmark: ~0.04% a day with a larger wobble."""
    return _growth_series(date(2023, 1, 1), 547, "1000", "0.0004", wobble="0.004")


# =============================================================================
# INVESTMENT FACTORY
# =============================================================================

@pytest.fixture
def make_record():
    """Factory for InvestmentRecord with sensible defaults."""

    def _make(
            primary_series: NAVSeries,
            counterpart_series: NAVSeries | None = None,
            primary_is_direct: bool = True,
            contribution_type: ContributionType = ContributionType.SIP,
            amount: str = "5000",
            start_date: date = date(2023, 1, 15),
            end_date: date | None = None,
            identifier: str = "119551",
            name: str = "Example Flexi Cap Fund - Direct Plan - Growth",
    ) -> InvestmentRecord:
        return InvestmentRecord(
            identifier=identifier,
            name=name,
            primary_is_direct=primary_is_direct,
            primary_series=primary_series,
            counterpart_series=counterpart_series,
            contribution_type=contribution_type,
            amount=Decimal(amount),
            start_date=start_date,
            end_date=end_date,
        )

    return _make


# =============================================================================
# FAKE SCHEME SEARCH
# =============================================================================

class FakeSchemeSearch:
    """
    In-memory search_schemes() for the plan pairing heuristics.

    Responses are keyed by exact query text; unknown queries return [].
    """

    def __init__(self, responses: dict[str, list[tuple[str, str]]] | None = None):
        self._responses = {
            query: [SchemeSearchResult(code=code, name=name) for code, name in hits]
            for query, hits in (responses or {}).items()
        }
        self.queries: list[str] = []

    def search_schemes(self, query: str) -> list[SchemeSearchResult]:
        self.queries.append(query)
        return list(self._responses.get(query, []))


@pytest.fixture
def fake_search():
    """Factory: FakeSchemeSearch from {query: [(code, name), ...]}."""
    return FakeSchemeSearch
