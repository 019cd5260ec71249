# tests/services/analytics/test_service.py
"""
Integration tests for the comparison orchestrator.

Uses the synthetic Direct/Regular/benchmark series from conftest: the
Direct plan compounds slightly faster than the Regular plan, as it does
in practice once the distributor commission is removed.

Test Coverage:
- Portfolio metrics: impact sign, missing counterparts, benchmark gating
- Fund ratios: per-fund rows, pooled portfolio XIRR, skipped holdings
- ComparisonService.compare() end to end
"""

from datetime import date
from decimal import Decimal

import pytest

from plancompare.services.analytics import (
    DEFAULT_CONFIG,
    ComparisonService,
    calculate_fund_ratios,
    calculate_portfolio_metrics,
)
from plancompare.services.navseries import NAVSeries
from plancompare.services.simulation import ContributionType, aggregate_monthly


@pytest.fixture
def held_direct(make_record, direct_series, regular_series):
    return make_record(
        primary_series=direct_series,
        counterpart_series=regular_series,
        primary_is_direct=True,
    )


@pytest.fixture
def held_regular(make_record, direct_series, regular_series):
    return make_record(
        primary_series=regular_series,
        counterpart_series=direct_series,
        primary_is_direct=False,
        contribution_type=ContributionType.LUMPSUM,
        amount="100000",
        start_date=date(2023, 3, 1),
        identifier="119552",
        name="Example Flexi Cap Fund - Regular Plan - Growth",
    )


# =============================================================================
# PORTFOLIO METRICS
# =============================================================================

class TestPortfolioMetrics:
    """Tests for calculate_portfolio_metrics()."""

    def test_direct_holding_has_positive_impact(self, held_direct, as_of):
        snapshots = aggregate_monthly([held_direct], as_of=as_of)

        metrics = calculate_portfolio_metrics([held_direct], snapshots, as_of=as_of)

        assert metrics.net_impact > 0
        assert metrics.annualized_impact > 0
        assert metrics.actual_value > metrics.counterpart_value
        assert metrics.total_invested == Decimal("90000")  # Jan 2023 - Jun 2024
        assert metrics.xirr > 0
        assert metrics.absolute_return > 0

    def test_regular_holding_has_negative_impact(self, held_regular, as_of):
        snapshots = aggregate_monthly([held_regular], as_of=as_of)

        metrics = calculate_portfolio_metrics([held_regular], snapshots, as_of=as_of)

        assert metrics.net_impact < 0
        assert metrics.total_invested == Decimal("100000")

    def test_missing_counterpart_means_zero_impact(self, make_record, direct_series, as_of):
        record = make_record(primary_series=direct_series)
        snapshots = aggregate_monthly([record], as_of=as_of)

        metrics = calculate_portfolio_metrics([record], snapshots, as_of=as_of)

        assert metrics.counterpart_value == metrics.actual_value
        assert metrics.net_impact == Decimal("0")

    def test_no_benchmark_means_no_alpha_beta(self, held_direct, as_of):
        snapshots = aggregate_monthly([held_direct], as_of=as_of)

        metrics = calculate_portfolio_metrics([held_direct], snapshots, as_of=as_of)

        assert metrics.alpha is None
        assert metrics.beta is None
        assert not metrics.has_benchmark_metrics

    def test_benchmark_gives_alpha_beta(self, held_direct, benchmark_series, as_of):
        snapshots = aggregate_monthly([held_direct], benchmark_series, as_of)

        metrics = calculate_portfolio_metrics(
            [held_direct], snapshots, benchmark_series, as_of=as_of
        )

        assert metrics.has_benchmark_metrics
        assert metrics.beta > 0

    def test_empty_portfolio(self, as_of):
        metrics = calculate_portfolio_metrics([], [], as_of=as_of)

        assert metrics.total_invested == Decimal("0")
        assert metrics.xirr == Decimal("0")
        assert metrics.max_drawdown == Decimal("0")
        assert metrics.annualized_impact == Decimal("0")


# =============================================================================
# FUND RATIOS
# =============================================================================

class TestFundRatios:
    """Tests for calculate_fund_ratios()."""

    def test_one_row_per_fund(self, held_direct, held_regular, as_of):
        ratios = calculate_fund_ratios([held_direct, held_regular], as_of=as_of)

        assert [f.identifier for f in ratios.funds] == ["119551", "119552"]
        assert all(f.volatility > 0 for f in ratios.funds)
        assert ratios.portfolio.name == "Portfolio"
        assert ratios.portfolio.identifier is None

    def test_portfolio_row_totals(self, held_direct, held_regular, as_of):
        ratios = calculate_fund_ratios([held_direct, held_regular], as_of=as_of)

        assert ratios.portfolio.invested == sum(f.invested for f in ratios.funds)
        assert ratios.portfolio.current_value == sum(f.current_value for f in ratios.funds)

    def test_single_fund_portfolio_xirr_matches_fund(self, held_direct, as_of):
        ratios = calculate_fund_ratios([held_direct], as_of=as_of)

        assert ratios.portfolio.xirr == ratios.funds[0].xirr

    def test_no_benchmark_leaves_beta_alpha_none(self, held_direct, as_of):
        ratios = calculate_fund_ratios([held_direct], as_of=as_of)

        assert ratios.funds[0].beta is None
        assert ratios.funds[0].alpha is None
        assert ratios.portfolio.beta is None
        assert ratios.portfolio.alpha is None

    def test_benchmark_fills_beta_alpha(self, held_direct, benchmark_series, as_of):
        ratios = calculate_fund_ratios([held_direct], benchmark_series, as_of=as_of)

        fund = ratios.funds[0]
        assert fund.beta is not None
        assert fund.alpha is not None
        assert abs(ratios.portfolio.beta - fund.beta) < Decimal("0.0000001")

    def test_empty_primary_series_skipped(self, make_record, held_direct, direct_series, as_of):
        orphan = make_record(
            primary_series=NAVSeries(),
            counterpart_series=direct_series,
            identifier="999999",
        )

        ratios = calculate_fund_ratios([orphan, held_direct], as_of=as_of)

        assert [f.identifier for f in ratios.funds] == ["119551"]


# =============================================================================
# COMPARISON SERVICE
# =============================================================================

class TestComparisonService:
    """End-to-end tests for ComparisonService.compare()."""

    def test_compare(self, held_direct, held_regular, benchmark_series, as_of):
        service = ComparisonService(DEFAULT_CONFIG)

        result = service.compare([held_direct, held_regular], benchmark_series, as_of)

        assert result.as_of == as_of
        assert len(result.snapshots) == 18
        assert result.snapshots[0].period_label == "Jan 23"
        assert result.snapshots[-1].period_end == as_of
        assert result.portfolio.has_benchmark_metrics
        assert len(result.fund_ratios.funds) == 2

    def test_compare_without_benchmark(self, held_direct, as_of):
        result = ComparisonService(DEFAULT_CONFIG).compare([held_direct], as_of=as_of)

        assert all(s.benchmark_value is None for s in result.snapshots)
        assert result.portfolio.alpha is None

    def test_default_config_from_settings(self):
        service = ComparisonService()

        assert service.config.trading_days_per_year > 0
