# tests/services/analytics/test_benchmark.py
"""
Tests for benchmark comparison functions.

Test Coverage:
- Beta from daily NAVs: alignment, thresholds, neutral fallbacks
- Jensen's alpha formula
- Holding-period alpha for a single fund
- Snapshot returns (cash-flow neutral) and portfolio alpha/beta
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from plancompare.services.analytics import (
    calculate_beta,
    calculate_holding_period_alpha,
    calculate_jensen_alpha,
    calculate_snapshot_alpha_beta,
    calculate_snapshot_returns,
)
from plancompare.services.navseries import NAVSeries
from plancompare.services.simulation import MonthlySnapshot

START = date(2024, 1, 1)


def paired_series(count: int, leverage: str) -> tuple[NAVSeries, NAVSeries]:
    """
    Fund and benchmark where every daily fund return is `leverage` times
    the benchmark return.
    """
    factor = Decimal(leverage)
    bench = [Decimal("100")]
    fund = [Decimal("100")]
    for i in range(count - 1):
        r = Decimal("0.01") if i % 3 else Decimal("-0.008")
        bench.append(bench[-1] * (1 + r))
        fund.append(fund[-1] * (1 + factor * r))
    dates = [START + timedelta(days=i) for i in range(count)]
    return NAVSeries.from_pairs(zip(dates, fund)), NAVSeries.from_pairs(zip(dates, bench))


def snapshot(
        month: int,
        actual: str,
        invested: str,
        benchmark: str | None,
) -> MonthlySnapshot:
    period_end = date(2024, month, 28)
    return MonthlySnapshot(
        period_label=period_end.strftime("%b %y"),
        period_end=period_end,
        actual_value=Decimal(actual),
        counterpart_value=Decimal(actual),
        direct_value=Decimal(actual),
        regular_value=Decimal(actual),
        invested_to_date=Decimal(invested),
        benchmark_value=Decimal(benchmark) if benchmark is not None else None,
    )


# =============================================================================
# BETA (DAILY NAV)
# =============================================================================

class TestBeta:
    """Tests for calculate_beta()."""

    def test_twice_as_volatile_fund(self):
        fund, bench = paired_series(40, "2")

        beta = calculate_beta(fund, bench, START)

        assert abs(beta - Decimal("2")) < Decimal("0.000001")

    def test_identical_series_is_one(self):
        fund, bench = paired_series(40, "1")

        assert abs(calculate_beta(fund, bench, START) - Decimal("1")) < Decimal("0.000001")

    def test_too_few_aligned_points_is_exactly_one(self):
        fund, bench = paired_series(29, "2")

        assert calculate_beta(fund, bench, START) == Decimal("1")

    def test_no_date_overlap_is_one(self):
        fund, _ = paired_series(40, "2")
        shifted = NAVSeries.from_pairs(
            (s.date + timedelta(days=365), s.value) for s in fund
        )

        assert calculate_beta(fund, shifted, START) == Decimal("1")

    def test_flat_benchmark_is_one(self):
        fund, _ = paired_series(40, "2")
        flat = NAVSeries.from_pairs((s.date, "100") for s in fund)

        assert calculate_beta(fund, flat, START) == Decimal("1")

    def test_missing_benchmark_is_one(self):
        fund, _ = paired_series(40, "2")

        assert calculate_beta(fund, None, START) == Decimal("1")
        assert calculate_beta(fund, NAVSeries(), START) == Decimal("1")

    def test_dates_before_since_ignored(self):
        """Window shrinks below the minimum once `since` skips 20 days."""
        fund, bench = paired_series(40, "2")

        assert calculate_beta(fund, bench, START + timedelta(days=20)) == Decimal("1")


# =============================================================================
# ALPHA
# =============================================================================

class TestJensenAlpha:
    """Tests for calculate_jensen_alpha()."""

    def test_formula(self):
        """15% actual vs 6% + 1.0 × (10% - 6%) expected = 5% alpha."""
        alpha = calculate_jensen_alpha(
            Decimal("0.15"), Decimal("0.10"), Decimal("1"), Decimal("0.06")
        )

        assert alpha == Decimal("0.05")

    def test_high_beta_raises_expectation(self):
        alpha = calculate_jensen_alpha(
            Decimal("0.15"), Decimal("0.10"), Decimal("2"), Decimal("0.06")
        )

        assert alpha == Decimal("0.01")


class TestHoldingPeriodAlpha:
    """Tests for calculate_holding_period_alpha()."""

    @pytest.fixture
    def benchmark(self, make_series):
        """Up 10% over exactly one year."""
        return make_series([
            (date(2023, 1, 1), "100"),
            (date(2023, 7, 1), "104"),
            (date(2024, 1, 1), "110"),
        ])

    def test_alpha_in_percent(self, benchmark):
        alpha = calculate_holding_period_alpha(
            Decimal("15"), Decimal("1"), benchmark, date(2023, 1, 1), date(2024, 1, 1)
        )

        assert abs(alpha - Decimal("5")) < Decimal("0.0001")

    def test_missing_benchmark_is_none(self):
        alpha = calculate_holding_period_alpha(
            Decimal("15"), Decimal("1"), NAVSeries(), date(2023, 1, 1), date(2024, 1, 1)
        )

        assert alpha is None


# =============================================================================
# SNAPSHOT PATH
# =============================================================================

class TestSnapshotReturns:
    """Tests for calculate_snapshot_returns()."""

    def test_contribution_neutral_formula(self):
        """r = (V_end - V_start - CF) / (V_start + CF)."""
        snapshots = [
            snapshot(1, "10000", "10000", "10000"),
            snapshot(2, "16000", "15000", "15500"),
        ]

        portfolio, bench = calculate_snapshot_returns(snapshots)

        assert portfolio == [Decimal("1000") / Decimal("15000")]
        assert bench == [Decimal("500") / Decimal("15000")]

    def test_period_skipped_without_prior_value(self):
        snapshots = [
            snapshot(1, "0", "10000", "10000"),
            snapshot(2, "11000", "10000", "10500"),
        ]

        assert calculate_snapshot_returns(snapshots) == ([], [])

    def test_period_skipped_without_benchmark(self):
        snapshots = [
            snapshot(1, "10000", "10000", None),
            snapshot(2, "11000", "10000", None),
        ]

        assert calculate_snapshot_returns(snapshots) == ([], [])


class TestSnapshotAlphaBeta:
    """Tests for calculate_snapshot_alpha_beta()."""

    def test_fewer_than_seven_snapshots(self):
        snapshots = [snapshot(m, "10000", "10000", "10000") for m in range(1, 7)]

        assert calculate_snapshot_alpha_beta(snapshots, Decimal("12")) == (None, None)

    def test_no_benchmark_values(self):
        snapshots = [snapshot(m, "10000", "10000", None) for m in range(1, 9)]

        assert calculate_snapshot_alpha_beta(snapshots, Decimal("12")) == (None, None)

    def test_tracking_benchmark(self):
        """A portfolio that moves exactly with the benchmark has beta 1."""
        values = ["10000", "10300", "10100", "10600", "10400", "10900", "11200", "11000"]
        snapshots = [snapshot(m + 1, v, "10000", v) for m, v in enumerate(values)]

        alpha, beta = calculate_snapshot_alpha_beta(snapshots, Decimal("16"))

        assert abs(beta - Decimal("1")) < Decimal("0.000001")
        assert alpha is not None
