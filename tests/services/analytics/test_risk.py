# tests/services/analytics/test_risk.py
"""
Tests for risk calculation functions.

Test Coverage:
- Period returns helper
- Volatility: sample threshold, flat series, known-answer alternating series
- Maximum drawdown on hand-checked curves
- RoMaD including the no-drawdown convention
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from plancompare.services.analytics import (
    calculate_max_drawdown,
    calculate_romad,
    calculate_series_returns,
    calculate_volatility,
)
from plancompare.services.navseries import NAVSeries


def d(*values) -> list[Decimal]:
    return [Decimal(str(v)) for v in values]


def daily_series(values: list[Decimal], start: date = date(2024, 1, 1)) -> NAVSeries:
    return NAVSeries.from_pairs(
        (start + timedelta(days=i), value) for i, value in enumerate(values)
    )


# =============================================================================
# PERIOD RETURNS
# =============================================================================

class TestSeriesReturns:
    """Tests for calculate_series_returns()."""

    def test_simple_returns(self):
        assert calculate_series_returns(d(100, 110, 99)) == d("0.1", "-0.1")

    def test_fewer_than_two_values(self):
        assert calculate_series_returns(d(100)) == []
        assert calculate_series_returns([]) == []


# =============================================================================
# VOLATILITY
# =============================================================================

class TestVolatility:
    """Tests for calculate_volatility()."""

    def test_alternating_one_percent(self):
        """Returns of exactly +1%/-1%: σ = 0.01, annualized × √252."""
        values = [Decimal("100")]
        for i in range(40):
            step = Decimal("1.01") if i % 2 == 0 else Decimal("0.99")
            values.append(values[-1] * step)

        result = calculate_volatility(daily_series(values), date(2024, 1, 1))

        assert abs(result - Decimal("15.8745")) < Decimal("0.001")

    def test_flat_series_is_zero(self):
        series = daily_series([Decimal("50")] * 40)

        assert calculate_volatility(series, date(2024, 1, 1)) == Decimal("0")

    def test_too_few_samples_is_zero(self):
        values = [Decimal("100") + i for i in range(29)]

        assert calculate_volatility(daily_series(values), date(2024, 1, 1)) == Decimal("0")

    def test_only_samples_since_start_count(self):
        """40 samples, but only 20 on/after the start date."""
        values = [Decimal("100") + i for i in range(40)]

        assert calculate_volatility(daily_series(values), date(2024, 1, 21)) == Decimal("0")

    def test_empty_series(self):
        assert calculate_volatility(NAVSeries(), date(2024, 1, 1)) == Decimal("0")
        assert calculate_volatility(None, date(2024, 1, 1)) == Decimal("0")


# =============================================================================
# DRAWDOWN
# =============================================================================

class TestMaxDrawdown:
    """Tests for calculate_max_drawdown()."""

    @pytest.mark.parametrize("values, expected", [
        (d(100, 110, 120, 130), Decimal("0")),
        (d(100, 50, 100), Decimal("50")),
        (d(100, 80, 120, 60), Decimal("50")),
        (d(100, 90, 95, 85, 200), Decimal("15")),
        ([], Decimal("0")),
    ])
    def test_known_curves(self, values, expected):
        assert calculate_max_drawdown(values) == expected

    def test_leading_zeros_skipped(self):
        """A curve that starts at zero has no peak to fall from yet."""
        assert calculate_max_drawdown(d(0, 0, 100, 75)) == Decimal("25")


# =============================================================================
# ROMAD
# =============================================================================

class TestRoMaD:
    """Tests for calculate_romad()."""

    def test_ratio(self):
        assert calculate_romad(Decimal("12"), Decimal("24")) == Decimal("0.5")

    def test_no_drawdown_positive_return(self):
        assert calculate_romad(Decimal("8"), Decimal("0")) == Decimal("100")

    def test_no_drawdown_non_positive_return(self):
        assert calculate_romad(Decimal("0"), Decimal("0")) == Decimal("0")
        assert calculate_romad(Decimal("-3"), Decimal("0")) == Decimal("0")
