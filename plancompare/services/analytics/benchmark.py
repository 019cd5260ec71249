# plancompare/services/analytics/benchmark.py
"""
Benchmark comparison functions.

This module compares a fund or the whole portfolio against a benchmark
series (e.g. a Nifty 50 index fund):
- Beta from daily NAVs: date-aligned fund vs benchmark returns
- Beta from monthly snapshots: returns net of each month's contributions
- Jensen's Alpha: excess return above the CAPM expectation

Formulas:
    Beta = Cov(R_p, R_m) / Var(R_m)

    Alpha = R_p - [R_f + β(R_m - R_f)]

    Snapshot period return (cash-flow neutral):
        r = (V_end - V_start - CF) / (V_start + CF)
        CF = contributions posted during the period

Two alpha paths exist:
    - Portfolio: R_p = portfolio XIRR, R_m = (1 + mean monthly benchmark
      snapshot return)^12 - 1, β from snapshot returns.
    - Fund: R_p = fund XIRR, R_m = benchmark CAGR over the holding period,
      β from daily NAVs.

Covariance and variance run in float (uses only `statistics` stdlib).
"""

import logging
from datetime import date
from decimal import Decimal
from statistics import mean

from plancompare.services.analytics.returns import calculate_cagr
from plancompare.services.analytics.types import DEFAULT_CONFIG, AnalyticsConfig
from plancompare.services.constants import MONTHS_PER_YEAR, NEUTRAL_BETA, ZERO
from plancompare.services.navseries import NAVSeries, latest_nav, purchase_nav
from plancompare.services.simulation.types import MonthlySnapshot
from plancompare.utils.date_utils import years_between

logger = logging.getLogger(__name__)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _covariance(x: list[float], y: list[float]) -> float:
    """Calculate (population) covariance between two series."""
    if len(x) != len(y) or not x:
        return 0.0

    mean_x = mean(x)
    mean_y = mean(y)
    return sum((a - mean_x) * (b - mean_y) for a, b in zip(x, y)) / len(x)


def _variance(x: list[float]) -> float:
    """Calculate (population) variance of a series."""
    return _covariance(x, x)


def _beta_from_returns(asset: list[float], bench: list[float]) -> Decimal:
    var_bench = _variance(bench)
    if var_bench == 0:
        return NEUTRAL_BETA
    return Decimal(str(_covariance(asset, bench) / var_bench))


# =============================================================================
# BETA (DAILY NAV)
# =============================================================================

def calculate_beta(
        asset: NAVSeries | None,
        benchmark: NAVSeries | None,
        since: date,
        config: AnalyticsConfig = DEFAULT_CONFIG,
) -> Decimal:
    """
    Calculate Beta of a fund against a benchmark from their NAV series.

    Only dates present in BOTH series (exact match) on/after `since` are
    used. Holidays missing from one side simply drop out.

    Args:
        asset: Fund NAV series
        benchmark: Benchmark NAV series
        since: First date considered
        config: Minimum aligned point count

    Returns:
        Beta as Decimal. Exactly 1 (neutral) with fewer than
        config.min_aligned_points_for_beta aligned dates or a flat benchmark.
    """
    if not asset or not benchmark:
        return NEUTRAL_BETA

    asset_by_date = {s.date: s.value for s in asset.since(since)}
    aligned = [
        (asset_by_date[s.date], s.value)
        for s in benchmark.since(since)
        if s.date in asset_by_date
    ]

    if len(aligned) < config.min_aligned_points_for_beta:
        logger.debug(
            "Beta needs %d aligned points, have %d",
            config.min_aligned_points_for_beta, len(aligned),
        )
        return NEUTRAL_BETA

    asset_returns = []
    bench_returns = []
    for (a_prev, b_prev), (a_curr, b_curr) in zip(aligned, aligned[1:]):
        asset_returns.append(float((a_curr - a_prev) / a_prev))
        bench_returns.append(float((b_curr - b_prev) / b_prev))

    return _beta_from_returns(asset_returns, bench_returns)


# =============================================================================
# ALPHA
# =============================================================================

def calculate_jensen_alpha(
        portfolio_return: Decimal,
        benchmark_return: Decimal,
        beta: Decimal,
        risk_free_rate: Decimal,
) -> Decimal:
    """
    Calculate Jensen's Alpha.

    Formula: α = R_p - [R_f + β(R_m - R_f)]

    Args:
        portfolio_return: Annualized return of the portfolio/fund (decimal)
        benchmark_return: Annualized benchmark return (decimal)
        beta: Sensitivity to the benchmark
        risk_free_rate: Annual risk-free rate (decimal)

    Returns:
        Alpha as a decimal (0.02 = 2%)
    """
    expected_return = risk_free_rate + beta * (benchmark_return - risk_free_rate)
    return portfolio_return - expected_return


def calculate_holding_period_alpha(
        fund_xirr: Decimal,
        beta: Decimal,
        benchmark: NAVSeries | None,
        start_date: date,
        as_of: date,
        config: AnalyticsConfig = DEFAULT_CONFIG,
) -> Decimal | None:
    """
    Jensen's alpha of one fund over its holding period, as a percentage.

    The benchmark return is its CAGR from the purchase NAV at start_date to
    its newest NAV, over max(years held, config.min_years_for_annualizing).

    Args:
        fund_xirr: Fund XIRR in percent
        beta: Fund beta
        benchmark: Benchmark NAV series
        start_date: First contribution date of the fund
        as_of: Valuation date
        config: Risk-free rate and annualizing floor

    Returns:
        Alpha in percent, or None when the benchmark has no start value
    """
    start_nav = purchase_nav(benchmark, start_date)
    end_nav = latest_nav(benchmark)
    if start_nav is None or end_nav is None:
        return None

    market_return = calculate_cagr(
        start_nav, end_nav, years_between(start_date, as_of), config
    )
    if market_return is None:
        return None

    alpha = calculate_jensen_alpha(
        fund_xirr / Decimal("100"), market_return, beta, config.risk_free_rate
    )
    return alpha * Decimal("100")


# =============================================================================
# SNAPSHOT PATH (PORTFOLIO)
# =============================================================================

def calculate_snapshot_returns(
        snapshots: list[MonthlySnapshot],
) -> tuple[list[Decimal], list[Decimal]]:
    """
    Cash-flow neutral period returns of the actual and benchmark curves.

    A period contributes a pair of returns only when the previous actual
    value is positive and both snapshots carry a benchmark value. A
    non-positive denominator yields a return of 0.

    Returns:
        (portfolio_returns, benchmark_returns), equal length
    """
    portfolio_returns: list[Decimal] = []
    benchmark_returns: list[Decimal] = []

    for prev, curr in zip(snapshots, snapshots[1:]):
        if prev.actual_value <= ZERO:
            continue
        if prev.benchmark_value is None or curr.benchmark_value is None:
            continue

        cash_flow = curr.invested_to_date - prev.invested_to_date

        p_denom = prev.actual_value + cash_flow
        p_ret = (
            (curr.actual_value - prev.actual_value - cash_flow) / p_denom
            if p_denom > ZERO else ZERO
        )

        b_denom = prev.benchmark_value + cash_flow
        b_ret = (
            (curr.benchmark_value - prev.benchmark_value - cash_flow) / b_denom
            if b_denom > ZERO else ZERO
        )

        portfolio_returns.append(p_ret)
        benchmark_returns.append(b_ret)

    return portfolio_returns, benchmark_returns


def calculate_snapshot_alpha_beta(
        snapshots: list[MonthlySnapshot],
        portfolio_xirr: Decimal,
        config: AnalyticsConfig = DEFAULT_CONFIG,
) -> tuple[Decimal | None, Decimal | None]:
    """
    Portfolio alpha and beta from the monthly snapshot curve.

    Args:
        snapshots: Aggregator output, built WITH a benchmark
        portfolio_xirr: Portfolio XIRR in percent
        config: Risk-free rate and minimum snapshot count

    Returns:
        (alpha in percent, beta), or (None, None) when there are fewer than
        config.min_snapshots_for_alpha snapshots or no usable periods
    """
    if len(snapshots) < config.min_snapshots_for_alpha:
        return None, None

    portfolio_returns, benchmark_returns = calculate_snapshot_returns(snapshots)
    if not portfolio_returns:
        return None, None

    p_returns = [float(r) for r in portfolio_returns]
    b_returns = [float(r) for r in benchmark_returns]
    beta = _beta_from_returns(p_returns, b_returns)

    market_return = Decimal(str((1 + mean(b_returns)) ** MONTHS_PER_YEAR - 1))
    alpha = calculate_jensen_alpha(
        portfolio_xirr / Decimal("100"), market_return, beta, config.risk_free_rate
    )
    return alpha * Decimal("100"), beta
