# plancompare/services/analytics/__init__.py
"""
Return/Risk Metrics package.

This package computes the comparison statistics:
- Returns (XIRR, CAGR, absolute return, plan-choice impact)
- Risk (volatility, maximum drawdown, RoMaD)
- Benchmark comparison (beta, Jensen's alpha)

Architecture:
    analytics/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # AnalyticsConfig and result dataclasses
    ├── returns.py               # XIRR solver, CAGR, impact
    ├── risk.py                  # Volatility, drawdown, RoMaD
    ├── benchmark.py             # Beta, alpha (fund and portfolio paths)
    └── service.py               # ComparisonService (orchestrator)

Usage:
    from plancompare.services.analytics import ComparisonService

    result = ComparisonService().compare(records, benchmark=nifty)

    print(f"Net impact: {result.portfolio.net_impact}")
    print(f"Beta: {result.portfolio.beta}")   # None without a benchmark
"""

from plancompare.services.analytics.benchmark import (
    calculate_beta,
    calculate_holding_period_alpha,
    calculate_jensen_alpha,
    calculate_snapshot_alpha_beta,
    calculate_snapshot_returns,
)
from plancompare.services.analytics.returns import (
    calculate_absolute_return,
    calculate_annualized_impact,
    calculate_cagr,
    calculate_net_impact,
    calculate_xirr,
)
from plancompare.services.analytics.risk import (
    calculate_max_drawdown,
    calculate_romad,
    calculate_series_returns,
    calculate_volatility,
)
from plancompare.services.analytics.service import (
    ComparisonService,
    calculate_fund_ratios,
    calculate_portfolio_metrics,
)
from plancompare.services.analytics.types import (
    DEFAULT_CONFIG,
    AnalyticsConfig,
    ComparisonResult,
    FundMetrics,
    FundRatios,
    PortfolioMetrics,
)

__all__ = [
    # Main service
    "ComparisonService",
    "calculate_portfolio_metrics",
    "calculate_fund_ratios",

    # Types
    "AnalyticsConfig",
    "DEFAULT_CONFIG",
    "ComparisonResult",
    "FundMetrics",
    "FundRatios",
    "PortfolioMetrics",

    # Returns
    "calculate_xirr",
    "calculate_cagr",
    "calculate_absolute_return",
    "calculate_net_impact",
    "calculate_annualized_impact",

    # Risk
    "calculate_volatility",
    "calculate_max_drawdown",
    "calculate_romad",
    "calculate_series_returns",

    # Benchmark
    "calculate_beta",
    "calculate_jensen_alpha",
    "calculate_holding_period_alpha",
    "calculate_snapshot_returns",
    "calculate_snapshot_alpha_beta",
]
