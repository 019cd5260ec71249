# plancompare/services/analytics/service.py
"""
Plan comparison orchestrator.

This is the main entry point of the engine. It:
1. Builds the monthly scenario curve (aggregator)
2. Re-simulates every holding for exact current figures (simulator)
3. Delegates to the return, risk and benchmark calculators
4. Combines everything into a ComparisonResult

The engine performs no I/O. Every NAV series is resolved by the caller
before compare() is invoked, so any number of comparisons may run
concurrently.

Architecture:
    ComparisonService
        ├── uses → aggregate_monthly (snapshot curve)
        ├── uses → simulate (per-holding units, flows, value)
        ├── uses → returns (XIRR, CAGR, impact)
        ├── uses → risk (volatility, drawdown, RoMaD)
        └── uses → benchmark (beta, alpha)

Usage:
    from plancompare.services.analytics import ComparisonService

    service = ComparisonService()
    result = service.compare(records, benchmark=nifty_series)

    print(f"Impact: {result.portfolio.net_impact}")
    print(f"XIRR: {result.portfolio.xirr}%")
"""

import logging
from datetime import date
from decimal import Decimal

from plancompare.services.analytics.benchmark import (
    calculate_beta,
    calculate_holding_period_alpha,
    calculate_snapshot_alpha_beta,
)
from plancompare.services.analytics.returns import (
    calculate_absolute_return,
    calculate_annualized_impact,
    calculate_net_impact,
    calculate_xirr,
)
from plancompare.services.analytics.risk import (
    calculate_max_drawdown,
    calculate_romad,
    calculate_volatility,
)
from plancompare.services.analytics.types import (
    DEFAULT_CONFIG,
    AnalyticsConfig,
    ComparisonResult,
    FundMetrics,
    FundRatios,
    PortfolioMetrics,
)
from plancompare.services.constants import ZERO
from plancompare.services.navseries import NAVSeries
from plancompare.services.simulation import (
    CashFlow,
    InvestmentRecord,
    MonthlySnapshot,
    aggregate_monthly,
    simulate,
)

logger = logging.getLogger(__name__)

PORTFOLIO_ROW_NAME = "Portfolio"


# =============================================================================
# PORTFOLIO METRICS
# =============================================================================

def calculate_portfolio_metrics(
        investments: list[InvestmentRecord],
        snapshots: list[MonthlySnapshot],
        benchmark: NAVSeries | None = None,
        config: AnalyticsConfig = DEFAULT_CONFIG,
        as_of: date | None = None,
) -> PortfolioMetrics:
    """
    Portfolio-level statistics of the held plans against their siblings.

    Current figures come from re-simulating every holding (not from the
    last snapshot), so the held plan is valued at its newest NAV. A holding
    without sibling data counts its actual value as its counterpart value,
    contributing zero impact.

    Args:
        investments: Holdings
        snapshots: Aggregator output for the same holdings
        benchmark: Optional benchmark; without it alpha and beta are None
        config: Calculator assumptions
        as_of: "Today"; defaults to date.today()

    Returns:
        PortfolioMetrics
    """
    today = as_of or date.today()

    total_invested = ZERO
    actual_value = ZERO
    counterpart_value = ZERO
    cash_flows: list[CashFlow] = []

    for inv in investments:
        actual = simulate(inv.schedule, inv.primary_series, today)
        total_invested += actual.total_contributed
        actual_value += actual.current_value
        cash_flows.extend(actual.cash_flows)

        if inv.has_counterpart:
            counterpart = simulate(inv.schedule, inv.counterpart_series, today)
            counterpart_value += counterpart.current_value
        else:
            logger.debug(f"No counterpart series for {inv.identifier}, assuming zero impact")
            counterpart_value += actual.current_value

    net_impact = calculate_net_impact(actual_value, counterpart_value)
    xirr = calculate_xirr(cash_flows, actual_value, today, config)
    max_drawdown = calculate_max_drawdown([s.actual_value for s in snapshots])

    alpha: Decimal | None = None
    beta: Decimal | None = None
    if benchmark:
        alpha, beta = calculate_snapshot_alpha_beta(snapshots, xirr, config)

    return PortfolioMetrics(
        total_invested=total_invested,
        actual_value=actual_value,
        counterpart_value=counterpart_value,
        net_impact=net_impact,
        annualized_impact=calculate_annualized_impact(net_impact, len(snapshots), config),
        xirr=xirr,
        absolute_return=calculate_absolute_return(total_invested, actual_value),
        max_drawdown=max_drawdown,
        romad=calculate_romad(xirr, max_drawdown),
        alpha=alpha,
        beta=beta,
    )


# =============================================================================
# FUND RATIOS
# =============================================================================

def _weighted(
        funds: list[FundMetrics],
        attr: str,
        total_value: Decimal,
) -> Decimal | None:
    """
    Current-value-weighted average of a fund metric.

    Funds without the metric contribute nothing (their weight is not
    redistributed). None when no fund has the metric or nothing is held.
    """
    rows = [f for f in funds if getattr(f, attr) is not None]
    if not rows or total_value <= ZERO:
        return None
    return sum(
        (getattr(f, attr) * f.current_value / total_value for f in rows),
        ZERO,
    )


def calculate_fund_ratios(
        investments: list[InvestmentRecord],
        benchmark: NAVSeries | None = None,
        config: AnalyticsConfig = DEFAULT_CONFIG,
        as_of: date | None = None,
) -> FundRatios:
    """
    Per-fund ratios for the held plans, plus a portfolio row.

    Holdings with an empty primary series are skipped. The portfolio row's
    XIRR is solved from the pooled cash flows of all funds (a weighted
    average of fund XIRRs would be wrong); volatility, beta and alpha are
    current-value weighted.

    Args:
        investments: Holdings
        benchmark: Optional benchmark; without it beta and alpha are None
        config: Calculator assumptions
        as_of: "Today"; defaults to date.today()

    Returns:
        FundRatios
    """
    today = as_of or date.today()
    funds: list[FundMetrics] = []
    pooled_flows: list[CashFlow] = []

    for inv in investments:
        if not inv.primary_series:
            continue

        stats = simulate(inv.schedule, inv.primary_series, today)
        pooled_flows.extend(stats.cash_flows)

        xirr = calculate_xirr(stats.cash_flows, stats.current_value, today, config)
        volatility = calculate_volatility(inv.primary_series, inv.start_date, config)

        beta: Decimal | None = None
        alpha: Decimal | None = None
        if benchmark:
            beta = calculate_beta(inv.primary_series, benchmark, inv.start_date, config)
            alpha = calculate_holding_period_alpha(
                xirr, beta, benchmark, inv.start_date, today, config
            )

        funds.append(FundMetrics(
            name=inv.name,
            invested=stats.total_contributed,
            current_value=stats.current_value,
            xirr=xirr,
            volatility=volatility,
            beta=beta,
            alpha=alpha,
            identifier=inv.identifier,
        ))

    total_invested = sum((f.invested for f in funds), ZERO)
    total_value = sum((f.current_value for f in funds), ZERO)

    portfolio = FundMetrics(
        name=PORTFOLIO_ROW_NAME,
        invested=total_invested,
        current_value=total_value,
        xirr=calculate_xirr(pooled_flows, total_value, today, config),
        volatility=_weighted(funds, "volatility", total_value) or ZERO,
        beta=_weighted(funds, "beta", total_value),
        alpha=_weighted(funds, "alpha", total_value),
    )

    return FundRatios(funds=funds, portfolio=portfolio)


# =============================================================================
# COMPARISON SERVICE
# =============================================================================

class ComparisonService:
    """
    Main orchestrator for a Direct vs Regular plan comparison.

    Stateless apart from its config; one instance can serve any number of
    comparisons.

    Attributes:
        config: Calculator assumptions applied to every comparison
    """

    def __init__(self, config: AnalyticsConfig | None = None):
        """
        Initialize the Comparison Service.

        Args:
            config: Calculator assumptions. If None, built from settings.
        """
        self.config = config or AnalyticsConfig.from_settings()

    def compare(
            self,
            investments: list[InvestmentRecord],
            benchmark: NAVSeries | None = None,
            as_of: date | None = None,
    ) -> ComparisonResult:
        """
        Run a full comparison.

        Args:
            investments: Holdings resolved to their NAV series
            benchmark: Optional benchmark series
            as_of: "Today"; defaults to date.today()

        Returns:
            ComparisonResult with snapshots, portfolio metrics and fund ratios
        """
        today = as_of or date.today()

        logger.info(
            f"Comparing {len(investments)} investments as of {today} "
            f"(benchmark={'yes' if benchmark else 'no'})"
        )

        snapshots = aggregate_monthly(investments, benchmark, today)
        portfolio = calculate_portfolio_metrics(
            investments, snapshots, benchmark, self.config, today
        )
        fund_ratios = calculate_fund_ratios(investments, benchmark, self.config, today)

        logger.info(
            f"Comparison complete: {len(snapshots)} months, "
            f"net impact {portfolio.net_impact:.2f}, XIRR {portfolio.xirr:.2f}%"
        )

        return ComparisonResult(
            snapshots=snapshots,
            portfolio=portfolio,
            fund_ratios=fund_ratios,
            as_of=today,
        )
