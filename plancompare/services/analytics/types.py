# plancompare/services/analytics/types.py
"""
Data types for the return/risk metrics.

Architecture:
    - AnalyticsConfig: Tunable assumptions passed into every calculator
    - PortfolioMetrics: Portfolio-level comparison statistics
    - FundMetrics: Per-fund (and weighted portfolio) ratios
    - FundRatios: Fund rows plus the portfolio row
    - ComparisonResult: Everything ComparisonService.compare() produces

Percentages are expressed as percentages (Decimal("10") = 10%).
Optional metrics use None for "unavailable", never 0.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from plancompare.config import Settings, settings
from plancompare.services.constants import (
    DEFAULT_RISK_FREE_RATE,
    MIN_ALIGNED_POINTS_FOR_BETA,
    MIN_SAMPLES_FOR_VOLATILITY,
    MIN_SNAPSHOTS_FOR_ALPHA,
    MIN_YEARS_FOR_ANNUALIZING,
    TRADING_DAYS_PER_YEAR,
    XIRR_INITIAL_GUESS,
    XIRR_MAX_ITERATIONS,
    XIRR_RATE_FLOOR,
    XIRR_TOLERANCE,
)
from plancompare.services.simulation.types import MonthlySnapshot


@dataclass(frozen=True)
class AnalyticsConfig:
    """
    Assumptions used by the metrics calculators.

    Attributes:
        risk_free_rate: Annual risk-free rate as a decimal (0.06 = 6%)
        trading_days_per_year: Volatility annualization factor (daily series)
        xirr_initial_guess: Starting rate for Newton-Raphson
        xirr_max_iterations: Iteration cap for Newton-Raphson
        xirr_tolerance: Absolute NPV tolerance, in currency units
        xirr_rate_floor: Rate floor applied before evaluating (1 + r)^t
        min_samples_for_volatility: Samples required for volatility
        min_aligned_points_for_beta: Date-aligned points required for beta
        min_snapshots_for_alpha: Snapshots required for portfolio alpha/beta
        min_years_for_annualizing: Floor on elapsed years when annualizing
    """
    risk_free_rate: Decimal = DEFAULT_RISK_FREE_RATE
    trading_days_per_year: int = TRADING_DAYS_PER_YEAR
    xirr_initial_guess: Decimal = XIRR_INITIAL_GUESS
    xirr_max_iterations: int = XIRR_MAX_ITERATIONS
    xirr_tolerance: Decimal = XIRR_TOLERANCE
    xirr_rate_floor: Decimal = XIRR_RATE_FLOOR
    min_samples_for_volatility: int = MIN_SAMPLES_FOR_VOLATILITY
    min_aligned_points_for_beta: int = MIN_ALIGNED_POINTS_FOR_BETA
    min_snapshots_for_alpha: int = MIN_SNAPSHOTS_FOR_ALPHA
    min_years_for_annualizing: Decimal = MIN_YEARS_FOR_ANNUALIZING

    @classmethod
    def from_settings(cls, app_settings: Settings | None = None) -> "AnalyticsConfig":
        """
        Build a config from environment settings.

        Args:
            app_settings: Settings instance (defaults to plancompare.config.settings)
        """
        app_settings = app_settings or settings
        return cls(
            risk_free_rate=app_settings.risk_free_rate,
            trading_days_per_year=app_settings.trading_days_per_year,
        )


DEFAULT_CONFIG = AnalyticsConfig()


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass
class PortfolioMetrics:
    """
    Portfolio-level comparison of the held plans against their siblings.

    Attributes:
        total_invested: Contributions that found a NAV
        actual_value: Current value of the plans held
        counterpart_value: Current value had the sibling plans been held
                           (equals actual for holdings with no sibling data)
        net_impact: actual_value - counterpart_value
                    (positive = the plan choice gained money)
        annualized_impact: net_impact per year of snapshot history
        xirr: Money-weighted annual return of the held plans (%)
        absolute_return: (actual - invested) / invested (%)
        max_drawdown: Largest peak-to-trough fall of the actual curve (%)
        romad: Return over maximum drawdown
        alpha: Jensen's alpha against the benchmark (%), None if unavailable
        beta: Sensitivity to the benchmark, None if unavailable
    """
    total_invested: Decimal
    actual_value: Decimal
    counterpart_value: Decimal
    net_impact: Decimal
    annualized_impact: Decimal
    xirr: Decimal
    absolute_return: Decimal
    max_drawdown: Decimal
    romad: Decimal
    alpha: Decimal | None = None
    beta: Decimal | None = None

    @property
    def has_benchmark_metrics(self) -> bool:
        return self.alpha is not None and self.beta is not None


@dataclass
class FundMetrics:
    """
    Ratios for one fund, or the value-weighted portfolio row.

    Attributes:
        name: Fund name ("Portfolio" for the aggregate row)
        invested: Contributions that found a NAV
        current_value: Units x newest NAV
        xirr: Money-weighted annual return (%)
        volatility: Annualized volatility since the start date (%)
        beta: Sensitivity to the benchmark, None without a benchmark
        alpha: Jensen's alpha (%), None without a benchmark or start NAV
        identifier: Scheme code, None for the portfolio row
    """
    name: str
    invested: Decimal
    current_value: Decimal
    xirr: Decimal
    volatility: Decimal
    beta: Decimal | None = None
    alpha: Decimal | None = None
    identifier: str | None = None


@dataclass
class FundRatios:
    """Per-fund rows and the portfolio row."""
    funds: list[FundMetrics]
    portfolio: FundMetrics


@dataclass
class ComparisonResult:
    """
    Combined output of a full plan comparison.

    Attributes:
        snapshots: Month-end curve from the aggregator
        portfolio: Portfolio-level metrics
        fund_ratios: Per-fund and weighted portfolio ratios
        as_of: The "today" every figure was computed for
    """
    snapshots: list[MonthlySnapshot] = field(default_factory=list)
    portfolio: PortfolioMetrics | None = None
    fund_ratios: FundRatios | None = None
    as_of: date | None = None
