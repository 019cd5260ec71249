# plancompare/services/analytics/risk.py
"""
Risk calculation functions.

This module contains pure functions for risk metrics:
- Volatility: Annualized standard deviation of NAV returns
- Maximum Drawdown: Largest peak-to-trough decline of a value curve
- RoMaD: Return over maximum drawdown

Formulas:
    Volatility = σ(r) × √252 × 100
        σ is the POPULATION standard deviation of period-over-period
        returns. √252 annualizes DAILY returns; the result is only
        meaningful for daily-frequency series.

    Drawdown_t = (Peak_t - Value_t) / Peak_t
    Max Drawdown = max(Drawdown_t) × 100

    RoMaD = XIRR / Max Drawdown
"""

import logging
from datetime import date
from decimal import Decimal

from plancompare.services.analytics.types import DEFAULT_CONFIG, AnalyticsConfig
from plancompare.services.constants import ROMAD_NO_DRAWDOWN, ZERO
from plancompare.services.navseries import NAVSeries

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def calculate_series_returns(values: list[Decimal]) -> list[Decimal]:
    """
    Period-over-period simple returns of a value sequence.

    Formula: r_i = (V_i - V_{i-1}) / V_{i-1}

    Returns:
        One fewer return than input values (empty for < 2 values)
    """
    return [
        (curr - prev) / prev
        for prev, curr in zip(values, values[1:])
        if prev != ZERO
    ]


def _decimal_mean(values: list[Decimal]) -> Decimal:
    return sum(values, ZERO) / Decimal(len(values))


def _population_stdev(values: list[Decimal]) -> Decimal:
    """σ = sqrt(Σ(x - μ)² / n), pure Decimal."""
    mean_val = _decimal_mean(values)
    variance = sum(((x - mean_val) ** 2 for x in values), ZERO) / Decimal(len(values))
    return variance.sqrt()


# =============================================================================
# VOLATILITY
# =============================================================================

def calculate_volatility(
        series: NAVSeries | None,
        since: date,
        config: AnalyticsConfig = DEFAULT_CONFIG,
) -> Decimal:
    """
    Annualized volatility of a NAV series from a start date, as a percentage.

    Args:
        series: NAV series (any source order; NAVSeries is ascending)
        since: Only samples dated on/after this date are used
        config: Minimum sample count and annualization factor

    Returns:
        Volatility in percent, or 0 with fewer than
        config.min_samples_for_volatility samples
    """
    if not series:
        return ZERO

    window = series.since(since)
    if len(window) < config.min_samples_for_volatility:
        logger.debug(
            "Volatility needs %d samples, have %d",
            config.min_samples_for_volatility, len(window),
        )
        return ZERO

    returns = calculate_series_returns([s.value for s in window])
    if not returns:
        return ZERO

    annualization = Decimal(config.trading_days_per_year).sqrt()
    return _population_stdev(returns) * annualization * HUNDRED


# =============================================================================
# DRAWDOWN
# =============================================================================

def calculate_max_drawdown(values: list[Decimal]) -> Decimal:
    """
    Maximum peak-to-trough decline as a percentage.

    Args:
        values: Value curve in chronological order

    Returns:
        Max drawdown in percent (50 = halved from a peak), 0 for an empty
        or never-declining curve

    Example:
        >>> calculate_max_drawdown([Decimal("100"), Decimal("50"), Decimal("100")])
        Decimal('50.0')
    """
    if not values:
        return ZERO

    peak = values[0]
    max_drawdown = ZERO

    for value in values:
        if value > peak:
            peak = value
        if peak <= ZERO:
            continue
        drawdown = (peak - value) / peak
        if drawdown > max_drawdown:
            max_drawdown = drawdown

    return max_drawdown * HUNDRED


# =============================================================================
# RISK-ADJUSTED RETURN
# =============================================================================

def calculate_romad(xirr: Decimal, max_drawdown: Decimal) -> Decimal:
    """
    Return over maximum drawdown.

    Without any drawdown the ratio is undefined; a positive return then
    reports ROMAD_NO_DRAWDOWN (100) and anything else reports 0.
    """
    if max_drawdown > ZERO:
        return xirr / max_drawdown
    if xirr > ZERO:
        return ROMAD_NO_DRAWDOWN
    return ZERO
