# plancompare/services/analytics/returns.py
"""
Return calculation functions.

This module contains pure functions for the return metrics of the plan
comparison:
- XIRR: Money-weighted annual return (Newton-Raphson solver)
- CAGR: Compound annual growth between two values
- Absolute Return: Gain over money invested
- Net Impact: Value difference between the held plans and their siblings

All functions are stateless and deterministic given their inputs.

Formulas:
    XIRR solves: Σ CF_i / (1 + r)^((d_i - d_0) / 365) = 0

    CAGR = (End / Start)^(1 / years) - 1

    Absolute Return = (Value - Invested) / Invested

Sign convention:
    Contributions are NEGATIVE cash flows (money leaves the investor).
    The terminal valuation is a POSITIVE cash flow.

Precision Note (Decimal vs Float):
    The XIRR solver runs in float: each iteration raises (1 + r) to a
    fractional power for every flow, which Decimal does slowly and float64
    does to ~15 significant digits. The rate is converted back to Decimal
    once. CAGR uses float for the fractional exponent for the same reason.
"""

import logging
import math
from datetime import date
from decimal import Decimal

from plancompare.services.analytics.types import DEFAULT_CONFIG, AnalyticsConfig
from plancompare.services.constants import CALENDAR_DAYS_PER_YEAR, MONTHS_PER_YEAR, ZERO
from plancompare.services.simulation.types import CashFlow

logger = logging.getLogger(__name__)


# =============================================================================
# XIRR
# =============================================================================

def calculate_xirr(
        cash_flows: list[CashFlow],
        terminal_value: Decimal,
        terminal_date: date,
        config: AnalyticsConfig = DEFAULT_CONFIG,
) -> Decimal:
    """
    Calculate Extended Internal Rate of Return (XIRR) as a percentage.

    A synthetic terminal inflow {terminal_date, terminal_value} is appended
    to the flows before solving.

    Solver:
        Newton-Raphson from config.xirr_initial_guess. Before each
        evaluation the rate is floored at config.xirr_rate_floor so
        (1 + r) stays positive. Stops when |NPV| < config.xirr_tolerance
        (an ABSOLUTE tolerance, in currency units).

    Failure path:
        Returns 0 (and logs a warning) when:
        - fewer than 2 flows exist after appending the terminal flow
        - the derivative vanishes or the next rate is not finite
        - the NPV overflows float range
        - no convergence within config.xirr_max_iterations

        Deep short-horizon losses (e.g. 100,000 in, 1,000 back a month
        later) can push the Newton step below the rate floor repeatedly and
        end here, so a near-total loss may be reported as 0.

    Args:
        cash_flows: Contributions (negative) and any redemptions (positive)
        terminal_value: Current value of the holding
        terminal_date: Valuation date of terminal_value
        config: Solver settings

    Returns:
        Annual rate as a percentage (10 = 10%), or 0 if unsolvable

    Example:
        >>> flows = [CashFlow(date(2023, 1, 1), Decimal("-100000"))]
        >>> calculate_xirr(flows, Decimal("110000"), date(2024, 1, 1))
        Decimal('10.0')
    """
    flows = sorted(
        [*cash_flows, CashFlow(date=terminal_date, amount=terminal_value)],
        key=lambda cf: cf.date,
    )
    if len(flows) < 2:
        return ZERO

    base_date = flows[0].date
    points = [
        ((cf.date - base_date).days / CALENDAR_DAYS_PER_YEAR, float(cf.amount))
        for cf in flows
    ]

    rate = float(config.xirr_initial_guess)
    floor = float(config.xirr_rate_floor)
    tolerance = float(config.xirr_tolerance)

    for _ in range(config.xirr_max_iterations):
        r = max(rate, floor)
        npv = 0.0
        npv_derivative = 0.0

        try:
            for years, amount in points:
                discount = (1 + r) ** years
                npv += amount / discount
                # d/dr [CF / (1+r)^t] = -t * CF / (1+r)^(t+1)
                npv_derivative -= years * amount / (discount * (1 + r))
        except (OverflowError, ZeroDivisionError):
            logger.warning("XIRR diverged at rate %s", rate)
            return ZERO

        if abs(npv) < tolerance:
            return Decimal(str(rate * 100))

        if npv_derivative == 0:
            logger.warning("XIRR derivative vanished at rate %s", rate)
            return ZERO

        rate = rate - npv / npv_derivative
        if not math.isfinite(rate):
            logger.warning("XIRR produced a non-finite rate")
            return ZERO

    logger.warning(
        "XIRR did not converge after %d iterations", config.xirr_max_iterations
    )
    return ZERO


# =============================================================================
# CAGR
# =============================================================================

def calculate_cagr(
        start_value: Decimal,
        end_value: Decimal,
        years: float,
        config: AnalyticsConfig = DEFAULT_CONFIG,
) -> Decimal | None:
    """
    Calculate Compound Annual Growth Rate between two values.

    Formula: (End / Start)^(1 / years) - 1

    years is floored at config.min_years_for_annualizing so very short
    spans do not explode.

    Returns:
        CAGR as a decimal (0.12 = 12%), or None if start_value <= 0
    """
    if start_value <= ZERO:
        return None
    if end_value <= ZERO:
        return Decimal("-1")

    span = max(years, float(config.min_years_for_annualizing))
    growth = float(end_value / start_value)
    return Decimal(str(growth ** (1 / span) - 1))


# =============================================================================
# SIMPLE AGGREGATES
# =============================================================================

def calculate_absolute_return(invested: Decimal, current_value: Decimal) -> Decimal:
    """(Value - Invested) / Invested as a percentage; 0 when nothing was invested."""
    if invested <= ZERO:
        return ZERO
    return (current_value - invested) / invested * Decimal("100")


def calculate_net_impact(actual_value: Decimal, counterpart_value: Decimal) -> Decimal:
    """
    Money gained (positive) or lost (negative) by the plan choice.

    Holding Direct plans, actual > counterpart (Regular) and the impact is
    the commission saved. Holding Regular plans, the impact is negative.
    """
    return actual_value - counterpart_value


def calculate_annualized_impact(
        net_impact: Decimal,
        snapshot_count: int,
        config: AnalyticsConfig = DEFAULT_CONFIG,
) -> Decimal:
    """
    Net impact per year of history.

    The history length is the number of monthly snapshots / 12, floored at
    config.min_years_for_annualizing. No snapshots means no history: 0.
    """
    if snapshot_count <= 0:
        return ZERO

    years = max(
        Decimal(snapshot_count) / Decimal(MONTHS_PER_YEAR),
        config.min_years_for_annualizing,
    )
    return net_impact / years
