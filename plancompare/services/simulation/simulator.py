# plancompare/services/simulation/simulator.py
"""
Cash-flow simulator.

Replays a contribution schedule against one valuation series and reports
units held, money contributed, the signed cash flows and the value at the
newest NAV.

The simulator knows nothing about plan types. The same call simulates the
plan the investor holds and its sibling plan; which instrument is being
simulated is decided entirely by the series passed in.

Schedule rules:
    LUMPSUM - one contribution at start_date (purchase lookup).
    SIP     - one contribution per calendar month from start_date's month
              through today's month, on start_date's day-of-month clamped
              to the month length. A candidate date is skipped if it is
              before start_date, after end_date or after today.

A contribution whose purchase lookup finds no NAV is skipped silently: it
adds no units, no money and no cash flow.
"""

import logging
from collections.abc import Iterator
from datetime import date

from plancompare.services.navseries import NAVSeries, latest_nav, purchase_nav
from plancompare.services.simulation.types import (
    CashFlow,
    ContributionSchedule,
    ContributionType,
    SimulationResult,
)
from plancompare.utils.date_utils import clamped_day, iter_months

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEDULE EXPANSION
# =============================================================================

def sip_date_for_month(
        schedule: ContributionSchedule,
        year: int,
        month: int,
        today: date,
) -> date | None:
    """
    Get the SIP date for a calendar month, or None if nothing posts that month.

    Args:
        schedule: Recurring schedule
        year: Calendar year
        month: Calendar month (1-12)
        today: Contributions dated after today are not posted

    Returns:
        The contribution date, or None if it falls outside the schedule window

    Example:
        >>> s = ContributionSchedule(ContributionType.SIP, Decimal("5000"), date(2024, 1, 31))
        >>> sip_date_for_month(s, 2024, 2, date(2024, 12, 1))
        date(2024, 2, 29)
    """
    payment_date = clamped_day(year, month, schedule.start_date.day)

    if payment_date < schedule.start_date:
        return None
    if payment_date > today:
        return None
    if schedule.end_date is not None and payment_date > schedule.end_date:
        return None
    return payment_date


def contribution_dates(
        schedule: ContributionSchedule,
        today: date,
) -> Iterator[date]:
    """
    Yield every date on which the schedule contributes, in order.

    A LUMPSUM yields its start date once. It is not bounded by today: a
    lumpsum dated in the future still resolves through the purchase lookup,
    which falls back to the newest NAV.
    """
    if schedule.contribution_type == ContributionType.LUMPSUM:
        yield schedule.start_date
        return

    for year, month in iter_months(schedule.start_date, today):
        payment_date = sip_date_for_month(schedule, year, month, today)
        if payment_date is not None:
            yield payment_date


# =============================================================================
# SIMULATION
# =============================================================================

def simulate(
        schedule: ContributionSchedule,
        series: NAVSeries | None,
        as_of: date | None = None,
) -> SimulationResult:
    """
    Replay a contribution schedule against a valuation series.

    Args:
        schedule: Lumpsum or SIP schedule
        series: NAV series of the instrument being bought (None/empty = no data)
        as_of: "Today" for the SIP window; defaults to date.today()

    Returns:
        SimulationResult. All-zero when the series is empty.

    Example:
        schedule = ContributionSchedule(ContributionType.SIP, Decimal("5000"), date(2023, 1, 15))
        result = simulate(schedule, series, as_of=date(2023, 3, 31))
        result.total_contributed  # Decimal("15000") if every month found a NAV
    """
    result = SimulationResult()
    if not series:
        return result

    today = as_of or date.today()

    for payment_date in contribution_dates(schedule, today):
        nav = purchase_nav(series, payment_date)
        if nav is None:
            logger.debug("No NAV for contribution on %s, skipping", payment_date)
            continue

        result.units_held += schedule.amount / nav
        result.total_contributed += schedule.amount
        result.cash_flows.append(CashFlow(date=payment_date, amount=-schedule.amount))

    newest = latest_nav(series)
    if newest is not None:
        result.current_value = result.units_held * newest

    return result
