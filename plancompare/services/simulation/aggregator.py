# plancompare/services/simulation/aggregator.py
"""
Multi-scenario monthly aggregator.

Walks the calendar month by month from the earliest contribution to today
and produces one MonthlySnapshot per month in which money has been
invested.

For every investment, independently of the plan actually held, two
hypothetical scenarios accrue units side by side:

    direct  - every contribution bought the Direct plan
    regular - every contribution bought the Regular plan

The benchmark, when supplied, is bought with the same contributions.

At each month end both scenarios are valued (valuation lookup) and summed
across the portfolio. "Actual" takes, per investment, the scenario that
matches the plan held; "counterpart" takes the other one.

Contributions follow the simulator's schedule rules, with one difference
in bookkeeping: invested_to_date counts every posted contribution, even if
no NAV was found for one of the scenarios. The snapshot curve therefore
shows the money the investor put in, not the money that found a price.
"""

import calendar
import logging
from datetime import date
from decimal import Decimal

from plancompare.services.constants import ZERO
from plancompare.services.navseries import NAVSeries, purchase_nav, valuation_nav
from plancompare.services.simulation.simulator import sip_date_for_month
from plancompare.services.simulation.types import (
    ContributionType,
    InvestmentRecord,
    MonthlySnapshot,
    ScenarioUnits,
)
from plancompare.utils.date_utils import iter_months, month_end_or_today

logger = logging.getLogger(__name__)


def format_period_label(period_end: date) -> str:
    """
    Short month label, e.g. "Jan 24".

    Uses calendar.month_abbr so the label does not depend on the process locale.
    """
    return f"{calendar.month_abbr[period_end.month]} {period_end.year % 100:02d}"


def _contribution_date(
        investment: InvestmentRecord,
        state: ScenarioUnits,
        year: int,
        month: int,
        today: date,
) -> date | None:
    """Date the investment contributes in this month, or None."""
    if investment.contribution_type == ContributionType.SIP:
        return sip_date_for_month(investment.schedule, year, month, today)

    if state.lumpsum_posted:
        return None
    start = investment.start_date
    if (start.year, start.month) == (year, month):
        return start
    return None


def _buy(units: Decimal, amount: Decimal, series: NAVSeries | None, on: date) -> Decimal:
    nav = purchase_nav(series, on)
    if nav is None:
        return units
    return units + amount / nav


def _value(units: Decimal, series: NAVSeries | None, on: date) -> Decimal:
    if units <= ZERO:
        return ZERO
    nav = valuation_nav(series, on)
    if nav is None:
        return ZERO
    return units * nav


def aggregate_monthly(
        investments: list[InvestmentRecord],
        benchmark: NAVSeries | None = None,
        as_of: date | None = None,
) -> list[MonthlySnapshot]:
    """
    Build the month-end snapshot curve for a portfolio.

    Args:
        investments: Holdings, each resolved to its primary and optional
                     counterpart series
        benchmark: Optional benchmark series bought with the same money
        as_of: "Today"; defaults to date.today()

    Returns:
        Snapshots in chronological order. Empty if no investment has any
        series data. Months before the first posted contribution are
        skipped.
    """
    active = [inv for inv in investments if inv.has_any_series]
    if not active:
        return []

    today = as_of or date.today()
    has_benchmark = bool(benchmark)
    global_start = min(inv.start_date for inv in active).replace(day=1)

    states = [ScenarioUnits() for _ in active]
    snapshots: list[MonthlySnapshot] = []

    for year, month in iter_months(global_start, today):
        period_end = month_end_or_today(year, month, today)

        # Post this month's contributions
        for inv, state in zip(active, states):
            paid_on = _contribution_date(inv, state, year, month, today)
            if paid_on is None:
                continue

            if inv.contribution_type == ContributionType.LUMPSUM:
                state.lumpsum_posted = True

            state.direct_units = _buy(state.direct_units, inv.amount, inv.direct_series, paid_on)
            state.regular_units = _buy(state.regular_units, inv.amount, inv.regular_series, paid_on)
            if has_benchmark:
                state.benchmark_units = _buy(state.benchmark_units, inv.amount, benchmark, paid_on)
            state.invested += inv.amount

        # Value both scenarios at month end
        direct_total = ZERO
        regular_total = ZERO
        actual_total = ZERO
        counterpart_total = ZERO
        invested_total = ZERO
        benchmark_units = ZERO

        for inv, state in zip(active, states):
            invested_total += state.invested
            benchmark_units += state.benchmark_units

            direct_value = _value(state.direct_units, inv.direct_series, period_end)
            regular_value = _value(state.regular_units, inv.regular_series, period_end)
            direct_total += direct_value
            regular_total += regular_value

            if inv.primary_is_direct:
                actual_total += direct_value
                counterpart_total += regular_value
            else:
                actual_total += regular_value
                counterpart_total += direct_value

        if invested_total <= ZERO:
            continue

        benchmark_value = None
        if has_benchmark:
            benchmark_value = _value(benchmark_units, benchmark, period_end)

        snapshots.append(MonthlySnapshot(
            period_label=format_period_label(period_end),
            period_end=period_end,
            actual_value=actual_total,
            counterpart_value=counterpart_total,
            direct_value=direct_total,
            regular_value=regular_total,
            invested_to_date=invested_total,
            benchmark_value=benchmark_value,
        ))

    logger.debug(
        "Aggregated %d investments into %d monthly snapshots",
        len(active), len(snapshots),
    )
    return snapshots
