# plancompare/services/simulation/types.py
"""
Data types for contribution replay.

This module defines the structures flowing through the simulator and the
monthly aggregator. All amounts, values and unit counts are Decimal.

Architecture:
    - ContributionType: Single (lumpsum) or recurring (SIP)
    - ContributionSchedule: When and how much is invested
    - CashFlow: Dated, signed money movement (investor's perspective)
    - SimulationResult: Units, money in, cash flows and value of one replay
    - InvestmentRecord: A holding, resolved to its NAV series by the caller
    - ScenarioUnits: Per-investment accumulators used by the aggregator
    - MonthlySnapshot: Portfolio totals at one month end
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from plancompare.services.constants import ZERO
from plancompare.services.navseries.types import NAVSeries


class ContributionType(str, Enum):
    """
    How an investment is funded.

    Attributes:
        LUMPSUM: One contribution on the start date
        SIP: Recurring monthly contribution on the start date's day-of-month
    """
    LUMPSUM = "LUMPSUM"
    SIP = "SIP"


# =============================================================================
# INPUT TYPES
# =============================================================================

@dataclass(frozen=True)
class ContributionSchedule:
    """
    Contribution schedule of an investment.

    Attributes:
        contribution_type: LUMPSUM or SIP
        amount: Money invested per contribution (positive)
        start_date: Lumpsum date, or first SIP date (its day-of-month is the SIP day)
        end_date: Last date a SIP may post (inclusive), None = until today
    """
    contribution_type: ContributionType
    amount: Decimal
    start_date: date
    end_date: date | None = None

    @property
    def is_recurring(self) -> bool:
        return self.contribution_type == ContributionType.SIP


@dataclass(frozen=True)
class CashFlow:
    """
    A dated cash movement for XIRR.

    Attributes:
        date: When the money moved
        amount: Negative = contribution (money leaves the investor),
                Positive = redemption or terminal valuation
    """
    date: date
    amount: Decimal


@dataclass(frozen=True)
class InvestmentRecord:
    """
    One holding in the portfolio, already resolved to its NAV series.

    The caller (UI, file import, plan-pairing heuristics) supplies the
    series; the engine never fetches anything.

    Attributes:
        identifier: Scheme code of the held plan (or custom label)
        name: Display name of the held plan
        primary_is_direct: True if the investor holds the Direct plan
        primary_series: NAV series of the held plan
        counterpart_series: NAV series of the sibling plan, if known
        contribution_type: LUMPSUM or SIP
        amount: Amount per contribution
        start_date: Lumpsum date or first SIP date
        end_date: Optional SIP end date (inclusive)
        counterpart_identifier: Scheme code of the sibling plan
        counterpart_name: Display name of the sibling plan
        category: Scheme category from the provider
        fund_house: Issuing fund house from the provider
        source: "api" for provider data, "custom" for a user-entered NAV table
        tags: Free-form labels (goal, owner, ...)
        record_id: Row id in a saved portfolio file, kept across save and load
    """
    identifier: str
    name: str
    primary_is_direct: bool
    primary_series: NAVSeries
    contribution_type: ContributionType
    amount: Decimal
    start_date: date
    end_date: date | None = None
    counterpart_series: NAVSeries | None = None
    counterpart_identifier: str | None = None
    counterpart_name: str | None = None
    category: str | None = None
    fund_house: str | None = None
    source: str = "api"
    tags: tuple[str, ...] = ()
    record_id: str | None = None

    @property
    def schedule(self) -> ContributionSchedule:
        return ContributionSchedule(
            contribution_type=self.contribution_type,
            amount=self.amount,
            start_date=self.start_date,
            end_date=self.end_date,
        )

    @property
    def direct_series(self) -> NAVSeries | None:
        """Series of the Direct listing, whichever side it is on."""
        return self.primary_series if self.primary_is_direct else self.counterpart_series

    @property
    def regular_series(self) -> NAVSeries | None:
        """Series of the Regular listing, whichever side it is on."""
        return self.counterpart_series if self.primary_is_direct else self.primary_series

    @property
    def has_counterpart(self) -> bool:
        return bool(self.counterpart_series)

    @property
    def has_any_series(self) -> bool:
        return bool(self.primary_series) or bool(self.counterpart_series)


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass
class SimulationResult:
    """
    Outcome of replaying one schedule against one NAV series.

    Attributes:
        units_held: Units accumulated
        total_contributed: Sum of contributions that found a NAV
        cash_flows: Negative flows, one per posted contribution, chronological
        current_value: units_held x newest NAV in the series
    """
    units_held: Decimal = ZERO
    total_contributed: Decimal = ZERO
    cash_flows: list[CashFlow] = field(default_factory=list)
    current_value: Decimal = ZERO

    @property
    def contribution_count(self) -> int:
        return len(self.cash_flows)


@dataclass
class ScenarioUnits:
    """
    Running accumulators the aggregator keeps for one investment.

    The scenario set is closed: units if every contribution had gone into
    the Direct plan, units if it had gone into the Regular plan, units of
    the benchmark bought with the same money, and the money itself.

    Attributes:
        direct_units: Units accrued in the Direct plan scenario
        regular_units: Units accrued in the Regular plan scenario
        benchmark_units: Benchmark units bought with the same contributions
        invested: Contributions posted so far
        lumpsum_posted: Set once a LUMPSUM has fired
    """
    direct_units: Decimal = ZERO
    regular_units: Decimal = ZERO
    benchmark_units: Decimal = ZERO
    invested: Decimal = ZERO
    lumpsum_posted: bool = False


@dataclass(frozen=True)
class MonthlySnapshot:
    """
    Portfolio totals valued at one month end.

    Attributes:
        period_label: Display label, e.g. "Jan 24"
        period_end: Valuation date (last day of month, or today)
        actual_value: Value of the plans actually held
        counterpart_value: Value had every holding been in its sibling plan
        direct_value: Value had every holding been in the Direct plan
        regular_value: Value had every holding been in the Regular plan
        invested_to_date: Cumulative contributions
        benchmark_value: Value of the benchmark bought with the same money,
                         None when no benchmark was supplied
    """
    period_label: str
    period_end: date
    actual_value: Decimal
    counterpart_value: Decimal
    direct_value: Decimal
    regular_value: Decimal
    invested_to_date: Decimal
    benchmark_value: Decimal | None = None
