# plancompare/services/simulation/__init__.py
"""
Contribution replay package.

Architecture:
    simulation/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # Schedules, cash flows, records, snapshots
    ├── simulator.py             # Single-series cash-flow simulator
    └── aggregator.py            # Portfolio-wide monthly scenario aggregator

Usage:
    from plancompare.services.simulation import simulate, aggregate_monthly

    result = simulate(record.schedule, record.primary_series, as_of=today)
    snapshots = aggregate_monthly(records, benchmark=nifty, as_of=today)
"""

from plancompare.services.simulation.aggregator import aggregate_monthly, format_period_label
from plancompare.services.simulation.simulator import (
    contribution_dates,
    simulate,
    sip_date_for_month,
)
from plancompare.services.simulation.types import (
    CashFlow,
    ContributionSchedule,
    ContributionType,
    InvestmentRecord,
    MonthlySnapshot,
    ScenarioUnits,
    SimulationResult,
)

__all__ = [
    # Types
    "CashFlow",
    "ContributionSchedule",
    "ContributionType",
    "InvestmentRecord",
    "MonthlySnapshot",
    "ScenarioUnits",
    "SimulationResult",

    # Simulator
    "simulate",
    "contribution_dates",
    "sip_date_for_month",

    # Aggregator
    "aggregate_monthly",
    "format_period_label",
]
