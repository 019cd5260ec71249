# plancompare/services/__init__.py
"""
Service layer for the plan comparison engine.

Services:
- Have NO knowledge of presentation or storage
- Raise domain-specific exceptions only for contract violations
- Receive resolved NAV series as parameters (no I/O in the core)

Usage:
    from plancompare.services.analytics import ComparisonService
    from plancompare.services.simulation import InvestmentRecord, aggregate_monthly
    from plancompare.services.navseries import NAVSeries
    from plancompare.services.market_data import MFApiProvider
    from plancompare.services import ServiceError, DateParseError

Architecture:
    services/
    ├── __init__.py                  # This file - exception exports
    ├── exceptions.py                # Domain exceptions
    ├── constants.py                 # Business constants and limits
    ├── protocols.py                 # Provider interfaces (Protocol classes)
    ├── portfolio_io.py              # Portfolio file import/export
    ├── navseries/                   # Valuation series store and lookups
    ├── simulation/                  # Cash-flow simulator and monthly aggregator
    ├── analytics/                   # Return/risk metrics and ComparisonService
    └── market_data/                 # NAV provider client and plan pairing

Subpackages are imported explicitly: utils.date_utils depends on
constants/exceptions, and navseries depends on utils.date_utils.
"""

from plancompare.services.exceptions import (
    # Base exceptions
    ServiceError,
    # Validation exceptions
    ValidationError,
    DateParseError,
    InvalidNAVError,
    # Market data exceptions
    MarketDataError,
    ProviderUnavailableError,
    SchemeNotFoundError,
    RateLimitError,
    # Portfolio file exceptions
    PortfolioFileError,
)

__all__ = [
    "ServiceError",
    "ValidationError",
    "DateParseError",
    "InvalidNAVError",
    "MarketDataError",
    "ProviderUnavailableError",
    "SchemeNotFoundError",
    "RateLimitError",
    "PortfolioFileError",
]
