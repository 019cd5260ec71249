# plancompare/services/constants.py
"""
Centralized constants for the plan comparison services.

This module provides a single source of truth for the business constants
used across the engine. They are the DEFAULTS of AnalyticsConfig; the
calculators receive the values through that object so tests and callers
can vary them.

Usage:
    from plancompare.services.constants import (
        TRADING_DAYS_PER_YEAR,
        DEFAULT_RISK_FREE_RATE,
        ZERO,
    )
"""

from decimal import Decimal


# =============================================================================
# FINANCIAL CALENDAR CONSTANTS
# =============================================================================

# Trading days in a year. Used to annualize volatility of DAILY series only:
# sqrt(252) is wrong for weekly or monthly samples.
TRADING_DAYS_PER_YEAR: int = 252

# Calendar days in a year. Used for XIRR exponents and holding-period CAGR
CALENDAR_DAYS_PER_YEAR: int = 365

# Months in a year. Used to annualize mean monthly benchmark returns
MONTHS_PER_YEAR: int = 12


# =============================================================================
# RISK-FREE RATE
# =============================================================================

# Assumed annual risk-free rate for Jensen's alpha (Indian T-bill proxy)
# 6% = 0.06 as a decimal
DEFAULT_RISK_FREE_RATE: Decimal = Decimal("0.06")


# =============================================================================
# XIRR CALCULATION SETTINGS
# =============================================================================

# Maximum iterations for the Newton-Raphson solver
XIRR_MAX_ITERATIONS: int = 50

# Absolute convergence tolerance, in currency units of NPV (not a rate)
XIRR_TOLERANCE: Decimal = Decimal("1")

# Initial guess (10% annual return)
XIRR_INITIAL_GUESS: Decimal = Decimal("0.1")

# Floor applied to the rate before evaluating (1 + r)^t
XIRR_RATE_FLOOR: Decimal = Decimal("-0.99")


# =============================================================================
# MINIMUM SAMPLE SIZES
# =============================================================================

# Samples on/after the start date needed for volatility (else 0)
MIN_SAMPLES_FOR_VOLATILITY: int = 30

# Date-aligned asset/benchmark points needed for beta (else neutral 1)
MIN_ALIGNED_POINTS_FOR_BETA: int = 30

# Monthly snapshots needed for portfolio-level alpha/beta (else unavailable)
MIN_SNAPSHOTS_FOR_ALPHA: int = 7


# =============================================================================
# ANNUALIZATION FLOORS
# =============================================================================

# Shortest span, in years, used when annualizing impact or benchmark CAGR.
# Prevents blow-up for portfolios only days old.
MIN_YEARS_FOR_ANNUALIZING: Decimal = Decimal("0.1")


# =============================================================================
# NEUTRAL DEFAULTS
# =============================================================================

# Beta reported when there is not enough aligned data
NEUTRAL_BETA: Decimal = Decimal("1")

# RoMaD reported when there was no drawdown and XIRR is positive
ROMAD_NO_DRAWDOWN: Decimal = Decimal("100")


# =============================================================================
# PROVIDER SETTINGS
# =============================================================================

# Date format used by the NAV provider ("31-01-2024")
PROVIDER_DATE_FORMAT: str = "%d-%m-%Y"

# Date format used for user-entered dates ("2024-01-31")
ISO_DATE_FORMAT: str = "%Y-%m-%d"

# Maximum search results considered when pairing plans
MAX_SEARCH_RESULTS: int = 15


# =============================================================================
# UTILITY CONSTANTS
# =============================================================================

# Type-safe zero for Decimal comparisons
ZERO: Decimal = Decimal("0")
