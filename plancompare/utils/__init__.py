# plancompare/utils/__init__.py
"""
Utility modules for the plan comparison engine.

This package contains cross-cutting utilities:
- logging: Logging configuration and setup
- date_utils: Strict date parsers and calendar-month helpers

Usage:
    from plancompare.utils import setup_logging
    from plancompare.utils.date_utils import parse_api_date, iter_months
"""

from plancompare.utils.logging import setup_logging

__all__ = [
    # Logging
    "setup_logging",
]
