# plancompare/schemas/validators.py
"""
Field validators shared by the provider and portfolio-file schemas.

- Scheme codes arrive as JSON numbers or strings; both become trimmed strings
- Portfolio dates are YYYY-MM-DD, provider NAV dates are DD-MM-YYYY
- An investment's end date may not precede its start date

Each function raises ValueError, which Pydantic turns into a field error.
"""

import re
from datetime import date

from plancompare.services.exceptions import DateParseError
from plancompare.utils.date_utils import parse_api_date, parse_iso_date

# =============================================================================
# CONSTANTS
# =============================================================================

# Scheme codes: provider codes are numeric, custom series may use labels
SCHEME_CODE_PATTERN = re.compile(r'^[A-Za-z0-9_.\-]{1,40}$')


# =============================================================================
# SCHEME CODE VALIDATION
# =============================================================================

def validate_scheme_code(value: str | int) -> str:
    """
    Validate and normalize a scheme code.

    The provider sends codes as JSON numbers in search results and as
    strings elsewhere; both normalize to a trimmed string.

    Raises:
        ValueError: If the code is empty or contains unexpected characters
    """
    if value is None or value == "":
        raise ValueError("Scheme code cannot be empty")

    normalized = str(value).strip()

    if not SCHEME_CODE_PATTERN.match(normalized):
        raise ValueError(f"Invalid scheme code: '{normalized}'")

    return normalized


# =============================================================================
# DATE VALIDATION
# =============================================================================

def validate_iso_date(value: str | date) -> date:
    """
    Validate a user-entered YYYY-MM-DD date.

    Raises:
        ValueError: If the string is not a valid YYYY-MM-DD date
    """
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(value)
    except DateParseError as e:
        raise ValueError(str(e)) from None


def validate_api_date_string(value: str) -> str:
    """
    Validate a provider DD-MM-YYYY date string, returning it unchanged.

    Raises:
        ValueError: If the string is not a valid DD-MM-YYYY date
    """
    try:
        parse_api_date(value)
    except DateParseError as e:
        raise ValueError(str(e)) from None
    return value.strip()


def validate_date_range(start_date: date, end_date: date | None) -> None:
    """
    Validate that an optional end date does not precede the start date.

    Raises:
        ValueError: If end_date < start_date
    """
    if end_date is not None and end_date < start_date:
        raise ValueError(
            f"end date {end_date} cannot be before start date {start_date}"
        )
