# plancompare/services/exceptions.py
"""
Errors raised by the plancompare services.

Missing data is not an error here: an absent NAV, a fund without a
counterpart or a benchmark too short for beta all produce zero, neutral or
None results. Exceptions signal that a collaborator broke its contract:
the NAV provider sent a bad date or value, a portfolio file is unreadable,
or the provider could not be reached at all.

Exception Hierarchy:
    ServiceError
    ├── ValidationError
    │   ├── DateParseError          bad DD-MM-YYYY / ISO date text
    │   └── InvalidNAVError         NAV not a positive decimal
    ├── MarketDataError
    │   ├── ProviderUnavailableError   transient, retried
    │   ├── SchemeNotFoundError        permanent, not retried
    │   └── RateLimitError             transient, retried
    └── PortfolioFileError
"""


class ServiceError(Exception):
    """Root of the hierarchy; `message` holds the text shown to callers."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# BAD INPUT FROM A COLLABORATOR
# =============================================================================


class ValidationError(ServiceError):
    """A value handed to the engine is malformed; `field` names where, if known."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class DateParseError(ValidationError):
    """
    Date text did not match the format the caller required.

    Attributes:
        value: Raw text as received
        expected_format: Format label used in the message, e.g. "DD-MM-YYYY"
    """

    def __init__(self, value: str, expected_format: str, field: str | None = "date") -> None:
        self.value = value
        self.expected_format = expected_format
        super().__init__(f"Invalid date '{value}': expected {expected_format}", field=field)


class InvalidNAVError(ValidationError):
    """A NAV that is not a finite decimal greater than zero."""

    def __init__(self, value: object, reason: str = "must be a positive decimal") -> None:
        self.value = value
        super().__init__(f"Invalid NAV '{value}': {reason}", field="nav")


# =============================================================================
# NAV PROVIDER
# =============================================================================


class MarketDataError(ServiceError):
    """Any failure talking to a NAV provider; `provider` is its short name."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        self.provider = provider
        super().__init__(message)


class ProviderUnavailableError(MarketDataError):
    """Timeout, connection failure, 5xx or an unparseable body."""

    def __init__(self, provider: str, reason: str) -> None:
        self.reason = reason
        super().__init__(f"{provider}: provider unavailable ({reason})", provider=provider)


class SchemeNotFoundError(MarketDataError):
    """The provider has no scheme with this code."""

    def __init__(self, scheme_code: str, provider: str) -> None:
        self.scheme_code = scheme_code
        super().__init__(f"{provider}: no scheme with code '{scheme_code}'", provider=provider)


class RateLimitError(MarketDataError):
    """
    HTTP 429 from the provider.

    Attributes:
        retry_after: Seconds from the Retry-After header, None when absent
    """

    def __init__(self, provider: str, retry_after: int | None = None) -> None:
        self.retry_after = retry_after
        hint = f", retry after {retry_after}s" if retry_after else ""
        super().__init__(f"{provider}: rate limited{hint}", provider=provider)


# =============================================================================
# PORTFOLIO FILES
# =============================================================================


class PortfolioFileError(ServiceError):
    """A saved portfolio could not be read, parsed or written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Portfolio file '{path}': {reason}")
