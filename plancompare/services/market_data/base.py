# plancompare/services/market_data/base.py
"""
Contract for NAV history providers.

A provider answers two questions: which schemes match a name, and what is
the full NAV history of a scheme code. Everything downstream (simulator,
aggregator, analytics) works on NAVSeries only, so swapping mfapi.in for
another source means writing one subclass of NAVProvider.

Retry policy lives here so every provider backs off the same way:
transient failures (ProviderUnavailableError, RateLimitError) are retried
with exponential backoff, everything else surfaces on the first attempt.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from plancompare.services.exceptions import (
    ProviderUnavailableError,
    RateLimitError,
    ServiceError,
)
from plancompare.services.navseries import NAVSeries

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_ERRORS = (ProviderUnavailableError, RateLimitError)


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass(frozen=True)
class SchemeSearchResult:
    """One search hit: scheme code plus its full display name."""

    code: str
    name: str


@dataclass(frozen=True)
class SchemeHistory:
    """
    A scheme's metadata together with its NAV series.

    Attributes:
        code: Provider scheme code, e.g. "119551"
        name: Display name including plan and option,
              e.g. "Example Fund - Direct Plan - Growth"
        series: Ascending NAVSeries (may be empty for a newly launched scheme)
        fund_house: AMC name when the provider reports one
        category: SEBI category, e.g. "Equity Scheme - Large Cap Fund"
        scheme_type: e.g. "Open Ended Schemes"
    """

    code: str
    name: str
    series: NAVSeries
    fund_house: str | None = None
    category: str | None = None
    scheme_type: str | None = None


@dataclass
class BatchHistoryResult:
    """
    Outcome of fetching several histories; one bad code does not sink the rest.

    `successful` and `failed` are keyed by scheme code. A code appears in
    exactly one of them.
    """

    successful: dict[str, SchemeHistory] = field(default_factory=dict)
    failed: dict[str, Exception] = field(default_factory=dict)

    @property
    def success_count(self) -> int:
        return len(self.successful)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def all_successful(self) -> bool:
        return not self.failed


# =============================================================================
# PROVIDER BASE
# =============================================================================

class NAVProvider(ABC):
    """
    Base class for NAV history sources.

    Subclasses implement `name`, `search_schemes` and `get_scheme_history`,
    and wrap their network calls in `_execute_with_retry`. Backoff is tuned
    through class attributes (tests zero the waits):

        MAX_RETRY_ATTEMPTS  total attempts, first one included
        RETRY_MIN_WAIT      lower bound of the backoff, seconds
        RETRY_MAX_WAIT      upper bound of the backoff, seconds
        RETRY_MULTIPLIER    exponential growth factor
    """

    MAX_RETRY_ATTEMPTS: int = 3
    RETRY_MIN_WAIT: int = 1
    RETRY_MAX_WAIT: int = 10
    RETRY_MULTIPLIER: int = 1

    @property
    @abstractmethod
    def name(self) -> str:
        """Short provider id used in log lines, e.g. "mfapi"."""

    @abstractmethod
    def search_schemes(self, query: str) -> list[SchemeSearchResult]:
        """
        Free-text scheme search.

        Returns hits in the provider's own ranking; an empty list when
        nothing matches.

        Raises:
            ProviderUnavailableError, RateLimitError: after retries run out
        """

    @abstractmethod
    def get_scheme_history(self, code: str) -> SchemeHistory:
        """
        Metadata and complete NAV history for one scheme code.

        Raises:
            SchemeNotFoundError: The provider does not know the code
            DateParseError, InvalidNAVError: A NAV row is malformed
            ProviderUnavailableError, RateLimitError: after retries run out
        """

    def get_scheme_histories(self, codes: Iterable[str]) -> BatchHistoryResult:
        """Fetch each distinct code once, collecting per-code failures."""
        result = BatchHistoryResult()

        for code in dict.fromkeys(codes):
            try:
                result.successful[code] = self.get_scheme_history(code)
            except ServiceError as e:
                logger.error(f"[{self.name}] NAV history for {code} failed: {e}")
                result.failed[code] = e

        if result.failed:
            logger.info(
                f"[{self.name}] Fetched {result.success_count} histories, "
                f"{result.failure_count} failed"
            )
        return result

    def is_available(self) -> bool:
        """Providers without a cheap health probe report themselves up."""
        return True

    # =========================================================================
    # RETRY
    # =========================================================================

    def _retrying(self) -> Retrying:
        """Tenacity controller built from the class-level backoff settings."""
        return Retrying(
            stop=stop_after_attempt(self.MAX_RETRY_ATTEMPTS),
            wait=wait_exponential(
                multiplier=self.RETRY_MULTIPLIER,
                min=self.RETRY_MIN_WAIT,
                max=self.RETRY_MAX_WAIT,
            ),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    def _execute_with_retry(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Call func(*args, **kwargs), retrying transient provider failures.

        The final exception is re-raised unchanged once attempts run out.
        """
        return self._retrying()(func, *args, **kwargs)
