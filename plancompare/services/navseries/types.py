# plancompare/services/navseries/types.py
"""
Data types for valuation (NAV) series.

Architecture:
    - NAVSample: One (date, per-unit value) observation
    - NAVSeries: Immutable, date-ascending collection of samples
    - NAVStore: Per-instrument registry of series
    - LookupMode: Policy for resolving a value at an arbitrary date

Providers usually deliver samples newest-first. NAVSeries accepts any order
and normalizes to ascending once, at construction, so every lookup can use
binary search.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum

from plancompare.services.exceptions import InvalidNAVError
from plancompare.utils.date_utils import format_api_date, parse_api_date


class LookupMode(str, Enum):
    """
    Policy for resolving a per-unit value at a target date.

    Attributes:
        PURCHASE: First value on/after the date (settlement delay)
        VALUATION: Last value on/before the date (mark-to-market)
    """
    PURCHASE = "purchase"
    VALUATION = "valuation"


@dataclass(frozen=True)
class NAVSample:
    """
    A single per-unit valuation.

    Attributes:
        date: Valuation date
        value: Per-unit value (strictly positive)
    """
    date: date
    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal) or not self.value.is_finite() or self.value <= 0:
            raise InvalidNAVError(self.value)


def parse_nav(raw: str | Decimal | int) -> Decimal:
    """
    Parse a provider NAV string into a positive Decimal.

    Raises:
        InvalidNAVError: If the value is not a number or is not positive
    """
    if isinstance(raw, float):
        # Floats would smuggle binary rounding into units held
        raw = str(raw)
    try:
        value = Decimal(str(raw).strip()) if not isinstance(raw, Decimal) else raw
    except (InvalidOperation, ValueError):
        raise InvalidNAVError(raw, "not a number") from None
    if not value.is_finite() or value <= 0:
        raise InvalidNAVError(raw)
    return value


@dataclass(frozen=True)
class NAVSeries:
    """
    Immutable valuation series for one instrument, ascending by date.

    Build with NAVSeries.from_samples() or NAVSeries.from_api(); the default
    constructor trusts its input to be ascending and duplicate-free.

    Attributes:
        samples: Samples sorted ascending by date, unique dates
    """
    samples: tuple[NAVSample, ...] = ()
    _dates: tuple[date, ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_dates", tuple(s.date for s in self.samples))

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_samples(cls, samples: Iterable[NAVSample]) -> NAVSeries:
        """
        Build a series from samples in any order.

        Duplicate dates resolve last-write-wins: the sample appearing later
        in the input replaces the earlier one.
        """
        by_date: dict[date, NAVSample] = {}
        for sample in samples:
            by_date[sample.date] = sample
        return cls(samples=tuple(by_date[d] for d in sorted(by_date)))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[date, Decimal | str | int]]) -> NAVSeries:
        """Build a series from (date, value) pairs."""
        return cls.from_samples(NAVSample(d, parse_nav(v)) for d, v in pairs)

    @classmethod
    def from_api(cls, rows: Iterable[Mapping[str, str]]) -> NAVSeries:
        """
        Build a series from provider rows: {"date": "DD-MM-YYYY", "nav": "123.45"}.

        Raises:
            DateParseError: If a date is malformed
            InvalidNAVError: If a NAV is malformed or not positive
        """
        return cls.from_samples(
            NAVSample(parse_api_date(row["date"]), parse_nav(row["nav"]))
            for row in rows
        )

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[NAVSample]:
        return iter(self.samples)

    def __bool__(self) -> bool:
        return bool(self.samples)

    @property
    def dates(self) -> tuple[date, ...]:
        return self._dates

    @property
    def latest(self) -> NAVSample | None:
        """Newest sample, or None if empty."""
        return self.samples[-1] if self.samples else None

    @property
    def earliest(self) -> NAVSample | None:
        """Oldest sample, or None if empty."""
        return self.samples[0] if self.samples else None

    def value_on(self, target: date) -> Decimal | None:
        """Exact-date value, or None if there is no sample on that date."""
        i = bisect.bisect_left(self._dates, target)
        if i < len(self._dates) and self._dates[i] == target:
            return self.samples[i].value
        return None

    def since(self, start: date) -> NAVSeries:
        """Samples dated on/after start."""
        i = bisect.bisect_left(self._dates, start)
        return NAVSeries(samples=self.samples[i:])

    def to_api_rows(self) -> list[dict[str, str]]:
        """Provider-format rows, newest first."""
        return [
            {"date": format_api_date(s.date), "nav": str(s.value)}
            for s in reversed(self.samples)
        ]


class NAVStore:
    """
    Registry of valuation series keyed by instrument identifier.

    Identifiers are provider scheme codes for fetched funds, or any unique
    label for user-entered (custom) series.
    """

    def __init__(self) -> None:
        self._series: dict[str, NAVSeries] = {}

    def add(self, identifier: str, series: NAVSeries) -> None:
        """Register or replace the series for an identifier."""
        self._series[identifier] = series

    def get(self, identifier: str) -> NAVSeries | None:
        return self._series.get(identifier)

    def identifiers(self) -> list[str]:
        return sorted(self._series)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._series

    def __len__(self) -> int:
        return len(self._series)
