# plancompare/services/protocols.py
"""
Protocol interfaces for service dependency injection.

Using typing.Protocol enables structural subtyping:
- Existing classes satisfy protocols without modification
- Test fakes work without explicit inheritance
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from plancompare.services.market_data.base import SchemeSearchResult


class SchemeSearchProtocol(Protocol):
    """Interface required by the plan pairing heuristics."""

    def search_schemes(self, query: str) -> list[SchemeSearchResult]:
        ...
