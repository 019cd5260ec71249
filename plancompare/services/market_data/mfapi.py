# plancompare/services/market_data/mfapi.py
"""
mfapi.in valuation series provider implementation.

This module implements the NAVProvider interface over the free mfapi.in
JSON API (Indian mutual fund NAVs as published by AMFI).

Endpoints:
    GET {base}/mf/search?q=<query>   scheme search
    GET {base}/mf/<code>             metadata + full NAV history (newest first)

Key features:
- HTTP status mapping to the service exception hierarchy
- Response validation with Pydantic schemas
- Retry mechanism inherited from base class
- Injectable httpx.Client (tests use httpx.MockTransport)

Limitations:
- NAVs are end-of-day; the newest value may lag by a business day
- Unknown scheme codes come back as HTTP 200 with an empty body
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from plancompare.config import settings
from plancompare.schemas.mfapi import MFSchemeResponse, SchemeSearchItem
from plancompare.services.exceptions import (
    MarketDataError,
    ProviderUnavailableError,
    RateLimitError,
    SchemeNotFoundError,
)
from plancompare.services.market_data.base import (
    NAVProvider,
    SchemeHistory,
    SchemeSearchResult,
)
from plancompare.services.navseries import NAVSeries

logger = logging.getLogger(__name__)


class MFApiProvider(NAVProvider):
    """
    mfapi.in implementation of NAVProvider.

    Configuration:
        base_url: API root (default: settings.mfapi_base_url)
        timeout: Request timeout in seconds (default: settings.mfapi_timeout_seconds)
        client: Pre-built httpx.Client; when given, base_url/timeout are ignored

    Retry Behavior (inherited from NAVProvider):
        - Retries on ProviderUnavailableError and RateLimitError
        - Does NOT retry on SchemeNotFoundError (permanent failure)

    Example:
        with MFApiProvider() as provider:
            hits = provider.search_schemes("parag parikh flexi cap")
            history = provider.get_scheme_history(hits[0].code)
            print(f"{history.name}: {len(history.series)} NAVs")
    """

    def __init__(
            self,
            base_url: str | None = None,
            timeout: float | None = None,
            client: httpx.Client | None = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=base_url or settings.mfapi_base_url,
            timeout=timeout or settings.mfapi_timeout_seconds,
        )

    @property
    def name(self) -> str:
        return "mfapi"

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def close(self) -> None:
        """Close the underlying HTTP client if this provider created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "MFApiProvider":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def search_schemes(self, query: str) -> list[SchemeSearchResult]:
        """
        Search schemes by name.

        Items that do not match the expected shape are skipped.
        """
        query = query.strip()
        if not query:
            return []

        payload = self._execute_with_retry(self._get_json, "/mf/search", {"q": query})
        if not isinstance(payload, list):
            logger.warning(f"Unexpected search payload for '{query}': {type(payload).__name__}")
            return []

        results = []
        for item in payload:
            try:
                hit = SchemeSearchItem.model_validate(item)
            except PydanticValidationError:
                logger.debug(f"Skipping malformed search item: {item!r}")
                continue
            results.append(SchemeSearchResult(code=hit.scheme_code, name=hit.scheme_name))

        logger.debug(f"Search '{query}' returned {len(results)} schemes")
        return results

    def get_scheme_history(self, code: str) -> SchemeHistory:
        """
        Fetch metadata and NAV history of a scheme.

        Raises:
            SchemeNotFoundError: Unknown code (404 or empty body)
            MarketDataError: Response does not match the expected shape
            DateParseError / InvalidNAVError: Malformed NAV rows
        """
        code = str(code).strip()
        payload = self._execute_with_retry(
            self._get_json, f"/mf/{code}", None, code
        )

        if (
                not isinstance(payload, dict)
                or not payload.get("meta")
                or not isinstance(payload.get("data"), list)
        ):
            raise SchemeNotFoundError(code, self.name)

        try:
            response = MFSchemeResponse.model_validate(payload)
        except PydanticValidationError as e:
            raise MarketDataError(
                f"Unexpected response for scheme '{code}': {e.error_count()} validation errors",
                provider=self.name,
            ) from e

        series = NAVSeries.from_api(point.model_dump() for point in response.data)
        meta = response.meta

        logger.info(f"Fetched {len(series)} NAVs for {code} ({meta.scheme_name})")

        return SchemeHistory(
            code=meta.scheme_code,
            name=meta.scheme_name,
            series=series,
            fund_house=meta.fund_house,
            category=meta.scheme_category,
            scheme_type=meta.scheme_type,
        )

    # =========================================================================
    # HTTP
    # =========================================================================

    def _get_json(
            self,
            path: str,
            params: dict[str, str] | None = None,
            scheme_code: str | None = None,
    ) -> Any:
        """
        GET a path and decode its JSON body.

        Raises:
            ProviderUnavailableError: Network error, timeout, 5xx, bad JSON
            RateLimitError: HTTP 429
            SchemeNotFoundError: HTTP 404 on a scheme lookup
            MarketDataError: Any other non-2xx status
        """
        try:
            response = self._client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise ProviderUnavailableError(self.name, f"Timeout requesting {path}: {e}")
        except httpx.RequestError as e:
            raise ProviderUnavailableError(self.name, f"Network error requesting {path}: {e}")

        status = response.status_code

        if status == 429:
            raise RateLimitError(self.name, _retry_after_seconds(response))
        if status == 404 and scheme_code is not None:
            raise SchemeNotFoundError(scheme_code, self.name)
        if status >= 500:
            raise ProviderUnavailableError(self.name, f"HTTP {status} from {path}")
        if status >= 400:
            raise MarketDataError(f"HTTP {status} from {path}", provider=self.name)

        try:
            return response.json()
        except ValueError:
            raise ProviderUnavailableError(self.name, f"Invalid JSON from {path}")


def _retry_after_seconds(response: httpx.Response) -> int | None:
    """Parse a Retry-After header given in seconds."""
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
