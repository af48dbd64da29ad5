"""Async client for the Google geocoding and places web services.

Every lookup returns ``None`` on failure instead of raising: request
denial, quota exhaustion, non-OK statuses, empty result sets, HTTP
errors, timeouts and malformed payloads are all logged and swallowed
here so callers can move on to their next strategy.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from models import PlaceDetails
from services.rate_limiter import RateLimiter

logger = logging.getLogger("address_verifier.places")

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
PLACES_BASE_URL = "https://maps.googleapis.com/maps/api/place"

FIND_PLACE_FIELDS = "place_id,formatted_address,geometry,address_components,types"
DETAILS_FIELDS = (
    "place_id,formatted_address,name,geometry,address_components,"
    "business_status,types"
)

DEFAULT_TIMEOUT = 5.0


class GooglePlacesClient:
    """Thin wrapper over the four endpoints the verifier needs.

    *transport* is handed to :class:`httpx.AsyncClient` and lets tests
    substitute an :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        api_key: str,
        rate_limiter: Optional[RateLimiter] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key.strip()
        self.rate_limiter = rate_limiter or RateLimiter()
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def _get_json(
        self,
        endpoint: str,
        url: str,
        params: dict[str, str],
    ) -> Optional[dict[str, Any]]:
        """GET *url* and return the decoded JSON body, or ``None``.

        The whole request, connect through body, is abandoned once
        ``self.timeout`` seconds have passed.  There is no retry.
        """
        await self.rate_limiter.wait()
        logger.info("%s request to %s", endpoint, url)

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self.timeout
            ) as client:
                resp = await asyncio.wait_for(
                    client.get(url, params={**params, "key": self.api_key}),
                    timeout=self.timeout,
                )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.error("%s request timed out after %.1fs", endpoint, self.timeout)
            return None
        except httpx.HTTPError as exc:
            # The exception text can carry the request URL; log the type only.
            logger.error("%s request failed: %s", endpoint, type(exc).__name__)
            return None

        if resp.status_code != 200:
            logger.error("%s returned HTTP %d", endpoint, resp.status_code)
            return None

        try:
            data = resp.json()
        except ValueError:
            logger.error("%s returned a non-JSON body", endpoint)
            return None
        if not isinstance(data, dict):
            logger.error("%s returned unexpected JSON: %s", endpoint, type(data).__name__)
            return None
        return data

    def _ok(self, endpoint: str, data: dict[str, Any]) -> bool:
        """Log and reject any provider status other than ``OK``."""
        status = data.get("status")
        if status == "OK":
            return True

        message = data.get("error_message", "")
        if status == "REQUEST_DENIED":
            logger.warning("%s not authorized (REQUEST_DENIED) %s", endpoint, message)
        elif status == "OVER_QUERY_LIMIT":
            logger.error("QUOTA EXCEEDED: %s quota limit reached", endpoint)
        elif status == "ZERO_RESULTS":
            logger.info("%s found no results", endpoint)
        else:
            logger.error("%s API error: %s %s", endpoint, status, message)
        return False

    def _to_place(self, endpoint: str, payload: Any) -> Optional[PlaceDetails]:
        try:
            return PlaceDetails.model_validate(payload)
        except ValidationError as exc:
            logger.error(
                "%s returned a malformed place (%d errors)", endpoint, exc.error_count()
            )
            return None

    def _result_list(
        self, endpoint: str, data: dict[str, Any], key: str
    ) -> Optional[list[Any]]:
        """Return ``data[key]`` as a list; a missing key counts as empty."""
        results = data.get(key)
        if results is None:
            return []
        if not isinstance(results, list):
            logger.error(
                "%s returned malformed %s: %s", endpoint, key, type(results).__name__
            )
            return None
        return results

    async def _first_place(
        self,
        endpoint: str,
        url: str,
        params: dict[str, str],
        results_key: str,
    ) -> Optional[PlaceDetails]:
        data = await self._get_json(endpoint, url, params)
        if data is None or not self._ok(endpoint, data):
            return None

        results = self._result_list(endpoint, data, results_key)
        if results is None:
            return None
        if not results:
            logger.info("%s returned no %s", endpoint, results_key)
            return None

        logger.info("%s found %d %s", endpoint, len(results), results_key)
        return self._to_place(endpoint, results[0])

    async def geocode(self, address: str) -> Optional[PlaceDetails]:
        """Return the most relevant geocoding result for *address*."""
        return await self._first_place(
            "Geocoding", GEOCODE_URL, {"address": address}, "results"
        )

    async def find_place(self, text: str) -> Optional[PlaceDetails]:
        """Return the first "find place from text" candidate for *text*."""
        return await self._first_place(
            "FindPlace",
            f"{PLACES_BASE_URL}/findplacefromtext/json",
            {"input": text, "inputtype": "textquery", "fields": FIND_PLACE_FIELDS},
            "candidates",
        )

    async def text_search(
        self,
        query: str,
        types: list[str],
    ) -> Optional[list[PlaceDetails]]:
        """Return text-search results, or ``None`` when the search failed.

        An ``OK`` response with no results yields an empty list.  Results
        that do not validate are dropped.
        """
        endpoint = "TextSearch"
        data = await self._get_json(
            endpoint,
            f"{PLACES_BASE_URL}/textsearch/json",
            {"query": query, "type": "|".join(types)},
        )
        if data is None or not self._ok(endpoint, data):
            return None

        results = self._result_list(endpoint, data, "results")
        if results is None:
            return None

        places = [self._to_place(endpoint, item) for item in results]
        found = [p for p in places if p is not None]
        logger.info("%s found %d results", endpoint, len(found))
        return found

    async def place_details(self, place_id: str) -> Optional[PlaceDetails]:
        endpoint = "PlaceDetails"
        data = await self._get_json(
            endpoint,
            f"{PLACES_BASE_URL}/details/json",
            {"place_id": place_id, "fields": DETAILS_FIELDS},
        )
        if data is None or not self._ok(endpoint, data):
            return None

        result = data.get("result")
        if not result:
            return None
        return self._to_place(endpoint, result)
