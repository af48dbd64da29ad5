"""Root conftest.py: shared fixtures for the entire test suite."""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx
import pytest

# ---------------------------------------------------------------------------
# Make project modules importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

FIXED_NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)

ARDAVEEN = "40 Ardaveen Ave, Newry BT35 8UJ, UK"
SPRINGFIELD = "123 Main St, Springfield, IL 62701, USA"


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeClock:
    """Manual clock whose sleep() advances time instead of blocking."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeProvider:
    """Answer provider requests with canned outcomes keyed by URL path suffix.

    An outcome is a JSON-able dict (served with HTTP 200), an
    ``httpx.Response``, or an exception to raise.  Unknown paths get 404.
    """

    def __init__(self, responses: dict[str, Any]):
        self.responses = responses
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for suffix, outcome in self.responses.items():
            if request.url.path.endswith(suffix):
                if isinstance(outcome, Exception):
                    raise outcome
                if isinstance(outcome, httpx.Response):
                    return outcome
                return httpx.Response(200, json=outcome)
        return httpx.Response(404, json={"status": "NOT_FOUND"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


# ---------------------------------------------------------------------------
# Common fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_provider():
    """Factory: ``fake_provider({"geocode/json": payload, ...})``."""
    def _make(responses: dict[str, Any]) -> FakeProvider:
        return FakeProvider(responses)
    return _make


@pytest.fixture
def make_places_client():
    """Factory building a GooglePlacesClient wired to a FakeProvider."""
    from services.places_client import GooglePlacesClient
    from services.rate_limiter import RateLimiter

    def _make(provider: FakeProvider, api_key: str = "test-places-key", timeout: float = 5.0):
        return GooglePlacesClient(
            api_key,
            rate_limiter=RateLimiter(min_interval=0.0),
            timeout=timeout,
            transport=provider.transport,
        )
    return _make


@pytest.fixture
def make_verifier(make_places_client):
    """Factory building an AddressVerifier with a fixed clock.

    With no provider the verifier has no client at all.
    """
    from services.verifier import AddressVerifier

    def _make(provider: FakeProvider | None = None, api_key: str = "test-places-key"):
        client = make_places_client(provider, api_key=api_key) if provider else None
        return AddressVerifier(client, now=lambda: FIXED_NOW)
    return _make


# ---------------------------------------------------------------------------
# Provider payloads
# ---------------------------------------------------------------------------

@pytest.fixture
def geocode_ok_payload():
    """Realistic geocoding response for the Ardaveen Ave address."""
    return {
        "status": "OK",
        "results": [
            {
                "place_id": "ChIJgeocodeArdaveen",
                "formatted_address": ARDAVEEN,
                "geometry": {
                    "location": {"lat": 54.1751, "lng": -6.3402},
                    "location_type": "ROOFTOP",
                },
                "address_components": [
                    {"long_name": "40", "short_name": "40", "types": ["street_number"]},
                    {"long_name": "Ardaveen Avenue", "short_name": "Ardaveen Ave",
                     "types": ["route"]},
                    {"long_name": "Newry", "short_name": "Newry", "types": ["postal_town"]},
                    {"long_name": "Armagh City Banbridge and Craigavon",
                     "short_name": "Armagh City Banbridge and Craigavon",
                     "types": ["administrative_area_level_2", "political"]},
                    {"long_name": "Northern Ireland", "short_name": "Northern Ireland",
                     "types": ["administrative_area_level_1", "political"]},
                    {"long_name": "United Kingdom", "short_name": "GB",
                     "types": ["country", "political"]},
                    {"long_name": "BT35 8UJ", "short_name": "BT35 8UJ",
                     "types": ["postal_code"]},
                ],
                "types": ["street_address"],
            },
            {
                "place_id": "ChIJsecondResult",
                "formatted_address": "Newry, UK",
                "geometry": {"location": {"lat": 54.17, "lng": -6.33}},
                "address_components": [],
                "types": ["locality", "political"],
            },
        ],
    }


@pytest.fixture
def find_place_ok_payload():
    """Find-place response for a restaurant on Main St, Springfield."""
    return {
        "status": "OK",
        "candidates": [
            {
                "place_id": "ChIJplaceSpringfield",
                "formatted_address": SPRINGFIELD,
                "geometry": {"location": {"lat": 39.7990, "lng": -89.6440}},
                "address_components": [
                    {"long_name": "123", "short_name": "123", "types": ["street_number"]},
                    {"long_name": "Main Street", "short_name": "Main St", "types": ["route"]},
                    {"long_name": "Springfield", "short_name": "Springfield",
                     "types": ["locality", "political"]},
                    {"long_name": "Illinois", "short_name": "IL",
                     "types": ["administrative_area_level_1", "political"]},
                    {"long_name": "United States", "short_name": "US",
                     "types": ["country", "political"]},
                    {"long_name": "62701", "short_name": "62701", "types": ["postal_code"]},
                ],
                "types": ["restaurant", "food", "point_of_interest", "establishment"],
            }
        ],
    }


@pytest.fixture
def over_query_limit_payload():
    return {
        "status": "OVER_QUERY_LIMIT",
        "error_message": "You have exceeded your daily request quota for this API.",
    }
