"""Address verification: remote lookups with a manual-parsing fallback."""

import logging
import re
import time
from datetime import datetime, timezone
from typing import Awaitable, Callable, Iterable, Optional, Sequence

from address_data.indicators import STREET_TYPES_CAPITALIZED
from models import (
    AddressComponents,
    Coordinates,
    Geometry,
    LocationVerification,
    PlaceDetails,
)
from services.parser import parse_address_manually, parse_provider_components
from services.places_client import GooglePlacesClient
from services.scoring import (
    address_completeness,
    geocoding_confidence,
    manual_confidence,
    place_confidence,
)

logger = logging.getLogger("address_verifier.verifier")

VERIFIED_MIN_CONFIDENCE = 70

MIN_FALLBACK_QUERY_LENGTH = 10
MAX_FALLBACK_SUGGESTIONS = 3
_PARTIAL_ADDRESS = re.compile(r"^\d+\s+\w+")

Strategy = Callable[[str], Awaitable[Optional[LocationVerification]]]


class EmptyAddressError(ValueError):
    """The address to verify is empty or whitespace."""


async def first_success(
    strategies: Sequence[Strategy],
    address: str,
) -> Optional[LocationVerification]:
    """Run *strategies* in order and return the first non-``None`` result."""
    for strategy in strategies:
        result = await strategy(address)
        if result is not None:
            return result
        logger.info("Strategy %s gave no result", getattr(strategy, "__name__", strategy))
    return None


def _synthetic_place(place_id: str, text: str, types: list[str]) -> PlaceDetails:
    return PlaceDetails(
        place_id=place_id,
        formatted_address=text,
        name=text,
        geometry=Geometry(location=Coordinates()),
        types=types,
    )


def fallback_suggestions(query: str) -> list[PlaceDetails]:
    """Offer suggestions for *query* without calling the provider.

    Short queries get nothing, since echoing a fragment back is no help.
    A query shaped like ``"<number> <word>"`` is completed with common
    street types; anything else is returned as a single suggestion.
    """
    if len(query) < MIN_FALLBACK_QUERY_LENGTH:
        logger.info("Query too short for fallback suggestions")
        return []

    stamp = int(time.time() * 1000)
    if _PARTIAL_ADDRESS.match(query.strip()):
        suggestions = [
            _synthetic_place(
                f"fallback-street-{index}-{stamp}", f"{query} {street_type}", ["route"]
            )
            for index, street_type in enumerate(STREET_TYPES_CAPITALIZED[:5])
        ]
    else:
        suggestions = [_synthetic_place(f"fallback-{stamp}", query, ["establishment"])]

    return suggestions[:MAX_FALLBACK_SUGGESTIONS]


class AddressVerifier:
    """Turn free-text addresses into scored :class:`LocationVerification` records.

    Verification tries, in order, geocoding, "find place from text" and
    manual parsing, keeping the first that produces a record.  Without a
    configured *client* only manual parsing runs and nothing touches the
    network.

    *now* supplies the verification timestamp; it defaults to the
    current UTC time.
    """

    def __init__(
        self,
        client: Optional[GooglePlacesClient] = None,
        now: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.client = client
        self._now = now or (lambda: datetime.now(timezone.utc))

    @property
    def remote_enabled(self) -> bool:
        return self.client is not None and self.client.configured

    def remote_strategies(self) -> list[Strategy]:
        if not self.remote_enabled:
            return []
        return [self.verify_by_geocoding, self.verify_by_place_search]

    def strategies(self) -> list[Strategy]:
        """The full chain: remote lookups, then manual parsing."""
        return [*self.remote_strategies(), self.verify_manually]

    # -- record assembly -----------------------------------------------------

    def _build(
        self,
        address: str,
        formatted_address: str,
        location: Coordinates,
        source: str,
        confidence: int,
        components: AddressComponents,
        place_id: Optional[str] = None,
    ) -> LocationVerification:
        completeness = address_completeness(components, formatted_address)
        return LocationVerification(
            address=address,
            formatted_address=formatted_address,
            coordinates=Coordinates(lat=location.lat, lng=location.lng),
            verified=confidence >= VERIFIED_MIN_CONFIDENCE and completeness.is_complete,
            verification_source=source,
            verification_date=self._now(),
            confidence=confidence,
            place_id=place_id,
            address_components=components,
            completeness=completeness,
        )

    # -- strategies ----------------------------------------------------------

    async def verify_by_geocoding(self, address: str) -> Optional[LocationVerification]:
        result = await self.client.geocode(address)
        if result is None:
            return None

        logger.info("Using geocoding result for: %s", address)
        return self._build(
            address,
            result.formatted_address,
            result.geometry.location,
            "google_places",
            geocoding_confidence(address, result.formatted_address, result.types),
            parse_provider_components(result.address_components, use_postal_town=True),
            place_id=result.place_id,
        )

    async def verify_by_place_search(self, address: str) -> Optional[LocationVerification]:
        result = await self.client.find_place(address)
        if result is None:
            return None

        logger.info("Using place search result for: %s", address)
        return self._build(
            address,
            result.formatted_address,
            result.geometry.location,
            "google_places",
            place_confidence(address, result.formatted_address, result.types),
            parse_provider_components(result.address_components),
            place_id=result.place_id,
        )

    async def verify_manually(self, address: str) -> LocationVerification:
        logger.info("Using manual verification for: %s", address)
        components = parse_address_manually(address)
        return self._build(
            address,
            address,
            Coordinates(),
            "manual",
            manual_confidence(address, components),
            components,
        )

    # -- public operations ---------------------------------------------------

    async def verify_address(self, address: str) -> LocationVerification:
        """Verify *address*, degrading to manual parsing rather than failing.

        Raises :class:`EmptyAddressError` for a blank address; nothing
        else propagates.
        """
        if not address or not address.strip():
            logger.error("Empty address provided")
            raise EmptyAddressError("Address is required for verification")

        if not self.remote_enabled:
            logger.warning("No API key available, using fallback verification")

        verification = await first_success(self.remote_strategies(), address)
        if verification is None:
            verification = await self.verify_manually(address)
        logger.info(
            "Verified %r: source=%s confidence=%d completeness=%d verified=%s",
            address,
            verification.verification_source,
            verification.confidence,
            verification.completeness.score,
            verification.verified,
        )
        return verification

    async def search_places(
        self,
        query: str,
        types: Iterable[str] = ("establishment",),
    ) -> list[PlaceDetails]:
        """Autocomplete-style search, falling back to synthetic suggestions."""
        if not self.remote_enabled:
            logger.warning("No API key available, using fallback results")
            return fallback_suggestions(query)

        places = await self.client.text_search(query, list(types))
        if places is None:
            return fallback_suggestions(query)
        return places

    async def get_place_details(self, place_id: str) -> Optional[PlaceDetails]:
        if not self.remote_enabled:
            return None
        return await self.client.place_details(place_id)
