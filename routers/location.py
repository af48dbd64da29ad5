"""Location endpoints: verify addresses, search and look up places."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from models import (
    PlaceResponse,
    SearchResponse,
    StatusResponse,
    VerifyRequest,
    VerifyResponse,
)
from services.verifier import AddressVerifier, EmptyAddressError

logger = logging.getLogger("address_verifier.api")

router = APIRouter(prefix="/api/location", tags=["location"])

MAX_SEARCH_RESULTS = 5


def get_verifier(request: Request) -> AddressVerifier:
    return request.app.state.verifier


@router.post("/verify", response_model=VerifyResponse)
async def verify_location(
    req: VerifyRequest,
    verifier: AddressVerifier = Depends(get_verifier),
) -> VerifyResponse:
    try:
        verification = await verifier.verify_address(req.address.strip())
    except EmptyAddressError as exc:
        raise HTTPException(status_code=400, detail="Address is required") from exc
    return VerifyResponse(verification=verification)


@router.get("/verify", response_model=SearchResponse)
async def search_locations(
    q: str = Query("", max_length=1000),
    verifier: AddressVerifier = Depends(get_verifier),
) -> SearchResponse:
    query = q.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Query parameter 'q' is required")

    places = await verifier.search_places(query)
    logger.info("Location search for %r found %d places", query, len(places))
    return SearchResponse(places=places[:MAX_SEARCH_RESULTS])


@router.get("/places/{place_id}", response_model=PlaceResponse)
async def place_details(
    place_id: str,
    verifier: AddressVerifier = Depends(get_verifier),
) -> PlaceResponse:
    place = await verifier.get_place_details(place_id)
    if place is None:
        raise HTTPException(status_code=404, detail="Place not found")
    return PlaceResponse(place=place)


@router.get("/status", response_model=StatusResponse)
def provider_status(
    verifier: AddressVerifier = Depends(get_verifier),
) -> StatusResponse:
    """Report whether remote verification is active; never the key itself."""
    client = verifier.client
    return StatusResponse(
        api_key_configured=verifier.remote_enabled,
        mode="google_places" if verifier.remote_enabled else "manual",
        request_timeout=client.timeout if client else 0.0,
        min_request_interval=client.rate_limiter.min_interval if client else 0.0,
    )
