"""Shared Pydantic models for verification records and request/response payloads."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Provider places
# ---------------------------------------------------------------------------

class Coordinates(BaseModel):
    lat: float = 0.0
    lng: float = 0.0


class Geometry(BaseModel):
    location: Coordinates


class PlaceAddressComponent(BaseModel):
    long_name: str
    short_name: str = ""
    types: list[str] = Field(default_factory=list)


class PlaceDetails(BaseModel):
    """A place as returned by the geocoding and places endpoints.

    Geocoding results and find-place candidates share this shape, so both
    are validated into it.  Unknown provider fields are ignored.
    """
    place_id: str
    formatted_address: str = ""
    name: Optional[str] = None
    geometry: Geometry
    address_components: list[PlaceAddressComponent] = Field(default_factory=list)
    business_status: Optional[str] = None
    types: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------

class AddressComponents(BaseModel):
    street_number: Optional[str] = None
    route: Optional[str] = None
    locality: Optional[str] = None
    administrative_area_level_1: Optional[str] = None
    administrative_area_level_2: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None


class CompletenessResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    score: int = Field(..., ge=0, le=100)
    issues: list[str] = Field(default_factory=list)
    is_complete: bool = Field(..., alias="isComplete")


class LocationVerification(BaseModel):
    """Outcome of verifying one free-text address.

    Serialised with camelCase keys (``formattedAddress``, ``placeId`` …);
    attributes stay snake_case.
    """
    model_config = ConfigDict(populate_by_name=True)

    address: str
    formatted_address: str = Field(..., alias="formattedAddress")
    coordinates: Coordinates
    verified: bool
    verification_source: Literal["google_places", "manual"] = Field(
        ..., alias="verificationSource"
    )
    verification_date: datetime = Field(..., alias="verificationDate")
    confidence: int = Field(..., ge=0, le=100)
    place_id: Optional[str] = Field(None, alias="placeId")
    address_components: AddressComponents = Field(..., alias="addressComponents")
    completeness: CompletenessResult


# ---------------------------------------------------------------------------
# Location API
# ---------------------------------------------------------------------------

class VerifyRequest(BaseModel):
    address: str = Field(..., max_length=1000)


class VerifyResponse(BaseModel):
    success: bool = True
    verification: LocationVerification


class SearchResponse(BaseModel):
    success: bool = True
    places: list[PlaceDetails]


class PlaceResponse(BaseModel):
    success: bool = True
    place: PlaceDetails


class StatusResponse(BaseModel):
    provider: str = "google_places"
    api_key_configured: bool
    mode: Literal["google_places", "manual"]
    request_timeout: float
    min_request_interval: float
