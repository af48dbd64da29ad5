"""Address component parsing: provider payloads and the manual heuristic."""

import re

from address_data.indicators import COUNTRY_INDICATORS, REGION_CODES
from address_data.postal_codes import match_postal_code
from models import AddressComponents, PlaceAddressComponent

# Leading house number, optionally with a letter suffix ("40", "12b").
STREET_NUMBER_RE = re.compile(r"^\d+[a-z]?", re.IGNORECASE)

# Provider component types in assignment priority order.  A component is
# assigned to the first type in the list that it carries.
_PLACE_COMPONENT_TYPES: tuple[str, ...] = (
    "street_number",
    "route",
    "locality",
    "administrative_area_level_1",
    "administrative_area_level_2",
    "country",
    "postal_code",
)

# Geocoding also reports ``postal_town``, which is the only town-level
# component for most UK addresses.
_GEOCODING_COMPONENT_TYPES: tuple[str, ...] = (
    "street_number",
    "route",
    "locality",
    "postal_town",
    "administrative_area_level_1",
    "administrative_area_level_2",
    "country",
    "postal_code",
)


def parse_provider_components(
    components: list[PlaceAddressComponent],
    use_postal_town: bool = False,
) -> AddressComponents:
    """Map provider address components onto :class:`AddressComponents`.

    When *use_postal_town* is set (geocoding results), a ``postal_town``
    component fills ``locality`` unless a locality was already seen.  A
    ``locality`` appearing later still overwrites it.
    """
    priority = _GEOCODING_COMPONENT_TYPES if use_postal_town else _PLACE_COMPONENT_TYPES
    result: dict[str, str] = {}

    for component in components:
        kind = next((t for t in priority if t in component.types), None)
        if kind is None:
            continue
        if kind == "postal_town":
            if "locality" not in result:
                result["locality"] = component.long_name
            continue
        result[kind] = component.long_name

    return AddressComponents(**result)


def _contains_keyword(text: str, keywords: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def _strip_postal_code(segment: str, postal_code: str | None) -> str:
    """Remove the first occurrence of *postal_code* from *segment*."""
    if postal_code:
        segment = segment.replace(postal_code, "", 1)
    return segment.strip()


def _recover_region_from_locality(
    components: dict[str, str],
    parts: list[str],
    index: int,
) -> bool:
    """Treat a bare state/province code as region rather than locality.

    North American addresses usually put the region between city and
    ZIP (``"Springfield, IL 62701, USA"``), so the segment chosen for the
    locality is often just ``"IL"`` once the postal code is stripped.
    When that happens the code is stored as ``administrative_area_level_1``
    and the segment before it becomes the locality, unless that segment is
    the street line.

    Returns ``True`` when the candidate was a region code.
    """
    candidate = _strip_postal_code(parts[index], components.get("postal_code"))
    if candidate not in REGION_CODES:
        return False

    components["administrative_area_level_1"] = candidate
    if index - 1 >= 1:
        previous = _strip_postal_code(parts[index - 1], components.get("postal_code"))
        if previous:
            components["locality"] = previous
    return True


def parse_address_manually(address: str) -> AddressComponents:
    """Split a free-text *address* into components without any remote lookup.

    The address is split on commas and each segment is scanned for a UK,
    US or Canadian postal code (tried in that order; a later segment's
    match replaces an earlier one).  UK and Canadian codes also imply the
    country.  A last segment containing a country keyword is taken as the
    country verbatim.

    The first segment supplies the street number (leading digits plus an
    optional letter) and the route (whatever follows it).  The locality
    is read from the second-to-last segment when a country is known, else
    from the last, with the postal code removed.

    This is a best-effort heuristic: multi-word cities without commas or
    unusual comma placement can produce odd splits.
    """
    components: dict[str, str] = {}
    parts = [part.strip() for part in address.split(",")]

    for part in parts:
        found = match_postal_code(part)
        if found is None:
            continue
        postal_code, country = found
        components["postal_code"] = postal_code
        if country:
            components["country"] = country

    last_part = parts[-1]
    if _contains_keyword(last_part, COUNTRY_INDICATORS):
        components["country"] = last_part

    first_part = parts[0]
    m = STREET_NUMBER_RE.match(first_part)
    if m:
        components["street_number"] = m.group(0)
        route = first_part[m.end():].strip()
        if route:
            components["route"] = route

    if len(parts) >= 2:
        index = len(parts) - 2 if components.get("country") else len(parts) - 1
        if not _recover_region_from_locality(components, parts, index):
            locality = _strip_postal_code(parts[index], components.get("postal_code"))
            if locality:
                components["locality"] = locality

    return AddressComponents(**components)
