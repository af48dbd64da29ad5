"""Confidence and completeness scoring for verification records."""

import re

from address_data.indicators import (
    CITY_INDICATORS,
    COUNTRY_INDICATORS,
    STREET_INDICATORS,
)
from address_data.postal_codes import POSTAL_CODE_PATTERNS
from models import AddressComponents, CompletenessResult

# Inputs longer than this are truncated before similarity is measured.
MAX_COMPARE_LENGTH = 100

# Case-sensitive: "12b Main" counts, "12B Main" does not.
_STREET_NUMBER_PREFIX = re.compile(r"^\d+[a-z]?\s")

_BROAD_AREA_MARKERS: tuple[str, ...] = (" city", " county", " district")

_MANUAL_COMPONENT_FIELDS: tuple[str, ...] = (
    "street_number", "route", "locality", "postal_code", "country",
)

# (field, points, issue when missing), in reporting order.
_COMPLETENESS_WEIGHTS: tuple[tuple[str, int, str], ...] = (
    ("street_number", 25, "Missing building/house number"),
    ("route", 25, "Missing street name"),
    ("locality", 25, "Missing city/locality"),
    ("postal_code", 15, "Missing postal code"),
    ("country", 10, "Missing country"),
)

COMPLETE_MIN_SCORE = 80
COMPLETE_MAX_ISSUES = 1


def _clamp(value: float, low: int, high: int) -> int:
    return int(round(min(high, max(low, value))))


def _character_overlap(first: str, second: str) -> float:
    """Fraction of the longer string's characters claimed by the shorter one.

    Each character of the shorter string claims the first unused equal
    character of the longer string.  Order-sensitive and greedy; the
    first available match always wins.
    """
    if len(first) > len(second):
        longer, shorter = first, second
    else:
        longer, shorter = second, first

    if not longer:
        return 1.0

    used: set[int] = set()
    matches = 0
    for ch in shorter:
        for j, other in enumerate(longer):
            if j not in used and ch == other:
                used.add(j)
                matches += 1
                break
    return matches / len(longer)


def string_similarity(first: str, second: str) -> float:
    """Return a 0.0–1.0 similarity between two address strings."""
    first = first[:MAX_COMPARE_LENGTH]
    second = second[:MAX_COMPARE_LENGTH]

    if first == second:
        return 1.0
    if not first or not second:
        return 0.0
    return _character_overlap(first.lower(), second.lower())


def geocoding_confidence(original: str, formatted: str, types: list[str]) -> int:
    confidence = 60.0

    if "street_address" in types:
        confidence += 25
    elif "premise" in types:
        confidence += 20
    elif "route" in types:
        confidence += 15

    confidence += string_similarity(original.lower(), formatted.lower()) * 15
    return _clamp(confidence, 0, 100)


def place_confidence(original: str, formatted: str, types: list[str]) -> int:
    confidence = 50.0

    if any(t in types for t in ("establishment", "restaurant", "food")):
        confidence += 30

    confidence += string_similarity(original.lower(), formatted.lower()) * 20
    return _clamp(confidence, 0, 100)


def manual_confidence(address: str, components: AddressComponents) -> int:
    """Score a manually parsed address from its shape and parsed fields.

    Manual parsing is never fully trusted nor fully dismissed, so the
    result is held within 30–95.
    """
    confidence = 30
    lowered = address.lower().strip()

    if _STREET_NUMBER_PREFIX.match(address.strip()):
        confidence += 25
    if any(indicator in lowered for indicator in STREET_INDICATORS):
        confidence += 20
    if any(indicator in lowered for indicator in CITY_INDICATORS):
        confidence += 10
    if any(p.regex.search(address) for p in POSTAL_CODE_PATTERNS):
        confidence += 15
    if any(country in lowered for country in COUNTRY_INDICATORS):
        confidence += 10

    segments = [s for s in (p.strip() for p in address.split(",")) if s]
    if len(segments) >= 3:
        confidence += 15

    for field in _MANUAL_COMPONENT_FIELDS:
        if getattr(components, field):
            confidence += 5

    return _clamp(confidence, 30, 95)


def address_completeness(
    components: AddressComponents,
    formatted_address: str,
) -> CompletenessResult:
    """Judge whether an address is precise enough to bill against.

    Each present field adds its weight; each missing one adds an issue.
    Formatted addresses naming a broad area (" city", " county",
    " district") or carrying at most one comma are penalised.  The score
    never drops below zero.
    """
    issues: list[str] = []
    score = 0

    for field, points, issue in _COMPLETENESS_WEIGHTS:
        if getattr(components, field):
            score += points
        else:
            issues.append(issue)

    lowered = formatted_address.lower()
    if any(marker in lowered for marker in _BROAD_AREA_MARKERS):
        score = max(0, score - 20)
        issues.append("Address appears to cover a broad geographic area")

    if formatted_address.count(",") <= 1:
        score = max(0, score - 15)
        issues.append("Address is too generic")

    return CompletenessResult(
        score=min(score, 100),
        issues=issues,
        is_complete=score >= COMPLETE_MIN_SCORE and len(issues) <= COMPLETE_MAX_ISSUES,
    )
