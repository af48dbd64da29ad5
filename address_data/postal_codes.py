"""Postal-code patterns, tried in order against each address segment."""

import re
from typing import NamedTuple, Optional


class PostalCodePattern(NamedTuple):
    name: str
    regex: re.Pattern
    # Country implied by a match, or None when the format is ambiguous.
    country: Optional[str]


POSTAL_CODE_PATTERNS: tuple[PostalCodePattern, ...] = (
    PostalCodePattern(
        "UK",
        re.compile(r"\b[A-Z]{1,2}\d[A-Z\d]?\s*\d[A-Z]{2}\b", re.IGNORECASE),
        "United Kingdom",
    ),
    # ZIP codes are also 5-digit in many other countries.
    PostalCodePattern("US", re.compile(r"\b\d{5}(-\d{4})?\b"), None),
    PostalCodePattern(
        "CANADA",
        re.compile(r"\b[A-Z]\d[A-Z]\s*\d[A-Z]\d\b", re.IGNORECASE),
        "Canada",
    ),
)


def match_postal_code(text: str) -> Optional[tuple[str, Optional[str]]]:
    """Return ``(postal_code, implied_country)`` for the first pattern that
    matches *text*, or ``None``."""
    for pattern in POSTAL_CODE_PATTERNS:
        m = pattern.regex.search(text)
        if m:
            return m.group(0), pattern.country
    return None
