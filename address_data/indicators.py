"""Keyword tables used by the manual address heuristics.

All lookups are lower-case substring tests against the lower-cased input,
so short entries such as ``st`` and ``uk`` match inside longer words too.
"""

STREET_INDICATORS: tuple[str, ...] = (
    "street", "st", "avenue", "ave", "road", "rd", "lane", "ln",
    "drive", "dr", "way", "place", "pl", "boulevard", "blvd",
    "court", "ct", "circle", "cir", "terrace", "ter",
)

CITY_INDICATORS: tuple[str, ...] = ("city", "town", "village", "borough")

COUNTRY_INDICATORS: tuple[str, ...] = (
    "uk", "united kingdom", "usa", "united states", "canada",
    "australia", "ireland", "france", "germany", "spain", "italy",
)

# Completions offered for partial addresses, in suggestion order.
STREET_TYPES_CAPITALIZED: tuple[str, ...] = (
    "Street", "Avenue", "Road", "Lane", "Drive", "Boulevard",
    "Court", "Circle", "Terrace", "Way", "Place",
)

# USPS state / territory codes and Canada Post province codes.
REGION_CODES: frozenset[str] = frozenset({
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "DC", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD", "MA",
    "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ", "NM", "NY",
    "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC", "SD", "TN", "TX",
    "UT", "VT", "VA", "WA", "WV", "WI", "WY", "PR", "GU", "VI", "AS",
    "MP",
    "AB", "BC", "MB", "NB", "NL", "NS", "NT", "NU", "ON", "PE", "QC",
    "SK", "YT",
})
