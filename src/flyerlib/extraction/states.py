"""US state name to postal code lookup.

Used by the field corrector both when backfilling city/state from flyer
text and when normalizing a spelled-out ``state`` value.
"""

from __future__ import annotations

import re

STATE_ABBREVIATIONS: dict[str, str] = {
    "alabama": "AL", "alaska": "AK", "arizona": "AZ", "arkansas": "AR",
    "california": "CA", "colorado": "CO", "connecticut": "CT", "delaware": "DE",
    "florida": "FL", "georgia": "GA", "hawaii": "HI", "idaho": "ID",
    "illinois": "IL", "indiana": "IN", "iowa": "IA", "kansas": "KS",
    "kentucky": "KY", "louisiana": "LA", "maine": "ME", "maryland": "MD",
    "massachusetts": "MA", "michigan": "MI", "minnesota": "MN", "mississippi": "MS",
    "missouri": "MO", "montana": "MT", "nebraska": "NE", "nevada": "NV",
    "new hampshire": "NH", "new jersey": "NJ", "new mexico": "NM", "new york": "NY",
    "north carolina": "NC", "north dakota": "ND", "ohio": "OH", "oklahoma": "OK",
    "oregon": "OR", "pennsylvania": "PA", "rhode island": "RI", "south carolina": "SC",
    "south dakota": "SD", "tennessee": "TN", "texas": "TX", "utah": "UT",
    "vermont": "VT", "virginia": "VA", "washington": "WA", "west virginia": "WV",
    "wisconsin": "WI", "wyoming": "WY",
}

_WHITESPACE = re.compile(r"\s+")


def abbreviate_state(name: str) -> str | None:
    """Return the 2-letter code for a full state name, or None if unknown.

    Matching is case-insensitive and tolerant of repeated or non-space
    whitespace inside multi-word names ("New\\nYork" -> "NY").
    """
    key = _WHITESPACE.sub(" ", name.strip()).lower()
    return STATE_ABBREVIATIONS.get(key)
