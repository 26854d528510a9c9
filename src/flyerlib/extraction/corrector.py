"""Deterministic post-processing for model-extracted flyer fields.

Vision models routinely under-report save-the-date flyers, leave city and
state empty even when they are printed on the flyer, and spell out state
names. Each correction is a pure ``dict -> dict`` step; ``correct_fields``
runs them in ``CORRECTION_STEPS`` order. Order matters: the backfill step
only fills what the model left empty, and state normalization runs after
backfill so either source ends up as a 2-letter code.

No step raises. When a step has nothing to work with it returns the map
unchanged.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable

from flyerlib.extraction.schemas import EventType
from flyerlib.extraction.states import STATE_ABBREVIATIONS, abbreviate_state

logger = logging.getLogger(__name__)

FieldMap = dict[str, Any]

SAVE_THE_DATE_PATTERNS: tuple[str, ...] = (
    "save the date",
    "save-the-date",
    "savethedate",
    "details to follow",
    "more info coming",
    "more info to come",
    "hotel link and more info to come",
)

# A "city" equal to one of these was captured from a street address,
# as in "5th Street, GA".
STREET_SUFFIXES: frozenset[str] = frozenset({
    "street", "avenue", "ave", "road", "rd", "boulevard", "blvd",
    "drive", "dr", "lane", "ln", "way", "court", "ct",
})

_CITY_WORDS = r"\b([A-Z][a-zA-Z]+(?:[ ][A-Z][a-zA-Z]+)*)"

# Longest names first so "west virginia" wins over "virginia".
_STATE_NAMES = "|".join(
    name.replace(" ", r"\s+")
    for name in sorted(STATE_ABBREVIATIONS, key=len, reverse=True)
)

# Backfill patterns in priority order. Each captures (city, state).
LOCATION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("city_comma_code", re.compile(_CITY_WORDS + r",[ \t]*([A-Z]{2})\b")),
    ("city_comma_name", re.compile(_CITY_WORDS + r",[ \t]*(?i:(" + _STATE_NAMES + r"))\b")),
    ("caps_city_code", re.compile(r"\b([A-Z]{3,})[ \t]+([A-Z]{2})\b")),
)

_WHITESPACE = re.compile(r"\s+")


def _text(fields: FieldMap, key: str) -> str:
    value = fields.get(key)
    return value if isinstance(value, str) else ""


def _title_case(city: str) -> str:
    return city[:1].upper() + city[1:].lower()


def _is_street_fragment(city: str) -> bool:
    return city.lower() in STREET_SUFFIXES


def apply_save_the_date_override(fields: FieldMap) -> FieldMap:
    """Force SAVE_THE_DATE when the description contains a trigger phrase.

    Overwrites whatever ``containsSaveTheDateText`` and ``eventType`` the
    model supplied.
    """
    description = _text(fields, "description").lower()
    matched = next((p for p in SAVE_THE_DATE_PATTERNS if p in description), None)
    if matched is None:
        return fields

    result = dict(fields)
    result["containsSaveTheDateText"] = True
    result["eventType"] = EventType.SAVE_THE_DATE.value
    if fields.get("eventType") != EventType.SAVE_THE_DATE.value:
        logger.debug(
            "Save-the-date phrase %r found; eventType %r -> SAVE_THE_DATE",
            matched,
            fields.get("eventType"),
        )
    return result


def backfill_city_state(fields: FieldMap) -> FieldMap:
    """Fill a missing city and/or state from description and address text.

    Patterns are tried in ``LOCATION_PATTERNS`` order. Only the first
    pattern that matches anywhere is used: its matches are scanned until
    city and state are both set, and later patterns are never consulted,
    even if none of those matches produced a usable value.
    """
    if fields.get("city") and fields.get("state"):
        return fields

    search_text = f"{_text(fields, 'description')} {_text(fields, 'address')}"
    result = dict(fields)

    for pattern_name, pattern in LOCATION_PATTERNS:
        matches = list(pattern.finditer(search_text))
        if not matches:
            continue

        for match in matches:
            city, state = match.group(1), match.group(2)
            if _is_street_fragment(city):
                logger.debug("Skipping street fragment %r as city", city)
                continue

            if len(state) > 2:
                state = abbreviate_state(state) or state

            if not result.get("city") and len(city) >= 3:
                result["city"] = _title_case(city)
                logger.debug("Backfilled city=%s from pattern %s", result["city"], pattern_name)
            if not result.get("state") and len(state) == 2:
                result["state"] = state.upper()
                logger.debug("Backfilled state=%s from pattern %s", result["state"], pattern_name)

            if result.get("city") and result.get("state"):
                break
        break

    return result


def normalize_state(fields: FieldMap) -> FieldMap:
    """Replace a spelled-out state name with its 2-letter code when known."""
    state = fields.get("state")
    if not isinstance(state, str) or len(state) <= 2:
        return fields

    code = abbreviate_state(state)
    if code is None:
        return fields

    result = dict(fields)
    result["state"] = code
    return result


def clean_event_name(fields: FieldMap) -> FieldMap:
    """Collapse whitespace runs in ``eventName`` and trim the ends."""
    name = fields.get("eventName")
    if not isinstance(name, str) or not name:
        return fields

    result = dict(fields)
    result["eventName"] = _WHITESPACE.sub(" ", name).strip()
    return result


CORRECTION_STEPS: tuple[Callable[[FieldMap], FieldMap], ...] = (
    apply_save_the_date_override,
    backfill_city_state,
    normalize_state,
    clean_event_name,
)


def correct_fields(fields: FieldMap) -> FieldMap:
    """Run every correction step in order and return the corrected map.

    The input map is never mutated.
    """
    corrected = fields
    for step in CORRECTION_STEPS:
        corrected = step(corrected)
    return corrected
