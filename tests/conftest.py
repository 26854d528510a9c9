"""Shared pytest fixtures for flyer extraction tests.

Provides representative vision-model responses: a complete ticketed
flyer, a save-the-date flyer with no venue, a model-reported failure
envelope, and a fenced variant of the complete flyer.
"""

from __future__ import annotations

import json

import pytest


@pytest.fixture
def ticketed_fields() -> dict:
    """Field map for a complete ticketed flyer."""
    return {
        "description": "SPRING STEPPERS BALL\nSaturday April 5th 8PM\nThe Grand Ballroom\n"
                       "Tickets $40 advance / $50 door",
        "eventName": "Spring  Steppers\n Ball ",
        "eventDate": "Saturday April 5th",
        "eventEndDate": None,
        "eventTime": "8:00 PM",
        "eventEndTime": None,
        "eventTimezone": None,
        "venueName": "The Grand Ballroom",
        "address": "500 Peachtree Street",
        "city": "Atlanta",
        "state": "Georgia",
        "zipCode": "30303",
        "hostOrganizer": "Steppers United",
        "contacts": [
            {
                "name": "Dee",
                "phoneNumber": "404-555-0100",
                "socialMedia": {"instagram": "@deesteps"},
            }
        ],
        "ticketPrices": [],
        "ageRestriction": "21+",
        "specialNotes": None,
        "containsSaveTheDateText": False,
        "eventType": "TICKETED_EVENT",
        "categories": ["Set", "Set", "Holiday Event"],
    }


@pytest.fixture
def ticketed_response(ticketed_fields) -> str:
    return json.dumps(ticketed_fields)


@pytest.fixture
def save_the_date_response() -> str:
    """Save-the-date flyer with city and state in capitals and no location fields."""
    return json.dumps({
        "description": "Power of Love Weekend\nFeb 12-15\nATLANTA GA\nSAVE THE DATE\n"
                       "Hotel link and more info to come",
        "eventName": "Power of Love Weekend",
        "eventDate": "FEB 12-15",
        "city": None,
        "state": None,
    })


@pytest.fixture
def envelope_response() -> str:
    return json.dumps({
        "error": "EXTRACTION_FAILED",
        "message": "Flyer is missing venue and time",
        "partialData": {
            "eventName": "Power of Love",
            "eventDate": "Feb 12-15",
            "containsSaveTheDateText": True,
        },
    })


@pytest.fixture
def fenced_response(ticketed_response) -> str:
    return f"```json\n{ticketed_response}\n```"
