"""Pydantic models for validated flyer extraction records.

Model output is handled as a loose dict through parsing, correction and
validation. Only a record that has passed validation is promoted into
``ExtractedRecord``. Every field is optional at the type level: required
fields depend on the save-the-date classification and are enforced by
``flyerlib.extraction.validator``, not by this schema.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Event classification reported by the model (or forced by correction)."""

    FREE_EVENT = "FREE_EVENT"
    TICKETED_EVENT = "TICKETED_EVENT"
    SAVE_THE_DATE = "SAVE_THE_DATE"


_VALID_EVENT_TYPES: set[str] = {t.value for t in EventType}


class SocialMedia(BaseModel):
    """Social handles printed next to a flyer contact."""

    instagram: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    tiktok: str | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)


class Contact(BaseModel):
    """A person or line to contact about the event."""

    name: str | None = None
    phone_number: str | None = None
    email: str | None = None
    role: str | None = None
    social_media: SocialMedia | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class ExtractedRecord(BaseModel):
    """Structured event record extracted from a flyer.

    Field names are snake_case in Python and camelCase on the wire
    (``model_dump(by_alias=True)``), matching the keys the model emits.
    """

    description: str | None = None
    event_name: str | None = None
    event_date: str | None = Field(default=None, description="Verbatim as printed on the flyer")
    event_end_date: str | None = None
    event_time: str | None = None
    event_end_time: str | None = None
    event_timezone: str | None = None
    venue_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    host_organizer: str | None = None
    contacts: tuple[Contact, ...] = ()
    ticket_prices: tuple[Any, ...] = ()
    age_restriction: str | None = None
    special_notes: str | None = None
    contains_save_the_date_text: bool = False
    event_type: EventType | None = None
    categories: tuple[str, ...] = ()

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator(
        "event_date",
        "event_end_date",
        "event_time",
        "event_end_time",
        "zip_code",
        mode="before",
    )
    @classmethod
    def stringify_scalars(cls, v: Any) -> Any:
        """Accept bare numbers for date/time/zip fields (e.g. ``zipCode: 30303``)."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("contacts", "ticket_prices", "categories", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        if v is None:
            return ()
        return v

    @field_validator("categories", mode="after")
    @classmethod
    def dedupe_categories(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Categories are a set; keep first-seen order for stable output."""
        return tuple(dict.fromkeys(v))

    @field_validator("contains_save_the_date_text", mode="before")
    @classmethod
    def none_to_false(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("event_type", mode="before")
    @classmethod
    def drop_unknown_event_type(cls, v: Any) -> Any:
        """Unrecognized labels become None rather than failing promotion."""
        if v is None or isinstance(v, EventType):
            return v
        if not isinstance(v, str) or v not in _VALID_EVENT_TYPES:
            logger.warning("Ignoring unrecognized eventType %r", v)
            return None
        return v

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys and enum values as strings."""
        return self.model_dump(mode="json", by_alias=True)
