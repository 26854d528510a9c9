"""Classification-dependent required-field validation.

Save-the-date flyers announce an event before the venue and time are
settled, so they only need a name and a date on top of the transcribed
description. Every other flyer must carry enough to list the event:
time, venue, city and state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from flyerlib.extraction.classifier import is_save_the_date

SAVE_THE_DATE_REQUIRED: tuple[str, ...] = ("description", "eventName", "eventDate")

STANDARD_REQUIRED: tuple[str, ...] = (
    "description",
    "eventName",
    "eventDate",
    "eventTime",
    "venueName",
    "city",
    "state",
)


@dataclass
class ValidationResult:
    """Result of checking a corrected field map for required fields.

    Attributes:
        save_the_date: Classification the required set was chosen from.
        required_fields: The required set that was checked.
        missing_fields: Every required field that is absent or empty,
            in required-set order.
    """

    save_the_date: bool
    required_fields: tuple[str, ...]
    missing_fields: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.missing_fields

    @property
    def message(self) -> str:
        return f"Missing required fields: {', '.join(self.missing_fields)}"


def required_fields_for(save_the_date: bool) -> tuple[str, ...]:
    return SAVE_THE_DATE_REQUIRED if save_the_date else STANDARD_REQUIRED


def validate_required_fields(fields: dict[str, Any]) -> ValidationResult:
    """Classify *fields* and collect all missing required fields.

    Classification is recomputed here rather than trusted from the
    corrector, so a map that never went through correction is still
    judged by all three save-the-date signals.
    """
    save_the_date = is_save_the_date(fields)
    required = required_fields_for(save_the_date)
    missing = [name for name in required if not fields.get(name)]
    return ValidationResult(
        save_the_date=save_the_date,
        required_fields=required,
        missing_fields=missing,
    )
