"""Save-the-date classification of extracted field maps."""

from __future__ import annotations

from typing import Any

from flyerlib.extraction.schemas import EventType

SAVE_THE_DATE_PHRASE = "save the date"


def is_save_the_date(fields: dict[str, Any], check_description: bool = True) -> bool:
    """Return True if any save-the-date signal is present in *fields*.

    Signals are checked independently: the ``containsSaveTheDateText``
    flag, the ``eventType`` label, and (unless *check_description* is
    False) the literal phrase in ``description``. Failure envelopes pass
    ``check_description=False`` because their partial data may omit the
    description entirely.
    """
    if fields.get("containsSaveTheDateText") is True:
        return True
    if fields.get("eventType") == EventType.SAVE_THE_DATE.value:
        return True
    if check_description:
        description = fields.get("description")
        if isinstance(description, str) and SAVE_THE_DATE_PHRASE in description.lower():
            return True
    return False
