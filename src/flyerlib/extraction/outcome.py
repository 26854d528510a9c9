"""Extraction outcomes and their HTTP response shape."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from flyerlib.extraction.schemas import ExtractedRecord

SAVE_THE_DATE_WARNING = "Save the Date flyer - missing venue/time details (expected)"


class FailureKind(str, Enum):
    """Why an extraction could not produce a usable record."""

    PARSE_ERROR = "PARSE_ERROR"
    INCOMPLETE_FLYER_DATA = "INCOMPLETE_FLYER_DATA"


@dataclass(frozen=True)
class ExtractionSuccess:
    """A validated record, the model that produced it, and an optional warning."""

    record: ExtractedRecord
    provider: str
    warning: str | None = None


@dataclass(frozen=True)
class ExtractionFailure:
    """An extraction the caller must complete by hand.

    ``partial_record`` is None only for PARSE_ERROR, where no structure
    could be recovered. INCOMPLETE_FLYER_DATA always carries the partial
    field map so a manual-entry form can be pre-filled.
    """

    kind: FailureKind
    message: str
    partial_record: dict[str, Any] | None = None


ExtractionOutcome = Union[ExtractionSuccess, ExtractionFailure]


def to_http_response(outcome: ExtractionOutcome) -> tuple[int, dict[str, Any]]:
    """Map an outcome to ``(status_code, json_body)`` for the upload route.

    Success is 200 with ``extractedData``/``provider`` (plus ``warning``
    when set). Failure is 400 with ``error``/``message``/``partialData``.
    """
    if isinstance(outcome, ExtractionSuccess):
        body: dict[str, Any] = {
            "success": True,
            "extractedData": outcome.record.to_wire(),
            "provider": outcome.provider,
        }
        if outcome.warning:
            body["warning"] = outcome.warning
        return 200, body

    return 400, {
        "success": False,
        "error": outcome.kind.value,
        "message": outcome.message,
        "partialData": outcome.partial_record,
    }
