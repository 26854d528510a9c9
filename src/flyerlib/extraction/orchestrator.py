"""Turn raw vision-model text into an extraction outcome.

Pipeline for a normal response:
  1. Unwrap fences and parse JSON (PARSE_ERROR on failure)
  2. Apply field corrections (save-the-date override, city/state
     backfill, state normalization, event-name cleanup)
  3. Classify and validate required fields (INCOMPLETE_FLYER_DATA on gaps)
  4. Promote the corrected map to an ExtractedRecord

A response of the form ``{"error": "EXTRACTION_FAILED", "partialData":
{...}}`` is the model reporting its own failure. Such an envelope is
accepted anyway when the partial data is a save-the-date with a name and
a date, since those flyers are expected to lack venue and time.

The pipeline is pure and synchronous: no I/O, no retries, no shared state.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from flyerlib.extraction.classifier import is_save_the_date
from flyerlib.extraction.corrector import correct_fields
from flyerlib.extraction.outcome import (
    SAVE_THE_DATE_WARNING,
    ExtractionFailure,
    ExtractionOutcome,
    ExtractionSuccess,
    FailureKind,
)
from flyerlib.extraction.parser import ResponseParseError, unwrap_response
from flyerlib.extraction.schemas import ExtractedRecord
from flyerlib.extraction.validator import validate_required_fields

logger = logging.getLogger(__name__)

EXTRACTION_FAILED = "EXTRACTION_FAILED"
DEFAULT_ENVELOPE_MESSAGE = "The flyer is missing required information."


def is_failure_envelope(fields: dict[str, Any]) -> bool:
    return fields.get("error") == EXTRACTION_FAILED


def _invalid_fields(error: ValidationError) -> list[str]:
    """Top-level keys named by a promotion error, in first-seen order."""
    return list(dict.fromkeys(str(err["loc"][0]) for err in error.errors() if err["loc"]))


def _invalid_values_failure(fields: dict[str, Any], bad_fields: list[str]) -> ExtractionFailure:
    return ExtractionFailure(
        kind=FailureKind.INCOMPLETE_FLYER_DATA,
        message=f"Invalid field values: {', '.join(bad_fields)}",
        partial_record=fields,
    )


def _promote(
    fields: dict[str, Any], provider: str, warning: str | None = None
) -> ExtractionOutcome:
    """Build a success from a validated map, or a failure if a value has the wrong type."""
    try:
        record = ExtractedRecord.model_validate(fields)
    except ValidationError as e:
        bad_fields = _invalid_fields(e)
        logger.warning("Record promotion rejected fields %s: %s", bad_fields, e)
        return _invalid_values_failure(fields, bad_fields)
    return ExtractionSuccess(record=record, provider=provider, warning=warning)


def _promote_envelope(partial: dict[str, Any], provider: str) -> ExtractionOutcome:
    """Promote save-the-date partial data with a warning.

    A field that fails validation is dropped from the record. A bad
    ``eventName`` or ``eventDate`` still fails the flyer.
    """
    try:
        ExtractedRecord.model_validate(partial)
    except ValidationError as e:
        bad_fields = _invalid_fields(e)
        if "eventName" in bad_fields or "eventDate" in bad_fields:
            logger.warning("Save-the-date envelope has unusable name or date: %s", e)
            return _invalid_values_failure(partial, bad_fields)
        logger.warning("Dropping invalid envelope fields %s", bad_fields)
        partial = {key: value for key, value in partial.items() if key not in bad_fields}
    return _promote(partial, provider, warning=SAVE_THE_DATE_WARNING)


def _resolve_envelope(envelope: dict[str, Any], provider: str) -> ExtractionOutcome:
    partial = envelope.get("partialData")
    if not isinstance(partial, dict):
        partial = {}

    if (
        is_save_the_date(partial, check_description=False)
        and partial.get("eventName")
        and partial.get("eventDate")
    ):
        logger.info(
            "Accepting save-the-date envelope for %r despite model-reported failure",
            partial.get("eventName"),
        )
        return _promote_envelope(partial, provider)

    message = envelope.get("message")
    if not isinstance(message, str) or not message:
        message = DEFAULT_ENVELOPE_MESSAGE
    logger.warning("Model reported extraction failure: %s", message)
    return ExtractionFailure(
        kind=FailureKind.INCOMPLETE_FLYER_DATA,
        message=message,
        partial_record=partial,
    )


def assemble_outcome(raw_text: str, provider: str) -> ExtractionOutcome:
    """Parse, correct and validate one model response.

    Args:
        raw_text: Text exactly as returned by the vision model.
        provider: Identifier of the model that produced *raw_text*,
            recorded on a successful outcome.

    Returns:
        ExtractionSuccess, or ExtractionFailure with kind PARSE_ERROR
        (no partial record) or INCOMPLETE_FLYER_DATA (partial record set).
    """
    try:
        fields = unwrap_response(raw_text)
    except ResponseParseError as e:
        return ExtractionFailure(kind=FailureKind.PARSE_ERROR, message=str(e))

    if is_failure_envelope(fields):
        return _resolve_envelope(fields, provider)

    corrected = correct_fields(fields)
    result = validate_required_fields(corrected)
    if not result.is_valid:
        logger.info("Extraction incomplete: %s", result.message)
        return ExtractionFailure(
            kind=FailureKind.INCOMPLETE_FLYER_DATA,
            message=result.message,
            partial_record=corrected,
        )

    outcome = _promote(corrected, provider)
    if isinstance(outcome, ExtractionSuccess):
        logger.info(
            "Extracted %r (save_the_date=%s, provider=%s)",
            corrected.get("eventName"),
            result.save_the_date,
            provider,
        )
    return outcome
