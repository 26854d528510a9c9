"""Flyer extraction: validated event records from vision-model output."""

__version__ = "0.1.0"

from flyerlib.extraction.orchestrator import assemble_outcome
from flyerlib.extraction.outcome import (
    ExtractionFailure,
    ExtractionOutcome,
    ExtractionSuccess,
    FailureKind,
    to_http_response,
)
from flyerlib.extraction.schemas import Contact, EventType, ExtractedRecord

__all__ = [
    "Contact",
    "EventType",
    "ExtractedRecord",
    "ExtractionFailure",
    "ExtractionOutcome",
    "ExtractionSuccess",
    "FailureKind",
    "assemble_outcome",
    "to_http_response",
    "__version__",
]
