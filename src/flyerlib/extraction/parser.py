"""Response unwrapper for vision-model flyer extraction output.

Models are asked for bare JSON but frequently wrap it in a markdown code
fence (```json ... ```). This module strips that wrapping and parses the
remainder into a loose field map. No schema is applied here: the map is
handed to the corrector and validator as-is so partial data survives.
"""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

_JSON_FENCE = "```json"
_FENCE = "```"


class ResponseParseError(ValueError):
    """Raised when model output cannot be interpreted as a JSON object."""


def strip_code_fence(text: str) -> str:
    """Remove an optional leading ```json / ``` fence and trailing ``` fence."""
    cleaned = text.strip()
    if cleaned.startswith(_JSON_FENCE):
        cleaned = cleaned[len(_JSON_FENCE):]
    elif cleaned.startswith(_FENCE):
        cleaned = cleaned[len(_FENCE):]
    if cleaned.endswith(_FENCE):
        cleaned = cleaned[: -len(_FENCE)]
    return cleaned.strip()


def unwrap_response(raw_text: str) -> dict[str, Any]:
    """Parse raw model output into a field map.

    Args:
        raw_text: Text exactly as returned by the vision model.

    Returns:
        The parsed top-level JSON object.

    Raises:
        ResponseParseError: If the text is not valid JSON after fence
            stripping, is nested too deeply to decode, or the top-level
            value is not an object.
    """
    cleaned = strip_code_fence(raw_text)
    try:
        parsed = json.loads(cleaned)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning("Model response is not valid JSON: %s (preview: %r)", e, cleaned[:200])
        raise ResponseParseError(f"Could not parse model response as JSON: {e}") from e

    if not isinstance(parsed, dict):
        logger.warning("Model response is JSON %s, expected object", type(parsed).__name__)
        raise ResponseParseError(
            f"Model response is a JSON {type(parsed).__name__}, expected an object"
        )
    return parsed
