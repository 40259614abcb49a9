import json
import re
from typing import Any, Dict, Optional

from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)


def parse_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Parse a single JSON object from model output.

    Handles:
    - Markdown code fences (```json ... ```)
    - Prose before or after the object

    Args:
        text: Raw model output

    Returns:
        The parsed object, or None if no JSON object can be read
    """
    if not text:
        return None

    cleaned = _FENCE_PATTERN.sub("", text.strip()).strip()

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        match = _OBJECT_PATTERN.search(cleaned)
        if not match:
            LOGGER.warning(f"Failed to parse JSON: {e}")
            return None
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as inner:
            LOGGER.warning(f"Failed to parse JSON: {inner}")
            return None

    if not isinstance(parsed, dict):
        LOGGER.warning(f"Expected a JSON object, got {type(parsed).__name__}")
        return None

    return parsed
