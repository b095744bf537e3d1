"""
Response Extractor.

Pulls a JSON object out of raw model text that may be wrapped in prose or
markdown code fences.
"""

import json
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def _parse_object(text: str) -> Optional[dict]:
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return data if isinstance(data, dict) else None


def extract_json_object(raw: str) -> Optional[dict]:
    """
    Extract the first-to-last brace span of a model reply as a dict.

    Tries a direct parse when the trimmed text already looks like an object,
    then falls back to slicing between the first '{' and the last '}'.
    No other repair is attempted.

    Args:
        raw: Raw model output

    Returns:
        Parsed object, or None when nothing parseable was found
    """
    if not isinstance(raw, str):
        return None

    trimmed = raw.strip()

    if trimmed.startswith("{") and trimmed.endswith("}"):
        data = _parse_object(trimmed)
        if data is not None:
            return data

    start = trimmed.find("{")
    end = trimmed.rfind("}")
    if start == -1 or end <= start:
        logger.debug("No JSON object found in model response")
        return None

    data = _parse_object(trimmed[start:end + 1])
    if data is None:
        logger.debug("Brace-delimited span in model response is not a JSON object")
    return data
