"""Extraction of JSON payloads embedded in free-text model output"""

import re
import json
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def _strip_fences(text: str) -> str:
    text = text.strip()
    text = re.sub(r"^```(?:json)?\s*", "", text, flags=re.IGNORECASE)
    text = re.sub(r"\s*```$", "", text)
    return text


def _extract(text: Optional[str], pattern: re.Pattern, expected: type) -> Optional[Any]:
    if not text:
        return None

    match = pattern.search(_strip_fences(text))
    if not match:
        logger.debug(f"No {expected.__name__} found in response: {text[:200]}")
        return None

    try:
        value = json.loads(match.group(0))
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning(f"Failed to parse JSON {expected.__name__}: {e}")
        return None

    if not isinstance(value, expected):
        logger.warning(f"Expected JSON {expected.__name__}, got {type(value).__name__}")
        return None

    return value


def extract_json_array(text: Optional[str]) -> Optional[List[Any]]:
    """Parse the outermost [...] span of the text, or return None"""
    return _extract(text, ARRAY_PATTERN, list)


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Parse the outermost {...} span of the text, or return None"""
    return _extract(text, OBJECT_PATTERN, dict)
