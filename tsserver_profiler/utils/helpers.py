# tsserver_profiler/utils/helpers.py - Helper functions
"""
General utility and helper functions.
"""

from typing import Any
import json


def truncate(text: str, width: int) -> str:
    """
    Shorten text to at most width characters.

    Args:
        text: Text to shorten
        width: Maximum length

    Returns:
        Text, with a trailing "..." when it was cut
    """
    if width <= 0 or len(text) <= width:
        return text
    if width <= 3:
        return text[:width]
    return text[:width - 3] + "..."


def preview_json(value: Any, width: int = 100) -> str:
    """
    Compact JSON preview of a value.

    Args:
        value: JSON-serializable value
        width: Maximum preview length

    Returns:
        Truncated JSON text
    """
    return truncate(json.dumps(value, default=str, separators=(',', ':')), width)
