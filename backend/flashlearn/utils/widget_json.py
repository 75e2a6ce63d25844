"""
JSON string-list helpers for stored id lists.

Older session documents kept the attempted ids as a JSON-encoded string;
newer ones store a native list. Both decode to a list of non-blank strings.
"""
import json
import logging
from typing import Optional, Union

logger = logging.getLogger(__name__)


def decode_string_list(value: Optional[Union[str, list]]) -> list[str]:
    """
    Decode a stored id list, dropping blanks and duplicates.

    Malformed input decodes to an empty list.
    """
    if value is None:
        return []

    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            logger.warning(f"Discarding malformed id list: {value!r}")
            return []
        if not isinstance(value, list):
            return []

    result: list[str] = []
    for item in value:
        if item is None:
            continue
        item = str(item)
        if item.strip() and item not in result:
            result.append(item)
    return result

