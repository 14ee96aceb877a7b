"""
JSON codec for values written to Redis.

The absent sentinel has no JSON form, so it is written as a reserved
marker object and turned back into ``ABSENT`` on read.
"""

import json
from typing import Any, Mapping

from ...domain.cache.value_objects import ABSENT, PAYLOAD_FIELD

ABSENT_MARKER = "__fuzzycache_absent__"


def _encode_absent(value: Any) -> Any:
    if value is ABSENT:
        return {ABSENT_MARKER: True}
    return value


def _is_absent_marker(value: Any) -> bool:
    return isinstance(value, Mapping) and value.get(ABSENT_MARKER) is True and len(value) == 1


def encode_value(value: Any) -> str:
    """Encode a raw value or envelope to JSON text."""
    if isinstance(value, Mapping) and PAYLOAD_FIELD in value:
        value = {**value, PAYLOAD_FIELD: _encode_absent(value[PAYLOAD_FIELD])}
    else:
        value = _encode_absent(value)
    return json.dumps(value, separators=(",", ":"))


def decode_value(text: str) -> Any:
    """Decode JSON text written by encode_value."""
    value = json.loads(text)
    if _is_absent_marker(value):
        return ABSENT
    if isinstance(value, dict) and _is_absent_marker(value.get(PAYLOAD_FIELD)):
        value[PAYLOAD_FIELD] = ABSENT
    return value
