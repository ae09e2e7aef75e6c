"""
Interchange Serializer

Lossless, human-readable JSON serialization of export payloads for backup
and re-import. No projection is applied.
"""

import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

INDENT = 2


def _default(value: Any) -> Any:
    """Encode the non-JSON scalars business data commonly carries"""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        # Fractions stay exact as strings
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not serializable")


def serialize(payload: Any) -> str:
    """
    Serialize a payload as indented JSON

    Args:
        payload: Any JSON-compatible structure, possibly nested

    Returns:
        Pretty-printed JSON text with two-space indentation

    Raises:
        TypeError: If the payload holds values with no JSON representation
        ValueError: If the payload contains a reference cycle
    """
    return json.dumps(payload, indent=INDENT, ensure_ascii=False, default=_default)


def serialize_compact(value: Any) -> str:
    """Single-line JSON used when a nested value has to fit in one cell"""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_default)


def deserialize(text: str) -> Any:
    """Parse interchange text back into the payload structure"""
    return json.loads(text)
