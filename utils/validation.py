"""
Input validation for Sui addresses, object ids and schema definitions
"""

import json
import re
from typing import Optional

OBJECT_ID_PATTERN = re.compile(r"^0x[a-fA-F0-9]{64}$")
ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]+$")


def is_valid_object_id(object_id: str) -> bool:
    """Full-length 32-byte hex object id"""
    return isinstance(object_id, str) and bool(OBJECT_ID_PATTERN.match(object_id))


def is_valid_sui_address(address: str) -> bool:
    """Hex address; short forms down to 20 bytes are accepted"""
    return (
        isinstance(address, str)
        and len(address) >= 42
        and bool(ADDRESS_PATTERN.match(address))
    )


def definition_json_error(definition_json: str) -> Optional[str]:
    """
    Check that a schema definition is a JSON object

    Returns:
        Error message, or None if the definition is valid
    """
    try:
        parsed = json.loads(definition_json)
    except (TypeError, ValueError) as e:
        return f"Invalid JSON: {str(e)}"
    if not isinstance(parsed, dict):
        return "JSON must be an object"
    return None


def sanitize_text(value: str) -> str:
    """Strip surrounding whitespace and control characters"""
    return re.sub(r"[\x00-\x1F\x7F]", "", value.strip())
