"""
Best-effort detection of base64-encoded text inside query results.

A value is only decoded when it looks like base64 *and* decodes to mostly
printable bytes; anything else is returned untouched. False positives are
possible (short alphanumeric strings such as "test" are valid base64).
"""
import base64
import binascii
import json
import re
from typing import Any

BASE64_PATTERN = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
MAX_NON_PRINTABLE_RATIO = 0.2
PRINTABLE_CONTROLS = {9, 10, 13}
TRAILING_JUNK = " \t\r\n\x00"


def _is_printable(byte: int) -> bool:
    return 32 <= byte <= 126 or byte in PRINTABLE_CONTROLS


def _try_decode(value: str):
    """Return the decoded bytes when `value` passes every base64 check, else None."""
    if not value or len(value) % 4 != 0:
        return None
    if not BASE64_PATTERN.match(value):
        return None
    try:
        decoded = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return None
    if not decoded:
        return None

    non_printable = sum(1 for b in decoded if not _is_printable(b))
    if non_printable / len(decoded) > MAX_NON_PRINTABLE_RATIO:
        return None
    return decoded


def looks_like_base64(value: str) -> bool:
    return _try_decode(value) is not None


def decode_base64_if_needed(value: str) -> str:
    """Decode `value` when it looks like base64 text; otherwise return it unchanged."""
    decoded = _try_decode(value)
    if decoded is None:
        return value
    return decoded.decode("utf-8", errors="replace").rstrip(TRAILING_JUNK)


def decode_if_encoded(value: Any) -> Any:
    """Walk dicts, lists and tuples, decoding every base64-looking string found."""
    if isinstance(value, dict):
        return {key: decode_if_encoded(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [decode_if_encoded(item) for item in value]
    if isinstance(value, str):
        return decode_base64_if_needed(value)
    return value


def decode_json_with_base64(text: str) -> Any:
    """Parse a JSON document and decode any base64 values inside it."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"failed to parse JSON: {e}") from e
    return decode_if_encoded(data)
