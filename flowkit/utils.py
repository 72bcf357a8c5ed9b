"""Base64 encoding and random UUID functions."""

from __future__ import annotations

import base64
import uuid
from typing import Any

from .coerce import CoercionError, to_bytes


def _as_bytes(value: Any, function_name: str) -> bytes:
    try:
        return to_bytes(value)
    except CoercionError:
        raise ValueError(
            f"{function_name} function first parameter [{value!r}] must be bytes"
        ) from None


def decode_base64(value: Any) -> bytes:
    """Decode standard base64 text; line breaks are ignored."""
    raw = _as_bytes(value, "decodeBase64")
    cleaned = raw.replace(b"\r", b"").replace(b"\n", b"")
    return base64.b64decode(cleaned, validate=True)


def encode_base64(value: Any) -> bytes:
    """Encode ``value`` as standard base64."""
    return base64.b64encode(_as_bytes(value, "encodeBase64"))


def new_uuid() -> str:
    """Return a random version 4 UUID in its usual text form."""
    return str(uuid.uuid4())