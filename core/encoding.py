"""
Transport encoding helpers.

Query strings carry SQL and parameter payloads either as plain text or as
Base64. Browsers and proxies mangle Base64 in predictable ways (URL-safe
alphabet, stripped padding, ``+`` decoded to a space), so the decoder
normalizes all of those before decoding.
"""

import base64
import binascii
from typing import Optional

from core.errors import FailureKind, QueryRejected


def from_base64(payload: Optional[str]) -> str:
    """
    Decode standard or URL-safe Base64 into UTF-8 text.

    Padding is applied from the length of the *normalized* string.

    Raises:
        QueryRejected: MISSING_PAYLOAD, INVALID_LENGTH or INVALID_ENCODING.
    """
    if not payload:
        raise QueryRejected(FailureKind.MISSING_PAYLOAD, "Missing base64 payload")

    # '+' arrives as ' ' when the query string was form-decoded upstream
    normalized = payload.replace(" ", "+")
    normalized = normalized.replace("-", "+").replace("_", "/")

    remainder = len(normalized) % 4
    if remainder == 1:
        raise QueryRejected(FailureKind.INVALID_LENGTH, "Invalid base64 length")
    if remainder == 2:
        normalized += "=="
    elif remainder == 3:
        normalized += "="

    try:
        raw = base64.b64decode(normalized, validate=True)
    except (binascii.Error, ValueError):
        raise QueryRejected(FailureKind.INVALID_ENCODING, "Invalid base64 payload")

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise QueryRejected(
            FailureKind.INVALID_ENCODING, "Base64 payload is not valid UTF-8"
        )


def to_base64url(text: str) -> str:
    """Encode text as URL-safe Base64 without padding."""
    encoded = base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii")
    return encoded.rstrip("=")
