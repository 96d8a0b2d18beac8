"""HMAC-SHA256 verification for webhook notifications."""

from __future__ import annotations

import hashlib
import hmac
import re
from typing import Optional, Union

SIGNATURE_HEADER = "X-Signature"
SIGNATURE_PREFIX = "sha256="

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")

Payload = Union[bytes, bytearray, memoryview, str]


def _as_bytes(value: Payload) -> Optional[bytes]:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return None


def sign_webhook(payload: Payload, secret: Union[str, bytes]) -> str:
    """Return the ``sha256=<hex>`` header value for ``payload``."""
    key = secret.encode("utf-8") if isinstance(secret, str) else secret
    mac = hmac.new(key, _as_bytes(payload) or b"", hashlib.sha256)
    return f"{SIGNATURE_PREFIX}{mac.hexdigest()}"


def verify_webhook(
    payload: Payload,
    signature_header: Optional[str],
    secret: Union[str, bytes],
) -> bool:
    """Check a webhook signature against the raw request body.

    ``payload`` must be the body exactly as received, before any JSON parsing.
    The header may carry the digest with or without the ``sha256=`` prefix.
    Malformed input of any kind yields ``False``; this function does not raise.

    Typical use in a web handler::

        if not verify_webhook(await request.body(), request.headers.get(SIGNATURE_HEADER), secret):
            raise HTTPException(status_code=401)
    """
    if not signature_header or not isinstance(signature_header, str):
        return False
    raw = _as_bytes(payload)
    if raw is None or not isinstance(secret, (str, bytes)):
        return False

    provided_hex = signature_header.strip()
    if provided_hex.startswith(SIGNATURE_PREFIX):
        provided_hex = provided_hex[len(SIGNATURE_PREFIX):]
    # bytes.fromhex tolerates whitespace, so the digit check comes first
    if len(provided_hex) % 2 or not _HEX_DIGITS.fullmatch(provided_hex):
        return False
    provided = bytes.fromhex(provided_hex)

    key = secret.encode("utf-8") if isinstance(secret, str) else secret
    expected = hmac.new(key, raw, hashlib.sha256).digest()
    if len(provided) != len(expected):
        return False
    return hmac.compare_digest(provided, expected)


__all__ = ["SIGNATURE_HEADER", "SIGNATURE_PREFIX", "sign_webhook", "verify_webhook"]
