from __future__ import annotations

import hashlib
import hmac

import httpx
import pytest

from gurutvapay import GuruTvapayClient, sign_webhook, verify_webhook
from gurutvapay.webhooks import SIGNATURE_HEADER

SECRET = "whsec_test"
PAYLOAD = b'{"merchantOrderId":"ORD1","status":"success"}'


def hex_digest(payload: bytes, secret: str) -> str:
    return hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()


@pytest.mark.parametrize(
    "payload",
    [b"", PAYLOAD, b"\x00\xff binary \x10", "café".encode("utf-8") * 50],
)
def test_valid_signature_with_and_without_prefix(payload: bytes) -> None:
    digest = hex_digest(payload, SECRET)
    assert verify_webhook(payload, digest, SECRET)
    assert verify_webhook(payload, f"sha256={digest}", SECRET)


def test_sign_webhook_matches_header_format() -> None:
    assert sign_webhook(PAYLOAD, SECRET) == f"sha256={hex_digest(PAYLOAD, SECRET)}"
    assert verify_webhook(PAYLOAD, sign_webhook(PAYLOAD, SECRET), SECRET)


def test_flipped_payload_bit_fails() -> None:
    header = sign_webhook(PAYLOAD, SECRET)
    for index in range(len(PAYLOAD)):
        tampered = bytearray(PAYLOAD)
        tampered[index] ^= 0x01
        assert not verify_webhook(bytes(tampered), header, SECRET)


def test_flipped_signature_bit_fails() -> None:
    signature = bytes.fromhex(hex_digest(PAYLOAD, SECRET))
    for index in (0, 15, len(signature) - 1):
        tampered = bytearray(signature)
        tampered[index] ^= 0x80
        assert not verify_webhook(PAYLOAD, "sha256=" + tampered.hex(), SECRET)


def test_wrong_secret_fails() -> None:
    assert not verify_webhook(PAYLOAD, sign_webhook(PAYLOAD, SECRET), "other-secret")


@pytest.mark.parametrize(
    "header",
    [
        None,
        "",
        "sha256=",
        "sha256=not-hex-at-all",
        "zz" * 32,
        "abc",
        "sha256=" + "ab" * 16,
        "sha256=" + "ab" * 33,
    ],
)
def test_malformed_headers_return_false(header) -> None:
    assert verify_webhook(PAYLOAD, header, SECRET) is False


def test_reparsed_payload_does_not_verify() -> None:
    header = sign_webhook(PAYLOAD, SECRET)
    reserialized = b'{"merchantOrderId": "ORD1", "status": "success"}'
    assert not verify_webhook(reserialized, header, SECRET)


def test_client_exposes_verifier() -> None:
    assert GuruTvapayClient.verify_webhook(PAYLOAD, sign_webhook(PAYLOAD, SECRET), SECRET)


def test_whitespace_separated_digest_is_rejected() -> None:
    digest = hex_digest(PAYLOAD, SECRET)
    spaced = " ".join(digest[i : i + 2] for i in range(0, len(digest), 2))
    assert verify_webhook(PAYLOAD, spaced, SECRET) is False
    assert verify_webhook(PAYLOAD, f"sha256={spaced}", SECRET) is False


def test_uppercase_digest_verifies() -> None:
    assert verify_webhook(PAYLOAD, hex_digest(PAYLOAD, SECRET).upper(), SECRET)


def test_verify_from_request_headers() -> None:
    headers = httpx.Headers({SIGNATURE_HEADER.lower(): sign_webhook(PAYLOAD, SECRET)})
    assert SIGNATURE_HEADER == "X-Signature"
    assert verify_webhook(PAYLOAD, headers.get(SIGNATURE_HEADER), SECRET)
    assert not verify_webhook(PAYLOAD, httpx.Headers().get(SIGNATURE_HEADER), SECRET)
