from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json

from auth.errors import ConfigurationError, InvalidTokenError

MIN_SECRET_LENGTH = 16


def check_secret(secret: str | None) -> str:
    if not secret or len(secret) < MIN_SECRET_LENGTH:
        raise ConfigurationError(
            f"SESSION_SECRET must be set and at least {MIN_SECRET_LENGTH} characters."
        )
    return secret


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(data: str) -> bytes:
    padded = data + "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def _sign(data_b64: str, key: str) -> str:
    sig = hmac.new(key.encode(), data_b64.encode("ascii"), hashlib.sha256).digest()
    return _b64encode(sig)


def encode(payload: dict, key: str) -> str:
    data = json.dumps(payload, separators=(",", ":")).encode()
    data_b64 = _b64encode(data)
    return f"{data_b64}.{_sign(data_b64, key)}"


def decode(token: str, key: str) -> dict:
    parts = token.split(".")
    if len(parts) != 2 or not all(parts):
        raise InvalidTokenError("Invalid token format.")
    data_b64, sig_b64 = parts
    try:
        data_b64.encode("ascii")
    except UnicodeEncodeError as error:
        raise InvalidTokenError("Invalid token format.") from error

    expected_sig = _sign(data_b64, key)
    if not hmac.compare_digest(expected_sig.encode(), sig_b64.encode()):
        raise InvalidTokenError("Token signature verification failed.")

    try:
        payload = json.loads(_b64decode(data_b64))
    except (binascii.Error, ValueError) as error:
        raise InvalidTokenError("Token payload is not valid JSON.") from error
    if not isinstance(payload, dict):
        raise InvalidTokenError("Token payload must be a JSON object.")
    return payload
