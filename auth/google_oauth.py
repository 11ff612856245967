from __future__ import annotations

import base64
import binascii
import json
import urllib.parse
from dataclasses import dataclass

import httpx

from auth.constants import DEFAULT_EXCHANGE_TIMEOUT_SECONDS, LOGGER
from auth.errors import ConfigurationError, TokenExchangeError
from auth.models import SessionUser
from playsite.http import build_http_client

GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
SCOPES = ["openid", "email", "profile"]


@dataclass
class TokenResponse:
    id_token: str

    @classmethod
    def from_payload(cls, payload: dict) -> "TokenResponse":
        if not isinstance(payload, dict):
            raise TokenExchangeError("Token response must be a JSON object.")

        id_token = payload.get("id_token")
        if not isinstance(id_token, str) or not id_token:
            raise TokenExchangeError("Token response missing id_token.")

        return cls(id_token=id_token)


def build_authorization_url(client_id: str, redirect_uri: str, state: str) -> str:
    query = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": " ".join(SCOPES),
        "state": state,
    }
    encoded = urllib.parse.urlencode(query, quote_via=urllib.parse.quote)
    return f"{GOOGLE_AUTHORIZE_URL}?{encoded}"


def decode_id_token(id_token: str) -> SessionUser:
    """Read the identity claims from a Google id_token.

    The JWT signature is not checked against Google's keys: the token comes
    straight from the token endpoint over TLS in a server-to-server call.
    """
    parts = id_token.split(".")
    if len(parts) < 2 or not parts[1]:
        raise TokenExchangeError("Invalid id_token: missing payload.")

    payload_b64 = parts[1]
    try:
        raw = base64.urlsafe_b64decode(payload_b64 + "=" * (-len(payload_b64) % 4))
        claims = json.loads(raw)
    except (binascii.Error, ValueError, RecursionError) as error:
        raise TokenExchangeError("Invalid id_token: payload is not valid JSON.") from error

    if not isinstance(claims, dict):
        raise TokenExchangeError("Invalid id_token: payload must be a JSON object.")

    sub = claims.get("sub")
    email = claims.get("email")
    if not isinstance(sub, str) or not sub or not isinstance(email, str) or not email:
        raise TokenExchangeError("Invalid id_token: missing sub or email claim.")

    name = claims.get("name")
    if not isinstance(name, str) or not name:
        name = email
    return SessionUser(id=sub, email=email, name=name)


async def exchange_code(
    client_id: str,
    client_secret: str,
    code: str,
    redirect_uri: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_EXCHANGE_TIMEOUT_SECONDS,
) -> SessionUser:
    if not client_id or not client_secret:
        raise ConfigurationError("GOOGLE_CLIENT_ID or GOOGLE_CLIENT_SECRET not configured.")

    own_client = client is None
    if client is None:
        client = build_http_client(timeout=timeout)

    try:
        response = await client.post(
            GOOGLE_TOKEN_URL,
            data={
                "code": code,
                "client_id": client_id,
                "client_secret": client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as error:
        detail = error.response.text
        raise TokenExchangeError(
            f"Token exchange failed with status {error.response.status_code}: {detail}"
        ) from error
    except httpx.HTTPError as error:
        raise TokenExchangeError(f"Token exchange request failed: {error}") from error
    finally:
        if own_client:
            await client.aclose()

    try:
        payload = response.json()
    except ValueError as error:
        raise TokenExchangeError("Token response is not valid JSON.") from error

    tokens = TokenResponse.from_payload(payload)
    user = decode_id_token(tokens.id_token)
    LOGGER.info("Exchanged Google authorization code for user id=%s", user.id)
    return user
