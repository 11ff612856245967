"""CSRF state cookie for the OAuth redirect round trip.

A fresh random state is issued with every login attempt and stored in a short
lived cookie. The callback compares it with the ``state`` query parameter the
provider echoes back and clears the cookie whatever the outcome.
"""

from __future__ import annotations

import hmac
import secrets

from starlette.requests import Request

from auth.cookies import build_cookie, expired_cookie, is_secure, read_cookie

STATE_COOKIE = "oauth_state"
STATE_MAX_AGE_SECONDS = 60 * 10
STATE_BYTES = 32


def issue(request: Request) -> tuple[str, str]:
    """Return ``(state, set_cookie_header)`` for a new login attempt."""
    state = secrets.token_hex(STATE_BYTES)
    cookie = build_cookie(
        STATE_COOKIE,
        state,
        STATE_MAX_AGE_SECONDS,
        secure=is_secure(request),
    )
    return state, cookie


def read(request: Request) -> str | None:
    return read_cookie(request, STATE_COOKIE)


def clear(request: Request) -> str:
    return expired_cookie(STATE_COOKIE, secure=is_secure(request))


def matches(stored: str | None, received: str | None) -> bool:
    if not stored or not received:
        return False
    return hmac.compare_digest(stored.encode(), received.encode())
