"""Stateless sessions carried in a signed cookie.

The cookie value is ``<base64url json>.<base64url hmac>``. Nothing is stored
server side: every read re-verifies the signature with the process secret.
"""

from __future__ import annotations

import time

from starlette.requests import Request

from auth import signed_token
from auth.constants import LOGGER
from auth.cookies import build_cookie, expired_cookie, is_secure, read_cookie
from auth.errors import InvalidTokenError
from auth.models import SessionUser

SESSION_COOKIE = "session"
SESSION_MAX_AGE_SECONDS = 60 * 60 * 24 * 7


class SessionManager:
    def __init__(self, secret: str | None, *, clock=time.time) -> None:
        self._secret = secret
        self._clock = clock

    def _key(self) -> str:
        return signed_token.check_secret(self._secret)

    def create(self, user: SessionUser, request: Request) -> str:
        """Sign ``user`` and return the ``Set-Cookie`` header value."""
        key = self._key()
        value = signed_token.encode(
            {
                "id": user.id,
                "email": user.email,
                "name": user.name,
                "iat": int(self._clock()),
            },
            key,
        )
        return build_cookie(
            SESSION_COOKIE,
            value,
            SESSION_MAX_AGE_SECONDS,
            secure=is_secure(request),
        )

    def read(self, request: Request) -> SessionUser | None:
        """Return the signed-in user, or None when there is no valid session.

        Only a configuration error (missing or short secret) is raised.
        """
        key = self._key()
        value = read_cookie(request, SESSION_COOKIE)
        if value is None:
            return None

        try:
            payload = signed_token.decode(value, key)
        except InvalidTokenError as error:
            LOGGER.info("Rejected session cookie: %s", error)
            return None

        user_id = payload.get("id")
        email = payload.get("email")
        name = payload.get("name")
        if not isinstance(user_id, str) or not user_id:
            return None
        if not isinstance(email, str) or not email:
            return None
        if not isinstance(name, str) or not name:
            name = email

        return SessionUser(id=user_id, email=email, name=name)

    def clear(self, request: Request) -> str:
        return expired_cookie(SESSION_COOKIE, secure=is_secure(request))
