from __future__ import annotations

from starlette.requests import Request


def is_secure(request: Request) -> bool:
    return request.url.scheme == "https"


def build_cookie(name: str, value: str, max_age: int, *, secure: bool) -> str:
    cookie = f"{name}={value}; Path=/; HttpOnly; SameSite=Lax; Max-Age={max_age}"
    if secure:
        cookie += "; Secure"
    return cookie


def expired_cookie(name: str, *, secure: bool) -> str:
    return build_cookie(name, "", 0, secure=secure)


def read_cookie(request: Request, name: str) -> str | None:
    # Starlette's cookie parser skips malformed pairs instead of raising.
    value = request.cookies.get(name)
    if not value:
        return None
    return value
