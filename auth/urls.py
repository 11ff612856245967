from __future__ import annotations

import urllib.parse

from starlette.requests import Request

CALLBACK_PATH = "/auth/callback"


def is_valid_public_url(url: str) -> bool:
    parsed = urllib.parse.urlparse(url)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def request_origin(request: Request, public_url: str | None = None) -> str:
    if public_url:
        return public_url.rstrip("/")
    return f"{request.url.scheme}://{request.url.netloc}"


def callback_url(request: Request, public_url: str | None = None) -> str:
    return f"{request_origin(request, public_url)}{CALLBACK_PATH}"
