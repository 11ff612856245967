from __future__ import annotations

import httpx

from .constants import LOGGER

MAX_LOGGED_BODY = 1000


async def log_request(request: httpx.Request) -> None:
    LOGGER.info("Outbound request %s %s", request.method, request.url)


async def log_response(response: httpx.Response) -> None:
    LOGGER.info(
        "Outbound response %s %s -> %s",
        response.request.method,
        response.request.url,
        response.status_code,
    )
    if response.status_code >= 400:
        body = await response.aread()
        text = body.decode("utf-8", errors="replace")
        if len(text) > MAX_LOGGED_BODY:
            text = text[:MAX_LOGGED_BODY] + "...<truncated>"
        LOGGER.warning("Outbound error body: %s", text)


def build_http_client(
    *,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout,
        transport=transport,
        event_hooks={
            "request": [log_request],
            "response": [log_response],
        },
    )
