from __future__ import annotations

import os

import uvicorn
from starlette.applications import Starlette

from auth.constants import DEFAULT_EXCHANGE_TIMEOUT_SECONDS
from auth.oauth_routes import GoogleAuthRoutes
from auth.session import SessionManager
from playsite.app import build_app
from playsite.constants import APP_VERSION, LOGGER
from playsite.env import (
    check_env,
    get_env_float,
    get_env_int,
    get_public_url,
    load_env,
    setup_logging,
)


def create_app() -> Starlette:
    load_env()
    setup_logging()
    check_env()

    session_manager = SessionManager(os.getenv("SESSION_SECRET"))
    auth_routes = GoogleAuthRoutes(
        client_id=os.getenv("GOOGLE_CLIENT_ID", "").strip(),
        client_secret=os.getenv("GOOGLE_CLIENT_SECRET", "").strip(),
        session_manager=session_manager,
        public_url=get_public_url(),
        timeout=get_env_float("GOOGLE_OAUTH_TIMEOUT", DEFAULT_EXCHANGE_TIMEOUT_SECONDS),
    )
    LOGGER.info("Starting playsite %s", APP_VERSION)
    return build_app(session_manager, auth_routes)


def main() -> None:
    host = os.getenv("PLAYSITE_HOST", "127.0.0.1")
    port = get_env_int("PLAYSITE_PORT", 8000)
    app = create_app()
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
