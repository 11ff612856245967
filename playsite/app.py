from __future__ import annotations

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from auth.errors import ConfigurationError
from auth.oauth_routes import GoogleAuthRoutes
from auth.session import SessionManager

from .constants import APP_VERSION, LOGGER, SITE_NAME


def build_site_routes(session_manager: SessionManager) -> list[Route]:
    async def home_route(request: Request) -> Response:
        try:
            user = session_manager.read(request)
        except ConfigurationError as error:
            LOGGER.error("Cannot read session: %s", error)
            return JSONResponse(
                {"error": "server_error", "error_description": str(error)},
                status_code=error.status_code,
            )
        return JSONResponse(
            {
                "site": SITE_NAME,
                "user": user.to_dict() if user else None,
            }
        )

    async def health_route(request: Request) -> Response:
        del request
        return JSONResponse({"status": "ok", "version": APP_VERSION})

    return [
        Route("/", home_route, methods=["GET"]),
        Route("/health", health_route, methods=["GET"]),
    ]


def build_app(
    session_manager: SessionManager,
    auth_routes: GoogleAuthRoutes,
) -> Starlette:
    routes = build_site_routes(session_manager) + auth_routes.routes()
    app = Starlette(routes=routes)
    app.state.auth_routes = auth_routes
    return app
