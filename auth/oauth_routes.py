from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response
from starlette.routing import Route

from auth import google_oauth, oauth_state
from auth.constants import DEFAULT_EXCHANGE_TIMEOUT_SECONDS, LOGGER
from auth.errors import ConfigurationError, TokenExchangeError
from auth.session import SessionManager
from auth.urls import CALLBACK_PATH, callback_url

HOME_PATH = "/"


class GoogleAuthRoutes:
    def __init__(
        self,
        *,
        client_id: str | None,
        client_secret: str | None,
        session_manager: SessionManager,
        public_url: str | None = None,
        timeout: float = DEFAULT_EXCHANGE_TIMEOUT_SECONDS,
        exchange_code_fn=google_oauth.exchange_code,
    ) -> None:
        self.client_id = client_id or ""
        self.client_secret = client_secret or ""
        self.session_manager = session_manager
        self.public_url = public_url.rstrip("/") if public_url else None
        self.timeout = timeout
        self._exchange_code_fn = exchange_code_fn

    def routes(self) -> list[Route]:
        return [
            Route("/auth/google", self._handle_login, methods=["GET"]),
            Route(CALLBACK_PATH, self._handle_callback, methods=["GET"]),
            Route("/auth/logout", self._handle_logout, methods=["GET"]),
        ]

    # -- handlers --------------------------------------------------------------

    async def _handle_login(self, request: Request) -> Response:
        if not self.client_id:
            LOGGER.error("Login requested but GOOGLE_CLIENT_ID is not configured.")
            return self._error("GOOGLE_CLIENT_ID is not configured.")

        state, state_cookie = oauth_state.issue(request)
        auth_url = google_oauth.build_authorization_url(
            client_id=self.client_id,
            redirect_uri=callback_url(request, self.public_url),
            state=state,
        )
        return self._redirect(auth_url, [state_cookie])

    async def _handle_callback(self, request: Request) -> Response:
        code = request.query_params.get("code")
        received_state = request.query_params.get("state")
        stored_state = oauth_state.read(request)
        clear_state_cookie = oauth_state.clear(request)

        if not oauth_state.matches(stored_state, received_state):
            LOGGER.warning("OAuth callback rejected: state missing or mismatched.")
            return self._redirect(HOME_PATH, [clear_state_cookie])

        if not code:
            # Provider sends no code when the user denies consent.
            LOGGER.info(
                "OAuth callback without code (error=%s).",
                request.query_params.get("error"),
            )
            return self._redirect(HOME_PATH, [clear_state_cookie])

        try:
            user = await self._exchange_code_fn(
                client_id=self.client_id,
                client_secret=self.client_secret,
                code=code,
                redirect_uri=callback_url(request, self.public_url),
                timeout=self.timeout,
            )
            session_cookie = self.session_manager.create(user, request)
        except ConfigurationError as error:
            LOGGER.error("OAuth callback failed on configuration: %s", error)
            return self._error(str(error), cookies=[clear_state_cookie])
        except TokenExchangeError as error:
            LOGGER.warning("OAuth code exchange failed: %s", error)
            return self._redirect(HOME_PATH, [clear_state_cookie])
        except Exception:
            LOGGER.exception("OAuth code exchange failed unexpectedly.")
            return self._redirect(HOME_PATH, [clear_state_cookie])

        LOGGER.info("Signed in user id=%s", user.id)
        return self._redirect(HOME_PATH, [clear_state_cookie, session_cookie])

    async def _handle_logout(self, request: Request) -> Response:
        return self._redirect(HOME_PATH, [self.session_manager.clear(request)])

    # -- helpers ---------------------------------------------------------------

    def _redirect(self, url: str, cookies: list[str]) -> Response:
        response = RedirectResponse(url=url, status_code=302)
        for cookie in cookies:
            response.headers.append("set-cookie", cookie)
        return response

    def _error(self, description: str, *, cookies: list[str] | None = None) -> Response:
        response = JSONResponse(
            {"error": "server_error", "error_description": description},
            status_code=500,
        )
        for cookie in cookies or []:
            response.headers.append("set-cookie", cookie)
        return response
