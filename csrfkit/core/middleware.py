import logging
from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from csrfkit.core.config import CSRFSettings, get_csrf_settings
from csrfkit.core.context import set_csrf
from csrfkit.core.csrf import CSRF, CSRFError, csrf_error_handler, resolve_identity
from csrfkit.core.security import ACTION_CLASS, generate_token, valid_token
from csrfkit.services.cookies import read_cookie, sets_cookie, write_token_cookie
from csrfkit.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class CSRFMiddleware(BaseHTTPMiddleware):
    """Issues the session-bound CSRF token; must be wrapped by SessionMiddleware."""

    def __init__(self, app, settings: CSRFSettings | None = None) -> None:
        super().__init__(app)
        self.settings = settings or get_csrf_settings()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        settings = self.settings
        if settings.reject_on_origin_header and request.headers.get("origin"):
            return await call_next(request)

        store = SessionStore(request)
        identity = resolve_identity(store, settings)
        previous = store.get(settings.previous_identity_key)

        token = None
        if previous is None or str(previous) != identity:
            store.set(settings.previous_identity_key, identity)
        else:
            cookie = read_cookie(request, settings.cookie_name)
            if cookie and valid_token(cookie, settings.secret, identity, ACTION_CLASS):
                token = cookie

        rotated = token is None
        if rotated:
            token = generate_token(settings.secret, identity, ACTION_CLASS)
            logger.debug("issued csrf token", extra={"identity": identity})
        else:
            logger.debug("reusing csrf token", extra={"identity": identity})

        set_csrf(request, CSRF.from_settings(settings, identity, token))
        response = await call_next(request)

        # A rejected request has already cleared the cookie.
        if rotated and settings.set_cookie and not sets_cookie(response, settings.cookie_name):
            write_token_cookie(response, settings, token)
        if settings.set_header:
            response.headers.append(settings.header_name, token)
        return response


def setup_csrf(app: FastAPI, settings: CSRFSettings | None = None) -> CSRFSettings:
    """Install issuance and the rejection handler; add SessionMiddleware afterwards."""
    settings = settings or get_csrf_settings()
    app.state.csrf_settings = settings
    app.add_middleware(CSRFMiddleware, settings=settings)
    app.add_exception_handler(CSRFError, csrf_error_handler)
    return settings
