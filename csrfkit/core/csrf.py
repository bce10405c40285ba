from collections.abc import Callable
import logging
from fastapi import Request
from starlette.responses import PlainTextResponse, Response
from csrfkit.core.config import CSRFSettings, get_csrf_settings
from csrfkit.core.context import get_csrf
from csrfkit.core.security import ACTION_CLASS, valid_token
from csrfkit.services.cookies import clear_cookie
from csrfkit.services.session_store import SessionStore

logger = logging.getLogger(__name__)

ANONYMOUS_IDENTITY = "0"
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def resolve_identity(store: SessionStore, settings: CSRFSettings) -> str:
    identity = store.get(settings.session_identity_key)
    return ANONYMOUS_IDENTITY if identity is None else str(identity)


class CSRF:
    """Per-request view of the CSRF state used by the verification path."""

    def __init__(
        self,
        token: str,
        identity: str,
        secret: str,
        header_name: str,
        form_name: str,
        cookie_name: str,
        cookie_path: str,
        failure_handler: Callable[[Request], Response],
    ) -> None:
        self.token = token
        self.identity = identity
        self.header_name = header_name
        self.form_name = form_name
        self.cookie_name = cookie_name
        self.cookie_path = cookie_path
        self._secret = secret
        self._failure_handler = failure_handler

    @classmethod
    def from_settings(cls, settings: CSRFSettings, identity: str, token: str) -> "CSRF":
        return cls(
            token=token,
            identity=identity,
            secret=settings.secret,
            header_name=settings.header_name,
            form_name=settings.form_field_name,
            cookie_name=settings.cookie_name,
            cookie_path=settings.cookie_path,
            failure_handler=settings.on_validation_failure,
        )

    @classmethod
    def for_request(cls, request: Request, settings: CSRFSettings) -> "CSRF":
        identity = resolve_identity(SessionStore(request), settings)
        return cls.from_settings(settings, identity, token="")

    def candidate_sources(self) -> list[tuple[str, str]]:
        return [("header", self.header_name), ("form", self.form_name)]

    def verify(self, token: str) -> bool:
        return valid_token(token, self._secret, self.identity, ACTION_CLASS)

    def on_failure(self, request: Request) -> Response:
        return self._failure_handler(request)


class CSRFError(Exception):
    def __init__(self, response: Response) -> None:
        super().__init__("CSRF validation failed")
        self.response = response


async def csrf_error_handler(request: Request, exc: CSRFError) -> Response:
    return exc.response


async def _read_candidate(request: Request, source: str, name: str) -> str:
    if source == "header":
        return request.headers.get(name, "")
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith(FORM_CONTENT_TYPES):
        return ""
    value = (await request.form()).get(name)
    return value if isinstance(value, str) else ""


async def validate(request: Request, csrf: CSRF) -> Response | None:
    """Return a rejection response, or None when the request may proceed."""
    for source, name in csrf.candidate_sources():
        token = await _read_candidate(request, source, name)
        if not token:
            continue
        if csrf.verify(token):
            return None
        logger.warning(
            "invalid csrf token",
            extra={"source": source, "path": request.url.path, "identity": csrf.identity},
        )
        response = csrf.on_failure(request)
        clear_cookie(response, csrf.cookie_name, csrf.cookie_path)
        return response

    logger.info("missing csrf token", extra={"path": request.url.path})
    return PlainTextResponse("Bad Request: no CSRF token present", status_code=400)


def settings_for(request: Request) -> CSRFSettings:
    return getattr(request.app.state, "csrf_settings", None) or get_csrf_settings()


def require_csrf(settings: CSRFSettings | None = None):
    async def checker(request: Request) -> CSRF:
        csrf = get_csrf(request)
        if csrf is None:
            csrf = CSRF.for_request(request, settings or settings_for(request))
        rejection = await validate(request, csrf)
        if rejection is not None:
            raise CSRFError(rejection)
        return csrf

    return checker
