from datetime import datetime, timedelta, UTC
from starlette.requests import Request
from starlette.responses import Response
from csrfkit.core.config import CSRFSettings

TOKEN_COOKIE_LIFETIME = timedelta(days=1)


def read_cookie(request: Request, name: str) -> str | None:
    return request.cookies.get(name)


def write_token_cookie(response: Response, settings: CSRFSettings, token: str) -> None:
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        path=settings.cookie_path,
        domain=settings.cookie_domain,
        secure=settings.cookie_secure,
        httponly=settings.cookie_http_only,
        expires=datetime.now(UTC) + TOKEN_COOKIE_LIFETIME,
    )


def clear_cookie(response: Response, name: str, path: str) -> None:
    response.set_cookie(key=name, value="", path=path)


def sets_cookie(response: Response, name: str) -> bool:
    return any(h.startswith(f"{name}=") for h in response.headers.getlist("set-cookie"))
