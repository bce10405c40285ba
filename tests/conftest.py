import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from starlette.middleware.sessions import SessionMiddleware
from csrfkit.core.config import CSRFSettings
from csrfkit.core.context import get_token, get_token_html
from csrfkit.core.csrf import require_csrf
from csrfkit.core.middleware import setup_csrf

SECRET = "s1"


def build_app(with_sessions: bool = True, **overrides) -> FastAPI:
    settings = CSRFSettings(**{"secret": SECRET, "set_header": True, **overrides})
    app = FastAPI()
    setup_csrf(app, settings)
    if with_sessions:
        app.add_middleware(SessionMiddleware, secret_key="test-session-key")

    @app.get("/token")
    def token(request: Request):
        html = get_token_html(request)
        return {"token": get_token(request), "html": None if html is None else str(html)}

    @app.post("/identity/{uid}")
    def set_identity(uid: str, request: Request):
        request.session[settings.session_identity_key] = uid
        return {"uid": uid}

    @app.post("/numeric-identity/{uid}")
    def set_numeric_identity(uid: int, request: Request):
        request.session[settings.session_identity_key] = uid
        return {"uid": uid}

    @app.post("/forget")
    def clear_identity(request: Request):
        request.session.pop(settings.session_identity_key, None)
        return {"uid": None}

    @app.post("/protected", dependencies=[Depends(require_csrf())])
    def protected():
        return {"ok": True}

    return app


def cookie_values(response, name: str) -> list[str]:
    """Values of every Set-Cookie header for ``name`` on ``response``."""
    values = []
    for header in response.headers.get_list("set-cookie"):
        pair = header.split(";", 1)[0]
        key, _, value = pair.partition("=")
        if key.strip() == name:
            values.append(value.strip().strip('"'))
    return values


@pytest.fixture
def make_client():
    def factory(**overrides) -> TestClient:
        return TestClient(build_app(**overrides))

    return factory


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
