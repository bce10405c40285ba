from collections.abc import Callable
from functools import lru_cache
from pydantic import BaseModel, ConfigDict, Field
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from csrfkit.core.security import random_string
import os


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def default_failure_handler(_: Request) -> Response:
    return PlainTextResponse("Invalid csrf token.", status_code=400)


def _default_secret() -> str:
    return os.getenv("CSRF_SECRET") or random_string(10)


class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "csrfkit")
    environment: str = os.getenv("ENVIRONMENT", "production")
    secret_key: str = os.getenv("SECRET_KEY", "change-me")
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "session")
    session_https_only: bool = _env_flag("SESSION_HTTPS_ONLY")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


class CSRFSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    secret: str = Field(default_factory=_default_secret)
    header_name: str = os.getenv("CSRF_HEADER_NAME", "X-CSRFToken")
    form_field_name: str = os.getenv("CSRF_FORM_FIELD_NAME", "_csrf")
    cookie_name: str = os.getenv("CSRF_COOKIE_NAME", "_csrf")
    cookie_path: str = os.getenv("CSRF_COOKIE_PATH", "/")
    cookie_domain: str | None = os.getenv("CSRF_COOKIE_DOMAIN") or None
    cookie_http_only: bool = _env_flag("CSRF_COOKIE_HTTP_ONLY")
    cookie_secure: bool = _env_flag("CSRF_COOKIE_SECURE")
    session_identity_key: str = os.getenv("CSRF_SESSION_KEY", "uid")
    set_header: bool = _env_flag("CSRF_SET_HEADER")
    set_cookie: bool = _env_flag("CSRF_SET_COOKIE", "true")
    # Requests carrying an Origin header skip issuance entirely.
    reject_on_origin_header: bool = _env_flag("CSRF_REJECT_ON_ORIGIN")
    on_validation_failure: Callable[[Request], Response] = default_failure_handler

    @property
    def previous_identity_key(self) -> str:
        return "_old_" + self.session_identity_key


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_csrf_settings() -> CSRFSettings:
    return CSRFSettings()
