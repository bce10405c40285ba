from csrfkit.core.config import CSRFSettings, get_csrf_settings
from csrfkit.core.context import get_csrf, get_token, get_token_html
from csrfkit.core.csrf import CSRF, CSRFError, require_csrf, validate
from csrfkit.core.middleware import CSRFMiddleware, setup_csrf
from csrfkit.core.security import generate_token, random_string, valid_token
from csrfkit.services.session_store import SessionStoreError

__all__ = [
    "CSRFSettings",
    "get_csrf_settings",
    "get_csrf",
    "get_token",
    "get_token_html",
    "CSRF",
    "CSRFError",
    "require_csrf",
    "validate",
    "CSRFMiddleware",
    "setup_csrf",
    "generate_token",
    "random_string",
    "valid_token",
    "SessionStoreError",
]
