import logging
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware
from csrfkit.api.rest import router as api_router
from csrfkit.api.web import router as web_router
from csrfkit.core.config import CSRFSettings, Settings, get_settings
from csrfkit.core.logging import configure_logging
from csrfkit.core.middleware import setup_csrf

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, csrf_settings: CSRFSettings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    # Middleware added last runs first: the session has to exist before
    # CSRF issuance reads it.
    csrf_settings = setup_csrf(app, csrf_settings)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie=settings.session_cookie_name,
        https_only=settings.session_https_only,
        same_site="lax",
    )
    app.include_router(web_router)
    app.include_router(api_router)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        if exc.status_code == 401 and not request.url.path.startswith("/api"):
            return RedirectResponse("/", status_code=303)
        return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)

    @app.get("/health")
    def health():
        return JSONResponse({"status": "ok"})

    logger.info(
        "csrf protection enabled",
        extra={
            "header": csrf_settings.header_name,
            "cookie": csrf_settings.cookie_name,
            "set_cookie": csrf_settings.set_cookie,
            "set_header": csrf_settings.set_header,
        },
    )
    return app


app = create_app()
