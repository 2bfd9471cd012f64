from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.core.config import Settings, get_settings
from storefront.core.errors import InternalError, StorefrontError
from storefront.core.logging_setup import configure_logging
from storefront.core.rate_limiter import RateLimiter
from storefront.repositories import build_storage
from storefront.repositories.base import Storage
from storefront.routers import auth as auth_router
from storefront.routers import catalog as catalog_router
from storefront.routers import store as store_router
from storefront.services.session_service import SessionStore

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, sniffing, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _validation_details(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorefrontError)
    async def storefront_error(request: Request, exc: StorefrontError):
        return JSONResponse(exc.to_body(), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": "Invalid input", "details": _validation_details(exc)}, status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        error = InternalError()
        return JSONResponse(error.to_body(), status_code=error.status_code)


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
    sessions: Optional[SessionStore] = None,
    login_limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    """Build the API. Collaborators default to ones derived from Settings."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Storefront API")
    app.state.settings = settings
    app.state.storage = storage if storage is not None else build_storage(settings)
    app.state.sessions = sessions if sessions is not None else SessionStore(settings.session_ttl_seconds)
    app.state.login_limiter = login_limiter if login_limiter is not None else RateLimiter(
        settings.login_rate_limit, settings.login_rate_window_seconds
    )

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    _install_error_handlers(app)

    app.include_router(auth_router.router)
    app.include_router(catalog_router.router)
    app.include_router(store_router.router)

    @app.get("/healthz", include_in_schema=False)
    def healthz():
        return {"status": "ok"}

    logger.info(
        "storefront app ready (env=%s, storage=%s)",
        settings.app_env,
        type(app.state.storage).__name__,
    )
    return app


def main() -> None:
    import uvicorn

    uvicorn.run("storefront.app:create_app", factory=True, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
