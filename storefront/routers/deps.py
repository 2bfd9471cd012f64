"""FastAPI dependencies: per-app services, the auth guard and login throttling."""
from __future__ import annotations

from fastapi import Depends, Request

from storefront.core.config import Settings
from storefront.core.rate_limiter import rate_limit_ip
from storefront.domain.entities import User
from storefront.services.auth_service import AuthService
from storefront.services.catalog_service import CatalogService
from storefront.services.session_service import session_token


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(request: Request) -> AuthService:
    return AuthService(storage=request.app.state.storage, sessions=request.app.state.sessions)


def get_catalog_service(request: Request) -> CatalogService:
    return CatalogService(storage=request.app.state.storage)


def require_auth(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings_dep),
) -> User:
    """Refuse the request unless its session cookie maps to an existing user."""
    user = auth.current_user(session_token(request, settings))
    request.state.user = user
    return user


def login_rate_limit(request: Request, settings: Settings = Depends(get_settings_dep)) -> None:
    rate_limit_ip(
        request,
        "auth:login",
        request.app.state.login_limiter,
        trust_proxy_headers=settings.trust_proxy_headers,
    )
