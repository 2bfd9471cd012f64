from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from storefront.core.config import Settings
from storefront.routers.deps import get_auth_service, get_settings_dep, login_rate_limit
from storefront.routers.schemas import LoginRequest, user_json
from storefront.services.auth_service import AuthService
from storefront.services.session_service import clear_session_cookie, session_token, set_session_cookie

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", dependencies=[Depends(login_rate_limit)])
def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings_dep),
):
    result = auth.login(payload.username, payload.password, previous_token=session_token(request, settings))
    set_session_cookie(response, result.session_token, settings)
    return {"user": user_json(result.user), "message": "Login successful"}


@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings_dep),
):
    auth.logout(session_token(request, settings))
    clear_session_cookie(response, settings)
    return {"message": "Logout successful"}


@router.get("/me")
def me(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings_dep),
):
    user = auth.current_user(
        session_token(request, settings),
        missing_message="Not authenticated",
        stale_message="User not found",
    )
    return {"user": user_json(user)}
