import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from manutencao.api.deps import SessionContext, get_auth_service, get_session_context
from manutencao.core.config import get_settings
from manutencao.core.exceptions import BusinessLogicError, business_exception_to_http
from manutencao.schemas.auth import LoginRequest, SessionInfo, ThemeUpdate, TokenResponse
from manutencao.services.auth import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Authenticate with email and password.

    The token is returned in the body and also set as the access_token cookie.
    """

    try:
        token, user = auth.login(payload.email, payload.password)
    except BusinessLogicError as e:
        raise business_exception_to_http(e)

    response.set_cookie(
        key="access_token",
        value=token,
        httponly=True,
        max_age=get_settings().ACCESS_EXPIRES_MIN * 60,
        path="/",
        samesite="lax",
        secure=False,
    )
    return TokenResponse(access_token=token, user=user)


@router.post("/logout")
async def logout(response: Response, auth: AuthService = Depends(get_auth_service)) -> dict:
    auth.logout()
    response.delete_cookie("access_token", path="/")
    return {"status": "success"}


@router.get("/me", response_model=SessionInfo)
async def me(ctx: SessionContext = Depends(get_session_context)) -> SessionInfo:
    return SessionInfo(user=ctx.user, theme=ctx.theme)


@router.put("/preferences/theme", response_model=SessionInfo)
async def update_theme(
    payload: ThemeUpdate,
    ctx: SessionContext = Depends(get_session_context),
    auth: AuthService = Depends(get_auth_service),
) -> SessionInfo:
    try:
        theme = auth.set_theme(ctx.user.id, payload.theme)
    except OSError as e:
        logger.exception(f"Failed to persist theme for user {ctx.user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not save preferences",
        )
    return SessionInfo(user=ctx.user, theme=theme)
