"""Authentication route handlers."""

from fastapi import APIRouter, Depends

from ..dependencies import get_current_principal, get_session_service
from ..schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    RefreshRequest,
    RefreshResponse,
    TokenPayload,
)
from ..sessions import SessionService

router = APIRouter(prefix="/auth", tags=["auth"])

_errors = {401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.post("/login", response_model=LoginResponse, responses=_errors, summary="User login")
def login(credentials: LoginRequest, sessions: SessionService = Depends(get_session_service)):
    """Authenticate user and return JWT tokens."""
    return sessions.login(credentials.email, credentials.password)


@router.post("/refresh", response_model=RefreshResponse, responses=_errors, summary="Refresh access token")
def refresh(payload: RefreshRequest, sessions: SessionService = Depends(get_session_service)):
    """Generate a new access token using a refresh token."""
    return sessions.refresh(payload.refreshToken)


@router.get(
    "/profile",
    response_model=ProfileResponse,
    responses={404: {"model": ErrorResponse}, **_errors},
    summary="Get current user profile",
)
def profile(
    principal: TokenPayload = Depends(get_current_principal),
    sessions: SessionService = Depends(get_session_service),
):
    return sessions.profile(principal.user_id)


@router.post("/logout", response_model=MessageResponse, summary="User logout")
def logout(
    principal: TokenPayload = Depends(get_current_principal),
    sessions: SessionService = Depends(get_session_service),
):
    """Logout user (client should discard its tokens)."""
    return sessions.logout(principal)
