# admin_portal/routers/auth.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from admin_portal.core.auth import require_auth
from admin_portal.core.policy import Actor
from admin_portal.database import get_session
from admin_portal.dependencies import get_auth_service
from admin_portal.schemas.auth import (
    LoginRequest,
    MessageResponse,
    RefreshResponse,
    SetPasswordRequest,
    TokenResponse,
)
from admin_portal.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/verify-otp", response_model=TokenResponse)
def verify_otp(
    email: str,
    code: str,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    """
    Exchange the emailed one-time code for a session token.

    Called by the invite link page with ?email=&code=.
    The token is then used for PATCH /auth/set-password.
    """
    return service.verify_otp(session, email, code)


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    """Password login for activated accounts."""
    return service.login_with_password(session, payload.email, payload.password)


@router.post("/refresh-token", response_model=RefreshResponse)
def refresh_token(
    actor: Actor = Depends(require_auth),
    service: AuthService = Depends(get_auth_service),
):
    """
    Issue a fresh 1-hour token.

    Auth:
      - Requires a valid, not yet expired token.
    """
    return service.refresh(actor)


@router.patch("/set-password", response_model=MessageResponse)
def set_password(
    payload: SetPasswordRequest,
    session: Session = Depends(get_session),
    actor: Actor = Depends(require_auth),
    service: AuthService = Depends(get_auth_service),
):
    """
    Set the password of the token's account and consume its one-time codes.

    Auth:
      - Requires a valid token (usually the one from verify-otp).
    """
    return service.set_password(session, actor.email, payload.new_password)
