# admin_portal/routers/users.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from admin_portal.core.auth import require_auth
from admin_portal.core.policy import Actor
from admin_portal.database import get_session
from admin_portal.dependencies import get_auth_service, get_user_service
from admin_portal.schemas.auth import MessageResponse
from admin_portal.schemas.user import UserInvite, UserRead
from admin_portal.services.auth_service import AuthService
from admin_portal.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/create", response_model=MessageResponse)
def invite_user(
    payload: UserInvite,
    session: Session = Depends(get_session),
    actor: Actor = Depends(require_auth),
    service: AuthService = Depends(get_auth_service),
):
    """
    Invite a new account and email it a one-time code link.

    Auth:
      - SUPER_ADMIN: any role; group_id required unless role=support.
      - ADMIN: role user | power_user, always in the admin's own group.
    """
    return service.invite(session, payload.email, payload.role, payload.group_id, actor)


@router.get("", response_model=list[UserRead])
def list_users(
    session: Session = Depends(get_session),
    actor: Actor = Depends(require_auth),
    service: UserService = Depends(get_user_service),
    skip: int = 0,
    limit: int = 50,
):
    """
    List the users visible to the caller.

    Pagination via skip/limit.
    """
    users = service.list_visible(session, actor, skip, limit)
    return [UserRead.model_validate(u, from_attributes=True) for u in users]


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
    actor: Actor = Depends(require_auth),
    service: UserService = Depends(get_user_service),
):
    user = service.get_visible(session, user_id, actor)
    return UserRead.model_validate(user, from_attributes=True)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
    actor: Actor = Depends(require_auth),
    service: UserService = Depends(get_user_service),
):
    """
    Soft-delete a user.

    Auth:
      - SUPER_ADMIN: anyone.
      - ADMIN: users / power users of the admin's own group.
    """
    return service.delete_by_role(session, user_id, actor)
