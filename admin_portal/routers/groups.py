# admin_portal/routers/groups.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from admin_portal.core.auth import require_action
from admin_portal.core.policy import Action
from admin_portal.database import get_session
from admin_portal.dependencies import get_group_service
from admin_portal.schemas.auth import MessageResponse
from admin_portal.schemas.group import GroupCreate, GroupRead, GroupUpdate
from admin_portal.services.group_service import GroupService

# Every group endpoint is SUPER_ADMIN only.
router = APIRouter(
    prefix="/groups",
    tags=["Groups"],
    dependencies=[Depends(require_action(Action.MANAGE_GROUPS))],
)


@router.post("", response_model=GroupRead, status_code=status.HTTP_201_CREATED)
def create_group(
    payload: GroupCreate,
    session: Session = Depends(get_session),
    service: GroupService = Depends(get_group_service),
):
    return service.create(session, payload.name)


@router.get("", response_model=list[GroupRead])
def list_groups(
    session: Session = Depends(get_session),
    service: GroupService = Depends(get_group_service),
    skip: int = 0,
    limit: int = 50,
):
    return service.list(session, skip, limit)


@router.get("/{group_id}", response_model=GroupRead)
def get_group(
    group_id: uuid.UUID,
    session: Session = Depends(get_session),
    service: GroupService = Depends(get_group_service),
):
    return service.get(session, group_id)


@router.patch("/{group_id}", response_model=GroupRead)
def rename_group(
    group_id: uuid.UUID,
    payload: GroupUpdate,
    session: Session = Depends(get_session),
    service: GroupService = Depends(get_group_service),
):
    return service.rename(session, group_id, payload.name)


@router.delete("/{group_id}", response_model=MessageResponse)
def delete_group(
    group_id: uuid.UUID,
    session: Session = Depends(get_session),
    service: GroupService = Depends(get_group_service),
):
    """Soft delete; members and transactions keep their group_id."""
    return service.delete(session, group_id)
