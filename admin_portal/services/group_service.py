# admin_portal/services/group_service.py
import uuid

from sqlmodel import Session

from admin_portal.core.clock import Clock
from admin_portal.core.errors import Conflict, NotFound
from admin_portal.models.group import Group
from admin_portal.repositories.errors import DuplicateRecordError
from admin_portal.repositories.group_repo import GroupRepository

DUPLICATE_NAME = "Group with this name already exists"


class GroupService:
    """
    Business logic for groups (tenants).

    Access (SUPER_ADMIN only) is enforced at the router via
    require_action(Action.MANAGE_GROUPS).
    """

    def __init__(self, repo: GroupRepository, clock: Clock):
        self.repo = repo
        self.clock = clock

    def create(self, session: Session, name: str) -> Group:
        if self.repo.get_by_name(session, name) is not None:
            raise Conflict(DUPLICATE_NAME)
        try:
            return self.repo.create(session, Group(name=name, created_at=self.clock.now()))
        except DuplicateRecordError:
            raise Conflict(DUPLICATE_NAME)

    def list(self, session: Session, skip: int = 0, limit: int = 50) -> list[Group]:
        return self.repo.list(session, skip=skip, limit=limit)

    def get(self, session: Session, group_id: uuid.UUID) -> Group:
        group = self.repo.get_by_id(session, group_id)
        if not group:
            raise NotFound("Group not found")
        return group

    def rename(self, session: Session, group_id: uuid.UUID, name: str) -> Group:
        group = self.get(session, group_id)
        if group.name == name:
            return group

        existing = self.repo.get_by_name(session, name)
        if existing is not None and existing.id != group.id:
            raise Conflict(DUPLICATE_NAME)

        group.name = name
        try:
            return self.repo.update(session, group)
        except DuplicateRecordError:
            raise Conflict(DUPLICATE_NAME)

    def delete(self, session: Session, group_id: uuid.UUID) -> dict[str, str]:
        group = self.get(session, group_id)
        self.repo.soft_delete(session, group, self.clock.now())
        return {"message": "Group deleted successfully"}
