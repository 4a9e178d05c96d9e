# admin_portal/repositories/group_repo.py
import uuid
from datetime import datetime

from sqlmodel import Session, select

from admin_portal.models.group import Group
from admin_portal.repositories.errors import commit_unique


class GroupRepository:
    """
    Data access layer for Group.

    - Pure DB operations (CRUD + queries).
    - Soft-deleted groups are never returned.
    """

    def get_by_id(self, session: Session, group_id: uuid.UUID) -> Group | None:
        stmt = select(Group).where(Group.id == group_id, Group.deleted_at.is_(None))
        return session.exec(stmt).first()

    def get_by_name(self, session: Session, name: str) -> Group | None:
        stmt = select(Group).where(Group.name == name, Group.deleted_at.is_(None))
        return session.exec(stmt).first()

    def list(self, session: Session, skip: int = 0, limit: int = 50) -> list[Group]:
        stmt = (
            select(Group)
            .where(Group.deleted_at.is_(None))
            .order_by(Group.created_at)
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def create(self, session: Session, group: Group) -> Group:
        """
        Raises:
            DuplicateRecordError: if the name is already taken.
        """
        session.add(group)
        commit_unique(session, f"group {group.name}")
        session.refresh(group)
        return group

    def update(self, session: Session, group: Group) -> Group:
        """
        Raises:
            DuplicateRecordError: if the new name is already taken.
        """
        session.add(group)
        commit_unique(session, f"group {group.name}")
        session.refresh(group)
        return group

    def soft_delete(self, session: Session, group: Group, deleted_at: datetime) -> None:
        group.deleted_at = deleted_at
        session.add(group)
        session.commit()
