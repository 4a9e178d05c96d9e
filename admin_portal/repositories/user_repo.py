# admin_portal/repositories/user_repo.py
import uuid
from datetime import datetime

from sqlmodel import Session, select

from admin_portal.core.visibility import Scope
from admin_portal.models.user import User
from admin_portal.repositories.errors import commit_unique


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - Soft-deleted rows are never returned
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Basic CRUD -----

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return a live User by primary key, or None."""
        stmt = select(User).where(User.id == user_id, User.deleted_at.is_(None))
        return session.exec(stmt).first()

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return a live User by email, or None."""
        stmt = select(User).where(User.email == email, User.deleted_at.is_(None))
        return session.exec(stmt).first()

    def list_scoped(
        self,
        session: Session,
        scope: Scope,
        skip: int = 0,
        limit: int = 50,
    ) -> list[User]:
        """
        List live users visible under `scope`, newest first.

        Args:
            scope: filter produced by the visibility builder
            skip: offset rows (for paging)
            limit: max number of rows returned
        """
        stmt = (
            select(User)
            .where(User.deleted_at.is_(None))
            .where(*scope.clauses(User.group_id, User.id, User.role))
            .order_by(User.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def create(self, session: Session, user: User) -> User:
        """
        Insert a new User and return the persisted row.

        Raises:
            DuplicateRecordError: if the email is already taken (unique index).
        """
        session.add(user)
        commit_unique(session, f"user {user.email}")
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        """Persist changes to an existing User (commits pending work too)."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def soft_delete(self, session: Session, user: User, deleted_at: datetime) -> None:
        """Hide a User from all reads; the row is kept."""
        user.deleted_at = deleted_at
        session.add(user)
        session.commit()
