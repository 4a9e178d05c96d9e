# admin_portal/models/transaction.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class Transaction(SQLModel, table=True):
    """
    A record owned by a USER.

    user_id and group_id are fixed at creation. group_id is a copy of the
    owner's group at that moment and does not follow later group changes.
    """

    __tablename__ = "transactions"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    title: str = Field(max_length=255)

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    group_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="groups.id",
        index=True,
    )

    created_at: datetime = Field(
        sa_type=DateTime(timezone=True),
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Creation timestamp (UTC); lists are newest first",
    )

    deleted_at: datetime | None = Field(
        sa_type=DateTime(timezone=True),
        default=None,
        index=True,
    )
