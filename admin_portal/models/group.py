# admin_portal/models/group.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class Group(SQLModel, table=True):
    """
    Tenant. Every ADMIN / POWER_USER / USER and every transaction
    belongs to exactly one group.

    Only SUPER_ADMIN creates, renames or deletes groups.
    """

    __tablename__ = "groups"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        unique=True,
        index=True,
        max_length=100,
    )

    created_at: datetime = Field(
        sa_type=DateTime(timezone=True),
        default_factory=lambda: datetime.now(timezone.utc),
    )

    deleted_at: datetime | None = Field(
        sa_type=DateTime(timezone=True),
        default=None,
        index=True,
    )
