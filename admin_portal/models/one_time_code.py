# admin_portal/models/one_time_code.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class OneTimeCode(SQLModel, table=True):
    """
    Six-digit onboarding code.

    Bound to an email rather than a user id. Verifying a code does not
    consume it; all codes for an email are deleted when the password is set.
    """

    __tablename__ = "one_time_codes"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
    )

    email: str = Field(index=True, max_length=255)

    code: str = Field(max_length=6)

    expires_at: datetime = Field(
        sa_type=DateTime(timezone=True),
        description="Issue time + OTP_EXPIRE_MINUTES (UTC)",
    )

    created_at: datetime = Field(
        sa_type=DateTime(timezone=True),
        default_factory=lambda: datetime.now(timezone.utc),
    )
