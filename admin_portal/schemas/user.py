# admin_portal/schemas/user.py
import uuid
from datetime import datetime

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel

from admin_portal.models.user import Role


class UserInvite(SQLModel):
    """
    Payload for inviting a new account.

    group_id:
      - required when a SUPER_ADMIN invites anything but SUPPORT
      - ignored for ADMIN (the admin's own group is used)
      - ignored for SUPPORT (no group)
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    role: Role
    group_id: uuid.UUID | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserRead(SQLModel):
    """Response schema returned to clients. Never includes the password hash."""

    id: uuid.UUID
    email: str
    role: Role
    group_id: uuid.UUID | None
    is_otp_verified: bool
    created_at: datetime
