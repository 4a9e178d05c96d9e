# admin_portal/schemas/auth.py
import uuid

from pydantic import ConfigDict, EmailStr, field_validator
from sqlmodel import SQLModel

from admin_portal.models.user import Role


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class SetPasswordRequest(SQLModel):
    """
    New password for the account named by the bearer token.

    Length is checked by AuthService.set_password (401 on failure), not here,
    so a short password is reported as an auth failure rather than 422.
    """

    model_config = ConfigDict(extra="forbid")

    new_password: str


class TokenResponse(SQLModel):
    token: str


class TokenUser(SQLModel):
    """Claims echoed back to the frontend on refresh."""

    id: uuid.UUID
    email: str
    role: Role
    group_id: uuid.UUID | None = None


class RefreshResponse(TokenResponse):
    user: TokenUser


class MessageResponse(SQLModel):
    message: str
