# admin_portal/models/user.py
import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class Role(str, enum.Enum):
    """
    Application roles.

    The enum carries no ordering; what each role may do is decided
    only by the policy table in admin_portal.core.policy.
    """

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    POWER_USER = "power_user"
    USER = "user"
    SUPPORT = "support"


class AccountStatus(str, enum.Enum):
    # invited: row exists, no password yet
    INVITED = "invited"
    # active: password set through the one-time code flow
    ACTIVE = "active"


class User(SQLModel, table=True):
    """
    Portal account.

    Lifecycle:
      - created by an invite with an empty password_hash (status=invited)
      - activated once a password is set (status=active)
      - soft-deleted by an authorized actor (deleted_at set), never removed

    Tenancy:
      - group_id is required for ADMIN / POWER_USER / USER
      - SUPPORT has no group
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    # Unique across all rows, including soft-deleted ones
    email: str = Field(
        unique=True,
        index=True,
        max_length=255,
    )

    password_hash: str = Field(
        default="",
        description="bcrypt hash; empty until the account is activated",
    )

    role: Role = Field(
        default=Role.USER,
        index=True,
    )

    group_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="groups.id",
        index=True,
    )

    status: AccountStatus = Field(
        default=AccountStatus.INVITED,
        description="Onboarding status: invited | active",
    )

    created_at: datetime = Field(
        sa_type=DateTime(timezone=True),
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    deleted_at: datetime | None = Field(
        sa_type=DateTime(timezone=True),
        default=None,
        index=True,
        description="Soft-delete timestamp; rows with a value are hidden",
    )

    @property
    def is_otp_verified(self) -> bool:
        return self.status == AccountStatus.ACTIVE

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    def activate(self, password_hash: str) -> None:
        """Set the password and mark the account active in one step."""
        if not password_hash:
            raise ValueError("password_hash cannot be empty")
        self.password_hash = password_hash
        self.status = AccountStatus.ACTIVE
