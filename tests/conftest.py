"""
Pytest configuration and fixtures.

Settings are read from the environment at import time, so the test
values are set before anything from admin_portal is imported.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["INVITE_LINK_BASE_URL"] = "http://portal.test/otp-flow.html"

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from admin_portal.core.clock import get_clock
from admin_portal.core.config import get_settings
from admin_portal.core.notifier import NotificationError, get_notifier
from admin_portal.core.policy import Actor
from admin_portal.core.security import create_token, get_password_hash
from admin_portal.database import get_session
from admin_portal.main import app
from admin_portal.models.group import Group
from admin_portal.models.user import AccountStatus, Role, User
from admin_portal.repositories.group_repo import GroupRepository
from admin_portal.repositories.one_time_code_repo import OneTimeCodeRepository
from admin_portal.repositories.transaction_repo import TransactionRepository
from admin_portal.repositories.user_repo import UserRepository
from admin_portal.services.auth_service import AuthService
from admin_portal.services.group_service import GroupService
from admin_portal.services.transaction_service import TransactionService
from admin_portal.services.user_service import UserService


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


class RecordingNotifier:
    """Keeps every invite instead of mailing it; can be told to fail."""

    def __init__(self):
        self.sent: list[tuple[str, str, str]] = []
        self.fail = False

    def send_invite_link(self, from_email: str, to_email: str, link: str) -> None:
        if self.fail:
            raise NotificationError("SMTP unavailable")
        self.sent.append((from_email, to_email, link))


def actor_for(user: User) -> Actor:
    return Actor(id=user.id, role=user.role, group_id=user.group_id, email=user.email)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def clock():
    return FrozenClock(datetime.now(timezone.utc).replace(microsecond=0))


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def auth_service(notifier, clock, settings):
    return AuthService(
        user_repo=UserRepository(),
        code_repo=OneTimeCodeRepository(),
        group_repo=GroupRepository(),
        notifier=notifier,
        clock=clock,
        settings=settings,
    )


@pytest.fixture
def user_service(clock):
    return UserService(UserRepository(), clock)


@pytest.fixture
def tx_service(clock):
    return TransactionService(TransactionRepository(), clock)


@pytest.fixture
def group_service(clock):
    return GroupService(GroupRepository(), clock)


@pytest.fixture
def make_group(session, clock):
    """Create a group directly in the database."""

    def _make(name: str | None = None) -> Group:
        group = Group(name=name or f"group-{uuid.uuid4().hex[:8]}", created_at=clock.now())
        session.add(group)
        session.commit()
        session.refresh(group)
        return group

    return _make


@pytest.fixture
def make_user(session, clock):
    """
    Create a user directly in the database.

    With a password the account is active, otherwise invited.
    The clock moves one second per user so creation order is stable.
    """

    def _make(
        role: Role,
        group: Group | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> User:
        user = User(
            email=email or f"{role.value}-{uuid.uuid4().hex[:8]}@example.com",
            role=role,
            group_id=group.id if group else None,
            created_at=clock.now(),
        )
        if password:
            user.activate(get_password_hash(password))
        else:
            user.status = AccountStatus.INVITED
        session.add(user)
        session.commit()
        session.refresh(user)
        clock.advance(seconds=1)
        return user

    return _make


@pytest.fixture
def client(session, clock, notifier):
    """TestClient sharing the test session, frozen clock and fake notifier."""
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_header(clock):
    """Build an Authorization header carrying a token for `user`."""

    def _header(user: User) -> dict[str, str]:
        token = create_token(
            subject_id=user.id,
            email=user.email,
            role=user.role.value,
            group_id=user.group_id,
            issued_at=clock.now(),
            expires_delta=timedelta(hours=1),
        )
        return {"Authorization": f"Bearer {token}"}

    return _header


@pytest.fixture
def as_actor():
    return actor_for
