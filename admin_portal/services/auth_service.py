# admin_portal/services/auth_service.py
import enum
import logging
import uuid
from datetime import timedelta
from typing import Any
from urllib.parse import urlencode

from sqlmodel import Session

from admin_portal.core.clock import Clock, as_utc
from admin_portal.core.config import Settings
from admin_portal.core.errors import Conflict, DeliveryFailed, NotFound, Unauthorized
from admin_portal.core.notifier import NotificationError, Notifier
from admin_portal.core.policy import Action, Actor, Target, authorize
from admin_portal.core.security import (
    create_token,
    generate_otp_code,
    get_password_hash,
    validate_new_password,
    verify_password,
)
from admin_portal.models.one_time_code import OneTimeCode
from admin_portal.models.user import AccountStatus, Role, User
from admin_portal.repositories.errors import DuplicateRecordError
from admin_portal.repositories.group_repo import GroupRepository
from admin_portal.repositories.one_time_code_repo import OneTimeCodeRepository
from admin_portal.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

REFRESH_TOKEN_EXPIRES = timedelta(hours=1)


class OnboardingState(str, enum.Enum):
    """
    Per-email credential state.

      INVITED --issue code--> CODE_ISSUED --verify--> CODE_VERIFIED
        --set password--> ACTIVE

    Only INVITED and ACTIVE are stored (User.status). CODE_ISSUED is
    INVITED plus a live code; CODE_VERIFIED is not distinguishable from
    CODE_ISSUED in storage because verifying never mutates the code.
    """

    INVITED = "invited"
    CODE_ISSUED = "code_issued"
    CODE_VERIFIED = "code_verified"
    ACTIVE = "active"


def normalize_email(email: str) -> str:
    """Emails are stored trimmed and lower-cased; lookups must match that."""
    return email.strip().lower()


def onboarding_state(user: User, has_live_code: bool) -> OnboardingState:
    if user.status == AccountStatus.ACTIVE:
        return OnboardingState.ACTIVE
    if has_live_code:
        return OnboardingState.CODE_ISSUED
    return OnboardingState.INVITED


class AuthService:
    """
    Credential lifecycle: invite -> one-time code -> password -> tokens.

    Responsibilities:
      - create invited accounts (create-user policy decides role/group)
      - issue, verify and consume one-time codes
      - hash and check passwords
      - mint and refresh session tokens
    """

    def __init__(
        self,
        user_repo: UserRepository,
        code_repo: OneTimeCodeRepository,
        group_repo: GroupRepository,
        notifier: Notifier,
        clock: Clock,
        settings: Settings,
    ):
        self.user_repo = user_repo
        self.code_repo = code_repo
        self.group_repo = group_repo
        self.notifier = notifier
        self.clock = clock
        self.settings = settings

    # -------- Onboarding --------

    def invite(
        self,
        session: Session,
        email: str,
        role: Role,
        group_id: uuid.UUID | None,
        actor: Actor,
    ) -> dict[str, str]:
        """
        Create an INVITED account and mail it a one-time code link.

        Steps:
          1. Reject duplicates (fast pre-check; the unique index is the backstop).
          2. Apply the create-user rule to get the final group.
          3. Persist the skeleton user (empty password, status=invited).
          4. Issue a code valid for OTP_EXPIRE_MINUTES.
          5. Send the link; on failure the user and code are kept.

        Raises:
            Conflict(409): email already registered.
            BadRequest(400): SUPER_ADMIN omitted a required group.
            Unauthorized(401): actor may not create this role.
            NotFound(404): the resolved group does not exist.
            DeliveryFailed(502): the invitation could not be sent.
        """
        email = normalize_email(email)
        if self.user_repo.get_by_email(session, email) is not None:
            raise Conflict("User already exists")

        decision = authorize(
            Action.CREATE_USER,
            actor,
            Target(owner_role=role, owner_group_id=group_id),
        )
        assigned_group_id = decision.group_id

        if assigned_group_id is not None:
            if self.group_repo.get_by_id(session, assigned_group_id) is None:
                raise NotFound("Group not found")

        user = User(
            email=email,
            password_hash="",
            role=role,
            group_id=assigned_group_id,
            status=AccountStatus.INVITED,
            created_at=self.clock.now(),
        )
        try:
            user = self.user_repo.create(session, user)
        except DuplicateRecordError:
            # Lost a race with a concurrent invite for the same email
            raise Conflict("User already exists")

        otp = self._issue_code(session, email)
        logger.info("Invited %s as %s by %s", email, role.value, actor.id)

        link = self._invite_link(email, otp.code)
        try:
            self.notifier.send_invite_link(actor.email, email, link)
        except NotificationError:
            logger.error("Invitation for %s saved but not delivered", email)
            raise DeliveryFailed(f"User {email} was created but the OTP link could not be sent")

        return {"message": f"OTP link sent to {email}"}

    def _issue_code(self, session: Session, email: str) -> OneTimeCode:
        now = self.clock.now()
        otp = OneTimeCode(
            email=email,
            code=generate_otp_code(),
            expires_at=now + timedelta(minutes=self.settings.OTP_EXPIRE_MINUTES),
            created_at=now,
        )
        return self.code_repo.replace_for_email(session, otp)

    def _invite_link(self, email: str, code: str) -> str:
        query = urlencode({"email": email, "code": code})
        return f"{self.settings.INVITE_LINK_BASE_URL}?{query}"

    def get_state(self, session: Session, email: str) -> OnboardingState:
        """
        Current onboarding state for `email`.

        Raises:
            NotFound(404): no live account for this email.
        """
        email = normalize_email(email)
        user = self.user_repo.get_by_email(session, email)
        if user is None:
            raise NotFound("User not found")
        now = self.clock.now()
        has_live_code = any(
            now <= as_utc(otp.expires_at)
            for otp in self.code_repo.list_for_email(session, email)
        )
        return onboarding_state(user, has_live_code)

    def verify_otp(self, session: Session, email: str, code: str) -> dict[str, str]:
        """
        Exchange a valid one-time code for a session token.

        The code stays usable until it expires or a password is set.

        Raises:
            Unauthorized(401): unknown code, expired code, or no such user.
        """
        email = normalize_email(email)
        otp = self.code_repo.find(session, email, code)
        if otp is None or self.clock.now() > as_utc(otp.expires_at):
            raise Unauthorized("OTP expired or invalid")

        user = self.user_repo.get_by_email(session, email)
        if user is None:
            raise Unauthorized("User not found")

        return {"token": self._access_token(user)}

    def set_password(self, session: Session, email: str, new_password: str) -> dict[str, str]:
        """
        Activate the account: hash the password and consume all codes.

        Raises:
            Unauthorized(401): password too short, or the account is gone.
        """
        validate_new_password(new_password, self.settings)
        email = normalize_email(email)

        user = self.user_repo.get_by_email(session, email)
        if user is None:
            raise Unauthorized("User not found")

        user.activate(get_password_hash(new_password, self.settings))
        self.code_repo.delete_for_email(session, email)
        # Commits the password and the code deletion together
        self.user_repo.update(session, user)

        logger.info("Password set for %s", email)
        return {"message": "Password set successfully. OTP expired."}

    # -------- Sessions --------

    def login_with_password(self, session: Session, email: str, password: str) -> dict[str, str]:
        """
        Raises:
            Unauthorized(401): unknown user, no password yet, or wrong password.
        """
        email = normalize_email(email)
        user = self.user_repo.get_by_email(session, email)
        if user is None or not user.has_password:
            logger.info("Login rejected for %s", email)
            raise Unauthorized("Invalid credentials")

        if not verify_password(password, user.password_hash):
            logger.info("Login rejected for %s", email)
            raise Unauthorized("Invalid credentials")

        return {"token": self._access_token(user)}

    def generate_jwt(
        self,
        subject_id: uuid.UUID,
        email: str,
        role: Role,
        group_id: uuid.UUID | None,
        expires_delta: timedelta,
    ) -> str:
        """Pure mint of {sub, email, role, group_id} with the given lifetime."""
        return create_token(
            subject_id=subject_id,
            email=email,
            role=role.value,
            group_id=group_id,
            issued_at=self.clock.now(),
            expires_delta=expires_delta,
            settings=self.settings,
        )

    def refresh(self, actor: Actor) -> dict[str, Any]:
        """
        Re-mint a token from already-verified claims, valid for one hour.

        No credential check here: the caller must already hold a valid token.
        """
        token = self.generate_jwt(
            actor.id,
            actor.email,
            actor.role,
            actor.group_id,
            REFRESH_TOKEN_EXPIRES,
        )
        return {
            "token": token,
            "user": {
                "id": actor.id,
                "email": actor.email,
                "role": actor.role,
                "group_id": actor.group_id,
            },
        }

    def _access_token(self, user: User) -> str:
        return self.generate_jwt(
            user.id,
            user.email,
            user.role,
            user.group_id,
            timedelta(minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )
