# admin_portal/services/user_service.py
import uuid

from sqlmodel import Session

from admin_portal.core.clock import Clock
from admin_portal.core.errors import NotFound
from admin_portal.core.policy import Action, Actor, Target, authorize
from admin_portal.core.visibility import visible_scope
from admin_portal.models.user import User
from admin_portal.repositories.user_repo import UserRepository


class UserService:
    """
    Business logic for viewing and removing accounts.

    Responsibilities:
      - apply list/view/delete-user rules from the policy table
      - orchestrate repository operations
      - map domain errors to HTTP errors

    Account creation lives in AuthService.invite (credential lifecycle).
    """

    def __init__(self, repo: UserRepository, clock: Clock):
        self.repo = repo
        self.clock = clock

    def list_visible(
        self,
        session: Session,
        actor: Actor,
        skip: int = 0,
        limit: int = 50,
    ) -> list[User]:
        """
        List the users the actor may see.

          - SUPER_ADMIN, SUPPORT: everyone
          - ADMIN: POWER_USER / USER of own group
          - POWER_USER: USER of own group
          - USER: 403
        """
        scope = visible_scope(Action.LIST_USERS, actor)
        return self.repo.list_scoped(session, scope, skip=skip, limit=limit)

    def get_visible(self, session: Session, user_id: uuid.UUID, actor: Actor) -> User:
        """
        Raises:
            NotFound(404): no live user with this id.
            Forbidden(403): the user exists but is outside the actor's view.
        """
        user = self._get_user(session, user_id)
        authorize(Action.VIEW_USER, actor, _as_target(user))
        return user

    def delete_by_role(self, session: Session, user_id: uuid.UUID, actor: Actor) -> dict[str, str]:
        """
        Soft-delete a user.

          - SUPER_ADMIN: any user -> "User deleted"
          - ADMIN: USER / POWER_USER of own group -> "User deleted by Admin"

        Raises:
            NotFound(404), Forbidden(403)
        """
        user = self._get_user(session, user_id)
        decision = authorize(Action.DELETE_USER, actor, _as_target(user))
        self.repo.soft_delete(session, user, self.clock.now())
        if decision.tag:
            return {"message": f"User deleted by {decision.tag}"}
        return {"message": "User deleted"}

    def _get_user(self, session: Session, user_id: uuid.UUID) -> User:
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise NotFound("User not found")
        return user


def _as_target(user: User) -> Target:
    return Target(owner_role=user.role, owner_id=user.id, owner_group_id=user.group_id)
