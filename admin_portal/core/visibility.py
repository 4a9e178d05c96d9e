# admin_portal/core/visibility.py
"""
Scoped visibility builder.

Turns the policy decision for a list action into a row filter:

  none             -> every live row
  group            -> rows of the actor's group
  group_and_roles  -> rows of the actor's group whose role is in a set
  owner            -> rows owned by the actor

Repositories render the scope against their own columns and always add
`deleted_at IS NULL` themselves.
"""
import enum
import uuid
from dataclasses import dataclass
from typing import Any

from admin_portal.core.policy import Action, Actor, Allow, Rule, authorize
from admin_portal.models.user import Role


class ScopeKind(str, enum.Enum):
    NONE = "none"
    GROUP = "group"
    GROUP_AND_ROLES = "group_and_roles"
    OWNER = "owner"


@dataclass(frozen=True)
class Scope:
    kind: ScopeKind
    group_id: uuid.UUID | None = None
    roles: frozenset[Role] | None = None
    owner_id: uuid.UUID | None = None

    def clauses(self, group_col: Any, owner_col: Any, role_col: Any = None) -> list[Any]:
        """
        Build SQLAlchemy WHERE clauses for this scope.

        Args:
            group_col: column holding the row's group id
            owner_col: column holding the row's owner id
            role_col: column holding the row's role (needed for group_and_roles)
        """
        if self.kind == ScopeKind.OWNER:
            return [owner_col == self.owner_id]
        if self.kind == ScopeKind.GROUP:
            return [group_col == self.group_id]
        if self.kind == ScopeKind.GROUP_AND_ROLES:
            if role_col is None:
                raise ValueError("role_col is required for a group_and_roles scope")
            return [group_col == self.group_id, role_col.in_(list(self.roles or ()))]
        return []


def scope_for(rule: Rule, actor: Actor) -> Scope:
    """Translate a list rule into a Scope for this actor."""
    if rule.own_only:
        return Scope(ScopeKind.OWNER, owner_id=actor.id)
    if rule.same_group and rule.target_roles is not None:
        return Scope(
            ScopeKind.GROUP_AND_ROLES,
            group_id=actor.group_id,
            roles=rule.target_roles,
        )
    if rule.same_group:
        return Scope(ScopeKind.GROUP, group_id=actor.group_id)
    return Scope(ScopeKind.NONE)


def visible_scope(action: Action, actor: Actor) -> Scope:
    """
    Authorize a list action and return the filter to apply.

    Raises:
        Forbidden(403): if the actor's role may not list at all.
    """
    decision: Allow = authorize(action, actor)
    return scope_for(decision.rule, actor)
