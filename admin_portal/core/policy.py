# admin_portal/core/policy.py
"""
Role hierarchy & policy engine.

Every protected operation is answered by `decide(action, actor, target)`.
The rules live in one table, POLICY: action -> role -> Rule. A role that is
missing from an action's row is denied. A Rule only states constraints
(same group, own rows only, allowed target roles, where the group of a new
row comes from); it is interpreted here for single rows and by
admin_portal.core.visibility for list filters, so both paths read the same
entry.

decide() is pure: no I/O, no clock, no database.
"""
import enum
import logging
import uuid
from dataclasses import dataclass

from admin_portal.core.errors import BadRequest, Forbidden, Unauthorized
from admin_portal.models.user import Role

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    CREATE_USER = "create_user"
    LIST_USERS = "list_users"
    VIEW_USER = "view_user"
    DELETE_USER = "delete_user"
    CREATE_TRANSACTION = "create_transaction"
    LIST_TRANSACTIONS = "list_transactions"
    GET_TRANSACTION = "get_transaction"
    UPDATE_TRANSACTION = "update_transaction"
    DELETE_TRANSACTION = "delete_transaction"
    MANAGE_GROUPS = "manage_groups"


class DenyKind(str, enum.Enum):
    FORBIDDEN = "forbidden"
    UNAUTHORIZED = "unauthorized"
    BAD_REQUEST = "bad_request"


class GroupSource(str, enum.Enum):
    # new row is placed in the actor's own group
    ACTOR = "actor"
    # new row uses the group given in the request (required unless groupless)
    TARGET = "target"


@dataclass(frozen=True)
class Actor:
    """Authenticated caller, as carried by the session token."""

    id: uuid.UUID
    role: Role
    group_id: uuid.UUID | None = None
    email: str = ""


@dataclass(frozen=True)
class Target:
    """
    The row being acted on.

    For create-user, owner_role / owner_group_id are the requested role
    and group of the account being created.
    """

    owner_role: Role | None = None
    owner_id: uuid.UUID | None = None
    owner_group_id: uuid.UUID | None = None


@dataclass(frozen=True)
class Rule:
    same_group: bool = False
    own_only: bool = False
    target_roles: frozenset[Role] | None = None
    assign_group: GroupSource | None = None
    tag: str | None = None
    deny_reason: str | None = None


@dataclass(frozen=True)
class Allow:
    rule: Rule
    tag: str | None = None
    group_id: uuid.UUID | None = None

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Deny:
    reason: str
    kind: DenyKind = DenyKind.FORBIDDEN

    def __bool__(self) -> bool:
        return False


Decision = Allow | Deny


UNRESTRICTED = Rule()

MEMBER_ROLES = frozenset({Role.POWER_USER, Role.USER})

# Roles that never belong to a group
GROUPLESS_ROLES = frozenset({Role.SUPPORT})

NO_GROUP_REASON = "Your account has no group assigned"
GROUP_REQUIRED_REASON = "Group ID is required for Super Admin"

_USER_VISIBILITY: dict[Role, Rule] = {
    Role.SUPER_ADMIN: UNRESTRICTED,
    Role.SUPPORT: UNRESTRICTED,
    Role.ADMIN: Rule(same_group=True, target_roles=MEMBER_ROLES),
    Role.POWER_USER: Rule(same_group=True, target_roles=frozenset({Role.USER})),
}

POLICY: dict[Action, dict[Role, Rule]] = {
    Action.CREATE_USER: {
        Role.SUPER_ADMIN: Rule(assign_group=GroupSource.TARGET),
        Role.ADMIN: Rule(
            same_group=True,
            target_roles=MEMBER_ROLES,
            assign_group=GroupSource.ACTOR,
            deny_reason="Admin may only create Users or Power Users",
        ),
    },
    Action.LIST_USERS: _USER_VISIBILITY,
    Action.VIEW_USER: _USER_VISIBILITY,
    Action.DELETE_USER: {
        Role.SUPER_ADMIN: UNRESTRICTED,
        Role.ADMIN: Rule(same_group=True, target_roles=MEMBER_ROLES, tag="Admin"),
    },
    Action.CREATE_TRANSACTION: {
        Role.USER: Rule(assign_group=GroupSource.ACTOR),
    },
    Action.LIST_TRANSACTIONS: {
        Role.USER: Rule(own_only=True),
        Role.POWER_USER: Rule(same_group=True),
        Role.ADMIN: Rule(same_group=True),
        Role.SUPPORT: UNRESTRICTED,
        Role.SUPER_ADMIN: UNRESTRICTED,
    },
    Action.GET_TRANSACTION: {
        Role.SUPER_ADMIN: UNRESTRICTED,
        Role.ADMIN: Rule(
            same_group=True,
            deny_reason="Not allowed to view transaction from another group",
        ),
        Role.USER: Rule(own_only=True),
    },
    # Even ADMIN may not edit another user's transaction.
    Action.UPDATE_TRANSACTION: {
        Role.USER: Rule(own_only=True),
    },
    Action.DELETE_TRANSACTION: {
        Role.SUPER_ADMIN: UNRESTRICTED,
        Role.ADMIN: Rule(
            same_group=True,
            tag="Admin",
            deny_reason="Not allowed to delete transaction from another group",
        ),
        Role.USER: Rule(own_only=True, tag="User"),
    },
    Action.MANAGE_GROUPS: {
        Role.SUPER_ADMIN: UNRESTRICTED,
    },
}

DEFAULT_DENY_REASONS: dict[Action, str] = {
    Action.CREATE_USER: "Only Super Admin or Admin may create users",
    Action.LIST_USERS: "You are not allowed to view users",
    Action.VIEW_USER: "You are not allowed to view this user",
    Action.DELETE_USER: "You are not allowed to delete this user",
    Action.CREATE_TRANSACTION: "Only users can create transactions",
    Action.LIST_TRANSACTIONS: "You are not allowed to view transactions",
    Action.GET_TRANSACTION: "You are not allowed to view this transaction",
    Action.UPDATE_TRANSACTION: "You are not allowed to update this transaction",
    Action.DELETE_TRANSACTION: "You are not allowed to delete this transaction",
    Action.MANAGE_GROUPS: "Only Super Admin may manage groups",
}

# Invitations reject with 401 rather than 403.
DENY_KINDS: dict[Action, DenyKind] = {
    Action.CREATE_USER: DenyKind.UNAUTHORIZED,
}

_missing = set(Action) - POLICY.keys() | set(Action) - DEFAULT_DENY_REASONS.keys()
if _missing:
    raise RuntimeError(f"Policy table is missing actions: {sorted(_missing)}")


def rule_for(action: Action, role: Role) -> Rule | None:
    """Return the rule for (action, role), or None if the role is denied."""
    return POLICY[action].get(role)


def _deny(action: Action, reason: str | None = None) -> Deny:
    return Deny(
        reason=reason or DEFAULT_DENY_REASONS[action],
        kind=DENY_KINDS.get(action, DenyKind.FORBIDDEN),
    )


def _assigned_group(
    rule: Rule,
    actor: Actor,
    target: Target | None,
) -> uuid.UUID | None | Deny:
    if rule.assign_group == GroupSource.ACTOR:
        return actor.group_id
    if rule.assign_group == GroupSource.TARGET and target is not None:
        if target.owner_role in GROUPLESS_ROLES:
            return None
        if target.owner_group_id is None:
            return Deny(GROUP_REQUIRED_REASON, DenyKind.BAD_REQUEST)
        return target.owner_group_id
    return None


def decide(action: Action, actor: Actor, target: Target | None = None) -> Decision:
    """
    Decide whether `actor` may perform `action` on `target`.

    With target=None the decision is made for the collection (list
    endpoints): only the actor's role and group are checked, and the
    returned Allow.rule says how to filter rows.

    Check order:
      1. role present in the action's table
      2. target role allowed
      3. actor has a group when the rule is group-scoped
      4. ownership / group match against the target row
      5. group assignment for rows being created
    """
    rule = rule_for(action, actor.role)
    if rule is None:
        return _deny(action)

    if (
        target is not None
        and rule.target_roles is not None
        and target.owner_role not in rule.target_roles
    ):
        return _deny(action, rule.deny_reason)

    if rule.same_group and actor.group_id is None:
        return _deny(action, NO_GROUP_REASON)

    if target is not None:
        if rule.own_only and target.owner_id != actor.id:
            return _deny(action, rule.deny_reason)
        # Assigning rules place the new row in the actor's group instead
        if (
            rule.same_group
            and rule.assign_group is None
            and target.owner_group_id != actor.group_id
        ):
            return _deny(action, rule.deny_reason)

    group_id = _assigned_group(rule, actor, target)
    if isinstance(group_id, Deny):
        return group_id

    return Allow(rule=rule, tag=rule.tag, group_id=group_id)


def authorize(action: Action, actor: Actor, target: Target | None = None) -> Allow:
    """
    decide() for service code: return the Allow or raise the mapped error.

    Raises:
        Forbidden(403), Unauthorized(401) or BadRequest(400) per Deny.kind.
    """
    decision = decide(action, actor, target)
    if isinstance(decision, Allow):
        return decision

    logger.info(
        "Denied %s for %s %s: %s",
        action.value,
        actor.role.value,
        actor.id,
        decision.reason,
    )
    if decision.kind == DenyKind.UNAUTHORIZED:
        raise Unauthorized(decision.reason)
    if decision.kind == DenyKind.BAD_REQUEST:
        raise BadRequest(decision.reason)
    raise Forbidden(decision.reason)
