import uuid

import pytest

from admin_portal.core.errors import Forbidden
from admin_portal.core.policy import Action, Actor
from admin_portal.core.visibility import Scope, ScopeKind, visible_scope
from admin_portal.models.transaction import Transaction
from admin_portal.models.user import Role, User

GROUP = uuid.uuid4()


def _actor(role: Role, group_id=GROUP) -> Actor:
    return Actor(id=uuid.uuid4(), role=role, group_id=group_id)


@pytest.mark.parametrize(
    "role,kind",
    [
        (Role.USER, ScopeKind.OWNER),
        (Role.POWER_USER, ScopeKind.GROUP),
        (Role.ADMIN, ScopeKind.GROUP),
        (Role.SUPPORT, ScopeKind.NONE),
        (Role.SUPER_ADMIN, ScopeKind.NONE),
    ],
)
def test_transaction_scopes(role, kind):
    actor = _actor(role)
    scope = visible_scope(Action.LIST_TRANSACTIONS, actor)

    assert scope.kind == kind
    if kind == ScopeKind.OWNER:
        assert scope.owner_id == actor.id
    if kind == ScopeKind.GROUP:
        assert scope.group_id == GROUP


def test_admin_user_scope_is_group_and_member_roles():
    scope = visible_scope(Action.LIST_USERS, _actor(Role.ADMIN))

    assert scope.kind == ScopeKind.GROUP_AND_ROLES
    assert scope.group_id == GROUP
    assert scope.roles == frozenset({Role.USER, Role.POWER_USER})


def test_power_user_sees_only_users_of_group():
    scope = visible_scope(Action.LIST_USERS, _actor(Role.POWER_USER))

    assert scope.kind == ScopeKind.GROUP_AND_ROLES
    assert scope.roles == frozenset({Role.USER})


@pytest.mark.parametrize("role", [Role.SUPER_ADMIN, Role.SUPPORT])
def test_unrestricted_user_scope(role):
    assert visible_scope(Action.LIST_USERS, _actor(role, None)).kind == ScopeKind.NONE


def test_user_cannot_list_users():
    with pytest.raises(Forbidden):
        visible_scope(Action.LIST_USERS, _actor(Role.USER))


def test_clauses_per_kind():
    assert Scope(ScopeKind.NONE).clauses(Transaction.group_id, Transaction.user_id) == []
    assert len(Scope(ScopeKind.OWNER, owner_id=uuid.uuid4()).clauses(
        Transaction.group_id, Transaction.user_id
    )) == 1
    scope = Scope(ScopeKind.GROUP_AND_ROLES, group_id=GROUP, roles=frozenset({Role.USER}))
    assert len(scope.clauses(User.group_id, User.id, User.role)) == 2


def test_group_and_roles_needs_role_column():
    scope = Scope(ScopeKind.GROUP_AND_ROLES, group_id=GROUP, roles=frozenset({Role.USER}))
    with pytest.raises(ValueError):
        scope.clauses(Transaction.group_id, Transaction.user_id)
