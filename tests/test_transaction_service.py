import uuid

import pytest

from admin_portal.core.errors import Forbidden, NotFound
from admin_portal.models.user import Role


@pytest.fixture
def ledger(session, tx_service, make_group, make_user, as_actor, clock):
    """
    Two groups; each has an admin, a power user and two users with one
    transaction each.
    """
    groups = {}
    for name in ("g1", "g2"):
        group = make_group(name)
        users = [make_user(Role.USER, group), make_user(Role.USER, group)]
        txs = []
        for user in users:
            txs.append(tx_service.create(session, f"{name} by {user.email}", as_actor(user)))
            clock.advance(seconds=1)
        groups[name] = {
            "group": group,
            "admin": make_user(Role.ADMIN, group),
            "power_user": make_user(Role.POWER_USER, group),
            "users": users,
            "txs": txs,
        }
    return groups


def _ids(rows):
    return {row.id for row in rows}


class TestCreate:
    def test_user_creates_in_own_group(self, session, tx_service, make_group, make_user, as_actor):
        g1 = make_group()
        user = make_user(Role.USER, g1)

        tx = tx_service.create(session, "T1", as_actor(user))

        assert tx.title == "T1"
        assert tx.user_id == user.id
        assert tx.group_id == g1.id
        assert tx.deleted_at is None

    @pytest.mark.parametrize(
        "role", [Role.SUPER_ADMIN, Role.ADMIN, Role.POWER_USER, Role.SUPPORT]
    )
    def test_only_users_create(self, session, tx_service, make_group, make_user, as_actor, role):
        group = None if role in (Role.SUPER_ADMIN, Role.SUPPORT) else make_group()
        actor = as_actor(make_user(role, group))

        with pytest.raises(Forbidden):
            tx_service.create(session, "nope", actor)

    def test_group_is_fixed_at_creation(
        self, session, tx_service, make_group, make_user, as_actor
    ):
        g1, g2 = make_group(), make_group()
        user = make_user(Role.USER, g1)
        tx = tx_service.create(session, "T1", as_actor(user))

        user.group_id = g2.id
        session.add(user)
        session.commit()

        session.refresh(tx)
        assert tx.group_id == g1.id


class TestList:
    def test_user_sees_own_rows(self, session, tx_service, ledger, as_actor):
        user = ledger["g1"]["users"][0]
        rows = tx_service.list(session, as_actor(user))

        assert _ids(rows) == {ledger["g1"]["txs"][0].id}

    @pytest.mark.parametrize("role", ["admin", "power_user"])
    def test_group_roles_see_own_group(self, session, tx_service, ledger, as_actor, role):
        rows = tx_service.list(session, as_actor(ledger["g2"][role]))

        assert _ids(rows) == _ids(ledger["g2"]["txs"])

    @pytest.mark.parametrize("role", [Role.SUPER_ADMIN, Role.SUPPORT])
    def test_global_roles_see_all(self, session, tx_service, ledger, make_user, as_actor, role):
        rows = tx_service.list(session, as_actor(make_user(role)))

        assert _ids(rows) == _ids(ledger["g1"]["txs"] + ledger["g2"]["txs"])

    def test_newest_first(self, session, tx_service, ledger, make_user, as_actor):
        rows = tx_service.list(session, as_actor(make_user(Role.SUPER_ADMIN)))

        created = [row.created_at for row in rows]
        assert created == sorted(created, reverse=True)
        assert rows[0].id == ledger["g2"]["txs"][-1].id

    def test_deleted_rows_are_hidden(self, session, tx_service, ledger, as_actor):
        user = ledger["g1"]["users"][0]
        tx_service.delete(session, ledger["g1"]["txs"][0].id, as_actor(ledger["g1"]["admin"]))

        assert tx_service.list(session, as_actor(user)) == []


class TestGet:
    def test_unknown_id(self, session, tx_service, ledger, as_actor):
        with pytest.raises(NotFound):
            tx_service.get(session, uuid.uuid4(), as_actor(ledger["g1"]["admin"]))

    def test_admin_other_group(self, session, tx_service, ledger, as_actor):
        with pytest.raises(Forbidden):
            tx_service.get(session, ledger["g2"]["txs"][0].id, as_actor(ledger["g1"]["admin"]))

    def test_user_other_owner(self, session, tx_service, ledger, as_actor):
        with pytest.raises(Forbidden):
            tx_service.get(
                session, ledger["g1"]["txs"][1].id, as_actor(ledger["g1"]["users"][0])
            )

    def test_power_user_cannot_get_by_id(self, session, tx_service, ledger, as_actor):
        with pytest.raises(Forbidden):
            tx_service.get(
                session, ledger["g1"]["txs"][0].id, as_actor(ledger["g1"]["power_user"])
            )

    def test_owner(self, session, tx_service, ledger, as_actor):
        tx = ledger["g1"]["txs"][0]
        assert tx_service.get(session, tx.id, as_actor(ledger["g1"]["users"][0])).id == tx.id


class TestUpdate:
    def test_owner_renames(self, session, tx_service, ledger, as_actor):
        tx = ledger["g1"]["txs"][0]

        updated = tx_service.update(session, tx.id, "renamed", as_actor(ledger["g1"]["users"][0]))

        assert updated.title == "renamed"

    def test_admin_cannot_update(self, session, tx_service, ledger, as_actor):
        with pytest.raises(Forbidden):
            tx_service.update(
                session, ledger["g1"]["txs"][0].id, "x", as_actor(ledger["g1"]["admin"])
            )

    def test_other_user_cannot_update(self, session, tx_service, ledger, as_actor):
        with pytest.raises(Forbidden):
            tx_service.update(
                session, ledger["g1"]["txs"][0].id, "x", as_actor(ledger["g1"]["users"][1])
            )


class TestDelete:
    def test_super_admin(self, session, tx_service, ledger, make_user, as_actor):
        result = tx_service.delete(
            session, ledger["g1"]["txs"][0].id, as_actor(make_user(Role.SUPER_ADMIN))
        )
        assert result == {"message": "Transaction deleted"}

    def test_admin_of_group(self, session, tx_service, ledger, as_actor):
        result = tx_service.delete(
            session, ledger["g1"]["txs"][0].id, as_actor(ledger["g1"]["admin"])
        )
        assert result == {"message": "Transaction deleted by Admin"}

    def test_owner(self, session, tx_service, ledger, as_actor):
        tx = ledger["g1"]["txs"][0]

        result = tx_service.delete(session, tx.id, as_actor(ledger["g1"]["users"][0]))

        assert result == {"message": "Transaction deleted by User"}
        session.refresh(tx)
        assert tx.deleted_at is not None

    def test_admin_of_other_group(self, session, tx_service, ledger, as_actor):
        tx = ledger["g1"]["txs"][0]
        with pytest.raises(Forbidden) as exc:
            tx_service.delete(session, tx.id, as_actor(ledger["g2"]["admin"]))

        assert exc.value.detail == "Not allowed to delete transaction from another group"
        session.refresh(tx)
        assert tx.deleted_at is None

    def test_already_deleted(self, session, tx_service, ledger, as_actor):
        tx = ledger["g1"]["txs"][0]
        owner = as_actor(ledger["g1"]["users"][0])
        tx_service.delete(session, tx.id, owner)

        with pytest.raises(NotFound):
            tx_service.delete(session, tx.id, owner)
