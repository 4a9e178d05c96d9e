# admin_portal/services/transaction_service.py
import uuid

from sqlmodel import Session

from admin_portal.core.clock import Clock
from admin_portal.core.errors import NotFound
from admin_portal.core.policy import Action, Actor, Target, authorize
from admin_portal.core.visibility import visible_scope
from admin_portal.models.transaction import Transaction
from admin_portal.repositories.transaction_repo import TransactionRepository


class TransactionService:
    """
    Business logic for transactions.

    Every operation asks the policy engine first; lookups happen before
    the check so a missing row is 404 and a foreign row is 403.
    """

    def __init__(self, repo: TransactionRepository, clock: Clock):
        self.repo = repo
        self.clock = clock

    def create(self, session: Session, title: str, actor: Actor) -> Transaction:
        """
        Only USER may create. The row's group is the actor's group now
        and never changes afterwards.
        """
        decision = authorize(Action.CREATE_TRANSACTION, actor)
        tx = Transaction(
            title=title,
            user_id=actor.id,
            group_id=decision.group_id,
            created_at=self.clock.now(),
        )
        return self.repo.create(session, tx)

    def list(
        self,
        session: Session,
        actor: Actor,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Transaction]:
        """
        Newest first.

          - USER: own rows
          - POWER_USER, ADMIN: own group
          - SUPPORT, SUPER_ADMIN: all
        """
        scope = visible_scope(Action.LIST_TRANSACTIONS, actor)
        return self.repo.list_scoped(session, scope, skip=skip, limit=limit)

    def get(self, session: Session, tx_id: uuid.UUID, actor: Actor) -> Transaction:
        tx = self._get_tx(session, tx_id)
        authorize(Action.GET_TRANSACTION, actor, _as_target(tx))
        return tx

    def update(self, session: Session, tx_id: uuid.UUID, title: str, actor: Actor) -> Transaction:
        """Only the owning USER may change the title."""
        tx = self._get_tx(session, tx_id)
        authorize(Action.UPDATE_TRANSACTION, actor, _as_target(tx))
        tx.title = title
        return self.repo.update(session, tx)

    def delete(self, session: Session, tx_id: uuid.UUID, actor: Actor) -> dict[str, str]:
        """
        Soft delete. The message says who deleted it:
        "Transaction deleted" (SUPER_ADMIN), "... by Admin", "... by User".
        """
        tx = self._get_tx(session, tx_id)
        decision = authorize(Action.DELETE_TRANSACTION, actor, _as_target(tx))
        self.repo.soft_delete(session, tx, self.clock.now())
        if decision.tag:
            return {"message": f"Transaction deleted by {decision.tag}"}
        return {"message": "Transaction deleted"}

    def _get_tx(self, session: Session, tx_id: uuid.UUID) -> Transaction:
        tx = self.repo.get_by_id(session, tx_id)
        if not tx:
            raise NotFound("Transaction not found")
        return tx


def _as_target(tx: Transaction) -> Target:
    return Target(owner_id=tx.user_id, owner_group_id=tx.group_id)
