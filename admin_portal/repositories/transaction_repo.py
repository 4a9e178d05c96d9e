# admin_portal/repositories/transaction_repo.py
import uuid
from datetime import datetime

from sqlmodel import Session, select

from admin_portal.core.visibility import Scope
from admin_portal.models.transaction import Transaction


class TransactionRepository:
    """
    Data access layer for transactions.

    Lists are always ordered by created_at descending (newest first);
    clients rely on that order.
    """

    def get_by_id(self, session: Session, tx_id: uuid.UUID) -> Transaction | None:
        stmt = select(Transaction).where(
            Transaction.id == tx_id,
            Transaction.deleted_at.is_(None),
        )
        return session.exec(stmt).first()

    def list_scoped(
        self,
        session: Session,
        scope: Scope,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Transaction]:
        stmt = (
            select(Transaction)
            .where(Transaction.deleted_at.is_(None))
            .where(*scope.clauses(Transaction.group_id, Transaction.user_id))
            .order_by(Transaction.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def create(self, session: Session, tx: Transaction) -> Transaction:
        session.add(tx)
        session.commit()
        session.refresh(tx)
        return tx

    def update(self, session: Session, tx: Transaction) -> Transaction:
        session.add(tx)
        session.commit()
        session.refresh(tx)
        return tx

    def soft_delete(self, session: Session, tx: Transaction, deleted_at: datetime) -> None:
        tx.deleted_at = deleted_at
        session.add(tx)
        session.commit()
