# admin_portal/routers/transactions.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from admin_portal.core.auth import require_auth
from admin_portal.core.policy import Actor
from admin_portal.database import get_session
from admin_portal.dependencies import get_transaction_service
from admin_portal.schemas.auth import MessageResponse
from admin_portal.schemas.transaction import (
    TransactionCreate,
    TransactionRead,
    TransactionUpdate,
)
from admin_portal.services.transaction_service import TransactionService

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
def create_transaction(
    payload: TransactionCreate,
    session: Session = Depends(get_session),
    actor: Actor = Depends(require_auth),
    service: TransactionService = Depends(get_transaction_service),
):
    """
    Create a transaction owned by the caller.

    Auth:
      - Only role='user'.
    """
    return service.create(session, payload.title, actor)


@router.get("", response_model=list[TransactionRead])
def list_transactions(
    session: Session = Depends(get_session),
    actor: Actor = Depends(require_auth),
    service: TransactionService = Depends(get_transaction_service),
    skip: int = 0,
    limit: int = 50,
):
    """
    List visible transactions, newest first.

      - user: own
      - power_user, admin: own group
      - support, super_admin: all
    """
    return service.list(session, actor, skip, limit)


@router.get("/{tx_id}", response_model=TransactionRead)
def get_transaction(
    tx_id: uuid.UUID,
    session: Session = Depends(get_session),
    actor: Actor = Depends(require_auth),
    service: TransactionService = Depends(get_transaction_service),
):
    return service.get(session, tx_id, actor)


@router.patch("/{tx_id}", response_model=TransactionRead)
def update_transaction(
    tx_id: uuid.UUID,
    payload: TransactionUpdate,
    session: Session = Depends(get_session),
    actor: Actor = Depends(require_auth),
    service: TransactionService = Depends(get_transaction_service),
):
    """Rename a transaction (owner only)."""
    return service.update(session, tx_id, payload.title, actor)


@router.delete("/{tx_id}", response_model=MessageResponse)
def delete_transaction(
    tx_id: uuid.UUID,
    session: Session = Depends(get_session),
    actor: Actor = Depends(require_auth),
    service: TransactionService = Depends(get_transaction_service),
):
    return service.delete(session, tx_id, actor)
