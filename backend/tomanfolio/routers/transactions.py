"""Transactions API router - the caller's buy ledger."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tomanfolio.database import get_db
from tomanfolio.dependencies.auth import get_current_user
from tomanfolio.models.user import User
from tomanfolio.schemas.common import MessageResponse
from tomanfolio.schemas.transaction import TransactionResponse, TransactionSave
from tomanfolio.services.repositories.exceptions import NotFoundError
from tomanfolio.services.repositories.transaction_repository import TransactionRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("", response_model=list[TransactionResponse])
def list_transactions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the caller's transactions in the order they were recorded."""
    return TransactionRepository(db).find_by_user(current_user.id)


@router.post("", response_model=TransactionResponse)
def save_transaction(
    data: TransactionSave,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a transaction, or replace the one with the same id."""
    try:
        transaction = TransactionRepository(db).save(current_user.id, data.model_dump())
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Transaction {data.id} not found",
        ) from None

    logger.info(
        f"Saved transaction {transaction.id} for {current_user.username}: "
        f"{transaction.quantity} {transaction.asset_symbol}"
    )
    return transaction


@router.delete("/{transaction_id}", response_model=MessageResponse)
def delete_transaction(
    transaction_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete one of the caller's transactions."""
    try:
        TransactionRepository(db).delete(transaction_id, current_user.id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Transaction {transaction_id} not found",
        ) from None
    return {"message": "Transaction deleted"}
