"""Transaction ledger data access layer."""

import logging
from uuid import uuid4

from sqlalchemy import func
from sqlalchemy.orm import Session

from tomanfolio.models import Transaction
from tomanfolio.services.repositories.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class TransactionRepository:
    """Centralized transaction data access.

    Naming conventions:
    - find_* : Query that may return None or empty list
    - get_* : Query that raises exception if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_user(self, user_id: str) -> list[Transaction]:
        """All transactions of a user in the order they were recorded."""
        return (
            self._db.query(Transaction)
            .filter(Transaction.user_id == user_id)
            .order_by(Transaction.created_at, Transaction.buy_date_time)
            .all()
        )

    def find_by_id(self, transaction_id: str, user_id: str | None = None) -> Transaction | None:
        """Find a transaction, optionally restricted to one owner."""
        query = self._db.query(Transaction).filter(Transaction.id == transaction_id)
        if user_id is not None:
            query = query.filter(Transaction.user_id == user_id)
        return query.first()

    def get_by_id(self, transaction_id: str, user_id: str | None = None) -> Transaction:
        """Get a transaction, raising NotFoundError when missing."""
        transaction = self.find_by_id(transaction_id, user_id)
        if transaction is None:
            raise NotFoundError("Transaction", transaction_id)
        return transaction

    def save(self, user_id: str, data: dict) -> Transaction:
        """Insert or update a transaction by id.

        A missing id generates a new one. An existing id owned by another
        user raises NotFoundError rather than reassigning the row.
        """
        transaction_id = data.get("id") or str(uuid4())
        transaction = self._db.query(Transaction).filter(Transaction.id == transaction_id).first()

        if transaction is None:
            transaction = Transaction(id=transaction_id, user_id=user_id)
            self._db.add(transaction)
        elif transaction.user_id != user_id:
            raise NotFoundError("Transaction", transaction_id)

        for field in (
            "asset_symbol",
            "quantity",
            "buy_date_time",
            "buy_price_per_unit",
            "buy_currency",
            "fees_toman",
            "note",
        ):
            if field in data:
                setattr(transaction, field, data[field])

        self._db.commit()
        self._db.refresh(transaction)
        return transaction

    def delete(self, transaction_id: str, user_id: str | None = None) -> None:
        """Delete a transaction; raises NotFoundError when missing."""
        transaction = self.get_by_id(transaction_id, user_id)
        self._db.delete(transaction)
        self._db.commit()
        logger.info(f"Deleted transaction {transaction_id}")

    def count_by_user(self, user_id: str) -> int:
        """Number of ledger entries owned by a user."""
        return (
            self._db.query(func.count(Transaction.id))
            .filter(Transaction.user_id == user_id)
            .scalar()
            or 0
        )
