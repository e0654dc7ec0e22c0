"""User data access layer."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from tomanfolio.models import Transaction, User
from tomanfolio.services.repositories.exceptions import DuplicateError, NotFoundError

logger = logging.getLogger(__name__)


class UserRepository:
    """Centralized user data access.

    Naming conventions:
    - find_* : Query that may return None
    - get_* : Query that raises exception if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, user_id: str) -> User | None:
        """Find user by primary key."""
        return self._db.query(User).filter(User.id == user_id).first()

    def find_by_username(self, username: str) -> User | None:
        """Find user by username (case-insensitive)."""
        return self._db.query(User).filter(func.lower(User.username) == username.lower()).first()

    def get_by_username(self, username: str) -> User:
        """Get user by username, raising NotFoundError when missing."""
        user = self.find_by_username(username)
        if user is None:
            raise NotFoundError("User", username)
        return user

    def create(
        self,
        username: str,
        password_hash: str,
        display_name: str | None = None,
        is_admin: bool = False,
    ) -> User:
        """Create a user; raises DuplicateError if the username is taken."""
        if self.find_by_username(username) is not None:
            raise DuplicateError("User", "username", username)
        user = User(
            username=username,
            password_hash=password_hash,
            display_name=display_name or username,
            is_admin=is_admin,
        )
        self._db.add(user)
        self._db.commit()
        self._db.refresh(user)
        logger.info(f"Created user {username}")
        return user

    def list_with_transaction_counts(self) -> list[tuple[User, int]]:
        """All users with the number of ledger entries each owns."""
        rows = (
            self._db.query(User, func.count(Transaction.id))
            .outerjoin(Transaction, Transaction.user_id == User.id)
            .group_by(User.id)
            .order_by(User.created_at, User.username)
            .all()
        )
        return [(user, count) for user, count in rows]

    def delete(self, user: User) -> None:
        """Delete a user together with their transactions and snapshots."""
        self._db.delete(user)
        self._db.commit()
        logger.info(f"Deleted user {user.username}")
