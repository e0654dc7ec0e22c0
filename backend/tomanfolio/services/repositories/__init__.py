"""Repository layer - data access abstraction.

Repositories handle all database queries; services use them rather than
querying SQLAlchemy models directly.

Dependency direction: Services -> Repositories -> Models
"""

from .exceptions import DuplicateError, NotFoundError, RepositoryError
from .portfolio_snapshot_repository import PortfolioSnapshotRepository
from .price_snapshot_repository import PriceSnapshotRepository
from .transaction_repository import TransactionRepository
from .user_repository import UserRepository

__all__ = [
    "DuplicateError",
    "NotFoundError",
    "PortfolioSnapshotRepository",
    "PriceSnapshotRepository",
    "RepositoryError",
    "TransactionRepository",
    "UserRepository",
]
