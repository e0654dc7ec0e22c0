"""SQLAlchemy ORM models."""

from tomanfolio.models.portfolio_snapshot import PortfolioSnapshot
from tomanfolio.models.price_snapshot import PriceSnapshotRecord
from tomanfolio.models.transaction import Transaction
from tomanfolio.models.user import User

__all__ = [
    "PortfolioSnapshot",
    "PriceSnapshotRecord",
    "Transaction",
    "User",
]
