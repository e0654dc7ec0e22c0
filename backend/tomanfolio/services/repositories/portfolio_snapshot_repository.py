"""Daily portfolio snapshot data access layer."""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from tomanfolio.models import PortfolioSnapshot

logger = logging.getLogger(__name__)


class PortfolioSnapshotRepository:
    """Centralized portfolio snapshot data access."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_user(
        self,
        user_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[PortfolioSnapshot]:
        """Snapshots for a user in date order, optionally within a range."""
        query = self._db.query(PortfolioSnapshot).filter(PortfolioSnapshot.user_id == user_id)
        if start_date is not None:
            query = query.filter(PortfolioSnapshot.snapshot_date >= start_date)
        if end_date is not None:
            query = query.filter(PortfolioSnapshot.snapshot_date <= end_date)
        return query.order_by(PortfolioSnapshot.snapshot_date).all()

    def has_any(self, user_id: str) -> bool:
        return (
            self._db.query(PortfolioSnapshot.id)
            .filter(PortfolioSnapshot.user_id == user_id)
            .first()
            is not None
        )

    def upsert(
        self,
        user_id: str,
        snapshot_date: date,
        total_value: Decimal,
        total_cost_basis: Decimal,
    ) -> PortfolioSnapshot:
        """Insert or replace the snapshot for one user and day."""
        snapshot = (
            self._db.query(PortfolioSnapshot)
            .filter(
                PortfolioSnapshot.user_id == user_id,
                PortfolioSnapshot.snapshot_date == snapshot_date,
            )
            .first()
        )
        if snapshot is None:
            snapshot = PortfolioSnapshot(user_id=user_id, snapshot_date=snapshot_date)
            self._db.add(snapshot)

        snapshot.total_value_toman = total_value
        snapshot.total_cost_basis_toman = total_cost_basis
        self._db.commit()
        self._db.refresh(snapshot)
        return snapshot

    def bulk_insert(self, user_id: str, rows: list[tuple[date, Decimal, Decimal]]) -> int:
        """Insert many ``(date, value, cost)`` rows in one commit."""
        self._db.add_all(
            PortfolioSnapshot(
                user_id=user_id,
                snapshot_date=snapshot_date,
                total_value_toman=value,
                total_cost_basis_toman=cost,
            )
            for snapshot_date, value, cost in rows
        )
        self._db.commit()
        logger.info(f"Inserted {len(rows)} portfolio snapshots for user {user_id}")
        return len(rows)
