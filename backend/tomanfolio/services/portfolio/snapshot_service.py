"""Daily portfolio history: today's totals and a one-off backfill."""

import logging
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from tomanfolio.models import PortfolioSnapshot
from tomanfolio.services.market_data.price_types import PriceSnapshot
from tomanfolio.services.portfolio.valuation_service import PortfolioValuationService
from tomanfolio.services.repositories.portfolio_snapshot_repository import (
    PortfolioSnapshotRepository,
)
from tomanfolio.services.repositories.transaction_repository import TransactionRepository
from tomanfolio.services.shared.number_normalizer import round_toman

logger = logging.getLogger(__name__)


class PortfolioSnapshotService:
    """Records and reconstructs per-day portfolio totals for a user."""

    def __init__(self, db: Session) -> None:
        self._snapshots = PortfolioSnapshotRepository(db)
        self._transactions = TransactionRepository(db)

    def find_by_user(
        self,
        user_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[PortfolioSnapshot]:
        return self._snapshots.find_by_user(user_id, start_date, end_date)

    def record_today(
        self,
        user_id: str,
        prices: PriceSnapshot,
        today: date | None = None,
    ) -> PortfolioSnapshot:
        """Store today's totals from a fresh valuation, replacing any earlier one."""
        summary = PortfolioValuationService.compute_summary(
            self._transactions.find_by_user(user_id), prices
        )
        return self._snapshots.upsert(
            user_id,
            today or datetime.now(UTC).date(),
            round_toman(summary.total_value_toman),
            round_toman(summary.total_cost_basis_toman),
        )

    def backfill(
        self,
        user_id: str,
        current_value: Decimal,
        current_cost: Decimal,
        today: date | None = None,
    ) -> int:
        """Estimate one snapshot per day since the first purchase.

        Cost is the running sum of ``quantity x price`` of purchases made on
        or before each day; value moves linearly from that cost towards the
        current gain. Does nothing if the user already has snapshots.

        Returns:
            Number of snapshots written
        """
        if self._snapshots.has_any(user_id):
            logger.info(f"Backfill skipped for user {user_id}: snapshots exist")
            return 0

        transactions = sorted(
            self._transactions.find_by_user(user_id), key=lambda t: t.buy_date_time
        )
        if not transactions:
            return 0

        today = today or datetime.now(UTC).date()
        first_day = transactions[0].buy_date_time.date()
        total_days = (today - first_day).days
        if total_days <= 0:
            return 0

        gain = Decimal(current_value) - Decimal(current_cost)
        rows: list[tuple[date, Decimal, Decimal]] = []
        for i in range(total_days + 1):
            day = first_day + timedelta(days=i)
            cost = sum(
                (Decimal(t.quantity) * Decimal(t.buy_price_per_unit)
                 for t in transactions if t.buy_date_time.date() <= day),
                Decimal("0"),
            )
            value = cost + gain * Decimal(i) / Decimal(total_days)
            rows.append((day, round_toman(value), round_toman(cost)))

        return self._snapshots.bulk_insert(user_id, rows)
