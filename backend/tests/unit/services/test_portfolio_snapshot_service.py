"""Tests for PortfolioSnapshotService."""

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from tomanfolio.services.portfolio import PortfolioSnapshotService
from tomanfolio.services.repositories import TransactionRepository


def _buy(db, user_id, day, quantity, price, symbol="USD"):
    return TransactionRepository(db).save(
        user_id,
        {
            "asset_symbol": symbol,
            "quantity": Decimal(str(quantity)),
            "buy_date_time": datetime(2025, 1, day, 10, 0, tzinfo=UTC),
            "buy_price_per_unit": Decimal(str(price)),
            "buy_currency": "TOMAN",
            "fees_toman": Decimal("0"),
        },
    )


@pytest.fixture
def service(db):
    return PortfolioSnapshotService(db)


class TestRecordToday:
    def test_stores_current_totals(self, service, db, user, price_snapshot):
        _buy(db, user.id, 1, 10, 45000)

        snapshot = service.record_today(user.id, price_snapshot, today=date(2025, 1, 2))

        assert snapshot.snapshot_date == date(2025, 1, 2)
        assert snapshot.total_value_toman == Decimal("500000")
        assert snapshot.total_cost_basis_toman == Decimal("450000")

    def test_same_day_is_replaced(self, service, db, user, price_snapshot):
        _buy(db, user.id, 1, 10, 45000)
        service.record_today(user.id, price_snapshot, today=date(2025, 1, 2))
        _buy(db, user.id, 1, 10, 45000)

        service.record_today(user.id, price_snapshot, today=date(2025, 1, 2))

        (snapshot,) = service.find_by_user(user.id)
        assert snapshot.total_value_toman == Decimal("1000000")


class TestBackfill:
    def test_interpolates_from_first_purchase(self, service, db, user):
        _buy(db, user.id, 1, 1, 100)
        _buy(db, user.id, 3, 2, 50)

        count = service.backfill(user.id, Decimal("600"), Decimal("200"), today=date(2025, 1, 5))

        assert count == 5
        snapshots = service.find_by_user(user.id)
        assert [s.snapshot_date for s in snapshots] == [date(2025, 1, d) for d in range(1, 6)]
        assert [s.total_cost_basis_toman for s in snapshots] == [100, 100, 200, 200, 200]
        assert [s.total_value_toman for s in snapshots] == [100, 200, 400, 500, 600]

    def test_date_range_filter(self, service, db, user):
        _buy(db, user.id, 1, 1, 100)
        service.backfill(user.id, Decimal("100"), Decimal("100"), today=date(2025, 1, 5))

        snapshots = service.find_by_user(user.id, date(2025, 1, 2), date(2025, 1, 3))

        assert [s.snapshot_date for s in snapshots] == [date(2025, 1, 2), date(2025, 1, 3)]

    def test_skipped_when_snapshots_exist(self, service, db, user, price_snapshot):
        _buy(db, user.id, 1, 1, 100)
        service.record_today(user.id, price_snapshot, today=date(2025, 1, 5))

        assert service.backfill(user.id, Decimal("1"), Decimal("1"), today=date(2025, 1, 5)) == 0

    def test_nothing_to_backfill_without_transactions(self, service, user):
        assert service.backfill(user.id, Decimal("0"), Decimal("0"), today=date(2025, 1, 5)) == 0

    def test_nothing_to_backfill_for_same_day_purchase(self, service, db, user):
        _buy(db, user.id, 5, 1, 100)
        assert service.backfill(user.id, Decimal("1"), Decimal("1"), today=date(2025, 1, 5)) == 0
