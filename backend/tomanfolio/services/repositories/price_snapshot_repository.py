"""Price snapshot data access layer.

Converts between the immutable ``PriceSnapshot`` value object and the
stored row; price maps are kept as JSON decimal strings.
"""

import logging
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import desc
from sqlalchemy.orm import Session

from tomanfolio.models import PriceSnapshotRecord
from tomanfolio.services.market_data.price_types import PriceMap, PriceSnapshot, SourceReport

logger = logging.getLogger(__name__)


def _dump_prices(prices: PriceMap) -> dict[str, str]:
    return {symbol: str(value) for symbol, value in prices.items()}


def _load_prices(raw: dict | None) -> PriceMap:
    return {symbol: Decimal(str(value)) for symbol, value in (raw or {}).items()}


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on read
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


class PriceSnapshotRepository:
    """Centralized price snapshot data access."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def _latest_record(self) -> PriceSnapshotRecord | None:
        return (
            self._db.query(PriceSnapshotRecord)
            .order_by(desc(PriceSnapshotRecord.fetched_at), desc(PriceSnapshotRecord.id))
            .first()
        )

    def find_latest(self) -> PriceSnapshot | None:
        """The most recently fetched snapshot, or None when none is stored."""
        record = self._latest_record()
        return self.to_snapshot(record) if record else None

    def find_latest_sources(self) -> list[SourceReport]:
        """Source report stored with the latest snapshot."""
        record = self._latest_record()
        if record is None:
            return []
        return [SourceReport(type=item["type"], source=item["source"]) for item in record.sources or []]

    def save(self, snapshot: PriceSnapshot, sources: list[SourceReport] | None = None) -> PriceSnapshotRecord:
        """Persist a snapshot with the per-category source report."""
        record = PriceSnapshotRecord(
            usd_to_toman=snapshot.usd_to_toman,
            eur_to_toman=snapshot.eur_to_toman,
            gold18_to_toman=snapshot.gold18_to_toman,
            fiat_prices=_dump_prices(snapshot.fiat_prices),
            crypto_prices=_dump_prices(snapshot.crypto_prices),
            gold_prices=_dump_prices(snapshot.gold_prices),
            sources=[{"type": s.type, "source": s.source} for s in sources or []],
            fetched_at=snapshot.fetched_at,
        )
        self._db.add(record)
        self._db.commit()
        self._db.refresh(record)
        logger.debug(f"Saved price snapshot {record.id} fetched at {snapshot.fetched_at}")
        return record

    @staticmethod
    def to_snapshot(record: PriceSnapshotRecord) -> PriceSnapshot:
        return PriceSnapshot(
            usd_to_toman=Decimal(str(record.usd_to_toman)),
            eur_to_toman=Decimal(str(record.eur_to_toman)),
            gold18_to_toman=Decimal(str(record.gold18_to_toman)),
            fiat_prices=_load_prices(record.fiat_prices),
            crypto_prices=_load_prices(record.crypto_prices),
            gold_prices=_load_prices(record.gold_prices),
            fetched_at=_as_utc(record.fetched_at),
        )
