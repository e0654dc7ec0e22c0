"""Price snapshot model - one persisted refresh result."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, DateTime, Index, Numeric
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from tomanfolio.database import Base


class PriceSnapshotRecord(Base):
    """Stored price snapshot.

    Price maps are JSON objects of ``symbol -> decimal string``; ``sources``
    records which source served each category.
    """

    __tablename__ = "price_snapshots"
    __table_args__ = (Index("idx_price_snapshots_fetched_at", "fetched_at"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    usd_to_toman: Mapped[Decimal] = mapped_column(Numeric(20, 2))
    eur_to_toman: Mapped[Decimal] = mapped_column(Numeric(20, 2))
    gold18_to_toman: Mapped[Decimal] = mapped_column(Numeric(20, 2))
    fiat_prices: Mapped[dict] = mapped_column(JSON, default=dict)
    crypto_prices: Mapped[dict] = mapped_column(JSON, default=dict)
    gold_prices: Mapped[dict] = mapped_column(JSON, default=dict)
    sources: Mapped[list] = mapped_column(JSON, default=list)
    fetched_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    def __repr__(self) -> str:
        return f"<PriceSnapshotRecord(id={self.id}, usd={self.usd_to_toman}, at={self.fetched_at})>"
