"""Transaction model - one buy entry in a user's ledger."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tomanfolio.database import Base

if TYPE_CHECKING:
    from tomanfolio.models.user import User


class Transaction(Base):
    """A single purchase of an asset.

    Repeated buys of the same asset are separate rows; they are only
    aggregated at valuation time.
    """

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_transactions_quantity_positive"),
        CheckConstraint("fees_toman >= 0", name="ck_transactions_fees_non_negative"),
        Index("idx_transactions_user", "user_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    asset_symbol: Mapped[str] = mapped_column(String(50))
    quantity: Mapped[Decimal] = mapped_column(Numeric(28, 10))
    buy_date_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    buy_price_per_unit: Mapped[Decimal] = mapped_column(Numeric(28, 8))
    buy_currency: Mapped[str] = mapped_column(String(10))  # 'TOMAN' or 'USD'
    fees_toman: Mapped[Decimal] = mapped_column(Numeric(28, 2), default=Decimal("0"))
    note: Mapped[str | None] = mapped_column(Text)
    # Python-side default keeps sub-second precision; ledger order follows it
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC)
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="transactions")

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id}, symbol='{self.asset_symbol}', "
            f"quantity={self.quantity}, currency='{self.buy_currency}')>"
        )
