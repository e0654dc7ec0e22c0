"""Portfolio snapshot model - daily portfolio totals per user."""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Index, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from tomanfolio.database import Base

if TYPE_CHECKING:
    from tomanfolio.models.user import User


class PortfolioSnapshot(Base):
    """Total value and cost basis of a user's portfolio on one day."""

    __tablename__ = "portfolio_snapshots"
    __table_args__ = (
        UniqueConstraint("user_id", "snapshot_date", name="uq_portfolio_snapshot_user_date"),
        Index("idx_portfolio_snapshots_user_date", "user_id", "snapshot_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    total_value_toman: Mapped[Decimal] = mapped_column(Numeric(24, 2))
    total_cost_basis_toman: Mapped[Decimal] = mapped_column(Numeric(24, 2))
    snapshot_date: Mapped[date] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    user: Mapped["User"] = relationship(back_populates="portfolio_snapshots")

    def __repr__(self) -> str:
        return (
            f"<PortfolioSnapshot(user_id={self.user_id}, date={self.snapshot_date}, "
            f"value={self.total_value_toman})>"
        )
