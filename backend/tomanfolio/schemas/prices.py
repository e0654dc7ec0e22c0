"""Schemas for price snapshot endpoints."""

from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from tomanfolio.services.market_data.price_types import PriceSnapshot, RefreshOutcome


class PriceSnapshotSchema(BaseModel):
    """A full price snapshot; every price is in toman."""

    model_config = ConfigDict(from_attributes=True)

    usd_to_toman: Decimal
    eur_to_toman: Decimal
    gold18_to_toman: Decimal
    fiat_prices: dict[str, Decimal] = {}
    crypto_prices: dict[str, Decimal] = {}
    gold_prices: dict[str, Decimal] = {}
    fetched_at: datetime


class PriceSnapshotUpdate(BaseModel):
    """Administrator-supplied snapshot replacing the current one."""

    usd_to_toman: Decimal = Field(..., gt=0)
    eur_to_toman: Decimal = Field(..., gt=0)
    gold18_to_toman: Decimal = Field(..., gt=0)
    fiat_prices: dict[str, Decimal] = {}
    crypto_prices: dict[str, Decimal] = {}
    gold_prices: dict[str, Decimal] = {}

    def to_snapshot(self, now: datetime | None = None) -> PriceSnapshot:
        return PriceSnapshot(
            usd_to_toman=self.usd_to_toman,
            eur_to_toman=self.eur_to_toman,
            gold18_to_toman=self.gold18_to_toman,
            fiat_prices=dict(self.fiat_prices),
            crypto_prices=dict(self.crypto_prices),
            gold_prices=dict(self.gold_prices),
            fetched_at=now or datetime.now(UTC),
        )


class SourceReportSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: str
    source: str


class PricesResponse(BaseModel):
    """Current snapshot with the sources that produced it."""

    data: PriceSnapshotSchema
    sources: list[SourceReportSchema] = []


class RefreshRequest(BaseModel):
    forced: bool = False


class RefreshResponse(BaseModel):
    """Result of a refresh request."""

    success: bool = True
    data: PriceSnapshotSchema
    sources: list[SourceReportSchema] = []
    skipped: bool = False
    next_allowed_at: datetime | None = None
    message: str | None = None
    degraded: bool = False

    @classmethod
    def from_outcome(cls, outcome: RefreshOutcome) -> "RefreshResponse":
        return cls(
            data=PriceSnapshotSchema.model_validate(outcome.snapshot),
            sources=[SourceReportSchema.model_validate(s) for s in outcome.sources],
            skipped=outcome.skipped,
            next_allowed_at=outcome.next_allowed_at,
            message=outcome.message,
            degraded=outcome.degraded,
        )
