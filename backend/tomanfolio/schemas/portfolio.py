"""Schemas for portfolio valuation and history endpoints."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class AssetSummarySchema(BaseModel):
    """One aggregated position."""

    model_config = ConfigDict(from_attributes=True)

    symbol: str
    name: str
    type: str
    total_quantity: Decimal
    current_price_toman: Decimal
    current_value_toman: Decimal
    cost_basis_toman: Decimal
    pnl_toman: Decimal
    pnl_percent: Decimal
    allocation_percent: Decimal
    current_price_usd: Decimal | None = None


class PortfolioSummarySchema(BaseModel):
    """Portfolio totals with assets ordered by value, largest first."""

    model_config = ConfigDict(from_attributes=True)

    total_value_toman: Decimal
    total_cost_basis_toman: Decimal
    total_pnl_toman: Decimal
    total_pnl_percent: Decimal
    assets: list[AssetSummarySchema]


class PortfolioSnapshotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    snapshot_date: date
    total_value_toman: Decimal
    total_cost_basis_toman: Decimal


class BackfillRequest(BaseModel):
    """Current totals to interpolate towards; omitted values are computed."""

    current_total_value: Decimal | None = Field(None, ge=0)
    current_cost_basis: Decimal | None = Field(None, ge=0)


class BackfillResponse(BaseModel):
    success: bool
    snapshot_count: int = 0
    message: str | None = None
