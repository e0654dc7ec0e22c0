"""Pydantic schemas for ledger transactions."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionSave(BaseModel):
    """Create or replace a purchase; an unknown or missing id creates one."""

    id: str | None = Field(None, max_length=36)
    asset_symbol: str = Field(..., min_length=1, max_length=50)
    quantity: Decimal = Field(..., gt=0, description="Units bought, asset-native")
    buy_date_time: datetime = Field(..., description="When the purchase happened")
    buy_price_per_unit: Decimal = Field(..., gt=0, description="Unit price in buy_currency")
    buy_currency: Literal["TOMAN", "USD"] = "TOMAN"
    fees_toman: Decimal = Field(default=Decimal("0"), ge=0, description="Always in toman")
    note: str | None = Field(None, max_length=500)

    @field_validator("asset_symbol")
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return v.strip().upper()


class TransactionResponse(BaseModel):
    """Schema for Transaction response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    asset_symbol: str
    quantity: Decimal
    buy_date_time: datetime
    buy_price_per_unit: Decimal
    buy_currency: str
    fees_toman: Decimal
    note: str | None = None
    created_at: datetime | None = None
