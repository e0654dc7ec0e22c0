"""Portfolio API router - valuation and daily history."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tomanfolio.database import get_db
from tomanfolio.dependencies.auth import get_current_user
from tomanfolio.models.user import User
from tomanfolio.routers.prices import get_price_refresh_service
from tomanfolio.schemas.portfolio import (
    BackfillRequest,
    BackfillResponse,
    PortfolioSnapshotResponse,
    PortfolioSummarySchema,
)
from tomanfolio.services.market_data.price_refresh_service import PriceRefreshService
from tomanfolio.services.portfolio.snapshot_service import PortfolioSnapshotService
from tomanfolio.services.portfolio.valuation_service import PortfolioValuationService
from tomanfolio.services.repositories.transaction_repository import TransactionRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


@router.get("/summary", response_model=PortfolioSummarySchema)
def get_summary(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    prices: PriceRefreshService = Depends(get_price_refresh_service),
):
    """Value the caller's ledger against the current snapshot."""
    transactions = TransactionRepository(db).find_by_user(current_user.id)
    return PortfolioValuationService.compute_summary(transactions, prices.current_snapshot())


@router.get("/snapshots", response_model=list[PortfolioSnapshotResponse])
def list_snapshots(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Daily totals for the caller, oldest first."""
    return PortfolioSnapshotService(db).find_by_user(current_user.id, start_date, end_date)


@router.post("/snapshots", response_model=PortfolioSnapshotResponse)
def record_snapshot(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    prices: PriceRefreshService = Depends(get_price_refresh_service),
):
    """Store today's totals, replacing any stored earlier today."""
    return PortfolioSnapshotService(db).record_today(current_user.id, prices.current_snapshot())


@router.post("/snapshots/backfill", response_model=BackfillResponse)
def backfill_snapshots(
    data: BackfillRequest | None = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    prices: PriceRefreshService = Depends(get_price_refresh_service),
):
    """Estimate daily history since the first purchase when none exists yet."""
    service = PortfolioSnapshotService(db)
    if service.find_by_user(current_user.id):
        return BackfillResponse(success=False, message="Snapshots exist")

    data = data or BackfillRequest()
    current_value = data.current_total_value
    current_cost = data.current_cost_basis
    if current_value is None or current_cost is None:
        summary = PortfolioValuationService.compute_summary(
            TransactionRepository(db).find_by_user(current_user.id), prices.current_snapshot()
        )
        current_value = summary.total_value_toman if current_value is None else current_value
        current_cost = summary.total_cost_basis_toman if current_cost is None else current_cost

    count = service.backfill(current_user.id, current_value, current_cost)
    if not count:
        return BackfillResponse(success=False, message="Nothing to backfill")

    logger.info(f"Backfilled {count} snapshots for {current_user.username}")
    return BackfillResponse(success=True, snapshot_count=count)
