"""Prices API router - current snapshot, refresh and manual override."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from tomanfolio.database import get_db
from tomanfolio.dependencies.admin import get_admin_user
from tomanfolio.dependencies.auth import get_current_user_optional
from tomanfolio.models.user import User
from tomanfolio.rate_limiter import limiter
from tomanfolio.schemas.prices import (
    PriceSnapshotSchema,
    PriceSnapshotUpdate,
    PricesResponse,
    RefreshRequest,
    RefreshResponse,
    SourceReportSchema,
)
from tomanfolio.services.market_data.price_refresh_service import PriceRefreshService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/prices", tags=["prices"])


def get_price_refresh_service(db: Session = Depends(get_db)) -> PriceRefreshService:
    """Per-request price service; overridden in tests to inject fake providers."""
    return PriceRefreshService(db)


@router.get("", response_model=PricesResponse)
def get_prices(service: PriceRefreshService = Depends(get_price_refresh_service)):
    """Current snapshot; the default one when nothing has been fetched yet."""
    return PricesResponse(
        data=PriceSnapshotSchema.model_validate(service.current_snapshot()),
        sources=[SourceReportSchema.model_validate(s) for s in service.current_sources()],
    )


@router.post("/refresh", response_model=RefreshResponse)
@limiter.limit("10/minute")
def refresh_prices(
    request: Request,
    data: RefreshRequest | None = None,
    current_user: User | None = Depends(get_current_user_optional),
    service: PriceRefreshService = Depends(get_price_refresh_service),
):
    """Refresh live prices unless the cooldown is active.

    ``forced`` is only honoured for administrators; anyone else gets the
    normal cooldown.
    """
    requested = data is not None and data.forced
    forced = requested and current_user is not None and current_user.is_admin
    if requested and not forced:
        logger.info("Ignoring forced refresh from non-admin caller")
    return RefreshResponse.from_outcome(service.refresh(forced=forced))


@router.post("/admin/force-refresh", response_model=RefreshResponse)
def force_refresh_prices(
    admin: User = Depends(get_admin_user),
    service: PriceRefreshService = Depends(get_price_refresh_service),
):
    """Refresh live prices immediately, bypassing the cooldown."""
    logger.info(f"Forced price refresh by {admin.username}")
    return RefreshResponse.from_outcome(service.refresh(forced=True))


@router.put("", response_model=PricesResponse)
def update_prices(
    data: PriceSnapshotUpdate,
    admin: User = Depends(get_admin_user),
    service: PriceRefreshService = Depends(get_price_refresh_service),
):
    """Replace the current snapshot with administrator-supplied prices."""
    snapshot = service.save_manual(data.to_snapshot())
    logger.info(f"Manual prices set by {admin.username}")
    return PricesResponse(
        data=PriceSnapshotSchema.model_validate(snapshot),
        sources=[SourceReportSchema.model_validate(s) for s in service.current_sources()],
    )
