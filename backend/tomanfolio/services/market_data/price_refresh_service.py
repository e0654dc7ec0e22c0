"""Current-snapshot holder and refresh boundary.

Owns the contract that a snapshot is always available: the latest stored
one, or the hardcoded default. A refresh runs the cooldown check, the
aggregation and the write under one process-wide lock so concurrent
callers cannot both pass the gate. Provider connections are closed once
each aggregation finishes.
"""

import logging
import threading
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from tomanfolio.config import settings
from tomanfolio.constants import PriceCategory, SourceLabel
from tomanfolio.services.market_data.price_aggregator import (
    PriceAggregator,
    build_default_snapshot,
)
from tomanfolio.services.market_data.price_types import (
    PriceSnapshot,
    RefreshOutcome,
    SourceReport,
)
from tomanfolio.services.market_data.refresh_gate import RefreshGate
from tomanfolio.services.repositories.price_snapshot_repository import PriceSnapshotRepository

logger = logging.getLogger(__name__)

_refresh_lock = threading.Lock()

CATEGORIES = (PriceCategory.FIAT, PriceCategory.CRYPTO, PriceCategory.GOLD)


class PriceRefreshService:
    """Reads, refreshes and overrides the current price snapshot."""

    def __init__(
        self,
        db: Session,
        aggregator: PriceAggregator | None = None,
        gate: RefreshGate | None = None,
    ):
        self._repository = PriceSnapshotRepository(db)
        self._aggregator = aggregator
        self.gate = gate or RefreshGate(timedelta(seconds=settings.price_refresh_cooldown_seconds))

    @property
    def aggregator(self) -> PriceAggregator:
        # Built lazily so read-only requests never construct provider clients
        if self._aggregator is None:
            self._aggregator = PriceAggregator()
        return self._aggregator

    def current_snapshot(self) -> PriceSnapshot:
        """Latest stored snapshot, or the default one when nothing is stored."""
        return self._repository.find_latest() or build_default_snapshot()

    def current_sources(self) -> list[SourceReport]:
        return self._repository.find_latest_sources()

    def refresh(self, forced: bool = False, now: datetime | None = None) -> RefreshOutcome:
        """Refresh prices unless the cooldown denies it.

        Args:
            forced: Bypass the cooldown (callers must check privileges)
            now: Reference time, defaults to the current UTC time

        Returns:
            The outcome; a denied refresh echoes the previous snapshot with
            ``skipped=True``, an aggregation failure answers with the default
            snapshot and ``degraded=True`` without persisting it.
        """
        now = now or datetime.now(UTC)

        with _refresh_lock:
            previous = self._repository.find_latest()
            decision = self.gate.should_refresh(previous, now, forced)
            if not decision.allowed:
                logger.info(f"Price refresh skipped, next allowed at {decision.next_allowed_at}")
                return RefreshOutcome(
                    snapshot=previous or build_default_snapshot(now),
                    sources=self._repository.find_latest_sources(),
                    skipped=True,
                    next_allowed_at=decision.next_allowed_at,
                    message=decision.message,
                )

            try:
                snapshot, sources = self.aggregator.refresh(previous, now)
            except Exception:
                logger.exception("Price aggregation failed, serving default snapshot")
                return RefreshOutcome(
                    snapshot=build_default_snapshot(now),
                    sources=[SourceReport(type=c, source=SourceLabel.NONE) for c in CATEGORIES],
                    skipped=False,
                    message="Live prices are unavailable; showing default prices.",
                    degraded=True,
                )
            finally:
                self.aggregator.close()

            self._repository.save(snapshot, sources)

        logger.info(
            "Prices refreshed"
            + (" (forced)" if forced else "")
            + ": "
            + ", ".join(f"{s.type}={s.source}" for s in sources)
        )
        return RefreshOutcome(
            snapshot=snapshot,
            sources=sources,
            skipped=False,
            next_allowed_at=now + self.gate.min_interval,
        )

    def save_manual(self, snapshot: PriceSnapshot) -> PriceSnapshot:
        """Store an administrator-supplied snapshot as the current one."""
        sources = [SourceReport(type=c, source=SourceLabel.MANUAL) for c in CATEGORIES]
        with _refresh_lock:
            self._repository.save(snapshot, sources)
        logger.info(f"Manual price snapshot saved (USD={snapshot.usd_to_toman})")
        return snapshot
