"""Cooldown policy between live price refreshes."""

import math
from datetime import datetime, timedelta

from tomanfolio.services.market_data.price_types import PriceSnapshot, RefreshDecision


def format_remaining(remaining: timedelta) -> str:
    """Human-readable remaining time, e.g. ``"3 minutes 20 seconds"``."""
    total_seconds = max(math.ceil(remaining.total_seconds()), 0)
    minutes, seconds = divmod(total_seconds, 60)
    parts = []
    if minutes:
        parts.append(f"{minutes} minute{'s' if minutes != 1 else ''}")
    if seconds or not parts:
        parts.append(f"{seconds} second{'s' if seconds != 1 else ''}")
    return " ".join(parts)


class RefreshGate:
    """Allows a refresh once ``min_interval`` has elapsed since the last one.

    ``forced`` bypasses the cooldown; whether a caller may force is decided
    by the HTTP layer.
    """

    def __init__(self, min_interval: timedelta):
        self.min_interval = min_interval

    def should_refresh(
        self,
        previous: PriceSnapshot | None,
        now: datetime,
        forced: bool = False,
    ) -> RefreshDecision:
        if forced or previous is None:
            return RefreshDecision(allowed=True, next_allowed_at=None)

        next_allowed_at = previous.fetched_at + self.min_interval
        if now >= next_allowed_at:
            return RefreshDecision(allowed=True, next_allowed_at=None)

        remaining = next_allowed_at - now
        return RefreshDecision(
            allowed=False,
            next_allowed_at=next_allowed_at,
            message=f"Prices were refreshed recently. Try again in {format_remaining(remaining)}.",
        )
