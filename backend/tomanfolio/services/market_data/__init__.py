"""Live price acquisition for fiat, crypto and gold.

- Provider clients: Alanchand (primary), Telegram channel, Navasan, TGJU,
  CoinGecko
- FallbackResolver: ordered primary/backup chain per category
- PriceAggregator: builds one PriceSnapshot from the three chains
- RefreshGate / PriceRefreshService: cooldown and current-snapshot holder

PriceRefreshService is imported from its module directly; it depends on the
repository layer, which itself imports the value types defined here.
"""

from .exceptions import PriceSourceError
from .fallback_resolver import FallbackResolver
from .price_aggregator import PriceAggregator, build_default_snapshot
from .price_types import CategoryResult, PriceSnapshot, RefreshOutcome, SourceReport
from .refresh_gate import RefreshGate

__all__ = [
    "CategoryResult",
    "FallbackResolver",
    "PriceAggregator",
    "PriceSnapshot",
    "PriceSourceError",
    "RefreshGate",
    "RefreshOutcome",
    "SourceReport",
    "build_default_snapshot",
]
