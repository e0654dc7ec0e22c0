"""Value objects for price acquisition."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from tomanfolio.constants import GOLD18_SYMBOL, SourceLabel

# symbol -> unit price in toman
PriceMap = dict[str, Decimal]

# A single provider fetch; raises on failure, returns {} when nothing matched
PriceSource = Callable[[], Mapping[str, Decimal]]


@dataclass(frozen=True)
class PriceSnapshot:
    """One immutable, timestamped set of resolved prices.

    Superseded (never mutated) on refresh. The scalar fields are convenience
    copies of the USD, EUR and 18-karat gold entries.
    """

    usd_to_toman: Decimal
    eur_to_toman: Decimal
    gold18_to_toman: Decimal
    fiat_prices: PriceMap
    crypto_prices: PriceMap
    gold_prices: PriceMap
    fetched_at: datetime

    def price_lookup(self) -> PriceMap:
        """Merge all categories into one ``symbol -> price`` lookup.

        Precedence, later overriding earlier: the 18-karat gold scalar, then
        fiat, crypto and gold maps. A ``GOLD18`` entry in the gold map
        therefore wins over the scalar.
        """
        lookup: PriceMap = {GOLD18_SYMBOL: self.gold18_to_toman}
        lookup.update(self.fiat_prices)
        lookup.update(self.crypto_prices)
        lookup.update(self.gold_prices)
        return lookup


@dataclass(frozen=True)
class CategoryResult:
    """Outcome of resolving one price category through its fallback chain."""

    data: PriceMap = field(default_factory=dict)
    source_label: str = SourceLabel.NONE

    @property
    def is_empty(self) -> bool:
        return not self.data


@dataclass(frozen=True)
class SourceReport:
    """Which source served a category during a refresh."""

    type: str
    source: str


@dataclass(frozen=True)
class RefreshDecision:
    """Result of checking the refresh cooldown."""

    allowed: bool
    next_allowed_at: datetime | None
    message: str | None = None


@dataclass(frozen=True)
class RefreshOutcome:
    """Everything the refresh endpoint reports back."""

    snapshot: PriceSnapshot
    sources: list[SourceReport]
    skipped: bool
    next_allowed_at: datetime | None = None
    message: str | None = None
    degraded: bool = False
