"""Value objects for portfolio valuation."""

from dataclasses import dataclass, field
from decimal import Decimal

_ZERO = Decimal("0")


@dataclass
class AssetSummary:
    """Aggregated position in one asset, valued against a price snapshot."""

    symbol: str
    name: str
    type: str
    total_quantity: Decimal
    current_price_toman: Decimal
    current_value_toman: Decimal
    cost_basis_toman: Decimal
    pnl_toman: Decimal
    pnl_percent: Decimal
    allocation_percent: Decimal = _ZERO
    current_price_usd: Decimal | None = None


@dataclass
class PortfolioSummary:
    """Portfolio-wide totals with per-asset breakdown, largest value first."""

    total_value_toman: Decimal = _ZERO
    total_cost_basis_toman: Decimal = _ZERO
    total_pnl_toman: Decimal = _ZERO
    total_pnl_percent: Decimal = _ZERO
    assets: list[AssetSummary] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.assets
