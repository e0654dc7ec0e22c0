"""Portfolio valuation service - single source of truth for value calculations.

Valuation is a pure function of the transaction ledger and a price
snapshot. Nothing here is cached; callers recompute whenever either input
changes.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Protocol

from tomanfolio.constants import BuyCurrency
from tomanfolio.services.market_data.price_types import PriceSnapshot
from tomanfolio.services.portfolio.asset_catalog import get_asset_detail
from tomanfolio.services.portfolio.valuation_types import AssetSummary, PortfolioSummary

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


class LedgerEntry(Protocol):
    """Fields valuation reads from a transaction (ORM row or schema)."""

    asset_symbol: str
    quantity: Decimal
    buy_price_per_unit: Decimal
    buy_currency: str
    fees_toman: Decimal


def _percent(part: Decimal, whole: Decimal) -> Decimal:
    """``part / whole * 100``, or zero when ``whole`` is not positive."""
    if whole <= 0:
        return _ZERO
    return part / whole * _HUNDRED


class PortfolioValuationService:
    """Calculates holdings, cost basis, P&L and allocation.

    All methods are static; the service holds no state.
    """

    @staticmethod
    def transaction_cost(entry: LedgerEntry, usd_to_toman: Decimal) -> Decimal:
        """Cost of one purchase in toman, fees included.

        USD purchases are converted at the snapshot's current USD rate, not
        the rate on the purchase date.
        """
        gross = Decimal(entry.quantity) * Decimal(entry.buy_price_per_unit)
        if entry.buy_currency == BuyCurrency.USD:
            gross *= usd_to_toman
        return gross + Decimal(entry.fees_toman or 0)

    @staticmethod
    def compute_summary(
        transactions: Iterable[LedgerEntry],
        snapshot: PriceSnapshot | None,
    ) -> PortfolioSummary:
        """Value a ledger against a snapshot.

        Args:
            transactions: Ledger entries; their order defines tie-break order
            snapshot: Current prices, or None when prices are unavailable

        Returns:
            The summary; all zeros with no assets when the ledger is empty
            or there is no snapshot. Held symbols missing from the snapshot
            are valued at zero rather than dropped.
        """
        transactions = list(transactions)
        if snapshot is None or not transactions:
            return PortfolioSummary()

        prices = snapshot.price_lookup()
        usd_rate = snapshot.usd_to_toman

        # dict preserves first-seen order for the stable sort below
        assets: dict[str, AssetSummary] = {}
        for entry in transactions:
            symbol = entry.asset_symbol
            asset = assets.get(symbol)
            if asset is None:
                detail = get_asset_detail(symbol)
                price = prices.get(symbol) or _ZERO
                asset = AssetSummary(
                    symbol=symbol,
                    name=detail.name,
                    type=detail.type,
                    total_quantity=_ZERO,
                    current_price_toman=price,
                    current_value_toman=_ZERO,
                    cost_basis_toman=_ZERO,
                    pnl_toman=_ZERO,
                    pnl_percent=_ZERO,
                    current_price_usd=price / usd_rate if usd_rate > 0 else None,
                )
                assets[symbol] = asset
            asset.total_quantity += Decimal(entry.quantity)
            asset.cost_basis_toman += PortfolioValuationService.transaction_cost(entry, usd_rate)

        total_value = _ZERO
        total_cost = _ZERO
        for asset in assets.values():
            asset.current_value_toman = asset.total_quantity * asset.current_price_toman
            asset.pnl_toman = asset.current_value_toman - asset.cost_basis_toman
            asset.pnl_percent = _percent(asset.pnl_toman, asset.cost_basis_toman)
            total_value += asset.current_value_toman
            total_cost += asset.cost_basis_toman
            if not asset.current_price_toman:
                logger.warning(f"No price for held asset {asset.symbol}; valuing at zero")

        for asset in assets.values():
            asset.allocation_percent = _percent(asset.current_value_toman, total_value)

        total_pnl = total_value - total_cost
        return PortfolioSummary(
            total_value_toman=total_value,
            total_cost_basis_toman=total_cost,
            total_pnl_toman=total_pnl,
            total_pnl_percent=_percent(total_pnl, total_cost),
            assets=sorted(assets.values(), key=lambda a: a.current_value_toman, reverse=True),
        )
