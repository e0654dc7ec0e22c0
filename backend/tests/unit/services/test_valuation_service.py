"""Tests for PortfolioValuationService."""

from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from tomanfolio.constants import AssetType
from tomanfolio.services.portfolio import PortfolioValuationService


def _entry(symbol, quantity, price, currency="TOMAN", fees="0"):
    return SimpleNamespace(
        asset_symbol=symbol,
        quantity=Decimal(str(quantity)),
        buy_price_per_unit=Decimal(str(price)),
        buy_currency=currency,
        fees_toman=Decimal(str(fees)),
        buy_date_time=datetime(2025, 1, 1, tzinfo=UTC),
    )


class TestTransactionCost:
    def test_toman_purchase(self):
        cost = PortfolioValuationService.transaction_cost(_entry("USD", 10, 50000, fees=500), Decimal("60000"))
        assert cost == Decimal("500500")

    def test_usd_purchase_uses_current_rate(self):
        cost = PortfolioValuationService.transaction_cost(_entry("BTC", 1, 100, currency="USD"), Decimal("60000"))
        assert cost == Decimal("6000000")


class TestComputeSummary:
    def test_empty_ledger(self, price_snapshot):
        summary = PortfolioValuationService.compute_summary([], price_snapshot)

        assert summary.total_value_toman == 0
        assert summary.total_cost_basis_toman == 0
        assert summary.total_pnl_toman == 0
        assert summary.total_pnl_percent == 0
        assert summary.assets == []
        assert summary.is_empty

    def test_no_snapshot(self):
        summary = PortfolioValuationService.compute_summary([_entry("BTC", 1, 1)], None)
        assert summary.is_empty

    def test_usd_bought_crypto(self, price_snapshot):
        entry = _entry("BTC", "0.5", 40000, currency="USD", fees=100000)

        summary = PortfolioValuationService.compute_summary([entry], price_snapshot)

        (asset,) = summary.assets
        assert asset.cost_basis_toman == Decimal("1000100000")
        assert asset.current_value_toman == Decimal("1250000000")
        assert asset.pnl_toman == Decimal("249900000")
        assert asset.pnl_percent == pytest.approx(Decimal("24.99"), abs=Decimal("0.01"))
        assert asset.allocation_percent == Decimal("100")
        assert asset.type == AssetType.CRYPTO
        assert asset.name == "بیت کوین"
        assert asset.current_price_usd == Decimal("50000")
        assert summary.total_pnl_toman == Decimal("249900000")

    def test_repeated_buys_aggregate(self, price_snapshot):
        entries = [_entry("USD", 10, 45000), _entry("USD", 5, 48000, fees=1000)]

        summary = PortfolioValuationService.compute_summary(entries, price_snapshot)

        (asset,) = summary.assets
        assert asset.total_quantity == Decimal("15")
        assert asset.cost_basis_toman == Decimal("450000") + Decimal("240000") + Decimal("1000")
        assert asset.current_value_toman == Decimal("750000")
        assert asset.type == AssetType.FIAT

    def test_zero_cost_basis_gives_zero_percent(self, price_snapshot):
        summary = PortfolioValuationService.compute_summary([_entry("USDT", 1, 0)], price_snapshot)

        (asset,) = summary.assets
        assert asset.cost_basis_toman == 0
        assert asset.pnl_percent == 0
        assert summary.total_pnl_percent == 0

    def test_assets_sorted_by_value_descending(self, price_snapshot):
        entries = [_entry("USD", 1, 1), _entry("BTC", 1, 1), _entry("GOLD18", 1, 1)]

        summary = PortfolioValuationService.compute_summary(entries, price_snapshot)

        assert [a.symbol for a in summary.assets] == ["BTC", "GOLD18", "USD"]

    def test_equal_values_keep_ledger_order(self, price_snapshot):
        snapshot = replace(
            price_snapshot,
            crypto_prices={"AAA": Decimal("100"), "BBB": Decimal("100")},
        )
        entries = [_entry("BBB", 1, 1), _entry("AAA", 1, 1), _entry("BBB", 1, 1), _entry("AAA", 1, 1)]

        summary = PortfolioValuationService.compute_summary(entries, snapshot)

        assert [a.symbol for a in summary.assets] == ["BBB", "AAA"]

    def test_missing_price_valued_at_zero(self, price_snapshot):
        summary = PortfolioValuationService.compute_summary(
            [_entry("UNKNOWNCOIN", 3, 10), _entry("USD", 1, 40000)], price_snapshot
        )

        unknown = next(a for a in summary.assets if a.symbol == "UNKNOWNCOIN")
        assert unknown.current_price_toman == 0
        assert unknown.current_value_toman == 0
        assert unknown.pnl_toman == Decimal("-30")
        assert unknown.type == AssetType.CRYPTO
        assert summary.total_value_toman == Decimal("50000")

    def test_allocation_sums_to_hundred(self, price_snapshot):
        entries = [_entry("USD", 2, 1), _entry("EUR", 2, 1), _entry("18AYAR", "0.1", 1)]

        summary = PortfolioValuationService.compute_summary(entries, price_snapshot)

        assert sum(a.allocation_percent for a in summary.assets) == pytest.approx(Decimal("100"))
        usd = next(a for a in summary.assets if a.symbol == "USD")
        assert usd.allocation_percent == pytest.approx(Decimal("100000") / Decimal("610000") * 100)

    def test_gold_map_entry_wins_over_scalar(self, price_snapshot):
        snapshot = replace(price_snapshot, gold18_to_toman=Decimal("1"))

        summary = PortfolioValuationService.compute_summary([_entry("GOLD18", 1, 1)], snapshot)

        assert summary.assets[0].current_price_toman == Decimal("4000000")
