"""Builds one canonical price snapshot from all provider chains.

Fiat resolves first because the USD rate it yields is needed to convert
USD-quoted gold rows and single-asset crypto lookups. Crypto and gold have
no dependency on each other and resolve concurrently afterwards.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from decimal import Decimal

from tomanfolio.constants import GOLD18_ALIASES, GOLD18_SYMBOL, PriceCategory
from tomanfolio.services.market_data.alanchand_client import AlanchandClient
from tomanfolio.services.market_data.coingecko_client import (
    SUPPLEMENTAL_COIN_ALIASES,
    SUPPLEMENTAL_COIN_IDS,
    CoinGeckoClient,
)
from tomanfolio.services.market_data.fallback_resolver import FallbackResolver
from tomanfolio.services.market_data.navasan_client import NavasanClient
from tomanfolio.services.market_data.price_types import (
    CategoryResult,
    PriceMap,
    PriceSnapshot,
    SourceReport,
)
from tomanfolio.services.market_data.telegram_channel_client import TelegramChannelClient
from tomanfolio.services.market_data.tgju_client import TGJUClient
from tomanfolio.services.shared.number_normalizer import round_toman

logger = logging.getLogger(__name__)

# Last-resort rates when neither a live source nor a previous snapshot has them
FALLBACK_USD_TO_TOMAN = Decimal("70000")
FALLBACK_EUR_TO_TOMAN = Decimal("74000")
FALLBACK_GOLD18_TO_TOMAN = Decimal("4700000")


def build_default_snapshot(now: datetime | None = None) -> PriceSnapshot:
    """The hardcoded snapshot served when no live or cached prices exist."""
    return PriceSnapshot(
        usd_to_toman=FALLBACK_USD_TO_TOMAN,
        eur_to_toman=FALLBACK_EUR_TO_TOMAN,
        gold18_to_toman=FALLBACK_GOLD18_TO_TOMAN,
        fiat_prices={"USD": FALLBACK_USD_TO_TOMAN, "EUR": FALLBACK_EUR_TO_TOMAN},
        crypto_prices={"USDT": FALLBACK_USD_TO_TOMAN},
        gold_prices={alias: FALLBACK_GOLD18_TO_TOMAN for alias in GOLD18_ALIASES},
        fetched_at=now or datetime.now(UTC),
    )


def alias_gold18(gold_prices: PriceMap) -> PriceMap:
    """Fill every 18-karat gold code from whichever one the provider used."""
    aliased = dict(gold_prices)
    value = next((aliased[code] for code in GOLD18_ALIASES if aliased.get(code)), None)
    if value is not None:
        for code in GOLD18_ALIASES:
            aliased.setdefault(code, value)
    return aliased


class PriceAggregator:
    """Resolves fiat, crypto and gold and assembles a PriceSnapshot.

    Provider clients are injected so tests can substitute fakes; defaults
    are built from settings.
    """

    def __init__(
        self,
        alanchand: AlanchandClient | None = None,
        telegram: TelegramChannelClient | None = None,
        navasan: NavasanClient | None = None,
        tgju: TGJUClient | None = None,
        coingecko: CoinGeckoClient | None = None,
        resolver: FallbackResolver | None = None,
        supplemental_coin_ids: dict[str, str] | None = None,
        supplemental_coin_aliases: dict[str, tuple[str, ...]] | None = None,
    ):
        self.alanchand = alanchand or AlanchandClient()
        self.telegram = telegram or TelegramChannelClient()
        self.navasan = navasan or NavasanClient()
        self.tgju = tgju or TGJUClient()
        self.coingecko = coingecko or CoinGeckoClient()
        self.resolver = resolver or FallbackResolver()
        self.supplemental_coin_ids = (
            SUPPLEMENTAL_COIN_IDS if supplemental_coin_ids is None else supplemental_coin_ids
        )
        self.supplemental_coin_aliases = (
            SUPPLEMENTAL_COIN_ALIASES
            if supplemental_coin_aliases is None
            else supplemental_coin_aliases
        )

    def close(self) -> None:
        """Close every provider client's connection pool."""
        for client in (self.alanchand, self.telegram, self.navasan, self.tgju, self.coingecko):
            client.close()

    def __enter__(self) -> "PriceAggregator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def refresh(
        self,
        previous: PriceSnapshot | None,
        now: datetime | None = None,
    ) -> tuple[PriceSnapshot, list[SourceReport]]:
        """Fetch all categories and return the new snapshot with its sources.

        A category whose every source fails keeps the previous snapshot's
        prices (or an empty map when there is none).
        """
        now = now or datetime.now(UTC)

        fiat = self.resolver.resolve(
            self.alanchand.fetch_currencies,
            [self.telegram.fetch_currencies, self.navasan.fetch_currencies],
            PriceCategory.FIAT,
        )
        fiat_prices = self._retain(fiat, previous.fiat_prices if previous else None, PriceCategory.FIAT)
        usd_rate = self._usd_rate(fiat_prices, previous)

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="price-refresh") as pool:
            crypto_future = pool.submit(self._resolve_crypto)
            gold_future = pool.submit(self._resolve_gold, usd_rate)
            crypto = crypto_future.result()
            gold = gold_future.result()

        crypto_prices = self._retain(
            crypto, previous.crypto_prices if previous else None, PriceCategory.CRYPTO
        )
        crypto_prices = self._supplement_crypto(crypto_prices, usd_rate)

        gold_prices = alias_gold18(
            self._retain(gold, previous.gold_prices if previous else None, PriceCategory.GOLD)
        )
        gold18_rate = gold_prices.get(GOLD18_SYMBOL) or (
            previous.gold18_to_toman if previous else FALLBACK_GOLD18_TO_TOMAN
        )

        # Backfill scalars missing from the resolved maps
        fiat_prices.setdefault("USD", usd_rate)
        if "EUR" not in fiat_prices:
            fiat_prices["EUR"] = previous.eur_to_toman if previous else FALLBACK_EUR_TO_TOMAN
        for code in GOLD18_ALIASES:
            gold_prices.setdefault(code, gold18_rate)

        snapshot = PriceSnapshot(
            usd_to_toman=usd_rate,
            eur_to_toman=fiat_prices["EUR"],
            gold18_to_toman=gold18_rate,
            fiat_prices=fiat_prices,
            crypto_prices=crypto_prices,
            gold_prices=gold_prices,
            fetched_at=now,
        )
        sources = [
            SourceReport(type=PriceCategory.FIAT, source=fiat.source_label),
            SourceReport(type=PriceCategory.CRYPTO, source=crypto.source_label),
            SourceReport(type=PriceCategory.GOLD, source=gold.source_label),
        ]
        logger.info(
            f"Price snapshot built: USD={usd_rate}, {len(fiat_prices)} fiat, "
            f"{len(crypto_prices)} crypto, {len(gold_prices)} gold"
        )
        return snapshot, sources

    def _resolve_crypto(self) -> CategoryResult:
        return self.resolver.resolve(
            self.alanchand.fetch_crypto,
            [self.telegram.fetch_crypto],
            PriceCategory.CRYPTO,
        )

    def _resolve_gold(self, usd_rate: Decimal) -> CategoryResult:
        return self.resolver.resolve(
            lambda: self.alanchand.fetch_gold(usd_rate),
            [self.telegram.fetch_gold, self.tgju.fetch_gold],
            PriceCategory.GOLD,
        )

    @staticmethod
    def _retain(result: CategoryResult, previous: PriceMap | None, category: str) -> PriceMap:
        if not result.is_empty:
            return dict(result.data)
        if previous:
            logger.warning(f"Keeping previous {category} prices ({len(previous)} symbols)")
            return dict(previous)
        logger.warning(f"No {category} prices available")
        return {}

    @staticmethod
    def _usd_rate(fiat_prices: PriceMap, previous: PriceSnapshot | None) -> Decimal:
        if fiat_prices.get("USD"):
            return fiat_prices["USD"]
        if previous is not None:
            return previous.usd_to_toman
        return FALLBACK_USD_TO_TOMAN

    def _supplement_crypto(self, crypto_prices: PriceMap, usd_rate: Decimal) -> PriceMap:
        """Fill supplemental coins missing (or zero) on the boards.

        A coin quoted under one of its alias keys is copied to its symbol
        instead of being looked up. A failed lookup keeps the map as is.
        """
        supplemented = dict(crypto_prices)
        missing: dict[str, str] = {}
        for symbol, coin_id in self.supplemental_coin_ids.items():
            if supplemented.get(symbol):
                continue
            alias_price = next(
                (supplemented[alias] for alias in self.supplemental_coin_aliases.get(symbol, ())
                 if supplemented.get(alias)),
                None,
            )
            if alias_price is not None:
                supplemented[symbol] = alias_price
            else:
                missing[symbol] = coin_id
        if not missing:
            return supplemented

        try:
            usd_prices = self.coingecko.get_usd_prices(missing)
        except Exception as e:
            logger.warning(f"CoinGecko lookup for {sorted(missing)} failed: {e}")
            return supplemented

        for symbol, usd_price in usd_prices.items():
            supplemented[symbol] = round_toman(usd_price * usd_rate)
            logger.info(f"Supplemented {symbol} from CoinGecko: {supplemented[symbol]}")
        return supplemented
