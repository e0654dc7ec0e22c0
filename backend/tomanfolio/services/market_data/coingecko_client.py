"""CoinGecko API client for single-asset crypto lookups.

Used to fill coins that the primary crypto board frequently omits. Prices
are quoted in USD and converted to toman by the caller with the resolved
USD rate.
"""

import logging
from decimal import Decimal, InvalidOperation

from tomanfolio.config import settings
from tomanfolio.services.shared.http_client import HTTPClient, HTTPClientError

logger = logging.getLogger(__name__)

COINGECKO_BASE_URL = "https://api.coingecko.com/api/v3"

# Coins often missing from the primary board, by CoinGecko id
SUPPLEMENTAL_COIN_IDS: dict[str, str] = {
    "ETC": "ethereum-classic",
}

# Board keys some providers use instead of our symbol
SUPPLEMENTAL_COIN_ALIASES: dict[str, tuple[str, ...]] = {
    "ETC": ("ETHEREUM CLASSIC", "ETHEREUM-CLASSIC"),
}


class CoinGeckoClient(HTTPClient):
    """Client for fetching USD spot prices from CoinGecko.

    Usage:
        client = CoinGeckoClient()
        prices = client.get_usd_prices({"ETC": "ethereum-classic"})
    """

    def __init__(self, api_key: str | None = None, base_url: str = COINGECKO_BASE_URL):
        self.api_key = api_key if api_key is not None else settings.coingecko_api_key
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-cg-demo-api-key"] = self.api_key
        super().__init__(
            base_url=base_url,
            timeout=settings.price_source_timeout_seconds,
            max_retries=settings.price_source_max_attempts,
            headers=headers,
        )

    def get_usd_prices(self, coin_ids: dict[str, str]) -> dict[str, Decimal]:
        """Get current USD prices for several coins.

        Args:
            coin_ids: Mapping of our symbol to CoinGecko id

        Returns:
            Dict mapping symbol to USD price; empty on any API error.
            Entries that are missing or not a positive number are skipped.
        """
        if not coin_ids:
            return {}

        params = {"ids": ",".join(coin_ids.values()), "vs_currencies": "usd"}
        try:
            result = self.get_json("/simple/price", params=params)
        except HTTPClientError as e:
            logger.error(f"Failed to fetch CoinGecko prices: {e}")
            return {}

        if not isinstance(result, dict):
            logger.error(f"Unexpected CoinGecko response: {type(result).__name__}")
            return {}

        prices: dict[str, Decimal] = {}
        for symbol, coin_id in coin_ids.items():
            entry = result.get(coin_id)
            if not isinstance(entry, dict) or entry.get("usd") is None:
                continue
            try:
                usd = Decimal(str(entry["usd"]))
            except (InvalidOperation, TypeError, ValueError):
                logger.warning(f"Unparseable CoinGecko price for {coin_id}: {entry['usd']!r}")
                continue
            if usd.is_finite() and usd > 0:
                prices[symbol] = usd

        logger.info(f"Fetched CoinGecko prices for {len(prices)}/{len(coin_ids)} coins")
        return prices
