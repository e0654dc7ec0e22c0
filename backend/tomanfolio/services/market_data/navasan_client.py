"""Navasan JSON API - secondary backup source for fiat rates."""

import logging

from tomanfolio.config import settings
from tomanfolio.services.market_data.exceptions import PriceSourceError
from tomanfolio.services.market_data.price_types import PriceMap
from tomanfolio.services.shared.http_client import HTTPClient
from tomanfolio.services.shared.number_normalizer import normalize_number

logger = logging.getLogger(__name__)

SOURCE_NAME = "navasan"

# Navasan item key -> canonical symbol; values are quoted in toman
NAVASAN_KEY_TO_SYMBOL: dict[str, str] = {
    "usd_sell": "USD",
    "eur": "EUR",
    "gbp": "GBP",
    "aed_sell": "AED",
    "try": "TRY",
    "cny": "CNY",
    "cad": "CAD",
    "aud": "AUD",
    "rub": "RUB",
    "chf": "CHF",
    "jpy": "JPY",
    "iqd": "IQD",
    "kwd": "KWD",
    "sar": "SAR",
    "qar": "QAR",
    "omr": "OMR",
    "inr": "INR",
    "afn": "AFN",
    "amd": "AMD",
    "azn": "AZN",
    "gel": "GEL",
}


def parse_latest(payload: object) -> PriceMap:
    """Map a ``/latest`` response body onto canonical fiat symbols."""
    if not isinstance(payload, dict):
        raise PriceSourceError(SOURCE_NAME, "unexpected response shape")

    prices: PriceMap = {}
    for key, symbol in NAVASAN_KEY_TO_SYMBOL.items():
        item = payload.get(key)
        if not isinstance(item, dict):
            continue
        value = normalize_number(item.get("value"))
        if value:
            prices[symbol] = value
    return prices


class NavasanClient(HTTPClient):
    """Client for the Navasan latest-rates endpoint."""

    def __init__(self, api_key: str | None = None, base_url: str | None = None):
        super().__init__(
            base_url=base_url or settings.navasan_base_url,
            timeout=settings.price_source_timeout_seconds,
            max_retries=settings.price_source_max_attempts,
        )
        self.api_key = api_key if api_key is not None else settings.navasan_api_key

    def fetch_currencies(self) -> PriceMap:
        if not self.api_key:
            raise PriceSourceError(SOURCE_NAME, "no API key configured")
        prices = parse_latest(self.get_json("/latest/", params={"api_key": self.api_key}))
        logger.info(f"Navasan currencies: {len(prices)} prices")
        return prices
