"""TGJU instrument profile pages - backup source for gold and coins.

Each instrument has its own page; the last-trade value is quoted in rial.
"""

import logging
import time
from decimal import Decimal

from bs4 import BeautifulSoup

from tomanfolio.config import settings
from tomanfolio.services.market_data.price_types import PriceMap
from tomanfolio.services.shared.http_client import HTTPClient, HTTPClientError
from tomanfolio.services.shared.number_normalizer import parse_number, rial_to_toman

logger = logging.getLogger(__name__)

# Profile slug -> canonical symbol
TGJU_PROFILES: dict[str, str] = {
    "geram18": "GOLD18",
    "sekee": "SEKKEH",
    "sekeb": "BAHAR",
    "nim": "NIM",
    "rob": "ROB",
    "gerami": "SEK",
    "mesghal": "ABSHODEH",
}

_LAST_TRADE_SELECTOR = 'span[data-col="info.last_trade.PDrCotVal"]'


def parse_profile_price(html: str) -> Decimal | None:
    """Return the toman last-trade price on a profile page, or None."""
    soup = BeautifulSoup(html, "html.parser")
    cell = soup.select_one(_LAST_TRADE_SELECTOR)
    if cell is None:
        return None
    rial = parse_number(cell.get_text())
    if not rial:
        return None
    return rial_to_toman(rial)


class TGJUClient(HTTPClient):
    """Scrapes TGJU profile pages, one request per instrument."""

    def __init__(
        self,
        profiles: dict[str, str] | None = None,
        base_url: str | None = None,
        request_interval: float = 0.5,
    ):
        super().__init__(
            base_url=base_url or settings.tgju_base_url,
            timeout=settings.price_source_timeout_seconds,
            max_retries=settings.price_source_max_attempts,
        )
        self.profiles = profiles if profiles is not None else TGJU_PROFILES
        self.request_interval = request_interval

    def fetch_gold(self) -> PriceMap:
        """Fetch every configured profile.

        A failing page is skipped; if every page fails the last error is
        raised so the resolver moves on.
        """
        prices: PriceMap = {}
        last_error: HTTPClientError | None = None
        for index, (slug, symbol) in enumerate(self.profiles.items()):
            if index and self.request_interval:
                time.sleep(self.request_interval)
            try:
                html = self.get_text(f"/profile/{slug}")
            except HTTPClientError as e:
                logger.warning(f"TGJU profile {slug} unavailable: {e}")
                last_error = e
                continue
            price = parse_profile_price(html)
            if price is not None:
                prices[symbol] = price

        if not prices and last_error is not None:
            raise last_error
        logger.info(f"TGJU gold: {len(prices)} prices")
        return prices
