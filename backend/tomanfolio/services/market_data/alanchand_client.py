"""Alanchand price boards - primary source for fiat, crypto and gold.

Each board is an HTML table whose rows link to an instrument page through an
``onclick`` handler; the last path segment of that link is the canonical
symbol. Parsing is kept in module-level functions so it can be tested on
saved HTML without network access.
"""

import logging
from decimal import Decimal

from bs4 import BeautifulSoup, Tag

from tomanfolio.config import settings
from tomanfolio.constants import GOLD18_ALIASES
from tomanfolio.services.market_data.price_types import PriceMap
from tomanfolio.services.shared.http_client import HTTPClient
from tomanfolio.services.shared.number_normalizer import normalize_number

logger = logging.getLogger(__name__)

CURRENCY_BOARD_PATH = "/currencies-price"
CRYPTO_BOARD_PATH = "/crypto-price"
GOLD_BOARD_PATH = "/gold-price"

_USD_MARKER = "$"


def _row_symbol(row: Tag) -> str | None:
    """Extract the symbol from a row's ``onclick`` link target."""
    onclick = row.get("onclick") or ""
    if not isinstance(onclick, str) or "/" not in onclick:
        return None
    slug = onclick.rsplit("/", 1)[-1].replace("'", "").replace('"', "").strip(" ;")
    return slug.upper() or None


def _cell_text(row: Tag, selector: str) -> str:
    cell = row.select_one(selector)
    return cell.get_text() if cell else ""


def _own_text(cell: Tag) -> str:
    """Text directly inside ``cell``, excluding nested elements."""
    return "".join(cell.find_all(string=True, recursive=False))


def _board_rows(html: str) -> list[Tag]:
    soup = BeautifulSoup(html, "html.parser")
    return soup.select("table tbody tr")


def parse_currency_board(html: str) -> PriceMap:
    """Parse the currency board; sell price preferred, buy price as fallback."""
    prices: PriceMap = {}
    for row in _board_rows(html):
        symbol = _row_symbol(row)
        if not symbol:
            continue
        sell = normalize_number(_cell_text(row, ".sellPrice"))
        buy = normalize_number(_cell_text(row, ".buyPrice"))
        price = sell or buy
        if price:
            prices[symbol] = price
    return prices


def parse_crypto_board(html: str) -> PriceMap:
    """Parse the crypto board using the toman column."""
    prices: PriceMap = {}
    for row in _board_rows(html):
        symbol = _row_symbol(row)
        if not symbol:
            continue
        price = normalize_number(_cell_text(row, ".tmn"))
        if price:
            prices[symbol] = price
    return prices


def parse_gold_board(html: str, usd_rate: Decimal) -> PriceMap:
    """Parse the gold board.

    Rows quoted in dollars (``$`` in the price cell) are converted with
    ``usd_rate``. Either 18-karat code fills both aliases.
    """
    prices: PriceMap = {}
    for row in _board_rows(html):
        symbol = _row_symbol(row)
        if not symbol:
            continue
        cell = row.select_one("td.priceTd")
        if cell is None:
            continue
        text = _own_text(cell)
        value = normalize_number(text)
        if _USD_MARKER in text:
            value = value * usd_rate
        if not value:
            continue
        prices[symbol] = value
        if symbol in GOLD18_ALIASES:
            for alias in GOLD18_ALIASES:
                prices[alias] = value
    return prices


class AlanchandClient(HTTPClient):
    """Scrapes the Alanchand currency, crypto and gold boards."""

    def __init__(self, base_url: str | None = None):
        super().__init__(
            base_url=base_url or settings.alanchand_base_url,
            timeout=settings.price_source_timeout_seconds,
            max_retries=settings.price_source_max_attempts,
            headers={"Accept": "text/html,application/xhtml+xml"},
        )

    def fetch_currencies(self) -> PriceMap:
        prices = parse_currency_board(self.get_text(CURRENCY_BOARD_PATH))
        logger.info(f"Alanchand currency board: {len(prices)} prices")
        return prices

    def fetch_crypto(self) -> PriceMap:
        prices = parse_crypto_board(self.get_text(CRYPTO_BOARD_PATH))
        logger.info(f"Alanchand crypto board: {len(prices)} prices")
        return prices

    def fetch_gold(self, usd_rate: Decimal) -> PriceMap:
        prices = parse_gold_board(self.get_text(GOLD_BOARD_PATH), usd_rate)
        logger.info(f"Alanchand gold board: {len(prices)} prices")
        return prices
