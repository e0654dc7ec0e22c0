"""Telegram channel price posts - backup source for every category.

Reads the public web preview of a price channel (``t.me/s/<channel>``),
takes the most recent message and pulls ``<name> : <number> <unit>`` lines
out of it. Names resolve through ordered ``(pattern, symbol)`` tables by
substring containment, first match wins, so each table lists the most
specific names first ("دلار کانادا" before "دلار").
"""

import logging
import re

from bs4 import BeautifulSoup

from tomanfolio.config import settings
from tomanfolio.services.market_data.exceptions import PriceSourceError
from tomanfolio.services.market_data.price_types import PriceMap
from tomanfolio.services.shared.http_client import HTTPClient
from tomanfolio.services.shared.number_normalizer import (
    normalize_number,
    rial_to_toman,
    to_ascii_digits,
)

logger = logging.getLogger(__name__)

SOURCE_NAME = "telegram"

NamePatterns = tuple[tuple[str, str], ...]

CURRENCY_PATTERNS: NamePatterns = (
    ("دلار کانادا", "CAD"),
    ("دلار استرالیا", "AUD"),
    ("دلار نیوزلند", "NZD"),
    ("دلار سنگاپور", "SGD"),
    ("دلار هنگ کنگ", "HKD"),
    ("دلار", "USD"),
    ("یورو", "EUR"),
    ("پوند", "GBP"),
    ("درهم", "AED"),
    ("لیر", "TRY"),
    ("یوان", "CNY"),
    ("روبل", "RUB"),
    ("فرانک", "CHF"),
    ("ین ژاپن", "JPY"),
    ("ریال عمان", "OMR"),
    ("ریال عربستان", "SAR"),
    ("ریال قطر", "QAR"),
    ("دینار کویت", "KWD"),
    ("دینار عراق", "IQD"),
    ("دینار بحرین", "BHD"),
    ("کرون سوئد", "SEK"),
    ("کرون نروژ", "NOK"),
    ("کرون دانمارک", "DKK"),
    ("روپیه هند", "INR"),
    ("روپیه پاکستان", "PKR"),
    ("رینگیت", "MYR"),
    ("بات تایلند", "THB"),
    ("لاری", "GEL"),
    ("منات آذربایجان", "AZN"),
    ("افغانی", "AFN"),
)

GOLD_PATTERNS: NamePatterns = (
    ("نیم سکه", "NIM"),
    ("ربع سکه", "ROB"),
    ("سکه گرمی", "SEK"),
    ("سکه بهار", "BAHAR"),
    ("سکه امامی", "SEKKEH"),
    ("سکه", "SEKKEH"),
    ("طلای 18", "GOLD18"),
    ("طلا 18", "GOLD18"),
    ("18 عیار", "GOLD18"),
    ("آبشده", "ABSHODEH"),
    ("مثقال", "ABSHODEH"),
)

CRYPTO_PATTERNS: NamePatterns = (
    ("اتریوم کلاسیک", "ETC"),
    ("اتریوم", "ETH"),
    ("بیت کوین کش", "BCH"),
    ("بیت کوین", "BTC"),
    ("تتر", "USDT"),
    ("ریپل", "XRP"),
    ("بایننس", "BNB"),
    ("دوج", "DOGE"),
    ("شیبا", "SHIB"),
    ("کاردانو", "ADA"),
    ("سولانا", "SOL"),
    ("ترون", "TRX"),
    ("تون کوین", "TON"),
    ("نات کوین", "NOT"),
    ("لایت کوین", "LTC"),
    ("پولکادات", "DOT"),
    ("چین لینک", "LINK"),
    ("آوالانچ", "AVAX"),
)

RIAL_UNITS = ("ریال",)
TOMAN_UNITS = ("تومان",)

# Bullets, emoji markers and separators that start a new price line
_LINE_SPLIT = re.compile(r"[\n\r•●▪▫◾◽■□◆◇🔸🔹🔶🔷💵💶💷💰🪙🥇|]+")
_PRICE_LINE = re.compile(
    r"(?P<name>[^:：]+?)\s*[:：]\s*"
    r"(?P<number>[0-9][0-9,٬.٫]*)\s*"
    r"(?P<unit>ریال|تومان)"
)


def normalize_text(text: str) -> str:
    """Normalize Arabic letter variants, digits and spacing in a message."""
    text = to_ascii_digits(text)
    text = text.replace("ي", "ی").replace("ك", "ک").replace("ـ", "")
    text = re.sub(r"[\u200c\u200e\u200f\ufe0f]", " ", text)
    return re.sub(r"[ \t]+", " ", text)


def resolve_symbol(name: str, patterns: NamePatterns) -> str | None:
    """Return the symbol of the first pattern contained in ``name``."""
    for pattern, symbol in patterns:
        if pattern in name:
            return symbol
    return None


def parse_price_lines(text: str, patterns: NamePatterns) -> PriceMap:
    """Extract prices from one message.

    Rial values are converted to toman. Lines whose name matches no pattern
    or whose number is unparseable are skipped; the first occurrence of a
    symbol wins.
    """
    prices: PriceMap = {}
    for line in _LINE_SPLIT.split(normalize_text(text)):
        match = _PRICE_LINE.search(line)
        if not match:
            continue
        symbol = resolve_symbol(match.group("name").strip(), patterns)
        if symbol is None or symbol in prices:
            continue
        value = normalize_number(match.group("number"))
        if not value:
            continue
        if match.group("unit") in RIAL_UNITS:
            value = rial_to_toman(value)
        prices[symbol] = value
    return prices


def latest_message_text(html: str) -> str | None:
    """Return the text of the newest message on a channel preview page."""
    soup = BeautifulSoup(html, "html.parser")
    messages = soup.select("div.tgme_widget_message_text")
    if not messages:
        return None
    return messages[-1].get_text("\n")


class TelegramChannelClient(HTTPClient):
    """Reads the latest post of a public price channel."""

    def __init__(self, channel: str | None = None, base_url: str | None = None):
        super().__init__(
            base_url=base_url or settings.telegram_base_url,
            timeout=settings.price_source_timeout_seconds,
            max_retries=settings.price_source_max_attempts,
        )
        self.channel = channel if channel is not None else settings.telegram_price_channel

    def _latest_message(self) -> str:
        if not self.channel:
            raise PriceSourceError(SOURCE_NAME, "no channel configured")
        text = latest_message_text(self.get_text(f"/{self.channel}"))
        if text is None:
            raise PriceSourceError(SOURCE_NAME, f"no messages found in {self.channel}")
        return text

    def _fetch(self, patterns: NamePatterns, label: str) -> PriceMap:
        prices = parse_price_lines(self._latest_message(), patterns)
        logger.info(f"Telegram {label}: {len(prices)} prices from {self.channel}")
        return prices

    def fetch_currencies(self) -> PriceMap:
        return self._fetch(CURRENCY_PATTERNS, "currencies")

    def fetch_crypto(self) -> PriceMap:
        return self._fetch(CRYPTO_PATTERNS, "crypto")

    def fetch_gold(self) -> PriceMap:
        return self._fetch(GOLD_PATTERNS, "gold")
