"""Tests for the Alanchand board parsers and client."""

from decimal import Decimal
from unittest.mock import patch

import pytest

from tomanfolio.services.market_data.alanchand_client import (
    CRYPTO_BOARD_PATH,
    AlanchandClient,
    parse_crypto_board,
    parse_currency_board,
    parse_gold_board,
)
from tomanfolio.services.shared.http_client import HTTPClientError

CURRENCY_HTML = """
<table><tbody>
  <tr onclick="location.href='/currencies-price/usd'">
    <td>دلار آمریکا</td>
    <td class="buyPrice">۶۱٬۲۰۰</td><td class="sellPrice">۶۱٬۵۰۰</td>
  </tr>
  <tr onclick="location.href='/currencies-price/eur'">
    <td>یورو</td>
    <td class="buyPrice">66,100</td><td class="sellPrice">-</td>
  </tr>
  <tr onclick="location.href='/currencies-price/try'">
    <td>لیر</td>
    <td class="buyPrice">ناموجود</td><td class="sellPrice"></td>
  </tr>
  <tr><td>ردیف بدون لینک</td><td class="sellPrice">1000</td></tr>
</tbody></table>
"""

CRYPTO_HTML = """
<table><tbody>
  <tr onclick="location.href='/crypto-price/btc'"><td class="usd">$ 60,000</td><td class="tmn">۳٬۶۹۰٬۰۰۰٬۰۰۰</td></tr>
  <tr onclick="location.href='/crypto-price/usdt'"><td class="tmn">61,480</td></tr>
</tbody></table>
"""

GOLD_HTML = """
<table><tbody>
  <tr onclick="location.href='/gold-price/18ayar'"><td class="priceTd">۴٬۵۰۰٬۰۰۰<span>تومان</span></td></tr>
  <tr onclick="location.href='/gold-price/sekkeh'"><td class="priceTd">52,000,000<small>+1.2%</small></td></tr>
  <tr onclick="location.href='/gold-price/usd_xau'"><td class="priceTd">$ 2,650<span>12</span></td></tr>
</tbody></table>
"""


class TestParseCurrencyBoard:
    def test_sell_price_preferred(self):
        prices = parse_currency_board(CURRENCY_HTML)
        assert prices["USD"] == Decimal("61500")

    def test_buy_price_fallback(self):
        prices = parse_currency_board(CURRENCY_HTML)
        assert prices["EUR"] == Decimal("66100")

    def test_unparseable_rows_skipped(self):
        prices = parse_currency_board(CURRENCY_HTML)
        assert "TRY" not in prices
        assert set(prices) == {"USD", "EUR"}

    def test_no_table_is_empty(self):
        assert parse_currency_board("<html><body>maintenance</body></html>") == {}


class TestParseCryptoBoard:
    def test_toman_column(self):
        prices = parse_crypto_board(CRYPTO_HTML)
        assert prices == {"BTC": Decimal("3690000000"), "USDT": Decimal("61480")}


class TestParseGoldBoard:
    def test_gold18_alias_fills_both_codes(self):
        prices = parse_gold_board(GOLD_HTML, Decimal("60000"))
        assert prices["18AYAR"] == Decimal("4500000")
        assert prices["GOLD18"] == Decimal("4500000")

    def test_nested_elements_ignored(self):
        prices = parse_gold_board(GOLD_HTML, Decimal("60000"))
        assert prices["SEKKEH"] == Decimal("52000000")

    def test_usd_marker_converted(self):
        prices = parse_gold_board(GOLD_HTML, Decimal("60000"))
        assert prices["USD_XAU"] == Decimal("2650") * Decimal("60000")


class TestAlanchandClient:
    @pytest.fixture
    def client(self):
        return AlanchandClient(base_url="https://example.test")

    def test_fetch_crypto_requests_board(self, client):
        with patch.object(client, "get_text", return_value=CRYPTO_HTML) as get_text:
            prices = client.fetch_crypto()

        get_text.assert_called_once_with(CRYPTO_BOARD_PATH)
        assert prices["BTC"] == Decimal("3690000000")

    def test_fetch_gold_passes_usd_rate(self, client):
        with patch.object(client, "get_text", return_value=GOLD_HTML):
            prices = client.fetch_gold(Decimal("10"))
        assert prices["USD_XAU"] == Decimal("26500")

    def test_transport_error_propagates(self, client):
        """Fetchers raise; the resolver decides what to do."""
        with patch.object(client, "get_text", side_effect=HTTPClientError("down")):
            with pytest.raises(HTTPClientError):
                client.fetch_currencies()
