"""Tests for locale-aware number parsing."""

from decimal import Decimal

import pytest

from tomanfolio.services.shared.number_normalizer import (
    normalize_number,
    parse_number,
    rial_to_toman,
    round_toman,
    to_ascii_digits,
)


class TestParseNumber:
    """Tests for parse_number."""

    def test_persian_digits_with_separator(self):
        assert parse_number("۱۲۳٬۴۵۶") == Decimal("123456")

    def test_arabic_indic_digits(self):
        assert parse_number("١٢٣٤٥٦") == Decimal("123456")

    def test_ascii_commas_and_currency_text(self):
        assert parse_number("123,456 تومان") == Decimal("123456")

    def test_usd_marker_and_decimal_point(self):
        assert parse_number("$ 2,650.40") == Decimal("2650.40")

    def test_arabic_decimal_separator(self):
        assert parse_number("۲٫۵") == Decimal("2.5")

    def test_mixed_scripts_agree(self):
        """Every rendering of the same number parses to the same value."""
        renderings = ["123456", "۱۲۳۴۵۶", "١٢٣٤٥٦", "۱۲۳,۴۵۶", "12۳٬4٥6"]
        assert {parse_number(r) for r in renderings} == {Decimal("123456")}

    @pytest.mark.parametrize("raw", [None, "", "تومان", "-", "..", "1.2.3"])
    def test_unparseable_returns_none(self, raw):
        assert parse_number(raw) is None

    def test_non_string_input(self):
        assert parse_number(4500) == Decimal("4500")


class TestNormalizeNumber:
    """Tests for the fetcher-boundary form."""

    def test_unparseable_is_zero(self):
        assert normalize_number("N/A") == Decimal("0")

    @pytest.mark.parametrize("raw", ["0", "42", "123456", "2650.40", "0.0001"])
    def test_idempotent_on_plain_decimal_strings(self, raw):
        once = normalize_number(raw)
        assert normalize_number(str(once)) == once

    def test_genuine_zero_distinguishable_internally(self):
        """parse_number keeps 'zero' and 'unparseable' apart."""
        assert parse_number("0") == Decimal("0")
        assert parse_number("abc") is None


class TestConversions:
    """Tests for unit conversion helpers."""

    def test_to_ascii_digits_leaves_text(self):
        assert to_ascii_digits("طلای ۱۸ عیار") == "طلای 18 عیار"

    def test_rial_to_toman_divides_by_ten(self):
        assert rial_to_toman(Decimal("1234560")) == Decimal("123456")

    def test_rial_to_toman_rounds_half_up(self):
        assert rial_to_toman(Decimal("1235")) == Decimal("124")
        assert rial_to_toman(Decimal("1234")) == Decimal("123")

    def test_round_toman(self):
        assert round_toman(Decimal("1234.5")) == Decimal("1235")
