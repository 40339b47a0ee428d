from decimal import Decimal

import pytest

from src.engine.money import dollars_to_cents, format_cents, parse_currency


class TestFormatCents:
    def test_basic(self):
        assert format_cents(2500) == "$25.00"
        assert format_cents(100) == "$1.00"
        assert format_cents(50) == "$0.50"

    def test_thousands(self):
        assert format_cents(123450) == "$1,234.50"

    def test_negative(self):
        assert format_cents(-500) == "-$5.00"


class TestDollarsToCents:
    def test_decimal(self):
        assert dollars_to_cents(Decimal("25.00")) == 2500
        assert dollars_to_cents(Decimal("1.50")) == 150

    def test_string_and_int(self):
        assert dollars_to_cents("0.07") == 7
        assert dollars_to_cents(3) == 300

    def test_rounds_half_up(self):
        assert dollars_to_cents("1.505") == 151


class TestParseCurrency:
    def test_symbols_and_commas(self):
        assert parse_currency("$1,234.50") == 123450

    def test_plain(self):
        assert parse_currency("20") == 2000

    @pytest.mark.parametrize("text", ["", "$", "abc"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_currency(text)
