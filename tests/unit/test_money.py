"""
Unit tests for Money and decimal parsing.

Verifies:
- Exact decimal construction from strings, ints and Decimals
- Float constructor prohibition
- Fixed two-digit scale
- Exact addition and ordering
"""

from decimal import Decimal

import pytest

from receipt_kernel.domain.values import Money, parse_decimal
from receipt_kernel.exceptions import ParseError, ReceiptTaxError


class TestParseDecimal:
    """Tests for parse_decimal."""

    def test_string(self):
        assert parse_decimal("12.25") == Decimal("12.25")

    def test_string_with_whitespace(self):
        assert parse_decimal(" 0.18 ") == Decimal("0.18")

    def test_int(self):
        assert parse_decimal(200) == Decimal("200")

    def test_decimal_passthrough(self):
        value = Decimal("0.0500")
        assert parse_decimal(value) is value

    def test_float_rejected(self):
        with pytest.raises(ParseError, match="floating point"):
            parse_decimal(0.18)

    def test_bool_rejected(self):
        with pytest.raises(ParseError):
            parse_decimal(True)

    def test_malformed_string(self):
        with pytest.raises(ParseError) as exc_info:
            parse_decimal("12,25")
        assert exc_info.value.value == "12,25"
        assert exc_info.value.code == "PARSE_ERROR"

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-inf"])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ParseError, match="finite"):
            parse_decimal(value)

    def test_unsupported_type(self):
        with pytest.raises(ParseError, match="unsupported type"):
            parse_decimal(None)

    def test_parse_error_is_domain_error(self):
        with pytest.raises(ReceiptTaxError):
            parse_decimal("abc")


class TestMoneyConstruction:
    """Tests for Money construction."""

    def test_of_string(self):
        assert Money.of("48.50").amount == Decimal("48.50")

    def test_scale_is_always_two_digits(self):
        assert Money.of("48.5").amount.as_tuple().exponent == -2
        assert Money.of(7).amount.as_tuple().exponent == -2

    def test_equal_regardless_of_input_scale(self):
        assert Money.of("48.5") == Money.of("48.50")
        assert hash(Money.of("48.5")) == hash(Money.of("48.50"))

    def test_sub_cent_rejected(self):
        with pytest.raises(ParseError, match="two fractional digits"):
            Money.of("12.255")

    def test_trailing_zeros_beyond_cents_accepted(self):
        assert Money.of("12.2500") == Money.of("12.25")

    def test_float_rejected(self):
        with pytest.raises(ParseError):
            Money.of(12.25)

    def test_malformed_rejected(self):
        with pytest.raises(ParseError):
            Money.of("twelve")

    def test_zero(self):
        assert Money.zero().is_zero
        assert str(Money.zero()) == "0.00"

    def test_str_and_repr(self):
        money = Money.of("15.5")
        assert str(money) == "15.50"
        assert repr(money) == "Money('15.50')"

    def test_immutable(self):
        money = Money.of("1.00")
        with pytest.raises(AttributeError):
            money.amount = Decimal("2.00")


class TestMoneyArithmetic:
    """Tests for Money arithmetic and ordering."""

    def test_add(self):
        assert Money.of("12.25") + Money.of("3.30") == Money.of("15.55")

    def test_sub(self):
        assert Money.of("15.55") - Money.of("3.30") == Money.of("12.25")

    def test_add_non_money_not_supported(self):
        with pytest.raises(TypeError):
            Money.of("1.00") + Decimal("1.00")

    def test_sum_of(self):
        total = Money.sum_of([Money.of("48.50"), Money.of("15.55"), Money.of("8.70")])
        assert total == Money.of("72.75")

    def test_sum_of_empty(self):
        assert Money.sum_of([]) == Money.zero()

    def test_ordering(self):
        assert Money.of("0.05") < Money.of("0.10")
        assert Money.of("0.10") >= Money.of("0.10")
        assert Money.of("1.00") > Money.zero()

    def test_negative(self):
        assert (Money.zero() - Money.of("0.01")).is_negative


class TestLargeAmounts:
    """Amounts beyond the default 28-digit decimal precision stay exact."""

    BIG = "99999999999999999999999999.99"

    def test_construct(self):
        assert str(Money.of(self.BIG)) == self.BIG

    def test_sub_cent_still_rejected(self):
        with pytest.raises(ParseError, match="two fractional digits"):
            Money.of("99999999999999999999999999.991")

    def test_add_carries_past_28_digits(self):
        total = Money.of(self.BIG) + Money.of("0.01")
        assert total == Money.of("100000000000000000000000000.00")

    def test_sub(self):
        assert Money.of("100000000000000000000000000.00") - Money.of("0.01") == Money.of(self.BIG)

    def test_sum_of(self):
        total = Money.sum_of([Money.of(self.BIG), Money.of("18000000000000000000000000.00")])
        assert total == Money.of("117999999999999999999999999.99")
