"""
Unit tests for the round-up rounding policy.
"""

from decimal import Decimal

import pytest

from receipt_kernel.domain.rounding import (
    DEFAULT_INCREMENT,
    DEFAULT_ROUNDING,
    RoundingPolicy,
    round_up,
)
from receipt_kernel.domain.values import Money
from receipt_kernel.exceptions import ConfigurationError, InvalidIncrementError, ParseError


class TestRoundUp:
    """Tests for round_up with the default 0.05 increment."""

    def test_default_increment(self):
        assert DEFAULT_INCREMENT == Decimal("0.05")

    def test_rounds_up_to_next_increment(self):
        assert round_up(Decimal("0.101")) == Decimal("0.15")

    def test_zero_stays_zero(self):
        assert round_up(Decimal("0")) == Decimal("0")

    def test_exact_multiple_unchanged(self):
        assert round_up(Decimal("2.25")) == Decimal("2.25")

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("2.205", "2.25"),    # 12.25 * 0.18
            ("0.3675", "0.40"),   # 12.25 * 0.03
            ("0.6125", "0.65"),   # 12.25 * 0.05
            ("0.252", "0.30"),    # 8.40 * 0.03
            ("3.185", "3.20"),    # 12.25 * 0.26
            ("0.0001", "0.05"),
        ],
    )
    def test_receipt_figures(self, raw, expected):
        assert round_up(Decimal(raw)) == Decimal(expected)

    def test_result_has_cent_scale(self):
        assert round_up(Decimal("7")).as_tuple().exponent == -2

    def test_custom_increment(self):
        assert round_up(Decimal("1.01"), Decimal("0.10")) == Decimal("1.10")
        assert round_up(Decimal("1.01"), Decimal("0.01")) == Decimal("1.01")
        assert round_up(Decimal("1.01"), Decimal("1")) == Decimal("2.00")

    @pytest.mark.parametrize("increment", ["0", "-0.05", "0.001"])
    def test_invalid_increment(self, increment):
        with pytest.raises(InvalidIncrementError):
            round_up(Decimal("1"), Decimal(increment))


class TestRoundingPolicy:
    """Tests for the RoundingPolicy value object."""

    def test_apply_returns_money(self):
        assert DEFAULT_ROUNDING.apply(Decimal("2.205")) == Money.of("2.25")

    def test_increment_from_string(self):
        policy = RoundingPolicy("0.10")
        assert policy.increment == Decimal("0.10")
        assert policy.apply(Decimal("0.3675")) == Money.of("0.40")

    def test_equal_policies(self):
        assert RoundingPolicy("0.05") == DEFAULT_ROUNDING

    def test_invalid_increment_is_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            RoundingPolicy("0.005")
        assert exc_info.value.code == "INVALID_INCREMENT"

    def test_float_increment_rejected(self):
        with pytest.raises(ParseError):
            RoundingPolicy(0.05)


class TestExactRounding:
    """Rounding never loses digits to the decimal context's precision."""

    def test_thirty_digit_value_rounds_up(self):
        value = Decimal("1000000000000000000000000.0005")
        assert round_up(value) == Decimal("1000000000000000000000000.05")

    def test_result_never_below_long_value(self):
        value = Decimal("12345678901234567890123456789.0100001")
        rounded = round_up(value)
        assert rounded >= value
        assert rounded == Decimal("12345678901234567890123456789.05")

    def test_negative_value_rounds_toward_zero(self):
        assert round_up(Decimal("-0.101")) == Decimal("-0.10")

    def test_large_increment_validated(self):
        assert RoundingPolicy("100000000000000000000000000000.00").increment == Decimal("1E+29")
