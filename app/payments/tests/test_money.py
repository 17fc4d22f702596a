"""
Tests for payments/money.py.

Covers half-away-from-zero rounding, float noise handling, invalid input
and the round-once behaviour of sum_amounts.
"""

from decimal import Decimal

import pytest

from payments.money import round2, sum_amounts, to_decimal


# =============================================================================
# round2 Tests
# =============================================================================


class TestRound2:
    """Tests for round2()."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("1.005", Decimal("1.01")),
            ("2.675", Decimal("2.68")),
            ("-2.675", Decimal("-2.68")),
            ("99.995", Decimal("100.00")),
            ("0.004", Decimal("0.00")),
            (10, Decimal("10.00")),
        ],
    )
    def test_rounds_half_away_from_zero(self, value, expected):
        """Should round halves away from zero."""
        assert round2(value) == expected

    def test_float_goes_through_str(self):
        """Should not leak binary float noise into the result."""
        assert round2(0.1 + 0.2) == Decimal("0.30")
        assert round2(1.005) == Decimal("1.01")

    def test_always_two_decimal_places(self):
        """Should quantize to exactly two places."""
        assert round2("7").as_tuple().exponent == -2
        assert str(round2("7")) == "7.00"

    def test_none_and_empty_are_zero(self):
        """Should treat missing values as zero."""
        assert round2(None) == Decimal("0.00")
        assert round2("") == Decimal("0.00")

    @pytest.mark.parametrize("value", ["abc", "NaN", "Infinity", True, object()])
    def test_rejects_non_numeric(self, value):
        """Should raise ValueError for values that are not amounts."""
        with pytest.raises(ValueError):
            round2(value)

    @pytest.mark.parametrize("value", ["1e30", Decimal("1e30")])
    def test_rejects_values_too_large_to_quantize(self, value):
        """Should raise ValueError instead of leaking InvalidOperation."""
        with pytest.raises(ValueError):
            round2(value)


class TestToDecimal:
    """Tests for to_decimal()."""

    def test_keeps_precision(self):
        """Should not round."""
        assert to_decimal("1.23456") == Decimal("1.23456")

    def test_strips_whitespace(self):
        assert to_decimal(" 12.5 ") == Decimal("12.5")

    def test_decimal_passthrough(self):
        value = Decimal("3.14159")
        assert to_decimal(value) is value

    @pytest.mark.parametrize("value", [Decimal("NaN"), Decimal("-Infinity")])
    def test_rejects_non_finite_decimal(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)


# =============================================================================
# sum_amounts Tests
# =============================================================================


class TestSumAmounts:
    """Tests for sum_amounts()."""

    def test_rounds_once_at_the_end(self):
        """Should sum raw values before rounding."""
        # Rounding each term first would give 0.00 + 0.00 + 0.00
        assert sum_amounts(["0.004", "0.004", "0.004"]) == Decimal("0.01")

    def test_skips_none(self):
        """Should ignore None values."""
        assert sum_amounts([Decimal("10.00"), None, "5.50"]) == Decimal("15.50")

    def test_empty_is_zero(self):
        assert sum_amounts([]) == Decimal("0.00")
