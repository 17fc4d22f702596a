"""
Money arithmetic shared by the settlement engine.

Every monetary input is passed through round2() the moment it is accepted,
and every derived amount is round2()'d before it is stored or compared.
Sums over collections accumulate unrounded values and round once at the end.

Usage:
    from payments.money import round2, sum_amounts

    round2("1.005")                 # Decimal("1.01")
    round2(-2.675)                  # Decimal("-2.68")
    sum_amounts([p.expected_amount_inr for p in payments])
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Stored amounts are DecimalField(max_digits=14, decimal_places=2)
MAX_AMOUNT = Decimal("1000000000000")

# Slack used when comparing cumulative payments to an order's selling total
COVERAGE_TOLERANCE = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """
    Convert value to Decimal without rounding.

    Floats go through str() so binary noise (0.1 + 0.2) never leaks in.
    None and empty strings are zero.

    Raises:
        ValueError: if value is not numeric
    """
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, bool):
        raise ValueError(f"Not a monetary value: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValueError(f"Not a monetary value: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Not a monetary value: {value!r}")
    return result


def round2(value) -> Decimal:
    """
    Round to 2 decimal places, halves away from zero.

    Raises:
        ValueError: if value is not numeric or too large to quantize
    """
    try:
        return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Not a monetary value: {value!r}") from exc


def sum_amounts(values: Iterable) -> Decimal:
    """Sum values (None counts as zero) and round the total once."""
    total = Decimal("0")
    for value in values:
        if value is not None:
            total += to_decimal(value)
    return round2(total)
