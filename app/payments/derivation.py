"""
Derived-field recomputation for payments.

derive_fields() is the single place the payment money invariants are
restored. It is a plain function over attributes, so it works on a Payment
instance as well as on any object exposing the same fields, and it never
touches the database.

Recomputation order (each step rounded with round2):
    1. mediator_commission_amount  (only when derive_commission=True)
    2. net_amount_usd              = gross - commission
    3. expected_amount_inr         = net * rate, or 0 when rate is 0
    4. exchange_difference         = actual - expected, or None without actual
"""

from __future__ import annotations

from decimal import Decimal

from payments.money import ZERO, round2
from payments.state_machines import CommissionType


def commission_amount(gross, commission_type: str, commission_value) -> Decimal:
    """
    Commission in USD for a gross amount.

    percentage: gross * value / 100
    fixed: value
    """
    if commission_type == CommissionType.FIXED:
        return round2(commission_value)
    return round2(round2(gross) * round2(commission_value) / Decimal("100"))


def derive_fields(payment, *, derive_commission: bool = True):
    """
    Recompute every derived money field of payment in place.

    Args:
        payment: Payment (or look-alike) to update
        derive_commission: Recompute mediator_commission_amount from the
            commission type and value. Pass False when the amount was
            supplied explicitly or must be kept as stored.

    Returns:
        The same payment, for chaining
    """
    payment.gross_amount_usd = round2(payment.gross_amount_usd)
    payment.mediator_commission_value = round2(payment.mediator_commission_value)
    # Rate column is 2dp; expected INR uses the stored rate
    payment.conversion_rate = round2(payment.conversion_rate)

    if derive_commission:
        payment.mediator_commission_amount = commission_amount(
            payment.gross_amount_usd,
            payment.mediator_commission_type,
            payment.mediator_commission_value,
        )
    else:
        payment.mediator_commission_amount = round2(payment.mediator_commission_amount)

    payment.net_amount_usd = round2(
        payment.gross_amount_usd - payment.mediator_commission_amount
    )

    if payment.conversion_rate > 0:
        payment.expected_amount_inr = round2(
            payment.net_amount_usd * payment.conversion_rate
        )
    else:
        payment.expected_amount_inr = ZERO

    if payment.actual_bank_credit_inr is not None:
        payment.actual_bank_credit_inr = round2(payment.actual_bank_credit_inr)
        payment.exchange_difference = round2(
            payment.actual_bank_credit_inr - payment.expected_amount_inr
        )
    else:
        payment.exchange_difference = None

    return payment
