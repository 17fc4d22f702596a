"""
State enums for payment models.

Django TextChoices for database storage and admin integration.

Payment lifecycle:
    pending_with_mediator -> processing -> credited_to_bank

    Transitions are permissive: any state may move to any other state,
    including backward moves and skips. Only membership in the enum is
    checked.

Order payment status (derived, never stored):
    Paid / Partial / Unpaid
"""

from django.db import models


class PaymentLifecycleStatus(models.TextChoices):
    """
    States for the Payment model lifecycle.

    PENDING_WITH_MEDIATOR: buyer has paid the mediator, nothing forwarded yet
    PROCESSING: mediator has started forwarding to the company bank
    CREDITED_TO_BANK: money landed; actual_bank_credit_inr is authoritative
    """

    PENDING_WITH_MEDIATOR = "pending_with_mediator", "Pending With Mediator"
    PROCESSING = "processing", "Processing"
    CREDITED_TO_BANK = "credited_to_bank", "Credited To Bank"


class CommissionType(models.TextChoices):
    """
    How a mediator's commission is computed.

    PERCENTAGE: commission_value percent of the gross amount
    FIXED: commission_value is a flat USD amount
    """

    PERCENTAGE = "percentage", "Percentage"
    FIXED = "fixed", "Fixed"


class OrderPaymentStatus(models.TextChoices):
    """Payment completeness verdict for an order."""

    PAID = "Paid", "Paid"
    PARTIAL = "Partial", "Partial"
    UNPAID = "Unpaid", "Unpaid"
