"""
Payment model: one settlement slot for part or all of an order's proceeds.

A payment follows the money from the buyer, through a mediator, to the final
credit on the company bank account in INR. Its derived money fields are
recomputed by payments.derivation.derive_fields on every create and update;
nothing on the model recomputes them implicitly.

Usage:
    from payments.models import Payment
    from payments.state_machines import PaymentLifecycleStatus

    payment.start_processing()
    payment.credit_to_bank()
    payment.save()

    payment.move_to(PaymentLifecycleStatus.PROCESSING)  # any state to any state
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.utils import timezone

from django_fsm import FSMField, transition

from core.managers import SoftDeleteManager
from core.model_mixins import SoftDeleteMixin, UUIDPrimaryKeyMixin
from core.models import BaseModel

from payments.exceptions import PaymentValidationError
from payments.state_machines import CommissionType, PaymentLifecycleStatus


def money_field(**kwargs) -> models.DecimalField:
    """DecimalField holding a 2dp money amount."""
    kwargs.setdefault("max_digits", 14)
    kwargs.setdefault("decimal_places", 2)
    return models.DecimalField(**kwargs)


class Payment(UUIDPrimaryKeyMixin, SoftDeleteMixin, BaseModel):
    """
    Cross-border payment tracked from mediator to bank credit.

    Invariants (restored by derive_fields after every mutation):
        net_amount_usd == round2(gross_amount_usd - mediator_commission_amount)
        expected_amount_inr == round2(net_amount_usd * conversion_rate),
            or 0 when conversion_rate is 0
        exchange_difference == round2(actual_bank_credit_inr - expected_amount_inr)
            when actual_bank_credit_inr is known, else NULL

    Commission terms are a snapshot of the mediator at creation time.
    Soft-deleted payments are excluded from every aggregate; use
    all_objects to reach them.
    """

    # ==========================================================================
    # Relationships
    # ==========================================================================

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="payments",
        help_text="Order whose proceeds this payment settles",
    )

    product_index = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="0-based position of the order line this payment funds",
    )

    mediator = models.ForeignKey(
        "payments.Mediator",
        on_delete=models.PROTECT,
        related_name="payments",
        help_text="Intermediary the buyer paid",
    )

    bank = models.ForeignKey(
        "payments.Bank",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payments",
        help_text="Company bank account credited",
    )

    # ==========================================================================
    # USD leg
    # ==========================================================================

    gross_amount_usd = money_field(
        default=Decimal("0.00"),
        help_text="Amount the buyer sent, before mediator commission",
    )

    mediator_commission_type = models.CharField(
        max_length=20,
        choices=CommissionType.choices,
        default=CommissionType.PERCENTAGE,
        help_text="Snapshot of the mediator commission type",
    )

    mediator_commission_value = money_field(
        default=Decimal("0.00"),
        help_text="Snapshot of the mediator commission value",
    )

    mediator_commission_amount = money_field(
        default=Decimal("0.00"),
        help_text="Commission in USD, explicit or derived from type and value",
    )

    net_amount_usd = money_field(
        default=Decimal("0.00"),
        help_text="Derived: gross minus commission",
    )

    # ==========================================================================
    # INR leg
    # ==========================================================================

    conversion_rate = money_field(
        default=Decimal("0.00"),
        help_text="USD to INR rate at recording time, kept to 2 decimals; 0 when not yet known",
    )

    expected_amount_inr = money_field(
        default=Decimal("0.00"),
        help_text="Derived: net amount converted at conversion_rate",
    )

    actual_bank_credit_inr = money_field(
        null=True,
        blank=True,
        help_text="INR that actually landed in the bank",
    )

    exchange_difference = money_field(
        null=True,
        blank=True,
        help_text="Derived: actual minus expected INR",
    )

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    payment_status = FSMField(
        default=PaymentLifecycleStatus.PENDING_WITH_MEDIATOR,
        choices=PaymentLifecycleStatus.choices,
        db_index=True,
        protected=False,
        help_text="Current lifecycle state",
    )

    credited_date = models.DateField(
        null=True,
        blank=True,
        help_text="Date the bank credit was received",
    )

    # ==========================================================================
    # Bookkeeping
    # ==========================================================================

    transaction_reference = models.CharField(
        max_length=255,
        blank=True,
        default="",
    )

    notes = models.TextField(blank=True, default="")

    objects = SoftDeleteManager()
    all_objects = models.Manager()

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Payment"
        verbose_name_plural = "Payments"
        indexes = [
            models.Index(
                fields=["order", "is_deleted", "payment_status"],
                name="payment_order_status_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(gross_amount_usd__gte=0),
                name="payment_gross_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(mediator_commission_amount__gte=0),
                name="payment_commission_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"Payment({self.id}, {self.payment_status}, {self.gross_amount_usd} USD)"

    @property
    def is_settled(self) -> bool:
        """Whether actual_bank_credit_inr counts towards settled totals."""
        return self.payment_status == PaymentLifecycleStatus.CREDITED_TO_BANK

    # ==========================================================================
    # State Transitions (django-fsm)
    # ==========================================================================
    # Every transition accepts any source state.

    @transition(
        field=payment_status,
        source="*",
        target=PaymentLifecycleStatus.PENDING_WITH_MEDIATOR,
    )
    def return_to_mediator(self):
        """Money is (back) with the mediator."""

    @transition(
        field=payment_status,
        source="*",
        target=PaymentLifecycleStatus.PROCESSING,
    )
    def start_processing(self):
        """Mediator has started forwarding to the company bank."""

    @transition(
        field=payment_status,
        source="*",
        target=PaymentLifecycleStatus.CREDITED_TO_BANK,
    )
    def credit_to_bank(self, credited_date=None):
        """
        Money landed in the company bank.

        Stamps credited_date with today unless a date is given or one is
        already recorded.
        """
        if credited_date is not None:
            self.credited_date = credited_date
        elif self.credited_date is None:
            self.credited_date = timezone.localdate()

    TRANSITIONS = {
        PaymentLifecycleStatus.PENDING_WITH_MEDIATOR: "return_to_mediator",
        PaymentLifecycleStatus.PROCESSING: "start_processing",
        PaymentLifecycleStatus.CREDITED_TO_BANK: "credit_to_bank",
    }

    def move_to(self, status: str) -> None:
        """
        Move to status through the matching transition.

        Raises:
            PaymentValidationError: status is not a lifecycle state
        """
        if status not in PaymentLifecycleStatus.values:
            raise PaymentValidationError(
                f"Unknown payment status: {status!r}",
                error_code="INVALID_PAYMENT_STATUS",
                details={
                    "payment_status": status,
                    "allowed": list(PaymentLifecycleStatus.values),
                },
            )
        getattr(self, self.TRANSITIONS[PaymentLifecycleStatus(status)])()
