"""
Payment service for recording and maintaining settlement payments.

This module provides the PaymentService class, the only writer of Payment
rows. Every create and update validates its input before touching the
database, snapshots or keeps the mediator commission terms, and restores the
derived money fields through payments.derivation.derive_fields.

Usage:
    from payments.services import PaymentService

    payment = PaymentService.create_payment({
        "order_id": order.id,
        "mediator_id": mediator.id,
        "gross_amount_usd": "1000.00",
        "conversion_rate": "83.12",
    })

    payment = PaymentService.update_payment(payment.id, {
        "actual_bank_credit_inr": "78900.00",
        "payment_status": "credited_to_bank",
    })
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from django.conf import settings
from django.utils.dateparse import parse_date

from core.helpers import calculate_pagination, validate_uuid
from core.services import BaseService

from orders.models import Order
from payments.derivation import derive_fields
from payments.exceptions import (
    BankNotFoundError,
    MediatorNotFoundError,
    OrderNotFoundError,
    PaymentNotFoundError,
    PaymentValidationError,
)
from payments.filters import PaymentFilter
from payments.models import Bank, Mediator, Payment
from payments.money import MAX_AMOUNT, ZERO, round2, to_decimal
from payments.state_machines import CommissionType

# =============================================================================
# Constants
# =============================================================================

CREATE_FIELDS = frozenset(
    [
        "order_id",
        "product_index",
        "mediator_id",
        "bank_id",
        "gross_amount_usd",
        "mediator_commission_type",
        "mediator_commission_value",
        "mediator_commission_amount",
        "conversion_rate",
        "actual_bank_credit_inr",
        "payment_status",
        "transaction_reference",
        "credited_date",
        "notes",
    ]
)

# A payment never moves to another order
UPDATE_FIELDS = CREATE_FIELDS - {"order_id"}

# Touching any of these without an explicit amount re-derives the commission
COMMISSION_INPUTS = frozenset(
    ["gross_amount_usd", "mediator_commission_type", "mediator_commission_value"]
)


# =============================================================================
# Result Types
# =============================================================================


@dataclass
class PaymentPage:
    """
    One page of a payment listing.

    Attributes:
        payments: Payments on this page, newest first
        pagination: Metadata from core.helpers.calculate_pagination
    """

    payments: list[Payment] = field(default_factory=list)
    pagination: dict[str, Any] = field(default_factory=dict)


# =============================================================================
# Payment Service
# =============================================================================


class PaymentService(BaseService):
    """
    Service for creating, updating and reading payments.

    Write rules:
        - Input is validated in full before any write
        - Commission type and value are copied from the mediator at creation
          unless overridden, and never refreshed when the mediator changes
        - Commission amount is derived unless supplied explicitly; on update it
          is re-derived only when gross, type or value change without an
          explicit amount
        - Net, expected and exchange difference are always recomputed
        - Status changes go through the django-fsm transitions on Payment

    All methods are class methods - no instance state is maintained.
    """

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def create_payment(cls, data: Mapping[str, Any]) -> Payment:
        """
        Record a new payment against an order.

        Args:
            data: Field values keyed by CREATE_FIELDS names. order_id and
                mediator_id are required.

        Returns:
            The saved Payment

        Raises:
            PaymentValidationError: malformed ids, negative amounts,
                unknown status or commission type, commission above gross
            OrderNotFoundError, MediatorNotFoundError, BankNotFoundError
        """
        cls._reject_unknown_fields(data, CREATE_FIELDS)

        order = cls._get_order(data.get("order_id"))
        mediator = cls._get_mediator(data.get("mediator_id"))
        bank = cls._get_bank(data.get("bank_id"))

        commission_type = data.get("mediator_commission_type")
        if commission_type is None:
            commission_type = mediator.commission_type
        commission_value = data.get("mediator_commission_value")
        if commission_value is None:
            commission_value = mediator.commission_value
        commission_amount = data.get("mediator_commission_amount")

        payment = Payment(
            order=order,
            mediator=mediator,
            bank=bank,
            product_index=cls._product_index(data.get("product_index")),
            gross_amount_usd=cls._money("gross_amount_usd", data.get("gross_amount_usd")),
            mediator_commission_type=cls._commission_type(commission_type),
            mediator_commission_value=cls._money("mediator_commission_value", commission_value),
            mediator_commission_amount=(
                cls._money("mediator_commission_amount", commission_amount)
                if commission_amount is not None
                else ZERO
            ),
            conversion_rate=cls._money("conversion_rate", data.get("conversion_rate")),
            actual_bank_credit_inr=cls._optional_money(
                "actual_bank_credit_inr", data.get("actual_bank_credit_inr")
            ),
            transaction_reference=cls._text(data.get("transaction_reference")),
            notes=cls._text(data.get("notes")),
            credited_date=cls._date("credited_date", data.get("credited_date")),
        )

        status = data.get("payment_status")
        if status is not None:
            payment.move_to(status)

        derive_fields(payment, derive_commission=commission_amount is None)
        cls._check_derived(payment)

        with cls.atomic():
            payment.save()

        cls.get_logger().info(
            "Payment created",
            extra={
                "payment_id": str(payment.id),
                "order_id": str(order.id),
                "payment_status": payment.payment_status,
                "gross_amount_usd": str(payment.gross_amount_usd),
            },
        )
        return payment

    @classmethod
    def update_payment(cls, payment_id, patch: Mapping[str, Any]) -> Payment:
        """
        Apply a partial update and recompute every derived field.

        Args:
            payment_id: Id of a live (not soft-deleted) payment
            patch: Field values keyed by UPDATE_FIELDS names. None clears
                nullable fields; for mediator_commission_amount it drops the
                explicit amount and re-derives it.

        Returns:
            The saved Payment

        Raises:
            PaymentNotFoundError, MediatorNotFoundError, BankNotFoundError
            PaymentValidationError
        """
        cls._reject_unknown_fields(patch, UPDATE_FIELDS)
        payment = cls.get_payment(payment_id)

        if "mediator_id" in patch:
            # Commission terms stay as snapshotted at creation
            payment.mediator = cls._get_mediator(patch["mediator_id"])
        if "bank_id" in patch:
            payment.bank = cls._get_bank(patch["bank_id"])
        if "product_index" in patch:
            payment.product_index = cls._product_index(patch["product_index"])
        if "gross_amount_usd" in patch:
            payment.gross_amount_usd = cls._money("gross_amount_usd", patch["gross_amount_usd"])
        if "mediator_commission_type" in patch:
            payment.mediator_commission_type = cls._commission_type(
                patch["mediator_commission_type"]
            )
        if "mediator_commission_value" in patch:
            payment.mediator_commission_value = cls._money(
                "mediator_commission_value", patch["mediator_commission_value"]
            )
        if patch.get("mediator_commission_amount") is not None:
            payment.mediator_commission_amount = cls._money(
                "mediator_commission_amount", patch["mediator_commission_amount"]
            )
        if "conversion_rate" in patch:
            payment.conversion_rate = cls._money("conversion_rate", patch["conversion_rate"])
        if "actual_bank_credit_inr" in patch:
            payment.actual_bank_credit_inr = cls._optional_money(
                "actual_bank_credit_inr", patch["actual_bank_credit_inr"]
            )
        if "transaction_reference" in patch:
            payment.transaction_reference = cls._text(patch["transaction_reference"])
        if "notes" in patch:
            payment.notes = cls._text(patch["notes"])
        if "credited_date" in patch:
            payment.credited_date = cls._date("credited_date", patch["credited_date"])
        if "payment_status" in patch:
            payment.move_to(patch["payment_status"])

        if "mediator_commission_amount" in patch:
            derive_commission = patch["mediator_commission_amount"] is None
        else:
            derive_commission = bool(COMMISSION_INPUTS & set(patch))

        derive_fields(payment, derive_commission=derive_commission)
        cls._check_derived(payment)

        with cls.atomic():
            payment.save()

        cls.get_logger().info(
            "Payment updated",
            extra={
                "payment_id": str(payment.id),
                "order_id": str(payment.order_id),
                "fields": sorted(patch),
                "payment_status": payment.payment_status,
            },
        )
        return payment

    @classmethod
    def delete_payment(cls, payment_id) -> Payment:
        """Soft delete a payment. It drops out of every aggregate."""
        payment = cls.get_payment(payment_id)
        payment.soft_delete()

        cls.get_logger().info(
            "Payment soft deleted",
            extra={"payment_id": str(payment.id), "order_id": str(payment.order_id)},
        )
        return payment

    @classmethod
    def restore_payment(cls, payment_id) -> Payment:
        """Bring a soft-deleted payment back into the aggregates."""
        cls._check_uuid("payment_id", payment_id)
        payment = Payment.objects.deleted().filter(id=payment_id).first()
        if payment is None:
            raise PaymentNotFoundError(
                f"Deleted payment {payment_id} not found",
                details={"payment_id": str(payment_id)},
            )
        payment.restore()

        cls.get_logger().info(
            "Payment restored",
            extra={"payment_id": str(payment.id), "order_id": str(payment.order_id)},
        )
        return payment

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def get_payment(cls, payment_id) -> Payment:
        """
        Look up a live payment.

        Raises:
            PaymentValidationError: malformed id
            PaymentNotFoundError: no live payment with this id
        """
        cls._check_uuid("payment_id", payment_id)
        payment = (
            Payment.objects.select_related("order", "mediator", "bank")
            .filter(id=payment_id)
            .first()
        )
        if payment is None:
            raise PaymentNotFoundError(
                f"Payment {payment_id} not found",
                details={"payment_id": str(payment_id)},
            )
        return payment

    @classmethod
    def list_order_payments(cls, order_id) -> list[Payment]:
        """Live payments of one order, oldest first."""
        order = cls._get_order(order_id)
        return list(
            Payment.objects.filter(order=order)
            .select_related("mediator", "bank")
            .order_by("created_at")
        )

    @classmethod
    def list_payments(
        cls,
        filters: Mapping[str, Any] | None = None,
        page=1,
        limit=None,
    ) -> PaymentPage:
        """
        Page through live payments, newest first.

        Args:
            filters: Optional order_id, payment_status, mediator_id
            page: 1-indexed page number; junk falls back to 1
            limit: Page size clamped to 1..PAYMENTS_MAX_PAGE_SIZE; junk
                falls back to PAYMENTS_DEFAULT_PAGE_SIZE

        Raises:
            PaymentValidationError: a filter value is malformed
        """
        filterset = PaymentFilter(
            data=dict(filters or {}),
            queryset=Payment.objects.select_related("order", "mediator", "bank"),
        )
        if not filterset.is_valid():
            cls.get_logger().warning(
                "Rejected payment list filters",
                extra={"errors": filterset.errors.get_json_data()},
            )
            raise PaymentValidationError(
                "Invalid payment filters",
                details={
                    name: [str(message) for message in messages]
                    for name, messages in filterset.errors.items()
                },
            )

        per_page = cls._page_size(limit)
        queryset = filterset.qs.order_by("-created_at")
        pagination = calculate_pagination(queryset.count(), cls._page_number(page), per_page)
        offset = (pagination["page"] - 1) * per_page
        return PaymentPage(
            payments=list(queryset[offset : offset + per_page]),
            pagination=pagination,
        )

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    @classmethod
    def _get_order(cls, order_id) -> Order:
        cls._check_uuid("order_id", order_id)
        order = Order.objects.filter(id=order_id).first()
        if order is None:
            raise OrderNotFoundError(
                f"Order {order_id} not found",
                details={"order_id": str(order_id)},
            )
        return order

    @classmethod
    def _get_mediator(cls, mediator_id) -> Mediator:
        cls._check_uuid("mediator_id", mediator_id)
        mediator = Mediator.objects.filter(id=mediator_id).first()
        if mediator is None:
            raise MediatorNotFoundError(
                f"Mediator {mediator_id} not found",
                details={"mediator_id": str(mediator_id)},
            )
        return mediator

    @classmethod
    def _get_bank(cls, bank_id) -> Bank | None:
        if bank_id in (None, ""):
            return None
        cls._check_uuid("bank_id", bank_id)
        bank = Bank.objects.filter(id=bank_id).first()
        if bank is None:
            raise BankNotFoundError(
                f"Bank {bank_id} not found",
                details={"bank_id": str(bank_id)},
            )
        return bank

    # -------------------------------------------------------------------------
    # Input coercion
    # -------------------------------------------------------------------------

    @classmethod
    def _reject_unknown_fields(cls, data: Mapping[str, Any], allowed: frozenset) -> None:
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise PaymentValidationError(
                f"Unknown payment fields: {', '.join(unknown)}",
                error_code="UNKNOWN_FIELDS",
                details={"fields": unknown},
            )

    @classmethod
    def _check_uuid(cls, name: str, value) -> None:
        if not validate_uuid(value):
            cls.get_logger().warning(
                "Rejected malformed id", extra={"field": name, "value": str(value)}
            )
            raise PaymentValidationError(
                f"{name} must be a valid UUID",
                error_code="INVALID_ID",
                details={name: str(value)},
            )

    @classmethod
    def _money(cls, name: str, value) -> Decimal:
        """Round a required amount; missing is zero, negative or oversized is rejected."""
        try:
            raw = to_decimal(value)
        except ValueError:
            raise PaymentValidationError(
                f"{name} must be a number",
                error_code="INVALID_AMOUNT",
                details={name: str(value)},
            ) from None
        cls._check_bound(name, raw)
        amount = round2(raw)
        if amount < 0:
            raise PaymentValidationError(
                f"{name} must not be negative",
                error_code="NEGATIVE_AMOUNT",
                details={name: str(amount)},
            )
        cls._check_bound(name, amount)
        return amount

    @classmethod
    def _check_bound(cls, name: str, amount: Decimal) -> None:
        if abs(amount) >= MAX_AMOUNT:
            raise PaymentValidationError(
                f"{name} is too large",
                error_code="AMOUNT_TOO_LARGE",
                details={name: str(amount), "limit": str(MAX_AMOUNT)},
            )

    @classmethod
    def _optional_money(cls, name: str, value) -> Decimal | None:
        if value is None or value == "":
            return None
        return cls._money(name, value)

    @classmethod
    def _commission_type(cls, value) -> str:
        if value not in CommissionType.values:
            raise PaymentValidationError(
                f"Unknown commission type: {value!r}",
                error_code="INVALID_COMMISSION_TYPE",
                details={
                    "mediator_commission_type": str(value),
                    "allowed": list(CommissionType.values),
                },
            )
        return CommissionType(value).value

    @classmethod
    def _product_index(cls, value) -> int | None:
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            index = None
        elif isinstance(value, int):
            index = value
        elif isinstance(value, str) and value.strip().isdigit():
            index = int(value.strip())
        else:
            index = None
        if index is None or index < 0:
            raise PaymentValidationError(
                "product_index must be a non-negative integer",
                error_code="INVALID_PRODUCT_INDEX",
                details={"product_index": str(value)},
            )
        return index

    @classmethod
    def _date(cls, name: str, value) -> date | None:
        if value is None or value == "":
            return None
        if isinstance(value, date):
            return value
        try:
            parsed = parse_date(str(value))
        except ValueError:
            parsed = None
        if parsed is None:
            raise PaymentValidationError(
                f"{name} must be an ISO date (YYYY-MM-DD)",
                error_code="INVALID_DATE",
                details={name: str(value)},
            )
        return parsed

    @classmethod
    def _text(cls, value) -> str:
        return "" if value is None else str(value).strip()

    @classmethod
    def _page_number(cls, value) -> int:
        try:
            return max(1, int(value))
        except (TypeError, ValueError):
            return 1

    @classmethod
    def _page_size(cls, value) -> int:
        try:
            size = int(value)
        except (TypeError, ValueError):
            size = settings.PAYMENTS_DEFAULT_PAGE_SIZE
        return min(settings.PAYMENTS_MAX_PAGE_SIZE, max(1, size))

    @classmethod
    def _check_derived(cls, payment: Payment) -> None:
        cls._check_bound("mediator_commission_amount", payment.mediator_commission_amount)
        cls._check_bound("net_amount_usd", payment.net_amount_usd)
        cls._check_bound("expected_amount_inr", payment.expected_amount_inr)
        if payment.exchange_difference is not None:
            cls._check_bound("exchange_difference", payment.exchange_difference)
        if payment.net_amount_usd < 0:
            raise PaymentValidationError(
                "Mediator commission exceeds the gross amount",
                error_code="COMMISSION_EXCEEDS_GROSS",
                details={
                    "gross_amount_usd": str(payment.gross_amount_usd),
                    "mediator_commission_amount": str(payment.mediator_commission_amount),
                },
            )
