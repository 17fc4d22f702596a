"""
DRF serializers for payments app.

This module provides serializers for:
- Payment display
- Payment create and partial update requests
- Order profit summaries, single and bulk

Input serializers only check shapes and types. Business validation
(negative amounts, commission above gross, unknown ids) lives in
PaymentService so API and in-process callers get the same rules.

Related files:
    - models/payment.py: Payment
    - services/: PaymentService, ProfitService
    - views.py: Payment API views
"""

from __future__ import annotations

from rest_framework import serializers

from payments.models import Payment
from payments.state_machines import CommissionType, PaymentLifecycleStatus


def amount_input(**kwargs) -> serializers.DecimalField:
    """Money input; extra decimals are rounded by the service, whole digits fit the column."""
    kwargs.setdefault("max_digits", 18)
    kwargs.setdefault("decimal_places", 6)
    kwargs.setdefault("required", False)
    return serializers.DecimalField(**kwargs)


def amount_output() -> serializers.DecimalField:
    return serializers.DecimalField(max_digits=20, decimal_places=2, read_only=True)


# =============================================================================
# Payments
# =============================================================================


class PaymentSerializer(serializers.ModelSerializer):
    """
    Payment serializer for API responses.

    order_id, mediator_id and bank_id are exposed as plain UUIDs.
    """

    order_id = serializers.UUIDField(read_only=True)
    mediator_id = serializers.UUIDField(read_only=True)
    mediator_name = serializers.CharField(source="mediator.name", read_only=True)
    bank_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Payment
        fields = [
            "id",
            "order_id",
            "product_index",
            "mediator_id",
            "mediator_name",
            "bank_id",
            "gross_amount_usd",
            "mediator_commission_type",
            "mediator_commission_value",
            "mediator_commission_amount",
            "net_amount_usd",
            "conversion_rate",
            "expected_amount_inr",
            "actual_bank_credit_inr",
            "exchange_difference",
            "payment_status",
            "credited_date",
            "transaction_reference",
            "notes",
            "created_at",
            "updated_at",
        ]


class PaymentUpdateSerializer(serializers.Serializer):
    """
    Partial update request. Only keys present in the body are passed on.

    Sending null for mediator_commission_amount drops an explicit amount and
    re-derives it from the commission type and value.
    """

    product_index = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    mediator_id = serializers.UUIDField(required=False)
    bank_id = serializers.UUIDField(required=False, allow_null=True)
    gross_amount_usd = amount_input()
    mediator_commission_type = serializers.ChoiceField(
        choices=CommissionType.choices, required=False
    )
    mediator_commission_value = amount_input()
    mediator_commission_amount = amount_input(allow_null=True)
    conversion_rate = amount_input()
    actual_bank_credit_inr = amount_input(allow_null=True)
    payment_status = serializers.ChoiceField(
        choices=PaymentLifecycleStatus.choices, required=False
    )
    credited_date = serializers.DateField(required=False, allow_null=True)
    transaction_reference = serializers.CharField(
        max_length=255, required=False, allow_blank=True
    )
    notes = serializers.CharField(required=False, allow_blank=True)


class PaymentCreateSerializer(PaymentUpdateSerializer):
    """
    Create request.

    Commission type and value default to the mediator's current terms.
    """

    order_id = serializers.UUIDField()
    mediator_id = serializers.UUIDField()
    mediator_commission_value = amount_input(allow_null=True)


class PaymentListQuerySerializer(serializers.Serializer):
    """Query parameters of the payment listing."""

    order_id = serializers.UUIDField(required=False)
    payment_status = serializers.ChoiceField(
        choices=PaymentLifecycleStatus.choices, required=False
    )
    mediator_id = serializers.UUIDField(required=False)
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, required=False)


class PaginationSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    per_page = serializers.IntegerField()
    total_pages = serializers.IntegerField()
    has_next = serializers.BooleanField()
    has_previous = serializers.BooleanField()


class PaymentPageSerializer(serializers.Serializer):
    results = PaymentSerializer(many=True, source="payments")
    pagination = PaginationSerializer()


# =============================================================================
# Profit
# =============================================================================


class OrderProfitSummarySerializer(serializers.Serializer):
    """
    Profit summary of one order.

    Settled figures (gross_usd through exchange_difference, total_actual_inr
    and net_profit) only count payments credited to the bank.
    """

    order_id = serializers.UUIDField(read_only=True)
    gross_usd = amount_output()
    commission_deducted_usd = amount_output()
    net_usd = amount_output()
    expected_inr = amount_output()
    total_actual_inr = amount_output()
    exchange_difference = amount_output()
    total_expected_inr_all_payments = amount_output()
    purchase_price = amount_output()
    supplier_cost = amount_output()
    shipping_cost = amount_output()
    packaging_cost = amount_output()
    other_expenses = amount_output()
    total_commission_inr = amount_output()
    total_expenses = amount_output()
    net_profit = amount_output()
    estimated_profit = amount_output()
    selling_total = amount_output()
    profit_percent = amount_output()
    settled_payments_count = serializers.IntegerField(read_only=True)


class OrderPaymentSnapshotSerializer(serializers.Serializer):
    """Bulk entry: profit figures plus Paid/Partial/Unpaid."""

    order_id = serializers.UUIDField(read_only=True)
    net_profit = amount_output()
    total_actual_inr = amount_output()
    total_expenses = amount_output()
    total_expected_inr = amount_output()
    estimated_profit = amount_output()
    payment_status = serializers.CharField(read_only=True)


class BulkProfitRequestSerializer(serializers.Serializer):
    """
    Bulk request body.

    Ids are taken as strings; malformed ones are skipped rather than
    rejected.
    """

    order_ids = serializers.ListField(
        child=serializers.CharField(allow_blank=True),
        allow_empty=True,
        max_length=1000,
    )
