"""
Payment admin configuration.

Mediators and banks are plain master data. Payments are read-only here:
their derived fields are maintained by PaymentService, so edits and state
changes go through the API or the service layer.
"""

from django.contrib import admin

from payments.models import Bank, Mediator, Payment


@admin.register(Mediator)
class MediatorAdmin(admin.ModelAdmin):
    """
    Admin configuration for Mediator.

    Changing commission terms affects new payments only; existing payments
    keep the terms they were created with.
    """

    list_display = [
        "name",
        "commission_type",
        "commission_value",
        "settlement_delay_days",
        "is_active",
    ]
    list_filter = ["commission_type", "is_active"]
    search_fields = ["id", "name"]
    readonly_fields = ["id", "created_at", "updated_at"]
    ordering = ["name"]


@admin.register(Bank)
class BankAdmin(admin.ModelAdmin):
    """Admin configuration for Bank."""

    list_display = ["name", "is_active", "created_at"]
    list_filter = ["is_active"]
    search_fields = ["id", "name"]
    readonly_fields = ["id", "created_at", "updated_at"]
    ordering = ["name"]


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """
    Admin configuration for Payment.

    Lists soft-deleted payments too, flagged by is_deleted.
    """

    list_display = [
        "id",
        "order",
        "mediator",
        "gross_amount_usd",
        "net_amount_usd",
        "expected_amount_inr",
        "actual_bank_credit_inr",
        "payment_status",
        "is_deleted",
        "created_at",
    ]
    list_filter = ["payment_status", "mediator_commission_type", "is_deleted", "created_at"]
    search_fields = ["id", "order__order_code", "transaction_reference"]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]

    fieldsets = (
        (
            None,
            {
                "fields": ("id", "order", "product_index", "mediator", "bank", "payment_status"),
            },
        ),
        (
            "USD",
            {
                "fields": (
                    "gross_amount_usd",
                    "mediator_commission_type",
                    "mediator_commission_value",
                    "mediator_commission_amount",
                    "net_amount_usd",
                ),
            },
        ),
        (
            "INR",
            {
                "fields": (
                    "conversion_rate",
                    "expected_amount_inr",
                    "actual_bank_credit_inr",
                    "exchange_difference",
                    "credited_date",
                ),
            },
        ),
        (
            "Bookkeeping",
            {
                "fields": ("transaction_reference", "notes"),
                "classes": ("collapse",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at", "is_deleted", "deleted_at"),
            },
        ),
    )

    def get_queryset(self, request):
        return Payment.all_objects.select_related("order", "mediator", "bank")

    def has_add_permission(self, request) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        """Payments are soft deleted through the API."""
        return False
