"""Order admin configuration."""

from django.contrib import admin

from orders.models import Order, OrderLine


class OrderLineInline(admin.TabularInline):
    model = OrderLine
    extra = 0
    fields = ["position", "description", "selling_price", "payment_currency", "purchase_price"]
    ordering = ["position"]


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin configuration for Order.

    Cost fields are editable here; payments and profit live in the
    payments app.
    """

    list_display = [
        "id",
        "order_code",
        "supplier_cost",
        "shipping_cost",
        "packaging_cost",
        "other_expenses",
        "created_at",
    ]
    search_fields = ["id", "order_code"]
    readonly_fields = ["id", "created_at", "updated_at"]
    ordering = ["-created_at"]
    inlines = [OrderLineInline]
