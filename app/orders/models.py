"""
Order models read by the settlement engine.

Order carries the cost fields that feed profit computation; OrderLine is one
product line of an order, addressed by its 0-based position (the target of a
payment's product_index).

Usage:
    from orders.models import Order, OrderLine

    order = Order.objects.create(order_code="ORD-1001", shipping_cost=1200)
    OrderLine.objects.create(
        order=order,
        position=0,
        selling_price=Decimal("100.00"),
        payment_currency=OrderLine.Currency.USD,
        purchase_price=Decimal("5000.00"),
    )
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from core.model_mixins import OrderableMixin, UUIDPrimaryKeyMixin
from core.models import BaseModel


class Order(UUIDPrimaryKeyMixin, BaseModel):
    """
    A customer order.

    Fields:
        order_code: External display reference (e.g. "ORD-1001")
        supplier_cost, shipping_cost, packaging_cost, other_expenses:
            Order-level costs in INR, added to the purchase price of the
            lines when computing total expenses
    """

    order_code = models.CharField(
        max_length=64,
        blank=True,
        default="",
        db_index=True,
        help_text="External order reference shown to users",
    )
    supplier_cost = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Supplier cost (INR)",
    )
    shipping_cost = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Shipping cost (INR)",
    )
    packaging_cost = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Packaging cost (INR)",
    )
    other_expenses = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Any other order-level expense (INR)",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Order"
        verbose_name_plural = "Orders"

    def __str__(self) -> str:
        return f"Order({self.order_code or self.id})"


class OrderLine(OrderableMixin, BaseModel):
    """
    One product line of an order.

    The selling price is expressed in the line's payment currency; lines
    without an explicit currency are INR.
    """

    class Currency(models.TextChoices):
        USD = "USD", "US Dollar"
        INR = "INR", "Indian Rupee"

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="lines",
        help_text="Order this line belongs to",
    )
    description = models.CharField(
        max_length=255,
        blank=True,
        default="",
    )
    selling_price = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Selling price in payment_currency",
    )
    payment_currency = models.CharField(
        max_length=3,
        choices=Currency.choices,
        default=Currency.INR,
        help_text="Currency the buyer pays this line in",
    )
    purchase_price = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Purchase price (INR)",
    )

    class Meta:
        ordering = ["order", "position"]
        verbose_name = "Order Line"
        verbose_name_plural = "Order Lines"
        constraints = [
            models.UniqueConstraint(
                fields=["order", "position"],
                name="order_line_unique_position",
            ),
        ]

    def __str__(self) -> str:
        return f"OrderLine({self.order_id}, #{self.position})"
