"""
Mediator and Bank master data.

A Mediator is the commission-bearing intermediary a buyer pays before the
money is forwarded to the company bank. Its commission terms are copied onto
each Payment at creation time; editing a mediator later never touches
existing payments.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

from payments.state_machines import CommissionType


class Mediator(UUIDPrimaryKeyMixin, BaseModel):
    """
    Commission-bearing payment intermediary.

    Fields:
        name: Display name
        commission_type: percentage of gross or fixed USD amount
        commission_value: Percent (0-100+) or flat USD amount
        settlement_delay_days: Typical days until bank credit (reporting only)
        is_active: Inactive mediators stay referenced by old payments
    """

    name = models.CharField(max_length=120)
    commission_type = models.CharField(
        max_length=20,
        choices=CommissionType.choices,
        default=CommissionType.PERCENTAGE,
    )
    commission_value = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    settlement_delay_days = models.PositiveIntegerField(
        default=0,
        help_text="Typical settlement delay, used for reporting only",
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Mediator"
        verbose_name_plural = "Mediators"

    def __str__(self) -> str:
        return self.name


class Bank(UUIDPrimaryKeyMixin, BaseModel):
    """Company bank account a payment is finally credited to."""

    name = models.CharField(max_length=120)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Bank"
        verbose_name_plural = "Banks"

    def __str__(self) -> str:
        return self.name
