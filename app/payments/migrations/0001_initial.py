import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django_fsm
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("orders", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Bank",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="When the row was inserted",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="When the row was last saved",
                    ),
                ),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Record identifier",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=120)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "Bank",
                "verbose_name_plural": "Banks",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Mediator",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="When the row was inserted",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="When the row was last saved",
                    ),
                ),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Record identifier",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=120)),
                (
                    "commission_type",
                    models.CharField(
                        choices=[("percentage", "Percentage"), ("fixed", "Fixed")],
                        default="percentage",
                        max_length=20,
                    ),
                ),
                (
                    "commission_value",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=14,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "settlement_delay_days",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Typical settlement delay, used for reporting only",
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "Mediator",
                "verbose_name_plural": "Mediators",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="When the row was inserted",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="When the row was last saved",
                    ),
                ),
                (
                    "is_deleted",
                    models.BooleanField(
                        db_index=True,
                        default=False,
                        help_text="Hidden from normal queries when set",
                    ),
                ),
                (
                    "deleted_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the row was flagged as deleted",
                        null=True,
                    ),
                ),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Record identifier",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "product_index",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="0-based position of the order line this payment funds",
                        null=True,
                    ),
                ),
                (
                    "gross_amount_usd",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Amount the buyer sent, before mediator commission",
                        max_digits=14,
                    ),
                ),
                (
                    "mediator_commission_type",
                    models.CharField(
                        choices=[("percentage", "Percentage"), ("fixed", "Fixed")],
                        default="percentage",
                        help_text="Snapshot of the mediator commission type",
                        max_length=20,
                    ),
                ),
                (
                    "mediator_commission_value",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Snapshot of the mediator commission value",
                        max_digits=14,
                    ),
                ),
                (
                    "mediator_commission_amount",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Commission in USD, explicit or derived from type and value",
                        max_digits=14,
                    ),
                ),
                (
                    "net_amount_usd",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Derived: gross minus commission",
                        max_digits=14,
                    ),
                ),
                (
                    "conversion_rate",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="USD to INR rate at recording time, kept to 2 decimals; 0 when not yet known",
                        max_digits=14,
                    ),
                ),
                (
                    "expected_amount_inr",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Derived: net amount converted at conversion_rate",
                        max_digits=14,
                    ),
                ),
                (
                    "actual_bank_credit_inr",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="INR that actually landed in the bank",
                        max_digits=14,
                        null=True,
                    ),
                ),
                (
                    "exchange_difference",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Derived: actual minus expected INR",
                        max_digits=14,
                        null=True,
                    ),
                ),
                (
                    "payment_status",
                    django_fsm.FSMField(
                        choices=[
                            ("pending_with_mediator", "Pending With Mediator"),
                            ("processing", "Processing"),
                            ("credited_to_bank", "Credited To Bank"),
                        ],
                        db_index=True,
                        default="pending_with_mediator",
                        help_text="Current lifecycle state",
                        max_length=50,
                    ),
                ),
                (
                    "credited_date",
                    models.DateField(
                        blank=True,
                        help_text="Date the bank credit was received",
                        null=True,
                    ),
                ),
                (
                    "transaction_reference",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                ("notes", models.TextField(blank=True, default="")),
                (
                    "bank",
                    models.ForeignKey(
                        blank=True,
                        help_text="Company bank account credited",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="payments",
                        to="payments.bank",
                    ),
                ),
                (
                    "mediator",
                    models.ForeignKey(
                        help_text="Intermediary the buyer paid",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="payments.mediator",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        help_text="Order whose proceeds this payment settles",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "verbose_name": "Payment",
                "verbose_name_plural": "Payments",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["order", "is_deleted", "payment_status"],
                        name="payment_order_status_idx",
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(gross_amount_usd__gte=0),
                        name="payment_gross_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(mediator_commission_amount__gte=0),
                        name="payment_commission_non_negative",
                    ),
                ],
            },
        ),
    ]
