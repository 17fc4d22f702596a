"""
Order profit and payment-status computation.

ProfitService rolls the live (not soft-deleted) payments of an order up into
a profit summary, and classifies many orders at once as Paid, Partial or
Unpaid. Both entry points are pure reads.

The single and bulk paths share PaymentTotals and order_costs(), so the
numbers they report for the same order are identical.

Query budget:
    get_order_profit_summary: order, order lines, payments
    get_order_profit_summary_bulk: orders, order lines, payments
        (three queries regardless of how many ids are passed)

Usage:
    from payments.services import ProfitService

    summary = ProfitService.get_order_profit_summary(order.id)
    summary.net_profit

    snapshots = ProfitService.get_order_profit_summary_bulk([a.id, b.id])
    snapshots[a.id].payment_status  # "Paid" | "Partial" | "Unpaid"
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from core.helpers import validate_uuid
from core.services import BaseService

from orders.models import Order, OrderLine
from payments.exceptions import OrderNotFoundError, PaymentValidationError
from payments.models import Payment
from payments.money import COVERAGE_TOLERANCE, ZERO, round2, sum_amounts
from payments.state_machines import OrderPaymentStatus, PaymentLifecycleStatus

# Columns read per payment; enough for both calculators
PAYMENT_COLUMNS = (
    "order_id",
    "payment_status",
    "gross_amount_usd",
    "mediator_commission_amount",
    "net_amount_usd",
    "conversion_rate",
    "expected_amount_inr",
    "actual_bank_credit_inr",
    "exchange_difference",
)


# =============================================================================
# Accumulation
# =============================================================================


def _raw(value) -> Decimal:
    return Decimal("0") if value is None else Decimal(value)


@dataclass
class PaymentTotals:
    """
    Unrounded running totals over one order's live payments.

    settled_* fields only see payments in credited_to_bank; all_* fields see
    every live payment. Everything is rounded once when read through the
    properties.
    """

    payments_count: int = 0
    settled_count: int = 0
    all_gross_usd: Decimal = field(default_factory=Decimal)
    all_expected_inr: Decimal = field(default_factory=Decimal)
    settled_gross_usd: Decimal = field(default_factory=Decimal)
    settled_commission_usd: Decimal = field(default_factory=Decimal)
    settled_net_usd: Decimal = field(default_factory=Decimal)
    settled_expected_inr: Decimal = field(default_factory=Decimal)
    settled_actual_inr: Decimal = field(default_factory=Decimal)
    settled_exchange_difference: Decimal = field(default_factory=Decimal)
    settled_commission_inr: Decimal = field(default_factory=Decimal)

    def add(self, row: dict) -> None:
        """Fold one payment, given as a .values() row, into the totals."""
        self.payments_count += 1
        self.all_gross_usd += _raw(row["gross_amount_usd"])
        self.all_expected_inr += _raw(row["expected_amount_inr"])

        if row["payment_status"] != PaymentLifecycleStatus.CREDITED_TO_BANK:
            return

        self.settled_count += 1
        self.settled_gross_usd += _raw(row["gross_amount_usd"])
        self.settled_commission_usd += _raw(row["mediator_commission_amount"])
        self.settled_net_usd += _raw(row["net_amount_usd"])
        self.settled_expected_inr += _raw(row["expected_amount_inr"])
        self.settled_actual_inr += _raw(row["actual_bank_credit_inr"])
        self.settled_exchange_difference += _raw(row["exchange_difference"])

        commission = row["mediator_commission_amount"]
        rate = row["conversion_rate"]
        if commission is not None and rate is not None:
            self.settled_commission_inr += Decimal(commission) * Decimal(rate)

    @property
    def total_actual_inr(self) -> Decimal:
        return round2(self.settled_actual_inr)

    @property
    def total_commission_inr(self) -> Decimal:
        return round2(self.settled_commission_inr)

    @property
    def total_expected_inr_all_payments(self) -> Decimal:
        return round2(self.all_expected_inr)

    @property
    def total_gross_usd_all_payments(self) -> Decimal:
        return round2(self.all_gross_usd)


@dataclass(frozen=True)
class OrderCosts:
    """Cost side of an order, each component rounded."""

    purchase_price: Decimal
    supplier_cost: Decimal
    shipping_cost: Decimal
    packaging_cost: Decimal
    other_expenses: Decimal
    selling_total: Decimal
    selling_usd: Decimal
    selling_inr: Decimal

    def total_expenses(self, commission_inr: Decimal) -> Decimal:
        return round2(
            self.purchase_price
            + self.supplier_cost
            + self.shipping_cost
            + self.packaging_cost
            + commission_inr
            + self.other_expenses
        )


def order_costs(order: Order) -> OrderCosts:
    """
    Read the cost and selling figures off an order and its prefetched lines.

    Lines with an empty currency tag count as INR.
    """
    lines = list(order.lines.all())
    usd_lines = [line for line in lines if line.payment_currency == OrderLine.Currency.USD]
    inr_lines = [line for line in lines if line.payment_currency != OrderLine.Currency.USD]
    return OrderCosts(
        purchase_price=sum_amounts(line.purchase_price for line in lines),
        supplier_cost=round2(order.supplier_cost),
        shipping_cost=round2(order.shipping_cost),
        packaging_cost=round2(order.packaging_cost),
        other_expenses=round2(order.other_expenses),
        # Summed across currency tags, as recorded
        selling_total=sum_amounts(line.selling_price for line in lines),
        selling_usd=sum_amounts(line.selling_price for line in usd_lines),
        selling_inr=sum_amounts(line.selling_price for line in inr_lines),
    )


def classify_payment_status(totals: PaymentTotals, costs: OrderCosts) -> str:
    """
    Paid, Partial or Unpaid for one order.

    Paid when every live payment is credited, or when the payments in flight
    already cover both selling buckets (USD against gross, INR against
    expected) within COVERAGE_TOLERANCE.
    """
    gross_usd = totals.total_gross_usd_all_payments
    expected_inr = totals.total_expected_inr_all_payments

    all_credited = totals.payments_count > 0 and totals.settled_count == totals.payments_count
    usd_covered = costs.selling_usd <= 0 or gross_usd >= costs.selling_usd - COVERAGE_TOLERANCE
    inr_covered = costs.selling_inr <= 0 or expected_inr >= costs.selling_inr - COVERAGE_TOLERANCE
    fully_paid_in_transit = totals.payments_count > 0 and usd_covered and inr_covered

    if all_credited or fully_paid_in_transit:
        return OrderPaymentStatus.PAID
    if totals.settled_count > 0 or gross_usd > 0 or expected_inr > 0:
        return OrderPaymentStatus.PARTIAL
    return OrderPaymentStatus.UNPAID


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True)
class OrderProfitSummary:
    """Profit summary of a single order. Settled figures only count credited payments."""

    order_id: uuid.UUID
    gross_usd: Decimal
    commission_deducted_usd: Decimal
    net_usd: Decimal
    expected_inr: Decimal
    total_actual_inr: Decimal
    exchange_difference: Decimal
    total_expected_inr_all_payments: Decimal
    purchase_price: Decimal
    supplier_cost: Decimal
    shipping_cost: Decimal
    packaging_cost: Decimal
    other_expenses: Decimal
    total_commission_inr: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    estimated_profit: Decimal
    selling_total: Decimal
    profit_percent: Decimal
    settled_payments_count: int


@dataclass(frozen=True)
class OrderPaymentSnapshot:
    """Per-order entry of the bulk computation."""

    order_id: uuid.UUID
    net_profit: Decimal
    total_actual_inr: Decimal
    total_expenses: Decimal
    total_expected_inr: Decimal
    estimated_profit: Decimal
    payment_status: str


# =============================================================================
# Profit Service
# =============================================================================


class ProfitService(BaseService):
    """
    Read-only profit and payment-status calculations over orders.

    All methods are class methods - no instance state is maintained.
    """

    @classmethod
    def get_order_profit_summary(cls, order_id) -> OrderProfitSummary:
        """
        Compute the profit summary of one order.

        Args:
            order_id: Order id

        Returns:
            OrderProfitSummary

        Raises:
            PaymentValidationError: order_id is not a UUID
            OrderNotFoundError: no such order
        """
        if not validate_uuid(order_id):
            raise PaymentValidationError(
                "order_id must be a valid UUID",
                error_code="INVALID_ID",
                details={"order_id": str(order_id)},
            )

        order = Order.objects.prefetch_related("lines").filter(id=order_id).first()
        if order is None:
            raise OrderNotFoundError(
                f"Order {order_id} not found",
                details={"order_id": str(order_id)},
            )

        totals = PaymentTotals()
        for row in Payment.objects.filter(order_id=order.id).values(*PAYMENT_COLUMNS):
            totals.add(row)

        costs = order_costs(order)
        commission_inr = totals.total_commission_inr
        total_expenses = costs.total_expenses(commission_inr)
        net_profit = round2(totals.total_actual_inr - total_expenses)

        if costs.selling_total > 0:
            profit_percent = round2(net_profit / costs.selling_total * 100)
        else:
            profit_percent = ZERO

        return OrderProfitSummary(
            order_id=order.id,
            gross_usd=round2(totals.settled_gross_usd),
            commission_deducted_usd=round2(totals.settled_commission_usd),
            net_usd=round2(totals.settled_net_usd),
            expected_inr=round2(totals.settled_expected_inr),
            total_actual_inr=totals.total_actual_inr,
            exchange_difference=round2(totals.settled_exchange_difference),
            total_expected_inr_all_payments=totals.total_expected_inr_all_payments,
            purchase_price=costs.purchase_price,
            supplier_cost=costs.supplier_cost,
            shipping_cost=costs.shipping_cost,
            packaging_cost=costs.packaging_cost,
            other_expenses=costs.other_expenses,
            total_commission_inr=commission_inr,
            total_expenses=total_expenses,
            net_profit=net_profit,
            estimated_profit=round2(totals.total_expected_inr_all_payments - total_expenses),
            selling_total=costs.selling_total,
            profit_percent=profit_percent,
            settled_payments_count=totals.settled_count,
        )

    @classmethod
    def get_order_profit_summary_bulk(
        cls, order_ids: Iterable
    ) -> dict[uuid.UUID, OrderPaymentSnapshot]:
        """
        Compute profit figures and payment status for many orders.

        Duplicate and malformed ids are dropped; ids with no order are
        omitted from the result.

        Args:
            order_ids: Iterable of order ids (UUIDs or strings)

        Returns:
            Dict of order id to OrderPaymentSnapshot
        """
        ids = []
        seen = set()
        for value in order_ids:
            if not validate_uuid(value):
                continue
            order_id = uuid.UUID(str(value))
            if order_id not in seen:
                seen.add(order_id)
                ids.append(order_id)

        if not ids:
            return {}

        orders = list(Order.objects.filter(id__in=ids).prefetch_related("lines"))

        totals_by_order = {order.id: PaymentTotals() for order in orders}
        rows = Payment.objects.filter(order_id__in=list(totals_by_order)).values(
            *PAYMENT_COLUMNS
        )
        for row in rows:
            totals_by_order[row["order_id"]].add(row)

        snapshots = {}
        for order in orders:
            totals = totals_by_order[order.id]
            costs = order_costs(order)
            total_expenses = costs.total_expenses(totals.total_commission_inr)
            snapshots[order.id] = OrderPaymentSnapshot(
                order_id=order.id,
                net_profit=round2(totals.total_actual_inr - total_expenses),
                total_actual_inr=totals.total_actual_inr,
                total_expenses=total_expenses,
                total_expected_inr=totals.total_expected_inr_all_payments,
                estimated_profit=round2(totals.total_expected_inr_all_payments - total_expenses),
                payment_status=classify_payment_status(totals, costs),
            )

        cls.get_logger().debug(
            "Computed bulk order profit",
            extra={"requested": len(ids), "found": len(snapshots)},
        )
        return snapshots
