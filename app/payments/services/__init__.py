"""
Settlement services.

This module provides:
- PaymentService: Records payments and keeps their derived fields consistent
- ProfitService: Per-order profit summaries and bulk payment-status verdicts

Usage:
    from payments.services import PaymentService, ProfitService

    payment = PaymentService.create_payment({
        "order_id": order.id,
        "mediator_id": mediator.id,
        "gross_amount_usd": "1000.00",
        "conversion_rate": "83.12",
    })

    summary = ProfitService.get_order_profit_summary(order.id)
    snapshots = ProfitService.get_order_profit_summary_bulk([order.id])
"""

from payments.services.payment_service import PaymentPage, PaymentService
from payments.services.profit_service import (
    OrderCosts,
    OrderPaymentSnapshot,
    OrderProfitSummary,
    PaymentTotals,
    ProfitService,
    classify_payment_status,
    order_costs,
)

__all__ = [
    "OrderCosts",
    "OrderPaymentSnapshot",
    "OrderProfitSummary",
    "PaymentPage",
    "PaymentService",
    "PaymentTotals",
    "ProfitService",
    "classify_payment_status",
    "order_costs",
]
