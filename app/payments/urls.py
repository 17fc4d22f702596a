"""
URL configuration for the payments app.

Routes:
    - GET/POST /payments/ - List or record payments
    - GET/PATCH/DELETE /payments/{payment_id}/ - One payment
    - POST /payments/{payment_id}/restore/ - Restore a soft-deleted payment
    - GET /orders/{order_id}/payments/ - Payments of one order
    - GET /orders/{order_id}/profit-summary/ - Profit summary of one order
    - POST /orders/profit-summary/ - Bulk profit and payment status

All routes are prefixed with /api/v1/payments/ when included in the main URLconf.
"""

from django.urls import path

from payments.views import (
    BulkOrderProfitSummaryView,
    OrderPaymentListView,
    OrderProfitSummaryView,
    PaymentDetailView,
    PaymentListCreateView,
    PaymentRestoreView,
)

app_name = "payments"

urlpatterns = [
    # Payments
    path("payments/", PaymentListCreateView.as_view(), name="payment-list"),
    path("payments/<uuid:payment_id>/", PaymentDetailView.as_view(), name="payment-detail"),
    path(
        "payments/<uuid:payment_id>/restore/",
        PaymentRestoreView.as_view(),
        name="payment-restore",
    ),
    # Orders
    path(
        "orders/profit-summary/",
        BulkOrderProfitSummaryView.as_view(),
        name="order-profit-summary-bulk",
    ),
    path(
        "orders/<uuid:order_id>/payments/",
        OrderPaymentListView.as_view(),
        name="order-payments",
    ),
    path(
        "orders/<uuid:order_id>/profit-summary/",
        OrderProfitSummaryView.as_view(),
        name="order-profit-summary",
    ),
]
