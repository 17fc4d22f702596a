"""
URL configuration for the Django application.

URL Structure:
    /                                       - ReDoc API documentation
    /admin/                                 - Django admin interface
    /health/                                - Health check endpoint
    /schema/                                - OpenAPI schema (YAML)
    /api/v1/payments/                       - Payment settlement endpoints
        payments/                           - List/create payments
        payments/{id}/                      - Get/update/soft delete a payment
        payments/{id}/restore/              - Restore a soft-deleted payment
        orders/{order_id}/payments/         - Payments of one order
        orders/{order_id}/profit-summary/   - Profit summary of one order
        orders/profit-summary/              - Bulk profit and payment status
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
api_v1_patterns = [
    path("payments/", include("payments.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Settlement Admin"
admin.site.site_title = "Settlement Admin Portal"
admin.site.index_title = "Payments and order profitability"
