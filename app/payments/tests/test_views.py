"""
Tests for payment API views.

Covers authentication, request validation, service error mapping and the
response shapes of the payment and order profit endpoints.
"""

import uuid
from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework import status

from payments.models import Payment
from payments.state_machines import OrderPaymentStatus, PaymentLifecycleStatus
from payments.tests.factories import PaymentFactory


def payment_list_url():
    return reverse("payments:payment-list")


def payment_detail_url(payment_id):
    return reverse("payments:payment-detail", kwargs={"payment_id": payment_id})


# =============================================================================
# Authentication Tests
# =============================================================================


class TestAuthentication:
    """All endpoints require an authenticated user."""

    def test_list_requires_auth(self, db, api_client):
        response = api_client.get(payment_list_url())

        assert response.status_code in (
            status.HTTP_401_UNAUTHORIZED,
            status.HTTP_403_FORBIDDEN,
        )

    def test_profit_summary_requires_auth(self, db, api_client, order):
        url = reverse("payments:order-profit-summary", kwargs={"order_id": order.id})

        response = api_client.get(url)

        assert response.status_code in (
            status.HTTP_401_UNAUTHORIZED,
            status.HTTP_403_FORBIDDEN,
        )


# =============================================================================
# Payment Endpoint Tests
# =============================================================================


class TestPaymentCreateView:
    """Tests for POST /api/v1/payments/payments/."""

    def test_create(self, db, auth_client, order, mediator):
        """Should return 201 with derived fields."""
        response = auth_client.post(
            payment_list_url(),
            {
                "order_id": str(order.id),
                "mediator_id": str(mediator.id),
                "gross_amount_usd": "1000.00",
                "conversion_rate": "83.12",
                "actual_bank_credit_inr": "78900.00",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert Decimal(str(data["mediator_commission_amount"])) == Decimal("50.00")
        assert Decimal(str(data["net_amount_usd"])) == Decimal("950.00")
        assert Decimal(str(data["expected_amount_inr"])) == Decimal("78964.00")
        assert Decimal(str(data["exchange_difference"])) == Decimal("-64.00")
        assert data["payment_status"] == PaymentLifecycleStatus.PENDING_WITH_MEDIATOR
        assert data["order_id"] == str(order.id)

    def test_unknown_status_is_400(self, db, auth_client, order, mediator):
        response = auth_client.post(
            payment_list_url(),
            {
                "order_id": str(order.id),
                "mediator_id": str(mediator.id),
                "payment_status": "lost_in_transit",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "payment_status" in response.json()
        assert Payment.all_objects.count() == 0

    def test_negative_gross_is_400(self, db, auth_client, order, mediator):
        """Should map the service validation error to 400."""
        response = auth_client.post(
            payment_list_url(),
            {
                "order_id": str(order.id),
                "mediator_id": str(mediator.id),
                "gross_amount_usd": "-10",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "NEGATIVE_AMOUNT"

    def test_derived_amount_past_column_limit_is_400(self, db, auth_client, order, mediator):
        """Gross that fits but converts to more INR than a column holds."""
        response = auth_client.post(
            payment_list_url(),
            {
                "order_id": str(order.id),
                "mediator_id": str(mediator.id),
                "gross_amount_usd": "100000000000",
                "conversion_rate": "83.12",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "AMOUNT_TOO_LARGE"
        assert Payment.all_objects.count() == 0

        url = reverse("payments:order-profit-summary", kwargs={"order_id": order.id})
        assert auth_client.get(url).status_code == status.HTTP_200_OK

    @pytest.mark.parametrize("value", ["1e30", "10000000000000"])
    def test_oversized_gross_is_400(self, db, auth_client, order, mediator, value):
        response = auth_client.post(
            payment_list_url(),
            {
                "order_id": str(order.id),
                "mediator_id": str(mediator.id),
                "gross_amount_usd": value,
            },
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "gross_amount_usd" in response.json()
        assert Payment.all_objects.count() == 0

    def test_missing_order_is_404(self, db, auth_client, mediator):
        response = auth_client.post(
            payment_list_url(),
            {"order_id": str(uuid.uuid4()), "mediator_id": str(mediator.id)},
            format="json",
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "ORDER_NOT_FOUND"

    def test_malformed_id_is_400(self, db, auth_client, mediator):
        response = auth_client.post(
            payment_list_url(),
            {"order_id": "abc", "mediator_id": str(mediator.id)},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestPaymentListView:
    """Tests for GET /api/v1/payments/payments/."""

    def test_list(self, db, auth_client, pending_payment):
        response = auth_client.get(payment_list_url())

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [p["id"] for p in data["results"]] == [str(pending_payment.id)]
        assert data["pagination"]["total"] == 1

    def test_filter_by_status(self, db, auth_client, pending_payment, credited_payment):
        response = auth_client.get(
            payment_list_url(), {"payment_status": "credited_to_bank"}
        )

        assert [p["id"] for p in response.json()["results"]] == [str(credited_payment.id)]

    def test_bad_filter_is_400(self, db, auth_client):
        response = auth_client.get(payment_list_url(), {"order_id": "nope"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestPaymentDetailView:
    """Tests for GET/PATCH/DELETE /api/v1/payments/payments/{id}/."""

    def test_get(self, db, auth_client, pending_payment):
        response = auth_client.get(payment_detail_url(pending_payment.id))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == str(pending_payment.id)

    def test_get_missing_is_404(self, db, auth_client):
        response = auth_client.get(payment_detail_url(uuid.uuid4()))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "PAYMENT_NOT_FOUND"

    def test_patch_credits_payment(self, db, auth_client, pending_payment):
        """Should recompute derived fields and move the lifecycle."""
        response = auth_client.patch(
            payment_detail_url(pending_payment.id),
            {"actual_bank_credit_inr": "78900.00", "payment_status": "credited_to_bank"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert Decimal(str(data["exchange_difference"])) == Decimal("-64.00")
        assert data["payment_status"] == "credited_to_bank"
        assert data["credited_date"] is not None

    def test_patch_only_touches_sent_fields(self, db, auth_client, pending_payment):
        response = auth_client.patch(
            payment_detail_url(pending_payment.id),
            {"notes": "wire pending"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        pending_payment.refresh_from_db()
        assert pending_payment.notes == "wire pending"
        assert pending_payment.gross_amount_usd == Decimal("1000.00")

    def test_delete_is_soft(self, db, auth_client, pending_payment):
        response = auth_client.delete(payment_detail_url(pending_payment.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert Payment.all_objects.get(pk=pending_payment.pk).is_deleted is True
        assert (
            auth_client.get(payment_detail_url(pending_payment.id)).status_code
            == status.HTTP_404_NOT_FOUND
        )

    def test_restore(self, db, auth_client, pending_payment):
        pending_payment.soft_delete()
        url = reverse("payments:payment-restore", kwargs={"payment_id": pending_payment.id})

        response = auth_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert Payment.objects.filter(pk=pending_payment.pk).exists()


# =============================================================================
# Order Endpoint Tests
# =============================================================================


class TestOrderPaymentListView:
    """Tests for GET /api/v1/payments/orders/{order_id}/payments/."""

    def test_lists_order_payments(self, db, auth_client, order, pending_payment):
        PaymentFactory()
        url = reverse("payments:order-payments", kwargs={"order_id": order.id})

        response = auth_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [p["id"] for p in response.json()] == [str(pending_payment.id)]

    def test_missing_order_is_404(self, db, auth_client):
        url = reverse("payments:order-payments", kwargs={"order_id": uuid.uuid4()})

        assert auth_client.get(url).status_code == status.HTTP_404_NOT_FOUND


class TestOrderProfitSummaryView:
    """Tests for GET /api/v1/payments/orders/{order_id}/profit-summary/."""

    def test_summary(self, db, auth_client, order, credited_payment):
        url = reverse("payments:order-profit-summary", kwargs={"order_id": order.id})

        response = auth_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert Decimal(str(data["net_profit"])) == Decimal("22744.00")
        assert Decimal(str(data["profit_percent"])) == Decimal("28.43")
        assert data["settled_payments_count"] == 1

    def test_missing_order_is_404(self, db, auth_client):
        url = reverse("payments:order-profit-summary", kwargs={"order_id": uuid.uuid4()})

        response = auth_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "ORDER_NOT_FOUND"


class TestBulkOrderProfitSummaryView:
    """Tests for POST /api/v1/payments/orders/profit-summary/."""

    def test_bulk(self, db, auth_client, order, usd_order, credited_payment):
        url = reverse("payments:order-profit-summary-bulk")

        response = auth_client.post(
            url,
            {"order_ids": [str(order.id), str(usd_order.id), "junk", str(uuid.uuid4())]},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        results = response.json()["results"]
        assert set(results) == {str(order.id), str(usd_order.id)}
        assert results[str(order.id)]["payment_status"] == OrderPaymentStatus.PAID
        assert results[str(usd_order.id)]["payment_status"] == OrderPaymentStatus.UNPAID
        assert Decimal(str(results[str(order.id)]["net_profit"])) == Decimal("22744.00")

    @pytest.mark.parametrize("body", [{}, {"order_ids": "abc"}])
    def test_bad_body_is_400(self, db, auth_client, body):
        url = reverse("payments:order-profit-summary-bulk")

        response = auth_client.post(url, body, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
