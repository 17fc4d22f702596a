"""
API views for payment settlement and order profitability.

Provides:
- PaymentListCreateView: List payments with filters, record a payment
- PaymentDetailView: Get, partially update or soft delete a payment
- PaymentRestoreView: Restore a soft-deleted payment
- OrderPaymentListView: Payments of one order
- OrderProfitSummaryView: Profit summary of one order
- BulkOrderProfitSummaryView: Profit and payment status of many orders

Service errors are answered with BaseApplicationError.to_dict() and the
error's own status code (400 for validation, 404 for missing records).
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from payments.exceptions import PaymentError
from payments.serializers import (
    BulkProfitRequestSerializer,
    OrderPaymentSnapshotSerializer,
    OrderProfitSummarySerializer,
    PaymentCreateSerializer,
    PaymentListQuerySerializer,
    PaymentPageSerializer,
    PaymentSerializer,
    PaymentUpdateSerializer,
)
from payments.services import PaymentService, ProfitService


def error_response(error: PaymentError) -> Response:
    return Response(error.to_dict(), status=error.status_code)


class PaymentListCreateView(APIView):
    """
    List and record payments.

    GET /api/v1/payments/payments/
        Live payments, newest first, paginated.

    POST /api/v1/payments/payments/
        Record a payment. Derived fields are computed server-side.

    Response:
        200 OK / 201 Created
        400 Bad Request: Validation error
        404 Not Found: Order, mediator or bank does not exist
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_payments",
        summary="List payments",
        description="Live (not soft-deleted) payments, newest first.",
        parameters=[
            OpenApiParameter("order_id", OpenApiTypes.UUID, description="Filter by order"),
            OpenApiParameter(
                "payment_status",
                OpenApiTypes.STR,
                description="Filter by lifecycle state",
            ),
            OpenApiParameter("mediator_id", OpenApiTypes.UUID, description="Filter by mediator"),
            OpenApiParameter("page", OpenApiTypes.INT, description="Page number (default 1)"),
            OpenApiParameter("limit", OpenApiTypes.INT, description="Page size (max 100)"),
        ],
        responses={
            200: PaymentPageSerializer,
            400: OpenApiResponse(description="Invalid filter or paging parameter"),
        },
        tags=["Payments"],
    )
    def get(self, request):
        query = PaymentListQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        params = dict(query.validated_data)
        page = params.pop("page", 1)
        limit = params.pop("limit", None)

        try:
            payment_page = PaymentService.list_payments(filters=params, page=page, limit=limit)
        except PaymentError as e:
            return error_response(e)

        return Response(PaymentPageSerializer(payment_page).data)

    @extend_schema(
        operation_id="create_payment",
        summary="Record payment",
        description=(
            "Record a payment against an order. Commission terms default to the "
            "mediator's current terms; commission amount, net amount, expected INR "
            "and exchange difference are derived."
        ),
        request=PaymentCreateSerializer,
        responses={
            201: PaymentSerializer,
            400: OpenApiResponse(description="Validation error"),
            404: OpenApiResponse(description="Order, mediator or bank not found"),
        },
        tags=["Payments"],
    )
    def post(self, request):
        serializer = PaymentCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            payment = PaymentService.create_payment(serializer.validated_data)
        except PaymentError as e:
            return error_response(e)

        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)


class PaymentDetailView(APIView):
    """
    Get, update or soft delete one payment.

    GET    /api/v1/payments/payments/{payment_id}/
    PATCH  /api/v1/payments/payments/{payment_id}/
    DELETE /api/v1/payments/payments/{payment_id}/

    Soft-deleted payments answer 404.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_payment",
        summary="Get payment",
        responses={
            200: PaymentSerializer,
            404: OpenApiResponse(description="Payment not found"),
        },
        tags=["Payments"],
    )
    def get(self, request, payment_id):
        try:
            payment = PaymentService.get_payment(payment_id)
        except PaymentError as e:
            return error_response(e)

        return Response(PaymentSerializer(payment).data)

    @extend_schema(
        operation_id="update_payment",
        summary="Update payment",
        description=(
            "Partial update. Every derived field is recomputed. The commission "
            "amount is re-derived when gross, commission type or commission value "
            "change without an explicit amount."
        ),
        request=PaymentUpdateSerializer,
        responses={
            200: PaymentSerializer,
            400: OpenApiResponse(description="Validation error"),
            404: OpenApiResponse(description="Payment, mediator or bank not found"),
        },
        tags=["Payments"],
    )
    def patch(self, request, payment_id):
        serializer = PaymentUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            payment = PaymentService.update_payment(payment_id, serializer.validated_data)
        except PaymentError as e:
            return error_response(e)

        return Response(PaymentSerializer(payment).data)

    @extend_schema(
        operation_id="delete_payment",
        summary="Soft delete payment",
        description="The payment stops counting towards any order total.",
        responses={
            204: OpenApiResponse(description="Payment deleted"),
            404: OpenApiResponse(description="Payment not found"),
        },
        tags=["Payments"],
    )
    def delete(self, request, payment_id):
        try:
            PaymentService.delete_payment(payment_id)
        except PaymentError as e:
            return error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)


class PaymentRestoreView(APIView):
    """
    POST /api/v1/payments/payments/{payment_id}/restore/
        Bring a soft-deleted payment back.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="restore_payment",
        summary="Restore payment",
        request=None,
        responses={
            200: PaymentSerializer,
            404: OpenApiResponse(description="No deleted payment with this id"),
        },
        tags=["Payments"],
    )
    def post(self, request, payment_id):
        try:
            payment = PaymentService.restore_payment(payment_id)
        except PaymentError as e:
            return error_response(e)

        return Response(PaymentSerializer(payment).data)


class OrderPaymentListView(APIView):
    """
    GET /api/v1/payments/orders/{order_id}/payments/
        Live payments of one order, oldest first.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_order_payments",
        summary="List order payments",
        responses={
            200: PaymentSerializer(many=True),
            404: OpenApiResponse(description="Order not found"),
        },
        tags=["Orders"],
    )
    def get(self, request, order_id):
        try:
            payments = PaymentService.list_order_payments(order_id)
        except PaymentError as e:
            return error_response(e)

        return Response(PaymentSerializer(payments, many=True).data)


class OrderProfitSummaryView(APIView):
    """
    GET /api/v1/payments/orders/{order_id}/profit-summary/
        Settled totals, expenses, net profit and profit percent of one order.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_order_profit_summary",
        summary="Order profit summary",
        description=(
            "Net profit counts only payments credited to the bank. "
            "estimated_profit assumes every live payment clears at its expected INR."
        ),
        responses={
            200: OrderProfitSummarySerializer,
            404: OpenApiResponse(description="Order not found"),
        },
        tags=["Orders"],
    )
    def get(self, request, order_id):
        try:
            summary = ProfitService.get_order_profit_summary(order_id)
        except PaymentError as e:
            return error_response(e)

        return Response(OrderProfitSummarySerializer(summary).data)


class BulkOrderProfitSummaryView(APIView):
    """
    POST /api/v1/payments/orders/profit-summary/
        Profit figures and Paid/Partial/Unpaid for many orders.

    Request:
        {"order_ids": ["<uuid>", ...]}

    Response:
        {"results": {"<uuid>": {...}, ...}}
        Unknown and malformed ids are left out.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="bulk_order_profit_summary",
        summary="Bulk order profit and payment status",
        request=BulkProfitRequestSerializer,
        responses={
            200: OpenApiResponse(
                description="Mapping of order id to OrderPaymentSnapshot under 'results'",
            ),
            400: OpenApiResponse(description="Body is not a list of ids"),
        },
        tags=["Orders"],
    )
    def post(self, request):
        serializer = BulkProfitRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        snapshots = ProfitService.get_order_profit_summary_bulk(
            serializer.validated_data["order_ids"]
        )
        results = {
            str(order_id): OrderPaymentSnapshotSerializer(snapshot).data
            for order_id, snapshot in snapshots.items()
        }
        return Response({"results": results})
