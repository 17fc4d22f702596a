"""
Pytest fixtures for payment tests.

Fixtures provide an order with priced lines, a 5% mediator, and payments in
each lifecycle state for testing derivation, aggregation and the API.

Usage:
    def test_net_profit(order, credited_payment):
        summary = ProfitService.get_order_profit_summary(order.id)
        assert summary.settled_payments_count == 1
"""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from orders.models import OrderLine
from orders.tests.factories import OrderFactory, OrderLineFactory
from payments.state_machines import PaymentLifecycleStatus
from payments.tests.factories import (
    BankFactory,
    MediatorFactory,
    PaymentFactory,
    UserFactory,
)


# =============================================================================
# User and Client Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a test user."""
    return UserFactory()


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def auth_client(api_client, user):
    """API client authenticated as user."""
    api_client.force_authenticate(user=user)
    return api_client


# =============================================================================
# Master Data Fixtures
# =============================================================================


@pytest.fixture
def mediator(db):
    """Mediator charging 5% of gross."""
    return MediatorFactory(commission_value=Decimal("5.00"))


@pytest.fixture
def bank(db):
    return BankFactory(name="HDFC Current Account")


# =============================================================================
# Order Fixtures
# =============================================================================


@pytest.fixture
def order(db):
    """
    Order with one INR line and fixed costs.

    purchase 50000 + supplier 1000 + shipping 500 + packaging 200 + other 300
    = 52000 INR before commission.
    """
    order = OrderFactory(
        supplier_cost=Decimal("1000.00"),
        shipping_cost=Decimal("500.00"),
        packaging_cost=Decimal("200.00"),
        other_expenses=Decimal("300.00"),
    )
    OrderLineFactory(
        order=order,
        position=0,
        selling_price=Decimal("80000.00"),
        payment_currency=OrderLine.Currency.INR,
        purchase_price=Decimal("50000.00"),
    )
    return order


@pytest.fixture
def usd_order(db):
    """Order with a single 100.00 USD line and no costs."""
    order = OrderFactory()
    OrderLineFactory(
        order=order,
        position=0,
        selling_price=Decimal("100.00"),
        payment_currency=OrderLine.Currency.USD,
    )
    return order


# =============================================================================
# Payment Fixtures
# =============================================================================


@pytest.fixture
def pending_payment(db, order, mediator):
    """1000 USD at 83.12, still with the mediator."""
    return PaymentFactory(order=order, mediator=mediator)


@pytest.fixture
def credited_payment(db, order, mediator):
    """1000 USD at 83.12, credited at 78900.00 INR."""
    return PaymentFactory(
        order=order,
        mediator=mediator,
        payment_status=PaymentLifecycleStatus.CREDITED_TO_BANK,
        actual_bank_credit_inr=Decimal("78900.00"),
    )
