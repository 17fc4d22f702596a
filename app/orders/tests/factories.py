"""
Factory Boy factories for order test data.

Usage:
    from orders.tests.factories import OrderFactory, OrderLineFactory

    order = OrderFactory(shipping_cost=Decimal("500.00"))
    OrderLineFactory(order=order, selling_price=Decimal("100.00"),
                     payment_currency=OrderLine.Currency.USD)
"""

from decimal import Decimal

import factory

from orders.models import Order, OrderLine


class OrderFactory(factory.django.DjangoModelFactory):
    """
    Factory for creating Order instances.

    Default creates an order with no costs and no lines.
    """

    class Meta:
        model = Order
        skip_postgeneration_save = True

    order_code = factory.Sequence(lambda n: f"ORD-{1000 + n}")
    supplier_cost = Decimal("0.00")
    shipping_cost = Decimal("0.00")
    packaging_cost = Decimal("0.00")
    other_expenses = Decimal("0.00")


class OrderLineFactory(factory.django.DjangoModelFactory):
    """
    Factory for creating OrderLine instances.

    Positions increase per factory call; pass position explicitly when
    the product_index of a payment must point at a specific line.
    """

    class Meta:
        model = OrderLine
        skip_postgeneration_save = True

    order = factory.SubFactory(OrderFactory)
    position = factory.Sequence(lambda n: n)
    description = factory.Sequence(lambda n: f"Gold ring #{n}")
    selling_price = Decimal("0.00")
    payment_currency = OrderLine.Currency.INR
    purchase_price = Decimal("0.00")
