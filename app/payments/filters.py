import django_filters as filters

from payments.models import Payment
from payments.state_machines import PaymentLifecycleStatus


class PaymentFilter(filters.FilterSet):
    order_id = filters.UUIDFilter(field_name="order_id")
    payment_status = filters.ChoiceFilter(choices=PaymentLifecycleStatus.choices)
    mediator_id = filters.UUIDFilter(field_name="mediator_id")

    class Meta:
        model = Payment
        fields = ["order_id", "payment_status", "mediator_id"]
