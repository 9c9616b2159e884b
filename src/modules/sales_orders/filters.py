import django_filters

from modules.sales_orders.constants import OrderKind, SalesOrderStatus
from modules.sales_orders.models import SalesOrder


class SalesOrderFilter(django_filters.FilterSet):
    status = django_filters.MultipleChoiceFilter(choices=SalesOrderStatus.choices)
    kind = django_filters.ChoiceFilter(choices=OrderKind.choices)
    customer = django_filters.CharFilter(
        field_name="customer_name", lookup_expr="icontains"
    )
    start_date = django_filters.DateFilter(field_name="created_at", lookup_expr="gte")
    end_date = django_filters.DateFilter(field_name="created_at", lookup_expr="lte")

    class Meta:
        model = SalesOrder
        fields = ["status", "kind", "customer", "start_date", "end_date"]
