import django_filters

from modules.production_orders.constants import ProductionOrderStatus
from modules.production_orders.models import ProductionOrder


class ProductionOrderFilter(django_filters.FilterSet):
    status = django_filters.MultipleChoiceFilter(choices=ProductionOrderStatus.choices)
    sales_order = django_filters.UUIDFilter(field_name="sales_order_id")
    product = django_filters.CharFilter(
        field_name="product_name", lookup_expr="icontains"
    )
    scheduled_from = django_filters.DateFilter(
        field_name="scheduled_date", lookup_expr="gte"
    )
    scheduled_to = django_filters.DateFilter(
        field_name="scheduled_date", lookup_expr="lte"
    )

    class Meta:
        model = ProductionOrder
        fields = ["status", "sales_order", "product", "scheduled_from", "scheduled_to"]
