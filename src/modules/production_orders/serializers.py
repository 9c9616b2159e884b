"""Production order DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.production_orders.constants import ProductionOrderStatus
from modules.production_orders.models import (
    ProductionOrder,
    ProductionOrderStatusHistory,
)


class CreateProductionOrderSerializer(serializers.Serializer):
    product_name = serializers.CharField(max_length=200)
    quantity_meters = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0
    )
    sales_order_id = serializers.UUIDField(required=False, allow_null=True)
    scheduled_date = serializers.DateField(required=False, allow_null=True)
    technical_instructions = serializers.CharField(
        required=False, default="", allow_blank=True
    )
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class UpdateProductionOrderSerializer(serializers.Serializer):
    product_name = serializers.CharField(max_length=200, required=False)
    quantity_meters = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False
    )
    scheduled_date = serializers.DateField(required=False)
    technical_instructions = serializers.CharField(required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class ChangeProductionStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ProductionOrderStatus.choices)
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class ProductionOrderStatusHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductionOrderStatusHistory
        fields = ["id", "old_status", "new_status", "notes", "created_at"]
        read_only_fields = fields


class ProductionOrderSerializer(serializers.ModelSerializer):
    status_label = serializers.CharField(source="get_status_display", read_only=True)
    sales_order_number = serializers.CharField(
        source="sales_order.order_number", read_only=True, default=None
    )
    status_history = ProductionOrderStatusHistorySerializer(many=True, read_only=True)
    is_final = serializers.BooleanField(read_only=True)
    can_edit = serializers.BooleanField(read_only=True)
    can_delete = serializers.BooleanField(read_only=True)

    class Meta:
        model = ProductionOrder
        fields = [
            "id",
            "op_number",
            "sales_order",
            "sales_order_number",
            "product_name",
            "quantity_meters",
            "status",
            "status_label",
            "scheduled_date",
            "started_at",
            "finished_at",
            "technical_instructions",
            "notes",
            "is_final",
            "can_edit",
            "can_delete",
            "created_at",
            "updated_at",
            "status_history",
        ]
        read_only_fields = fields


class ProductionOrderListSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductionOrder
        fields = [
            "id",
            "op_number",
            "sales_order",
            "product_name",
            "quantity_meters",
            "status",
            "scheduled_date",
            "created_at",
        ]
        read_only_fields = fields
