"""Sales order DRF serializers for API input/output.

Input serializers only validate the payload shape; the service receives
Pydantic DTOs built from ``validated_data``.
"""

from __future__ import annotations

from typing import Optional

from rest_framework import serializers

from modules.sales_orders.constants import OrderKind, SalesOrderStatus
from modules.sales_orders.models import SalesOrder, SalesOrderStatusHistory

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateSalesOrderSerializer(serializers.Serializer):
    customer_name = serializers.CharField(max_length=200)
    kind = serializers.ChoiceField(choices=OrderKind.choices, default=OrderKind.QUOTE)
    total_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False
    )
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class UpdateSalesOrderSerializer(serializers.Serializer):
    customer_name = serializers.CharField(max_length=200, required=False)
    total_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False
    )
    notes = serializers.CharField(required=False, allow_blank=True)


class ChangeStatusSerializer(serializers.Serializer):
    """Unknown status values are rejected here with a 400."""

    status = serializers.ChoiceField(choices=SalesOrderStatus.choices)
    notes = serializers.CharField(required=False, default="", allow_blank=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class SalesOrderStatusHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = SalesOrderStatusHistory
        fields = ["id", "old_status", "new_status", "notes", "created_at"]
        read_only_fields = fields


class SalesOrderSerializer(serializers.ModelSerializer):
    """Read serializer with history and the workflow flags."""

    status_label = serializers.CharField(source="get_status_display", read_only=True)
    kind_label = serializers.CharField(source="get_kind_display", read_only=True)
    status_history = SalesOrderStatusHistorySerializer(many=True, read_only=True)
    is_final = serializers.BooleanField(read_only=True)
    can_edit = serializers.BooleanField(read_only=True)
    can_delete = serializers.BooleanField(read_only=True)
    converted_order = serializers.SerializerMethodField()

    class Meta:
        model = SalesOrder
        fields = [
            "id",
            "order_number",
            "customer_name",
            "kind",
            "kind_label",
            "status",
            "status_label",
            "total_amount",
            "notes",
            "source_quote",
            "converted_order",
            "is_final",
            "can_edit",
            "can_delete",
            "created_at",
            "updated_at",
            "status_history",
        ]
        read_only_fields = fields

    def get_converted_order(self, obj: SalesOrder) -> Optional[str]:
        """Id of the confirmed order opened when this quote was approved."""
        converted = getattr(obj, "converted_order", None)
        return str(converted.id) if converted else None


class SalesOrderListSerializer(serializers.ModelSerializer):
    class Meta:
        model = SalesOrder
        fields = [
            "id",
            "order_number",
            "customer_name",
            "kind",
            "status",
            "total_amount",
            "created_at",
        ]
        read_only_fields = fields
