"""Sales order API views.

Exposes ``SalesOrderService`` over HTTP.  Domain exceptions are translated
into status codes here; a denied transition returns 400 with the
workflow's ``reason`` kind next to the human-readable ``detail``.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as DTOValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.sales_orders.dtos import (
    ChangeStatusDTO,
    CreateSalesOrderDTO,
    UpdateSalesOrderDTO,
)
from modules.sales_orders.exceptions import (
    InvalidOrderStatus,
    OrderNotDeletable,
    OrderNotEditable,
    SalesOrderNotFound,
)
from modules.sales_orders.filters import SalesOrderFilter
from modules.sales_orders.models import SalesOrder
from modules.sales_orders.repositories.django_repository import (
    SalesOrderDjangoRepository,
)
from modules.sales_orders.serializers import (
    ChangeStatusSerializer,
    CreateSalesOrderSerializer,
    SalesOrderListSerializer,
    SalesOrderSerializer,
    UpdateSalesOrderSerializer,
)
from modules.sales_orders.services import SalesOrderService

NOT_FOUND = {"detail": "Sales order not found."}


def invalid_transition_response(exc: InvalidOrderStatus) -> Response:
    return Response(
        {
            "detail": str(exc),
            "reason": exc.reason.value if exc.reason else None,
            "current_status": exc.result.current,
            "requested_status": exc.result.requested,
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


class SalesOrderViewSet(GenericViewSet):
    """Quotes and confirmed orders.

    Does **not** extend ``ModelViewSet``: every write goes through
    ``SalesOrderService`` so the workflow is always consulted.
    """

    queryset = SalesOrder.objects.none()
    filterset_class = SalesOrderFilter
    search_fields = ["order_number", "customer_name"]
    ordering_fields = ["created_at", "total_amount", "status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._repository = SalesOrderDjangoRepository()
        self._service = SalesOrderService(order_repository=self._repository)

    def get_queryset(self):
        return self._repository.queryset()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/sales-orders/"""
        queryset = self.filter_queryset(self.get_queryset())
        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(queryset, request)
        serializer = SalesOrderListSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/sales-orders/{pk}/"""
        try:
            order = self._service.get_order(str(pk))
        except SalesOrderNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(SalesOrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Create / Edit / Delete
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/sales-orders/"""
        serializer = CreateSalesOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            dto = CreateSalesOrderDTO(**serializer.validated_data)
        except DTOValidationError as exc:
            return Response(
                {"detail": exc.errors()[0]["msg"]},
                status=status.HTTP_400_BAD_REQUEST,
            )
        order = self._service.create_order(dto)
        return Response(
            SalesOrderSerializer(order).data, status=status.HTTP_201_CREATED
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/sales-orders/{pk}/

        Edits order fields.  Status changes go through ``POST .../status/``.
        """
        if "status" in request.data:
            return Response(
                {"detail": "Use the /status/ endpoint to change the status."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        serializer = UpdateSalesOrderSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            dto = UpdateSalesOrderDTO(**serializer.validated_data)
            order = self._service.update_order(pk, dto)
        except DTOValidationError as exc:
            return Response(
                {"detail": exc.errors()[0]["msg"]},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except SalesOrderNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except OrderNotEditable as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(SalesOrderSerializer(order).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/sales-orders/{pk}/"""
        try:
            self._service.delete_order(pk)
        except SalesOrderNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except OrderNotDeletable as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Workflow
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"], url_path="status")
    def change_status(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/sales-orders/{pk}/status/"""
        serializer = ChangeStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = ChangeStatusDTO(**serializer.validated_data)
        try:
            order = self._service.update_status(pk, dto.status, notes=dto.notes)
        except SalesOrderNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except InvalidOrderStatus as exc:
            return invalid_transition_response(exc)
        return Response(SalesOrderSerializer(order).data)

    @action(detail=True, methods=["get"])
    def workflow(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/sales-orders/{pk}/workflow/"""
        try:
            state = self._service.get_workflow_state(str(pk))
        except SalesOrderNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(state.model_dump())
