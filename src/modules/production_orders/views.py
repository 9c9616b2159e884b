"""Production order API views."""

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
from modules.production_orders.dtos import (
    ChangeProductionStatusDTO,
    CreateProductionOrderDTO,
    UpdateProductionOrderDTO,
)
from modules.production_orders.exceptions import (
    InvalidProductionOrderStatus,
    ProductionOrderNotDeletable,
    ProductionOrderNotEditable,
    ProductionOrderNotFound,
    SalesOrderNotReady,
)
from modules.production_orders.filters import ProductionOrderFilter
from modules.production_orders.models import ProductionOrder
from modules.production_orders.repositories.django_repository import (
    ProductionOrderDjangoRepository,
)
from modules.production_orders.serializers import (
    ChangeProductionStatusSerializer,
    CreateProductionOrderSerializer,
    ProductionOrderListSerializer,
    ProductionOrderSerializer,
    UpdateProductionOrderSerializer,
)
from modules.production_orders.services import ProductionOrderService
from modules.sales_orders.exceptions import SalesOrderNotFound
from modules.sales_orders.repositories.django_repository import (
    SalesOrderDjangoRepository,
)
from modules.sales_orders.services import SalesOrderService

NOT_FOUND = {"detail": "Production order not found."}


def _dto_error(exc: DTOValidationError) -> Response:
    return Response(
        {"detail": exc.errors()[0]["msg"]}, status=status.HTTP_400_BAD_REQUEST
    )


class ProductionOrderViewSet(GenericViewSet):
    queryset = ProductionOrder.objects.none()
    filterset_class = ProductionOrderFilter
    search_fields = ["op_number", "product_name"]
    ordering_fields = ["created_at", "scheduled_date", "status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._repository = ProductionOrderDjangoRepository()
        self._service = ProductionOrderService(
            order_repository=self._repository,
            sales_order_service=SalesOrderService(
                order_repository=SalesOrderDjangoRepository()
            ),
        )

    def get_queryset(self):
        return self._repository.queryset()

    def list(self, request: Request) -> Response:
        """GET /api/v1/production-orders/"""
        queryset = self.filter_queryset(self.get_queryset())
        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(queryset, request)
        serializer = ProductionOrderListSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        try:
            order = self._service.get_order(str(pk))
        except ProductionOrderNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(ProductionOrderSerializer(order).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/production-orders/

        Linking an approved sales order moves it to ``in_production``.
        """
        serializer = CreateProductionOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            dto = CreateProductionOrderDTO(**serializer.validated_data)
            order = self._service.create_order(dto)
        except DTOValidationError as exc:
            return _dto_error(exc)
        except SalesOrderNotFound:
            return Response(
                {"detail": "Sales order not found."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except SalesOrderNotReady as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(
            ProductionOrderSerializer(order).data, status=status.HTTP_201_CREATED
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        if "status" in request.data:
            return Response(
                {"detail": "Use the /status/ endpoint to change the status."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        serializer = UpdateProductionOrderSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            dto = UpdateProductionOrderDTO(**serializer.validated_data)
            order = self._service.update_order(pk, dto)
        except DTOValidationError as exc:
            return _dto_error(exc)
        except ProductionOrderNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except ProductionOrderNotEditable as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(ProductionOrderSerializer(order).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        try:
            self._service.delete_order(pk)
        except ProductionOrderNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except ProductionOrderNotDeletable as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="status")
    def change_status(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/production-orders/{pk}/status/"""
        serializer = ChangeProductionStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = ChangeProductionStatusDTO(**serializer.validated_data)
        try:
            order = self._service.update_status(pk, dto.status, notes=dto.notes)
        except ProductionOrderNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except InvalidProductionOrderStatus as exc:
            return Response(
                {
                    "detail": str(exc),
                    "reason": exc.reason.value if exc.reason else None,
                    "current_status": exc.result.current,
                    "requested_status": exc.result.requested,
                },
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(ProductionOrderSerializer(order).data)

    @action(detail=True, methods=["get"])
    def workflow(self, request: Request, pk: str | None = None) -> Response:
        try:
            state = self._service.get_workflow_state(str(pk))
        except ProductionOrderNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(state.model_dump())
