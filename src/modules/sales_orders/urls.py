"""Sales order URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.sales_orders.views import SalesOrderViewSet

router = DefaultRouter(trailing_slash=True)
router.register("sales-orders", SalesOrderViewSet, basename="sales-order")

urlpatterns = router.urls
