"""Production order URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.production_orders.views import ProductionOrderViewSet

router = DefaultRouter(trailing_slash=True)
router.register("production-orders", ProductionOrderViewSet, basename="production-order")

urlpatterns = router.urls
