"""Production order domain constants."""

from django.db import models


class ProductionOrderStatus(models.TextChoices):
    AWAITING = "awaiting", "Aguardando"
    IN_PRODUCTION = "in_production", "Em Produção"
    # Some line items finished while others are still awaiting or running.
    PARTIAL = "partial", "Parcial"
    COMPLETED = "completed", "Concluído"
    CANCELED = "canceled", "Cancelado"


FINAL_STATUSES: frozenset[str] = frozenset(
    {ProductionOrderStatus.COMPLETED.value, ProductionOrderStatus.CANCELED.value}
)

EDITABLE_STATUSES: frozenset[str] = frozenset(
    {ProductionOrderStatus.AWAITING.value, ProductionOrderStatus.PARTIAL.value}
)

DELETABLE_STATUSES: frozenset[str] = frozenset(
    {ProductionOrderStatus.AWAITING.value, ProductionOrderStatus.CANCELED.value}
)

OP_NUMBER_PREFIX = "OP"
OP_NUMBER_MAX_RETRIES = 5
