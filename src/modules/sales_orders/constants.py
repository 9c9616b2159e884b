"""Sales order domain constants.

Status and kind vocabularies for sales orders and quotes.  The
transition tables that use them live in ``modules.sales_orders.workflow``.
"""

from django.db import models


class SalesOrderStatus(models.TextChoices):
    PENDING = "pending", "Pendente"
    APPROVED = "approved", "Aprovado"
    IN_PRODUCTION = "in_production", "Em Produção"
    FINISHED = "finished", "Finalizado"
    AWAITING_DISPATCH = "awaiting_dispatch", "Aguardando Despacho"
    DELIVERED = "delivered", "Entregue"
    CANCELED = "canceled", "Cancelado"
    REJECTED = "rejected", "Recusado"


class OrderKind(models.TextChoices):
    QUOTE = "quote", "Orçamento"
    CONFIRMED_ORDER = "confirmed_order", "Pedido Confirmado"


FINAL_STATUSES: frozenset[str] = frozenset(
    {
        SalesOrderStatus.DELIVERED.value,
        SalesOrderStatus.CANCELED.value,
        SalesOrderStatus.REJECTED.value,
    }
)

# Escape statuses are never suggested as the natural next step.
ESCAPE_STATUSES: frozenset[str] = frozenset(
    {SalesOrderStatus.CANCELED.value, SalesOrderStatus.REJECTED.value}
)

ORDER_NUMBER_PREFIX = "PED"
ORDER_NUMBER_MAX_RETRIES = 5
