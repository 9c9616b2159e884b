"""Tarefas assíncronas do módulo core."""

import structlog
from celery import shared_task
from django.conf import settings

from modules.core.models import OutboxEvent
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)


@shared_task(name="core.publish_outbox_events")
def publish_outbox_events(batch_size: int = 100) -> dict:
    """Publish pending outbox events to the in-process event bus.

    A failing handler marks the row ``FAILED`` and bumps ``retry_count``;
    it is picked up again until ``OUTBOX_MAX_RETRIES`` is reached.
    """
    max_retries = getattr(settings, "OUTBOX_MAX_RETRIES", 5)
    published = failed = 0

    for outbox in OutboxEvent.objects.publishable(max_retries)[:batch_size]:
        log = logger.bind(
            outbox_id=str(outbox.id),
            event_type=outbox.event_type,
            aggregate_id=outbox.aggregate_id,
        )
        try:
            event = event_bus.rehydrate(outbox.event_type, outbox.payload)
            event_bus.publish(event)
        except Exception as exc:
            outbox.mark_as_failed(str(exc))
            failed += 1
            log.exception("outbox.publish_failed", retry_count=outbox.retry_count)
            continue
        outbox.mark_as_published()
        published += 1
        log.info("outbox.published")

    return {"published": published, "failed": failed}
