"""Outbox writer shared by the Django repositories.

Pending domain events of an aggregate become ``OutboxEvent`` rows inside
the caller's transaction and are then cleared from the aggregate.
"""

from __future__ import annotations

from typing import Any

from modules.core.models import OutboxEvent


def flush_domain_events(entity: Any, topic: str) -> int:
    """Write the entity's pending events to the outbox; returns how many."""
    events = getattr(entity, "domain_events", [])
    OutboxEvent.objects.bulk_create(
        [
            OutboxEvent(
                event_type=event.event_name,
                aggregate_id=str(event.aggregate_id),
                payload=event.to_payload(),
                topic=topic,
            )
            for event in events
        ]
    )
    if events:
        entity.clear_domain_events()
    return len(events)
