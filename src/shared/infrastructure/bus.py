"""In-memory event bus implementation."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Type

import structlog

from shared.domain.bus import IEventBus, IEventHandler
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class InMemoryEventBus(IEventBus):
    """Simple in-process event bus.

    Also keeps a name -> class registry of subscribed event types so that
    events read back from the outbox can be rebuilt with ``rehydrate``.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[IEventHandler]] = {}
        self._event_types: Dict[str, Type[DomainEvent]] = {}

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        self._event_types[event_class.__name__] = event_class
        handlers = self._handlers.setdefault(event_class, [])
        if handler not in handlers:
            handlers.append(handler)

    def publish(self, event: DomainEvent) -> None:
        handlers = self._handlers.get(type(event), [])
        logger.debug(
            "event_bus.publish",
            event_name=event.event_name,
            handler_count=len(handlers),
        )
        for handler in handlers:
            handler.handle(event)

    def rehydrate(self, event_type: str, payload: Mapping[str, Any]) -> DomainEvent:
        """Rebuild an event from its outbox JSON payload.

        Raises ``KeyError`` for event types nobody subscribed to.
        """
        return self._event_types[event_type].from_payload(payload)


# Global bus instance (singleton)

event_bus = InMemoryEventBus()
