"""Domain event primitives shared by the order modules.

Events are frozen dataclasses.  They travel through the outbox as JSON,
so each event knows how to produce its payload and how to be rebuilt
from it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, List, Mapping, Type, TypeVar
from uuid import UUID, uuid4

EventT = TypeVar("EventT", bound="DomainEvent")


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _jsonable(val) for key, val in value.items()}
    return value


@dataclass(frozen=True)
class DomainEvent:
    """Base domain event (immutable)."""

    UUID_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"aggregate_id", "event_id"})

    aggregate_id: UUID
    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_name: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "event_name", self.__class__.__name__)

    def to_payload(self) -> Dict[str, Any]:
        return _jsonable(asdict(self))

    @classmethod
    def from_payload(cls: Type[EventT], payload: Mapping[str, Any]) -> EventT:
        """Inverse of ``to_payload``; unknown keys are ignored."""
        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            if not f.init or f.name not in payload:
                continue
            value = payload[f.name]
            if f.name in cls.UUID_FIELDS and value is not None:
                value = UUID(str(value))
            elif f.name == "occurred_on":
                value = datetime.fromisoformat(value)
            kwargs[f.name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class StatusChangedEvent(DomainEvent):
    """An aggregate moved from ``old_status`` to ``new_status``."""

    old_status: str = ""
    new_status: str = ""
    notes: str = ""


class DomainEventMixin:
    """Aggregate roots collect events here until the repository flushes them
    to the outbox."""

    def _pending_events(self) -> List[DomainEvent]:
        return self.__dict__.setdefault("_domain_events", [])

    def add_domain_event(self, event: DomainEvent) -> None:
        self._pending_events().append(event)

    def clear_domain_events(self) -> None:
        self._pending_events().clear()

    @property
    def domain_events(self) -> List[DomainEvent]:
        return list(self._pending_events())
