"""Generic repository interface (Dependency Inversion Principle).

Services depend on ``IRepository[T]`` subclasses, never on the Django
ORM directly, so workflow-gated use cases can be unit tested with mocks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve a live (not soft-deleted) entity by its primary key."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[T]:
        """Retrieve a live entity holding a row-level lock."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        """List live entities with optional filters."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist an entity and flush its collected domain events."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Soft-delete an entity by ID."""
