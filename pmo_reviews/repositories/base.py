"""
Base repository interface and the in-memory implementation shared by all
collections.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from pmo_reviews.core.logging import get_logger
from pmo_reviews.domain.base import Entity

T = TypeVar("T", bound=Entity)

logger = get_logger(__name__)


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base class for repositories.

    Filters are equality matches keyed by snake_case attribute name.
    """

    @abstractmethod
    async def get(self, id: str) -> Optional[T]:
        """Get an entity by ID."""
        ...

    @abstractmethod
    async def save(self, entity: T) -> T:
        """Save an entity (insert or replace)."""
        ...

    @abstractmethod
    async def delete(self, id: str) -> bool:
        """Delete an entity by ID."""
        ...

    @abstractmethod
    async def list(
        self,
        filters: Optional[dict[str, Any]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[T]:
        """List entities with optional filters, in the collection's natural order."""
        ...

    @abstractmethod
    async def exists(self, id: str) -> bool:
        """Check if an entity exists."""
        ...

    async def find_one(self, **filters: Any) -> Optional[T]:
        """First entity matching all filters, if any."""
        matches = await self.list(filters=filters, limit=1)
        return matches[0] if matches else None


class InMemoryRepository(BaseRepository[T]):
    """
    In-memory repository for development/testing.

    Subclasses define ``collection`` and ``sort_key``/``sort_descending``.
    """

    collection: str = "entities"
    sort_descending: bool = False

    def __init__(self) -> None:
        self._items: dict[str, T] = {}

    def sort_key(self, entity: T) -> Any:
        return entity.created_at

    async def get(self, id: str) -> Optional[T]:
        """Get an entity by ID."""
        entity = self._items.get(id)
        return entity.model_copy(deep=True) if entity else None

    async def save(self, entity: T) -> T:
        """Save an entity."""
        entity.touch()
        self._items[entity.id] = entity.model_copy(deep=True)
        logger.debug("Entity saved", collection=self.collection, entity_id=entity.id)
        return entity

    async def delete(self, id: str) -> bool:
        """Delete an entity by ID."""
        if id in self._items:
            del self._items[id]
            logger.debug("Entity deleted", collection=self.collection, entity_id=id)
            return True
        return False

    async def list(
        self,
        filters: Optional[dict[str, Any]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[T]:
        """List entities with optional filters."""
        items = list(self._items.values())

        if filters:
            items = [
                e for e in items
                if all(getattr(e, key) == value for key, value in filters.items())
            ]

        items.sort(key=self.sort_key, reverse=self.sort_descending)

        end = offset + limit if limit is not None else None
        return [e.model_copy(deep=True) for e in items[offset:end]]

    async def exists(self, id: str) -> bool:
        """Check if an entity exists."""
        return id in self._items
