"""
Base repository with common CRUD operations.

Provides generic in-memory operations over an ordered collection of
entities that carry an ``id`` attribute. Every write swaps in a new list,
so snapshots handed out earlier never change underneath a caller.

Usage:
    class RouteRepository(BaseRepository[Route]):
        def __init__(self, items=()):
            super().__init__(items, "Route")
"""

from dataclasses import replace
from typing import Generic, Iterable, TypeVar

from pera_analytics.shared.exceptions import NotFoundError

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository for one collection.

    Insertion order is preserved; it is the iteration order every
    consumer sees.
    """

    def __init__(self, items: Iterable[T] = (), kind: str = "Entity"):
        """
        Initialize repository.

        Args:
            items: Initial entities
            kind: Human-readable entity name for errors
        """
        self.kind = kind
        self._items: list[T] = list(items)

    def __len__(self) -> int:
        return len(self._items)

    def get_by_id(self, id: str) -> T | None:
        """
        Get entity by ID.

        Returns:
            Entity if found, None otherwise
        """
        return next((item for item in self._items if item.id == id), None)

    def require(self, id: str) -> T:
        """Get entity by ID or raise NotFoundError."""
        entity = self.get_by_id(id)
        if entity is None:
            raise NotFoundError(self.kind, id)
        return entity

    def get_all(self, **kwargs) -> list[T]:
        """
        Get all entities matching criteria.

        Args:
            **kwargs: Field name-value pairs to filter by

        Returns:
            List of matching entities (a copy)
        """
        return [
            item for item in self._items
            if all(getattr(item, key) == value for key, value in kwargs.items())
        ]

    def create(self, entity: T) -> T:
        """Append a new entity."""
        self._items = [*self._items, entity]
        return entity

    def update(self, entity: T, **kwargs) -> T:
        """
        Replace entity fields.

        Args:
            entity: Entity to update (matched by id)
            **kwargs: Field values to update

        Returns:
            The new entity instance
        """
        self.require(entity.id)
        updated = replace(entity, **kwargs)
        self._items = [updated if item.id == entity.id else item for item in self._items]
        return updated

    def delete(self, id: str) -> T:
        """Remove entity by ID and return it."""
        entity = self.require(id)
        self._items = [item for item in self._items if item.id != id]
        return entity

    def replace_all(self, items: Iterable[T]) -> None:
        """Swap the whole collection."""
        self._items = list(items)
