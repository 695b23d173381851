"""Base classes for domain entities and value objects."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class Entity(BaseModel, ABC):
    """Base class for entities (have identity, can change over time).

    Identity is assigned by the ledger on insert, so ``id`` stays ``None``
    until the entity has been persisted.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    id: int | None = None

    def __eq__(self, other: Any) -> bool:
        """Persisted entities are equal if they have the same ID and type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return super().__eq__(other)
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.id))

    @abstractmethod
    def validate_rules(self) -> None:
        """Validate business rules, raising ``ValidationError`` on failure."""
        pass


class DomainService(ABC):
    """Base class for domain services (business logic that doesn't belong to a single entity)."""

    pass
