"""
Cycle Repository Interface

Defines the contract for the append-only cycle ledger.
"""

from abc import ABC, abstractmethod

from ..entities.cycle import CycleRecord
from ..entities.user import User


class CycleRepository(ABC):
    """
    Abstract repository interface for the cycle ledger.

    Records are immutable once written. Listings are newest-first
    (date descending, then id descending) and are returned without the
    partial-cycle annotation, which is derived by the domain services.
    """

    @abstractmethod
    def add(self, record: CycleRecord, actor: User) -> int:
        """
        Append an observation to the ledger.

        Args:
            record: Observation to store, its id is ignored
            actor: Operator recording the observation

        Returns:
            The id assigned to the new record

        Raises:
            ValidationError: If the record or actor is invalid (nothing written)
            RepositoryError: If the insert fails
        """
        pass

    @abstractmethod
    def get(self, cycle_id: int) -> CycleRecord:
        """
        Retrieve a record by its ID.

        Raises:
            EntityNotFoundError: If no record has this id
            RepositoryError: If retrieval fails
        """
        pass

    @abstractmethod
    def list_for_tool(self, tool_id: int) -> list[CycleRecord]:
        """All records of one tool, newest first."""
        pass

    @abstractmethod
    def list_for_press(
        self, press_number: int, limit: int | None = None, offset: int | None = None
    ) -> list[CycleRecord]:
        """Records of one press, newest first, optionally paginated."""
        pass

    @abstractmethod
    def list_all(self) -> list[CycleRecord]:
        pass

    @abstractmethod
    def get_last_for_tool(self, tool_id: int) -> CycleRecord:
        """
        Most recent record of a tool.

        Raises:
            EntityNotFoundError: If the tool has no records
        """
        pass

    @abstractmethod
    def update(self, record: CycleRecord, actor: User) -> CycleRecord:
        """Administrative correction of an existing record."""
        pass

    @abstractmethod
    def delete(self, cycle_id: int) -> bool:
        """Administrative removal. Returns False when the id is unknown."""
        pass
