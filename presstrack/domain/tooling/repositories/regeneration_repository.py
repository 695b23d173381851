"""
Regeneration Repository Interface

Defines the contract for regeneration record persistence.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from ..entities.regeneration import Regeneration
from ..entities.user import User


class RegenerationRepository(ABC):
    """Abstract repository interface for tool regenerations."""

    @abstractmethod
    def add(self, tool_id: int, cycle_id: int, reason: str, actor: User) -> int:
        """
        Insert a regeneration anchored to a ledger entry.

        Returns:
            The id of the new regeneration record

        Raises:
            ValidationError: If the record or actor is invalid
            RepositoryError: If the insert fails
        """
        pass

    @abstractmethod
    def get(self, regeneration_id: int) -> Regeneration:
        """
        Raises:
            EntityNotFoundError: If no regeneration has this id
        """
        pass

    @abstractmethod
    def get_last_for_tool(self, tool_id: int) -> Regeneration:
        """
        Latest regeneration of a tool.

        Raises:
            EntityNotFoundError: If the tool was never regenerated
        """
        pass

    @abstractmethod
    def list_for_tool(self, tool_id: int) -> list[Regeneration]:
        """Regeneration history of a tool, newest first."""
        pass

    @abstractmethod
    def has_regenerations_for_cycle(self, cycle_id: int) -> bool:
        pass

    @abstractmethod
    def anchor_dates(self) -> dict[int, list[datetime]]:
        """
        Ledger dates of every regeneration anchor, grouped by tool id.

        Anchors whose ledger entry no longer exists are left out.
        """
        pass

    @abstractmethod
    def update(self, regeneration: Regeneration, actor: User) -> Regeneration:
        pass

    @abstractmethod
    def delete(self, regeneration_id: int) -> bool:
        pass
