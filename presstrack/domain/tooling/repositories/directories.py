"""
Directory Interfaces

Capability interfaces for the collaborators the cycle engine does not own:
the tool directory (tool metadata and state) and the operator directory.
Both are passed into the engine explicitly at construction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..entities.tool import Tool
from ..entities.user import User


class ToolDirectory(ABC):
    """
    Tool metadata and state.

    Besides the regeneration tracker, this is the only writer of a tool's
    regenerating flag.
    """

    @abstractmethod
    def get(self, tool_id: int) -> Tool:
        """
        Raises:
            EntityNotFoundError: If the tool is unknown
        """
        pass

    @abstractmethod
    def list(self) -> list[Tool]:
        pass

    @abstractmethod
    def update(self, tool: Tool, actor: User) -> Tool:
        """Persist a modified tool (press assignment, dead flag, metadata)."""
        pass

    @abstractmethod
    def update_regenerating(self, tool_id: int, regenerating: bool, actor: User) -> None:
        """Set the regenerating flag; a no-op when the flag already has that value."""
        pass

    def tools_map(self) -> dict[int, Tool]:
        return {tool.id: tool for tool in self.list() if tool.id is not None}


class UserDirectory(ABC):
    """Resolves operator identities."""

    @abstractmethod
    def get(self, user_id: int) -> User:
        """
        Raises:
            EntityNotFoundError: If the operator is unknown
        """
        pass

    @abstractmethod
    def list(self) -> list[User]:
        pass

    def users_map(self) -> dict[int, User]:
        return {user.user_id: user for user in self.list()}
