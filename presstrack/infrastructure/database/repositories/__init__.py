"""
SQL repository implementations of the tooling ports.
"""

from .base import BaseRepository
from .cycle_repository import SQLCycleRepository
from .regeneration_repository import SQLRegenerationRepository
from .tool_repository import SQLToolRepository
from .user_repository import SQLUserRepository

__all__ = [
    "BaseRepository",
    "SQLCycleRepository",
    "SQLRegenerationRepository",
    "SQLToolRepository",
    "SQLUserRepository",
]
