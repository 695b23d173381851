"""Repository interfaces for the tooling domain."""

from .cycle_repository import CycleRepository
from .directories import ToolDirectory, UserDirectory
from .regeneration_repository import RegenerationRepository

__all__ = [
    "CycleRepository",
    "RegenerationRepository",
    "ToolDirectory",
    "UserDirectory",
]
