"""
Press Tooling Domain

Cycle ledger entities, tool state, usage read models and the services that
reconcile recorded cycle observations into tool usage reports.
"""

# Entities
from .entities import CycleRecord, Regeneration, Tool, User

# Read models
from .read_models import (
    CycleSummaryData,
    CycleSummaryStats,
    OverlappingTool,
    OverlappingToolInstance,
    ToolUsageSummary,
)

# Repository Interfaces
from .repositories import (
    CycleRepository,
    RegenerationRepository,
    ToolDirectory,
    UserDirectory,
)

# Domain Services
from .services import (
    OverlapDetector,
    PartialCycleCalculator,
    PressCycleService,
    RegenerationService,
    ToolUsageConsolidator,
)

# Value Objects
from .value_objects import Position, ToolFormat, ToolStatus, WearLevel

__all__ = [
    "CycleRecord",
    "CycleRepository",
    "CycleSummaryData",
    "CycleSummaryStats",
    "OverlapDetector",
    "OverlappingTool",
    "OverlappingToolInstance",
    "PartialCycleCalculator",
    "Position",
    "PressCycleService",
    "Regeneration",
    "RegenerationRepository",
    "RegenerationService",
    "Tool",
    "ToolDirectory",
    "ToolFormat",
    "ToolStatus",
    "ToolUsageConsolidator",
    "ToolUsageSummary",
    "User",
    "UserDirectory",
    "WearLevel",
]
