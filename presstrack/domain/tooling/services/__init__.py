"""Domain services for press tooling."""

from .consolidation import ToolUsageConsolidator
from .overlap_detection import OverlapDetector, periods_overlap
from .partial_cycles import PartialCycleCalculator
from .press_cycle_service import PressCycleService
from .regeneration_service import RegenerationService

__all__ = [
    "OverlapDetector",
    "PartialCycleCalculator",
    "PressCycleService",
    "RegenerationService",
    "ToolUsageConsolidator",
    "periods_overlap",
]
