"""
Mappers for converting between domain entities and SQL rows.
"""

from .cycle_mapper import CycleMapper
from .regeneration_mapper import RegenerationMapper
from .tool_mapper import ToolMapper

__all__ = ["CycleMapper", "RegenerationMapper", "ToolMapper"]
