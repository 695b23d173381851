"""
Tool usage read models.

Derived views over the cycle ledger: consolidated usage periods per press
position, cross-press overlap reports and aggregate counters. None of these
are persisted; they are recomputed from a ledger snapshot on every request.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..entities.cycle import CycleRecord
from ..entities.tool import Tool
from ..entities.user import User
from ..value_objects.enums import Position


class ToolUsageSummary(BaseModel):
    """One period during which a tool occupied a press position."""

    model_config = ConfigDict(frozen=True)

    tool_id: int
    tool_code: str
    position: Position
    start_date: datetime
    end_date: datetime
    max_cycles: int = Field(ge=0)
    total_partial: int
    # True when the start is the tool's first observation for this position,
    # False when it was inferred from the previous tool's end
    is_first_appearance: bool = False


class OverlappingToolInstance(BaseModel):
    """One usage period of a tool that collides with a period on another press."""

    model_config = ConfigDict(frozen=True)

    press_number: int
    position: Position
    start_date: datetime
    end_date: datetime


class OverlappingTool(BaseModel):
    """A tool whose usage periods intersect on more than one press."""

    model_config = ConfigDict(frozen=True)

    tool_id: int
    tool_code: str
    start_date: datetime
    end_date: datetime
    overlaps: list[OverlappingToolInstance] = Field(default_factory=list)

    @property
    def presses(self) -> list[int]:
        return sorted({instance.press_number for instance in self.overlaps})


class CycleSummaryStats(BaseModel):
    """Aggregate counters over a batch of annotated cycle records."""

    model_config = ConfigDict(frozen=True)

    total_cycles: int = 0
    total_partial_cycles: int = 0
    active_tools_count: int = 0
    entries_count: int = 0


class CycleSummaryData(BaseModel):
    """Everything needed to render the cycle summary of one press."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    press_number: int
    cycles: list[CycleRecord] = Field(default_factory=list)
    tools: dict[int, Tool] = Field(default_factory=dict)
    users: dict[int, User] = Field(default_factory=dict)
