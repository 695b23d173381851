from .tool_usage import (
    CycleSummaryData,
    CycleSummaryStats,
    OverlappingTool,
    OverlappingToolInstance,
    ToolUsageSummary,
)

__all__ = [
    "CycleSummaryData",
    "CycleSummaryStats",
    "OverlappingTool",
    "OverlappingToolInstance",
    "ToolUsageSummary",
]
