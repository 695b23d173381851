"""
Tool Usage Consolidation

Turns annotated ledger entries of one press into usage periods: consecutive
observations of the same tool on a position are merged, and the start of each
period after the first is inferred from the end of the period before it,
since the ledger never records the exact swap instant.
"""

import logging
from collections import defaultdict
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime

from ....shared.base import DomainService
from ..entities.cycle import CycleRecord
from ..entities.tool import Tool
from ..read_models.tool_usage import CycleSummaryStats, ToolUsageSummary
from ..value_objects.enums import Position, position_order

logger = logging.getLogger(__name__)


def format_tool_code(tool_id: int, tools_map: Mapping[int, Tool]) -> str:
    tool = tools_map.get(tool_id)
    if tool is not None:
        return tool.display_code
    return default_tool_code(tool_id)


def default_tool_code(tool_id: int) -> str:
    return f"Tool ID {tool_id}"


@dataclass
class _UsagePeriod:
    """Mutable accumulator for one usage period while consolidating."""

    tool_id: int
    tool_code: str
    position: Position
    start_date: datetime
    end_date: datetime
    max_cycles: int
    total_partial: int
    is_first_appearance: bool = False

    @classmethod
    def from_record(cls, record: CycleRecord, tool_code: str) -> "_UsagePeriod":
        return cls(
            tool_id=record.tool_id,
            tool_code=tool_code,
            position=record.position,
            start_date=record.date,
            end_date=record.date,
            max_cycles=record.total_cycles,
            total_partial=record.partial_cycles,
        )

    def merge(self, record: CycleRecord) -> None:
        self.start_date = min(self.start_date, record.date)
        self.end_date = max(self.end_date, record.date)
        self.max_cycles = max(self.max_cycles, record.total_cycles)
        self.total_partial += record.partial_cycles

    def freeze(self) -> ToolUsageSummary:
        return ToolUsageSummary(
            tool_id=self.tool_id,
            tool_code=self.tool_code,
            position=self.position,
            start_date=self.start_date,
            end_date=self.end_date,
            max_cycles=self.max_cycles,
            total_partial=self.total_partial,
            is_first_appearance=self.is_first_appearance,
        )


class ToolUsageConsolidator(DomainService):
    """Builds usage-period summaries from annotated cycle records."""

    def consolidate(
        self, records: Sequence[CycleRecord], tools_map: Mapping[int, Tool]
    ) -> list[ToolUsageSummary]:
        """
        Consolidate records of one press into usage periods.

        Args:
            records: Cycle records annotated with partial cycles
            tools_map: Tools by id, used for display codes

        Returns:
            Summaries ordered by maximum cycles (lowest wear first), ties
            broken by position order
        """
        periods = self._merge_consecutive(self._chronological(records), tools_map)
        self._infer_start_dates(periods)

        summaries = [period.freeze() for period in periods]
        summaries.sort(key=lambda s: (s.max_cycles, position_order(s.position)))

        logger.debug(
            "Consolidated %d cycle records into %d usage periods",
            len(records),
            len(summaries),
        )
        return summaries

    def summary_stats(self, records: Sequence[CycleRecord]) -> CycleSummaryStats:
        """Highest counter, summed partials, distinct tools and entry count."""
        return CycleSummaryStats(
            total_cycles=max((r.total_cycles for r in records), default=0),
            total_partial_cycles=sum(r.partial_cycles for r in records),
            active_tools_count=len({r.tool_id for r in records}),
            entries_count=len(records),
        )

    @staticmethod
    def _chronological(records: Sequence[CycleRecord]) -> list[CycleRecord]:
        # A single record's end date equals its start date, so the ledger id
        # settles whatever date and position leave tied
        return sorted(
            records,
            key=lambda r: (
                r.date,
                position_order(r.position),
                r.id if r.id is not None else 0,
            ),
        )

    @staticmethod
    def _merge_consecutive(
        records: list[CycleRecord], tools_map: Mapping[int, Tool]
    ) -> list[_UsagePeriod]:
        periods: list[_UsagePeriod] = []
        running: dict[Position, _UsagePeriod] = {}

        for record in records:
            current = running.get(record.position)
            if current is not None and current.tool_id == record.tool_id:
                current.merge(record)
                continue

            period = _UsagePeriod.from_record(
                record, format_tool_code(record.tool_id, tools_map)
            )
            periods.append(period)
            running[record.position] = period

        return periods

    @staticmethod
    def _infer_start_dates(periods: list[_UsagePeriod]) -> None:
        by_position: dict[Position, list[_UsagePeriod]] = defaultdict(list)
        for period in periods:
            by_position[period.position].append(period)

        for entries in by_position.values():
            entries.sort(key=lambda p: p.start_date)
            for index, entry in enumerate(entries):
                if index == 0:
                    entry.is_first_appearance = True
                else:
                    entry.start_date = entries[index - 1].end_date
                    entry.is_first_appearance = False
