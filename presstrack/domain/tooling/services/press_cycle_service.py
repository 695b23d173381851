"""
Press Cycle Service

Entry point for cycle reports. Fetches a ledger snapshot, annotates it with
partial cycles, consolidates usage periods and cross-checks presses for
overlapping tool usage. Every call re-derives its result from scratch; no
state is shared between calls.
"""

import logging

from ....core.config import Settings, settings
from ....shared.exceptions import RepositoryError, ValidationError
from ..entities.cycle import CycleRecord
from ..entities.tool import Tool
from ..read_models.tool_usage import (
    CycleSummaryData,
    CycleSummaryStats,
    OverlappingTool,
    ToolUsageSummary,
)
from ..repositories.cycle_repository import CycleRepository
from ..repositories.directories import ToolDirectory, UserDirectory
from ..repositories.regeneration_repository import RegenerationRepository
from ..value_objects.common import is_valid_press_number
from ..value_objects.enums import WearLevel
from .consolidation import ToolUsageConsolidator
from .overlap_detection import OverlapDetector
from .partial_cycles import PartialCycleCalculator

logger = logging.getLogger(__name__)


class PressCycleService:
    """
    Cycle tracking and tool usage analytics.

    Collaborators are injected explicitly; the service never reaches for
    global registries.
    """

    def __init__(
        self,
        cycle_repository: CycleRepository,
        regeneration_repository: RegenerationRepository,
        tool_directory: ToolDirectory,
        user_directory: UserDirectory,
        config: Settings | None = None,
    ) -> None:
        self._cycles = cycle_repository
        self._regenerations = regeneration_repository
        self._tools = tool_directory
        self._users = user_directory
        self._settings = config or settings

        self._calculator = PartialCycleCalculator()
        self._consolidator = ToolUsageConsolidator()
        self._overlap_detector = OverlapDetector()

    def _check_press(self, press_number: int) -> None:
        if not is_valid_press_number(press_number, self._settings.press_numbers):
            raise ValidationError(
                "press_number", press_number, "not a valid press number"
            )

    def get_cycle(self, cycle_id: int) -> CycleRecord:
        """Single ledger entry with its partial cycles."""
        record = self._cycles.get(cycle_id)
        history = self._cycles.list_for_press(record.press_number)
        partial = self._calculator.calculate(
            record, history, self._regenerations.anchor_dates()
        )
        return record.with_partial_cycles(partial)

    def get_press_cycles(
        self, press_number: int, limit: int | None = None, offset: int | None = None
    ) -> list[CycleRecord]:
        """
        Annotated ledger entries of a press, newest first.

        Pagination only limits the returned page; baselines are always
        searched in the full press history.
        """
        self._check_press(press_number)
        logger.debug(
            "Getting press cycles: press=%d limit=%s offset=%s",
            press_number,
            limit,
            offset,
        )

        page = self._cycles.list_for_press(press_number, limit, offset)
        if limit is None and offset is None:
            history = page
        else:
            history = self._cycles.list_for_press(press_number)

        return self._calculator.annotate(
            page, history, self._regenerations.anchor_dates()
        )

    def get_tool_cycles(self, tool_id: int) -> list[CycleRecord]:
        """Annotated ledger entries of one tool across all presses, newest first."""
        logger.debug("Getting press cycles for tool %d", tool_id)

        records = self._cycles.list_for_tool(tool_id)
        history: list[CycleRecord] = []
        for press_number in sorted({r.press_number for r in records}):
            history.extend(self._cycles.list_for_press(press_number))

        return self._calculator.annotate(
            records, history, self._regenerations.anchor_dates()
        )

    def get_tool_summaries(
        self, records: list[CycleRecord], tools_map: dict[int, Tool]
    ) -> list[ToolUsageSummary]:
        return self._consolidator.consolidate(records, tools_map)

    def get_cycle_summary_data(self, press_number: int) -> CycleSummaryData:
        """Annotated cycles of a press together with the tool and user lookups."""
        cycles = self.get_press_cycles(press_number)
        return CycleSummaryData(
            press_number=press_number,
            cycles=cycles,
            tools=self._tools.tools_map(),
            users=self._users.users_map(),
        )

    def get_cycle_summary_stats(self, records: list[CycleRecord]) -> CycleSummaryStats:
        return self._consolidator.summary_stats(records)

    def get_overlapping_tools(self) -> list[OverlappingTool]:
        """
        Tools used on more than one press during intersecting periods.

        Consolidation runs once per valid press. A press whose ledger cannot be
        read is logged and left out of the report.
        """
        logger.debug("Detecting overlapping tools across all presses")

        tools_map = self._tools.tools_map()
        anchors = self._regenerations.anchor_dates()

        summaries_by_press: dict[int, list[ToolUsageSummary]] = {}
        for press_number in self._settings.press_numbers:
            try:
                records = self._cycles.list_for_press(press_number)
            except RepositoryError as e:
                logger.error(
                    "Failed to get cycle summary data for press %d: %s", press_number, e
                )
                continue
            annotated = self._calculator.annotate(records, records, anchors)
            summaries_by_press[press_number] = self._consolidator.consolidate(
                annotated, tools_map
            )

        return self._overlap_detector.detect(summaries_by_press)

    def wear_level(self, cycles: int) -> WearLevel:
        return WearLevel.from_cycles(
            cycles,
            self._settings.TOOL_CYCLE_WARNING,
            self._settings.TOOL_CYCLE_ERROR,
        )
