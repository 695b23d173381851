"""
Overlap Detection

A tool can only be mounted on one press at a time. Usage periods of the same
tool on different presses that intersect point to bad ledger data (wrong tool
id typed in, a missed unmount) and are reported for correction.
"""

import logging
from collections import defaultdict
from collections.abc import Mapping, Sequence
from datetime import datetime

from ....shared.base import DomainService
from ..read_models.tool_usage import (
    OverlappingTool,
    OverlappingToolInstance,
    ToolUsageSummary,
)
from ..value_objects.enums import position_order
from .consolidation import default_tool_code

logger = logging.getLogger(__name__)


def periods_overlap(
    start1: datetime, end1: datetime, start2: datetime, end2: datetime
) -> bool:
    """Half-open interval intersection; touching periods do not overlap."""
    return start1 < end2 and start2 < end1


class OverlapDetector(DomainService):
    """Cross-checks consolidated usage periods of all presses."""

    def detect(
        self, summaries_by_press: Mapping[int, Sequence[ToolUsageSummary]]
    ) -> list[OverlappingTool]:
        """
        Find tools whose usage periods intersect on different presses.

        Args:
            summaries_by_press: Consolidated summaries, one list per press

        Returns:
            One report per conflicting tool, ordered by tool id. Empty when
            every tool's periods are disjoint across presses.
        """
        by_tool = self._group_by_tool(summaries_by_press)

        overlapping = []
        for tool_id in sorted(by_tool):
            press_summaries = by_tool[tool_id]
            if len(press_summaries) < 2:
                continue

            report = self._check_tool(tool_id, press_summaries)
            if report is not None:
                overlapping.append(report)

        if overlapping:
            logger.warning(
                "Detected %d tools used on several presses at once: %s",
                len(overlapping),
                [tool.tool_id for tool in overlapping],
            )
        return overlapping

    @staticmethod
    def _group_by_tool(
        summaries_by_press: Mapping[int, Sequence[ToolUsageSummary]],
    ) -> dict[int, dict[int, list[ToolUsageSummary]]]:
        by_tool: dict[int, dict[int, list[ToolUsageSummary]]] = defaultdict(
            lambda: defaultdict(list)
        )
        for press in sorted(summaries_by_press):
            for summary in summaries_by_press[press]:
                by_tool[summary.tool_id][press].append(summary)
        return by_tool

    def _check_tool(
        self, tool_id: int, press_summaries: Mapping[int, list[ToolUsageSummary]]
    ) -> OverlappingTool | None:
        presses = sorted(press_summaries)
        instances: dict[tuple, OverlappingToolInstance] = {}

        for i, press1 in enumerate(presses):
            for summary1 in press_summaries[press1]:
                for press2 in presses[i + 1 :]:
                    for summary2 in press_summaries[press2]:
                        if not periods_overlap(
                            summary1.start_date,
                            summary1.end_date,
                            summary2.start_date,
                            summary2.end_date,
                        ):
                            continue
                        for press, summary in ((press1, summary1), (press2, summary2)):
                            instance = _instance(press, summary)
                            instances.setdefault(_instance_key(instance), instance)

        if not instances:
            return None

        overlaps = sorted(
            instances.values(),
            key=lambda o: (o.start_date, o.press_number, position_order(o.position)),
        )
        tool_code = self._tool_code(tool_id, press_summaries, overlaps)

        return OverlappingTool(
            tool_id=tool_id,
            tool_code=tool_code,
            start_date=min(o.start_date for o in overlaps),
            end_date=max(o.end_date for o in overlaps),
            overlaps=overlaps,
        )

    @staticmethod
    def _tool_code(
        tool_id: int,
        press_summaries: Mapping[int, list[ToolUsageSummary]],
        overlaps: list[OverlappingToolInstance],
    ) -> str:
        fallback = default_tool_code(tool_id)
        tool_code = fallback
        for press in sorted(press_summaries):
            for summary in press_summaries[press]:
                if summary.tool_code and summary.tool_code != fallback:
                    tool_code = summary.tool_code

        labels: list[str] = []
        for instance in overlaps:
            if instance.position.label not in labels:
                labels.append(instance.position.label)
        return f"{tool_code} ({', '.join(labels)})"


def _instance(press: int, summary: ToolUsageSummary) -> OverlappingToolInstance:
    return OverlappingToolInstance(
        press_number=press,
        position=summary.position,
        start_date=summary.start_date,
        end_date=summary.end_date,
    )


def _instance_key(instance: OverlappingToolInstance) -> tuple:
    return (
        instance.press_number,
        instance.position,
        instance.start_date,
        instance.end_date,
    )
