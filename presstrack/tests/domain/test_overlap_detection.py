"""
Overlap Detection Tests
"""

from datetime import datetime

import pytest

from presstrack.domain.tooling.read_models.tool_usage import ToolUsageSummary
from presstrack.domain.tooling.services.overlap_detection import (
    OverlapDetector,
    periods_overlap,
)
from presstrack.domain.tooling.value_objects.enums import Position
from presstrack.tests.factories import day


def summary(
    tool_id: int,
    start: datetime,
    end: datetime,
    position: Position = Position.TOP,
    tool_code: str | None = None,
) -> ToolUsageSummary:
    return ToolUsageSummary(
        tool_id=tool_id,
        tool_code=tool_code or f"Tool ID {tool_id}",
        position=position,
        start_date=start,
        end_date=end,
        max_cycles=1000,
        total_partial=1000,
        is_first_appearance=True,
    )


@pytest.fixture
def detector() -> OverlapDetector:
    return OverlapDetector()


class TestPeriodsOverlap:
    def test_intersecting(self):
        assert periods_overlap(day(1), day(5), day(4), day(8))
        assert periods_overlap(day(4), day(8), day(1), day(5))

    def test_contained(self):
        assert periods_overlap(day(1), day(10), day(3), day(4))

    def test_touching_periods_do_not_overlap(self):
        assert not periods_overlap(day(1), day(3), day(3), day(5))

    def test_disjoint(self):
        assert not periods_overlap(day(1), day(2), day(5), day(6))


class TestDetect:
    def test_disjoint_periods_yield_empty_result(self, detector):
        result = detector.detect(
            {
                0: [summary(1, day(1), day(3))],
                2: [summary(1, day(4), day(6))],
            }
        )
        assert result == []

    def test_overlap_reports_both_instances(self, detector):
        result = detector.detect(
            {
                0: [summary(1, day(1), day(5), tool_code="G01")],
                3: [summary(1, day(4), day(8), position=Position.BOTTOM)],
            }
        )

        assert len(result) == 1
        report = result[0]
        assert report.tool_id == 1
        assert report.presses == [0, 3]
        assert report.start_date == day(1)
        assert report.end_date == day(8)
        assert [(o.press_number, o.position) for o in report.overlaps] == [
            (0, Position.TOP),
            (3, Position.BOTTOM),
        ]
        assert report.tool_code == "G01 (Top, Bottom)"

    def test_same_press_periods_never_conflict(self, detector):
        result = detector.detect(
            {0: [summary(1, day(1), day(5)), summary(1, day(2), day(6))]}
        )
        assert result == []

    def test_single_press_tools_skipped(self, detector):
        result = detector.detect(
            {0: [summary(1, day(1), day(5))], 2: [summary(2, day(1), day(5))]}
        )
        assert result == []

    def test_only_participating_instances_collected(self, detector):
        result = detector.detect(
            {
                0: [summary(1, day(1), day(5)), summary(1, day(20), day(25))],
                2: [summary(1, day(3), day(6))],
            }
        )

        report = result[0]
        assert len(report.overlaps) == 2
        assert report.end_date == day(6)

    def test_instance_collected_once(self, detector):
        result = detector.detect(
            {
                0: [summary(1, day(1), day(10))],
                2: [summary(1, day(2), day(3))],
                4: [summary(1, day(5), day(6))],
            }
        )

        report = result[0]
        assert [o.press_number for o in report.overlaps] == [0, 2, 4]

    def test_results_sorted_by_tool_id(self, detector):
        result = detector.detect(
            {
                0: [summary(7, day(1), day(5)), summary(3, day(1), day(5))],
                2: [summary(7, day(2), day(6)), summary(3, day(2), day(6))],
            }
        )
        assert [r.tool_id for r in result] == [3, 7]

    def test_empty_input(self, detector):
        assert detector.detect({}) == []
