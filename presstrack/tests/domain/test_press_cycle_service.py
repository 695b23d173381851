"""
Press Cycle Service Tests

End-to-end cycle reporting over in-memory ports.
"""

import logging

import pytest

from presstrack.domain.tooling.value_objects.enums import Position, WearLevel
from presstrack.shared.exceptions import RepositoryError, ValidationError
from presstrack.tests.factories import CycleFactory, day


def _record(repository, actor, **kwargs):
    return repository.add(CycleFactory.create(**kwargs), actor)


@pytest.fixture
def press_zero_history(cycle_repository, operator):
    """Tool 1 at 1000 and 1500, then tool 2 on the bottom at 400."""
    _record(cycle_repository, operator, tool_id=1, total_cycles=1000, date=day(1))
    _record(cycle_repository, operator, tool_id=1, total_cycles=1500, date=day(2))
    _record(
        cycle_repository,
        operator,
        tool_id=2,
        total_cycles=400,
        date=day(3),
        position=Position.BOTTOM,
    )


class TestPressCycles:
    def test_annotated_newest_first(self, press_cycle_service, press_zero_history):
        cycles = press_cycle_service.get_press_cycles(0)

        assert [c.total_cycles for c in cycles] == [400, 1500, 1000]
        assert [c.partial_cycles for c in cycles] == [400, 500, 1000]

    def test_pagination_keeps_baselines(self, press_cycle_service, press_zero_history):
        page = press_cycle_service.get_press_cycles(0, limit=1, offset=1)

        assert len(page) == 1
        assert page[0].total_cycles == 1500
        assert page[0].partial_cycles == 500

    def test_invalid_press_rejected(self, press_cycle_service):
        with pytest.raises(ValidationError):
            press_cycle_service.get_press_cycles(1)

    def test_regeneration_resets_lineage(
        self, press_cycle_service, regeneration_service, cycle_repository, operator,
        press_zero_history,
    ):
        regeneration_service.start_regeneration(1, "", operator)
        regeneration_service.stop_regeneration(1, operator)
        _record(cycle_repository, operator, tool_id=1, total_cycles=1700, date=day(4))

        cycles = press_cycle_service.get_tool_cycles(1)

        assert [(c.total_cycles, c.partial_cycles) for c in cycles] == [
            (1700, 1700),
            (1500, 500),
            (1000, 1000),
        ]

    def test_get_cycle(self, press_cycle_service, cycle_repository, press_zero_history):
        second = cycle_repository.list_for_tool(1)[0]

        record = press_cycle_service.get_cycle(second.id)

        assert record.partial_cycles == 500


class TestSummaries:
    def test_cycle_summary_data(self, press_cycle_service, press_zero_history, operator):
        data = press_cycle_service.get_cycle_summary_data(0)

        assert data.press_number == 0
        assert len(data.cycles) == 3
        assert set(data.tools) == {1, 2, 3, 4}
        assert data.users[operator.user_id].name == operator.name

    def test_tool_summaries(self, press_cycle_service, press_zero_history, tool_directory):
        data = press_cycle_service.get_cycle_summary_data(0)

        summaries = press_cycle_service.get_tool_summaries(
            data.cycles, tool_directory.tools_map()
        )

        assert [(s.tool_id, s.max_cycles) for s in summaries] == [(2, 400), (1, 1500)]
        assert summaries[1].tool_code == "100x100 G01"
        assert all(s.is_first_appearance for s in summaries)

    def test_summary_stats(self, press_cycle_service, press_zero_history):
        cycles = press_cycle_service.get_press_cycles(0)

        stats = press_cycle_service.get_cycle_summary_stats(cycles)

        assert stats.total_cycles == 1500
        assert stats.total_partial_cycles == 1900
        assert stats.active_tools_count == 2
        assert stats.entries_count == 3

    @pytest.mark.parametrize(
        "cycles,expected",
        [(10, WearLevel.OK), (800_000, WearLevel.WARNING), (2_000_000, WearLevel.CRITICAL)],
    )
    def test_wear_level(self, press_cycle_service, cycles, expected):
        assert press_cycle_service.wear_level(cycles) == expected


class TestOverlappingTools:
    def test_no_overlap(self, press_cycle_service, press_zero_history):
        assert press_cycle_service.get_overlapping_tools() == []

    def test_tool_on_two_presses_at_once(
        self, press_cycle_service, cycle_repository, operator
    ):
        _record(cycle_repository, operator, tool_id=1, total_cycles=100, date=day(1))
        _record(cycle_repository, operator, tool_id=1, total_cycles=900, date=day(5))
        _record(
            cycle_repository, operator,
            tool_id=1, total_cycles=300, date=day(2), press_number=2,
        )
        _record(
            cycle_repository, operator,
            tool_id=1, total_cycles=600, date=day(4), press_number=2,
        )

        result = press_cycle_service.get_overlapping_tools()

        assert len(result) == 1
        assert result[0].tool_id == 1
        assert result[0].presses == [0, 2]
        assert result[0].start_date == day(1)
        assert result[0].end_date == day(5)

    def test_failing_press_skipped(
        self, press_cycle_service, cycle_repository, operator, caplog, monkeypatch
    ):
        _record(cycle_repository, operator, tool_id=1, total_cycles=100, date=day(1))
        _record(cycle_repository, operator, tool_id=1, total_cycles=900, date=day(5))
        _record(
            cycle_repository, operator,
            tool_id=1, total_cycles=300, date=day(2), press_number=2,
        )
        list_for_press = cycle_repository.list_for_press

        def flaky_list_for_press(press_number, limit=None, offset=None):
            if press_number == 2:
                raise RepositoryError("press 2 unavailable")
            return list_for_press(press_number, limit, offset)

        monkeypatch.setattr(cycle_repository, "list_for_press", flaky_list_for_press)

        with caplog.at_level(logging.ERROR):
            result = press_cycle_service.get_overlapping_tools()

        assert result == []
        assert "press 2" in caplog.text
