"""
Domain Entity Tests

Validation of ledger entries, tools and operators, and the tool status
state machine.
"""

from datetime import datetime, timedelta, timezone

import pytest

from presstrack.domain.tooling.entities.cycle import CycleRecord
from presstrack.domain.tooling.entities.user import User, require_actor
from presstrack.domain.tooling.value_objects.common import (
    ToolFormat,
    is_valid_press_number,
)
from presstrack.domain.tooling.value_objects.enums import (
    Position,
    ToolStatus,
    WearLevel,
    position_order,
)
from presstrack.shared.exceptions import (
    BusinessRuleError,
    ErrorType,
    ValidationError,
)
from presstrack.tests.factories import BASE_DATE, CycleFactory, ToolFactory


class TestCycleRecord:
    def test_create_valid_record(self):
        record = CycleRecord.create(
            press_number=2,
            tool_id=7,
            position="bottom",
            total_cycles=1500,
            date=BASE_DATE,
        )

        assert record.position == Position.BOTTOM
        assert record.id is None
        assert record.partial_cycles == 0
        assert record.lineage_key == (2, Position.BOTTOM)

    @pytest.mark.parametrize("press_number", [1, 6, -1, None])
    def test_invalid_press_number(self, press_number):
        with pytest.raises(ValidationError) as exc_info:
            CycleFactory.create(press_number=press_number)
        assert exc_info.value.field_name == "press_number"

    @pytest.mark.parametrize("position", ["", None, "side"])
    def test_invalid_position(self, position):
        with pytest.raises(ValidationError) as exc_info:
            CycleRecord.create(0, 1, position, 100, BASE_DATE)
        assert exc_info.value.field_name == "position"

    @pytest.mark.parametrize("total_cycles", [0, -5])
    def test_non_positive_total(self, total_cycles):
        with pytest.raises(ValidationError) as exc_info:
            CycleFactory.create(total_cycles=total_cycles)
        assert exc_info.value.field_name == "total_cycles"

    def test_zero_timestamp(self):
        with pytest.raises(ValidationError) as exc_info:
            CycleRecord.create(0, 1, Position.TOP, 100, datetime.min)
        assert exc_info.value.field_name == "date"
        assert exc_info.value.error_type == ErrorType.VALIDATION

    def test_naive_date_taken_as_utc(self):
        record = CycleRecord.create(0, 1, Position.TOP, 100, datetime(2024, 5, 1, 8, 0))

        assert record.date == datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)
        assert record.date.tzinfo is not None

    def test_aware_date_converted_to_utc(self):
        local = datetime(2024, 5, 1, 10, 0, tzinfo=timezone(timedelta(hours=2)))
        record = CycleRecord.create(0, 1, Position.TOP, 100, local)

        assert record.date.utcoffset() == timedelta(0)
        assert record.date.hour == 8

    def test_zero_timestamp_rejected_with_offset(self):
        record = CycleFactory.create().model_copy(
            update={"date": datetime.min.replace(tzinfo=timezone.utc)}
        )
        with pytest.raises(ValidationError) as exc_info:
            record.validate_rules()
        assert exc_info.value.field_name == "date"

    def test_press_set_override(self):
        record = CycleRecord.create(1, 1, Position.TOP, 100, BASE_DATE, valid_presses=(1,))

        record.validate_rules(valid_presses=(1,))
        with pytest.raises(ValidationError):
            record.validate_rules()
        with pytest.raises(ValidationError):
            CycleRecord.create(0, 1, Position.TOP, 100, BASE_DATE, valid_presses=(1,))

    def test_partial_cycles_not_serialized(self):
        record = CycleFactory.create().with_partial_cycles(250)

        assert record.partial_cycles == 250
        assert "partial_cycles" not in record.model_dump()

    def test_records_are_immutable(self):
        record = CycleFactory.create()
        with pytest.raises(Exception):
            record.total_cycles = 5


class TestTool:
    def test_status_precedence(self):
        tool = ToolFactory.create(tool_id=1, press=2, regenerating=True, is_dead=True)
        assert tool.status == ToolStatus.DEAD

        tool = ToolFactory.create(tool_id=1, press=2, regenerating=True)
        assert tool.status == ToolStatus.REGENERATING

        tool = ToolFactory.create(tool_id=1, press=2)
        assert tool.status == ToolStatus.ACTIVE

        assert ToolFactory.create(tool_id=1).status == ToolStatus.AVAILABLE

    def test_display_code(self):
        tool = ToolFactory.create(code="G01", width=120, height=60, type="FC")
        assert tool.display_code == "120x60 G01 FC"

        tool = ToolFactory.create(code="G02", width=0, height=0)
        assert tool.display_code == "G02"

    def test_mark_dead_from_available(self):
        tool = ToolFactory.create(tool_id=1)
        tool.mark_dead()

        assert tool.status == ToolStatus.DEAD
        assert tool.press is None

    def test_mark_dead_from_active_rejected(self):
        tool = ToolFactory.create(tool_id=1, press=3)

        with pytest.raises(BusinessRuleError):
            tool.mark_dead()
        assert not tool.is_dead

    def test_mark_dead_clears_regenerating(self):
        tool = ToolFactory.create(tool_id=1, regenerating=True)
        tool.mark_dead()

        assert tool.is_dead
        assert not tool.regenerating

    def test_revive(self):
        tool = ToolFactory.create(tool_id=1, is_dead=True)
        tool.revive()
        assert tool.status == ToolStatus.AVAILABLE

        with pytest.raises(BusinessRuleError):
            tool.revive()

    def test_assign_press(self):
        tool = ToolFactory.create(tool_id=1)
        tool.assign_press(4)
        assert tool.is_active

        tool.assign_press(None)
        assert tool.press is None

        with pytest.raises(ValidationError):
            tool.assign_press(1)

    def test_assign_press_with_configured_press_set(self):
        tool = ToolFactory.create(tool_id=1)

        tool.assign_press(1, valid_presses=(1,))
        assert tool.press == 1
        tool.validate_rules(valid_presses=(1,))
        with pytest.raises(ValidationError):
            tool.validate_rules()

    def test_dead_tool_cannot_be_mounted(self):
        tool = ToolFactory.create(tool_id=1, is_dead=True)
        with pytest.raises(BusinessRuleError):
            tool.assign_press(0)

    def test_empty_code_rejected(self):
        with pytest.raises(ValidationError):
            ToolFactory.create(code="  ").validate_rules()

    def test_bottom_tools_cannot_be_bound(self):
        ToolFactory.create(position=Position.TOP_CASSETTE, binding=1).validate_rules()

        with pytest.raises(ValidationError) as exc_info:
            ToolFactory.create(position=Position.BOTTOM, binding=1).validate_rules()
        assert exc_info.value.field_name == "binding"


class TestValueObjects:
    def test_position_order(self):
        assert position_order(Position.TOP) == 1
        assert position_order("cassette top") == 2
        assert position_order(Position.BOTTOM) == 3
        assert position_order("side") == 999
        assert position_order(None) == 999

    def test_tool_format_str(self):
        assert str(ToolFormat(width=120, height=60)) == "120x60"
        assert str(ToolFormat()) == ""

    def test_valid_press_numbers(self):
        assert all(is_valid_press_number(n) for n in (0, 2, 3, 4, 5))
        assert not is_valid_press_number(1)
        assert not is_valid_press_number(None)
        assert not is_valid_press_number(True)
        assert is_valid_press_number(1, valid_presses=(1,))

    @pytest.mark.parametrize(
        "cycles,expected",
        [
            (0, WearLevel.OK),
            (799_999, WearLevel.OK),
            (800_000, WearLevel.WARNING),
            (999_999, WearLevel.WARNING),
            (1_000_000, WearLevel.CRITICAL),
        ],
    )
    def test_wear_level(self, cycles, expected):
        assert WearLevel.from_cycles(cycles, 800_000, 1_000_000) == expected

    def test_status_transitions(self):
        assert ToolStatus.AVAILABLE.can_transition_to(ToolStatus.DEAD)
        assert ToolStatus.REGENERATING.can_transition_to(ToolStatus.DEAD)
        assert not ToolStatus.ACTIVE.can_transition_to(ToolStatus.DEAD)
        assert ToolStatus.DEAD.can_transition_to(ToolStatus.AVAILABLE)
        assert not ToolStatus.DEAD.can_transition_to(ToolStatus.ACTIVE)


class TestUser:
    def test_require_actor_rejects_none(self):
        with pytest.raises(ValidationError) as exc_info:
            require_actor(None)
        assert exc_info.value.field_name == "actor"
        assert exc_info.value.to_dict() == {
            "type": "validation",
            "message": "Validation failed for field 'actor': an operator is required",
            "details": {"field": "actor", "value": None, "error_code": "VALIDATION_ERROR"},
        }

    def test_require_actor_validates(self):
        with pytest.raises(ValidationError):
            require_actor(User(user_id=0, name="Anna"))
        with pytest.raises(ValidationError):
            require_actor(User(user_id=5, name=" "))

        actor = User(user_id=5, name="Anna")
        assert require_actor(actor) is actor
