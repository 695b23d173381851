"""Cycle record entity: one observation of a tool's cumulative counter."""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from ....shared.base import Entity
from ....shared.exceptions import ValidationError
from ..value_objects.common import as_utc, is_valid_press_number
from ..value_objects.enums import Position


class CycleRecord(Entity):
    """
    Immutable ledger entry.

    ``total_cycles`` is non-decreasing within a lineage (one tool on one
    press/position between regenerations). ``partial_cycles`` is not stored;
    it is filled in by the partial-cycle calculator on a copy of the record.
    ``date`` is always held in UTC.
    """

    model_config = ConfigDict(frozen=True)

    press_number: int
    tool_id: int
    position: Position
    total_cycles: int
    date: datetime
    performed_by: int | None = None
    partial_cycles: int = Field(default=0, exclude=True)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return as_utc(v)

    def validate_rules(self, valid_presses: tuple[int, ...] | None = None) -> None:
        validate_cycle_fields(
            self.press_number,
            self.position,
            self.total_cycles,
            self.date,
            valid_presses,
        )

    @property
    def lineage_key(self) -> tuple[int, Position]:
        """Press and position this observation was taken on."""
        return self.press_number, self.position

    def with_partial_cycles(self, partial_cycles: int) -> "CycleRecord":
        """Return an annotated copy of this record."""
        return self.model_copy(update={"partial_cycles": partial_cycles})

    def with_id(self, cycle_id: int | None) -> "CycleRecord":
        return self.model_copy(update={"id": cycle_id})

    @staticmethod
    def create(
        press_number: int,
        tool_id: int,
        position: Position | str | None,
        total_cycles: int,
        date: datetime | None,
        performed_by: int | None = None,
        valid_presses: tuple[int, ...] | None = None,
    ) -> "CycleRecord":
        """
        Factory method that validates raw input before building the record.

        ``valid_presses`` overrides the configured press set.
        """
        validate_cycle_fields(press_number, position, total_cycles, date, valid_presses)
        return CycleRecord(
            press_number=press_number,
            tool_id=tool_id,
            position=Position(position),
            total_cycles=total_cycles,
            date=date,
            performed_by=performed_by,
        )


def validate_cycle_fields(
    press_number: int,
    position: Position | str | None,
    total_cycles: int,
    date: datetime | None,
    valid_presses: tuple[int, ...] | None = None,
) -> None:
    if not is_valid_press_number(press_number, valid_presses):
        raise ValidationError(
            "press_number", press_number, "not a valid press number"
        )

    if not position:
        raise ValidationError("position", None, "cannot be empty")
    try:
        Position(position)
    except ValueError as e:
        raise ValidationError(
            "position", str(position), "unknown tool position"
        ) from e

    if total_cycles is None or total_cycles <= 0:
        raise ValidationError("total_cycles", total_cycles, "must be positive")

    # The zero timestamp may arrive with or without an offset
    if date is None or date.replace(tzinfo=None) == datetime.min:
        raise ValidationError("date", None, "a timestamp is required")
