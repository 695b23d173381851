"""Regeneration record entity."""

from pydantic import ConfigDict

from ....shared.base import Entity
from ....shared.exceptions import ValidationError


class Regeneration(Entity):
    """
    A refurbishment of a tool.

    Anchored to the last ledger entry observed before the reset; cycle counts
    recorded after that entry start a new lineage for the tool.
    """

    model_config = ConfigDict(frozen=True)

    tool_id: int
    cycle_id: int
    reason: str = ""
    performed_by: int | None = None

    def validate_rules(self) -> None:
        if self.tool_id <= 0:
            raise ValidationError("tool_id", self.tool_id, "must be positive")
        if self.cycle_id <= 0:
            raise ValidationError("cycle_id", self.cycle_id, "must be positive")
