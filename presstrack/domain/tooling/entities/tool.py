"""Tool entity and its derived availability status."""

from pydantic import Field

from ....shared.base import Entity
from ....shared.exceptions import BusinessRuleError, ValidationError
from ..value_objects.common import ToolFormat, is_valid_press_number
from ..value_objects.enums import Position, ToolStatus


class Tool(Entity):
    """
    Press tool.

    The status is derived from three stored facts (dead flag, regenerating
    flag, press assignment) with precedence dead > regenerating > active >
    available. At most one status holds at a time.
    """

    position: Position
    format: ToolFormat = Field(default_factory=ToolFormat)
    type: str = ""  # e.g. FC, GTC, MASS
    code: str  # e.g. G01, G02
    regenerating: bool = False
    is_dead: bool = False
    press: int | None = None
    binding: int | None = None

    def validate_rules(self, valid_presses: tuple[int, ...] | None = None) -> None:
        if not self.code.strip():
            raise ValidationError("code", self.code, "cannot be empty")
        if self.press is not None and not is_valid_press_number(
            self.press, valid_presses
        ):
            raise ValidationError("press", self.press, "not a valid press number")
        if self.binding is not None and not self.position.is_bindable:
            raise ValidationError(
                "binding", self.binding, f"{self.position.label} tools cannot be bound"
            )

    @property
    def status(self) -> ToolStatus:
        if self.is_dead:
            return ToolStatus.DEAD
        if self.regenerating:
            return ToolStatus.REGENERATING
        if self.press is not None:
            return ToolStatus.ACTIVE
        return ToolStatus.AVAILABLE

    @property
    def is_active(self) -> bool:
        return self.status == ToolStatus.ACTIVE

    @property
    def is_bound(self) -> bool:
        return self.binding is not None

    @property
    def display_code(self) -> str:
        """Human readable code, "<format> <code>" plus the type when set."""
        parts = [str(self.format), self.code]
        if self.type:
            parts.append(self.type)
        return " ".join(part for part in parts if part)

    def assign_press(
        self, press_number: int | None, valid_presses: tuple[int, ...] | None = None
    ) -> None:
        """Mount the tool on a press, ``None`` unmounts it."""
        if press_number is None:
            self.clear_press()
            return
        if not is_valid_press_number(press_number, valid_presses):
            raise ValidationError(
                "press_number", press_number, "not a valid press number"
            )
        if self.is_dead:
            raise BusinessRuleError(
                f"Tool {self.id} is dead and cannot be mounted",
                {"tool_id": self.id, "press_number": press_number},
            )
        self.press = press_number

    def clear_press(self) -> None:
        self.press = None

    def mark_dead(self) -> None:
        if self.is_dead:
            return
        if not self.status.can_transition_to(ToolStatus.DEAD):
            raise BusinessRuleError(
                f"Tool {self.id} is {self.status.value} and cannot be marked dead",
                {"tool_id": self.id, "status": self.status.value},
            )
        self.is_dead = True
        self.regenerating = False
        self.press = None

    def revive(self) -> None:
        if not self.is_dead:
            raise BusinessRuleError(
                f"Tool {self.id} is not dead",
                {"tool_id": self.id, "status": self.status.value},
            )
        self.is_dead = False
