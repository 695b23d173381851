"""Domain enums for press tooling."""

from enum import Enum

UNKNOWN_POSITION_ORDER = 999


class Position(str, Enum):
    """Mounting slot a tool occupies on a press."""

    TOP = "top"
    TOP_CASSETTE = "cassette top"
    BOTTOM = "bottom"

    @property
    def order(self) -> int:
        """Sort order, top first."""
        return _POSITION_ORDER[self]

    @property
    def label(self) -> str:
        return _POSITION_LABELS[self]

    @property
    def is_bindable(self) -> bool:
        """Top tools and top cassettes can be bound to each other."""
        return self in {Position.TOP, Position.TOP_CASSETTE}


_POSITION_ORDER = {
    Position.TOP: 1,
    Position.TOP_CASSETTE: 2,
    Position.BOTTOM: 3,
}

_POSITION_LABELS = {
    Position.TOP: "Top",
    Position.TOP_CASSETTE: "Top cassette",
    Position.BOTTOM: "Bottom",
}


def position_order(position: Position | str | None) -> int:
    """Sort order of a position; unknown values go to the end."""
    try:
        return Position(position).order
    except ValueError:
        return UNKNOWN_POSITION_ORDER


class ToolStatus(str, Enum):
    """Derived tool status."""

    AVAILABLE = "available"
    ACTIVE = "active"
    REGENERATING = "regenerating"
    DEAD = "dead"

    def can_transition_to(self, target_status: "ToolStatus") -> bool:
        """Check if a tool can move from the current status to the target."""
        valid_transitions = {
            ToolStatus.AVAILABLE: {
                ToolStatus.ACTIVE,
                ToolStatus.REGENERATING,
                ToolStatus.DEAD,
            },
            # Regenerating an active tool is not forbidden, see RegenerationService
            ToolStatus.ACTIVE: {ToolStatus.AVAILABLE, ToolStatus.REGENERATING},
            ToolStatus.REGENERATING: {ToolStatus.AVAILABLE, ToolStatus.DEAD},
            ToolStatus.DEAD: {ToolStatus.AVAILABLE},
        }
        return target_status in valid_transitions.get(self, set())


class WearLevel(str, Enum):
    """Tool wear classification by cumulative cycles."""

    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"

    @classmethod
    def from_cycles(cls, cycles: int, warning: int, error: int) -> "WearLevel":
        if cycles >= error:
            return cls.CRITICAL
        if cycles >= warning:
            return cls.WARNING
        return cls.OK
