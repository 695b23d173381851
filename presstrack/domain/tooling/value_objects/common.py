"""Common value objects for press tooling."""

from datetime import datetime, timezone

from pydantic import Field

from ....core.config import settings
from ....shared.base import ValueObject


class ToolFormat(ValueObject):
    """Tool format (width x height)."""

    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)

    def __str__(self) -> str:
        if self.width == 0 and self.height == 0:
            return ""
        return f"{self.width}x{self.height}"


def is_valid_press_number(
    press_number: int | None, valid_presses: tuple[int, ...] | None = None
) -> bool:
    """Check a press number against the configured press set."""
    if press_number is None or isinstance(press_number, bool):
        return False
    presses = valid_presses if valid_presses is not None else settings.press_numbers
    return press_number in presses


def as_utc(value: datetime) -> datetime:
    """
    Timestamp in UTC.

    Naive values are taken to be UTC already; SQLite hands stored values back
    without their offset.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
