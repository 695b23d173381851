from .common import ToolFormat, is_valid_press_number
from .enums import Position, ToolStatus, WearLevel, position_order

__all__ = [
    "Position",
    "ToolFormat",
    "ToolStatus",
    "WearLevel",
    "is_valid_press_number",
    "position_order",
]
