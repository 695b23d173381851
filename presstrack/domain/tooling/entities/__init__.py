from .cycle import CycleRecord
from .regeneration import Regeneration
from .tool import Tool
from .user import User, require_actor

__all__ = ["CycleRecord", "Regeneration", "Tool", "User", "require_actor"]
