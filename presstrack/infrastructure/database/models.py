"""
SQLModel table definitions for the press tooling domain.

Storage-agnostic logical shape: a cycle ledger keyed by id, a regeneration
table anchored to ledger ids, plus the tool and operator directories.
Enumerations are stored as their string values; ledger dates are stored
as timezone-aware UTC timestamps.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """Operator table, keyed by messenger (telegram) id."""

    __tablename__ = "users"

    telegram_id: int = Field(primary_key=True)
    name: str = Field(min_length=1, max_length=100)


class Tool(SQLModel, table=True):
    """Tool directory table."""

    __tablename__ = "tools"
    __table_args__ = (
        UniqueConstraint(
            "position", "format_width", "format_height", "code",
            name="uq_tools_position_format_code",
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    position: str = Field(max_length=20, index=True)
    format_width: int = Field(default=0, ge=0)
    format_height: int = Field(default=0, ge=0)
    type: str = Field(default="", max_length=20)
    code: str = Field(max_length=50)
    regenerating: bool = Field(default=False)
    is_dead: bool = Field(default=False)
    press: int | None = Field(default=None, index=True)
    binding: int | None = Field(default=None, foreign_key="tools.id")


class PressCycle(SQLModel, table=True):
    """Cycle ledger table. Rows are never updated in normal operation."""

    __tablename__ = "press_cycles"
    __table_args__ = (
        CheckConstraint("press_number >= 0", name="ck_press_cycles_press_number"),
        CheckConstraint("total_cycles > 0", name="ck_press_cycles_total_cycles"),
    )

    id: int | None = Field(default=None, primary_key=True)
    press_number: int = Field(index=True)
    tool_id: int = Field(foreign_key="tools.id", index=True)
    tool_position: str = Field(max_length=20, index=True)
    total_cycles: int = Field(default=0)
    date: datetime = Field(sa_type=DateTime(timezone=True), index=True)
    performed_by: int | None = Field(
        default=None, foreign_key="users.telegram_id", ondelete="SET NULL"
    )


class ToolRegeneration(SQLModel, table=True):
    """Regeneration records, anchored to the last ledger entry before reset."""

    __tablename__ = "tool_regenerations"

    id: int | None = Field(default=None, primary_key=True)
    tool_id: int = Field(foreign_key="tools.id", index=True)
    cycle_id: int = Field(foreign_key="press_cycles.id", index=True)
    reason: str = Field(default="")
    performed_by: int | None = Field(
        default=None, foreign_key="users.telegram_id", ondelete="SET NULL"
    )
