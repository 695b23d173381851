"""
SQL implementation of the tool directory.
"""

from __future__ import annotations

import logging

from sqlmodel import Session, col, select

from presstrack.domain.tooling.entities.tool import Tool
from presstrack.domain.tooling.entities.user import User, require_actor
from presstrack.domain.tooling.repositories.directories import ToolDirectory
from presstrack.infrastructure.database.mappers.tool_mapper import ToolMapper
from presstrack.infrastructure.database.models import Tool as SQLTool

from .base import BaseRepository

logger = logging.getLogger(__name__)


class SQLToolRepository(BaseRepository[SQLTool], ToolDirectory):
    """
    Tool directory backed by the ``tools`` table.

    Position, format and code are unique together; a collision raises
    ``EntityAlreadyExistsError``. ``valid_presses`` overrides the configured
    press set for validation.
    """

    def __init__(self, session: Session, valid_presses: tuple[int, ...] | None = None):
        super().__init__(session)
        self.valid_presses = valid_presses

    @property
    def row_class(self) -> type[SQLTool]:
        return SQLTool

    @property
    def entity_name(self) -> str:
        return "tool"

    def add(self, tool: Tool, actor: User) -> int:
        tool.validate_rules(self.valid_presses)
        require_actor(actor)

        logger.debug(
            "Adding tool: position=%s format=%s code=%s by=%s",
            tool.position.value,
            tool.format,
            tool.code,
            actor.name,
        )

        row = ToolMapper.domain_to_sql(tool)
        row.id = None
        return self._save_row(row, "add").id

    def get(self, tool_id: int) -> Tool:
        return ToolMapper.sql_to_domain(self._get_row_required(tool_id))

    def list(self) -> list[Tool]:
        rows = self._exec_all(select(SQLTool).order_by(col(SQLTool.id)), "list tools")
        return [ToolMapper.sql_to_domain(row) for row in rows]

    def update(self, tool: Tool, actor: User) -> Tool:
        tool.validate_rules(self.valid_presses)
        require_actor(actor)

        logger.debug("Updating tool %s by %s", tool.id, actor.name)

        row = self._get_row_required(tool.id)
        ToolMapper.apply_to_sql(tool, row)
        return ToolMapper.sql_to_domain(self._save_row(row, "update"))

    def update_regenerating(self, tool_id: int, regenerating: bool, actor: User) -> None:
        require_actor(actor)

        row = self._get_row_required(tool_id)
        if row.regenerating == regenerating:
            return

        logger.debug(
            "Updating tool regenerating status: tool=%s regenerating=%s by=%s",
            tool_id,
            regenerating,
            actor.name,
        )

        row.regenerating = regenerating
        self._save_row(row, "update regenerating")

    def update_press(self, tool_id: int, press_number: int | None, actor: User) -> Tool:
        """
        Mount a tool on a press (``None`` unmounts it).

        A bound tool follows the press of the tool it is bound to; both rows
        are written in the same transaction.

        Raises:
            ValidationError: If the press number is invalid
            BusinessRuleError: If the tool is dead
            EntityNotFoundError: If the tool is unknown
        """
        require_actor(actor)

        row = self._get_row_required(tool_id)
        tool = ToolMapper.sql_to_domain(row)
        tool.assign_press(press_number, self.valid_presses)

        logger.debug(
            "Updating tool press: tool=%s press=%s by=%s",
            tool_id,
            press_number,
            actor.name,
        )

        row.press = tool.press
        if tool.binding is not None:
            bound_row = self._get_row_required(tool.binding)
            bound_row.press = tool.press
            self.session.add(bound_row)

        return ToolMapper.sql_to_domain(self._save_row(row, "update press"))

    def delete(self, tool_id: int) -> bool:
        logger.debug("Deleting tool %s", tool_id)
        return self._delete_row(tool_id)
