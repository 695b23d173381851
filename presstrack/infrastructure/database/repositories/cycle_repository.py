"""
SQL implementation of the cycle ledger.

Entries are validated before any write; reads are newest first
(date descending, then id descending).
"""

import logging

from sqlmodel import Session, col, select

from presstrack.domain.tooling.entities.cycle import CycleRecord
from presstrack.domain.tooling.entities.user import User, require_actor
from presstrack.domain.tooling.repositories.cycle_repository import CycleRepository
from presstrack.infrastructure.database.mappers.cycle_mapper import CycleMapper
from presstrack.infrastructure.database.models import PressCycle
from presstrack.shared.exceptions import EntityNotFoundError

from .base import BaseRepository

logger = logging.getLogger(__name__)


def _newest_first(statement):
    return statement.order_by(col(PressCycle.date).desc(), col(PressCycle.id).desc())


class SQLCycleRepository(BaseRepository[PressCycle], CycleRepository):
    """
    Cycle ledger backed by the ``press_cycles`` table.

    ``valid_presses`` overrides the configured press set for validation.
    """

    def __init__(self, session: Session, valid_presses: tuple[int, ...] | None = None):
        super().__init__(session)
        self.valid_presses = valid_presses

    @property
    def row_class(self) -> type[PressCycle]:
        return PressCycle

    @property
    def entity_name(self) -> str:
        return "cycle"

    def add(self, record: CycleRecord, actor: User) -> int:
        record.validate_rules(self.valid_presses)
        require_actor(actor)

        logger.debug(
            "Adding press cycle: press=%s tool=%s position=%s total=%s by=%s",
            record.press_number,
            record.tool_id,
            record.position.value,
            record.total_cycles,
            actor.name,
        )

        row = CycleMapper.domain_to_sql(record.with_id(None), actor.user_id)
        row = self._save_row(row, "add")
        return row.id

    def get(self, cycle_id: int) -> CycleRecord:
        return CycleMapper.sql_to_domain(self._get_row_required(cycle_id))

    def list_for_tool(self, tool_id: int) -> list[CycleRecord]:
        statement = _newest_first(
            select(PressCycle).where(PressCycle.tool_id == tool_id)
        )
        rows = self._exec_all(statement, f"list cycles for tool {tool_id}")
        return [CycleMapper.sql_to_domain(row) for row in rows]

    def list_for_press(
        self, press_number: int, limit: int | None = None, offset: int | None = None
    ) -> list[CycleRecord]:
        statement = _newest_first(
            select(PressCycle).where(PressCycle.press_number == press_number)
        )
        if offset:
            statement = statement.offset(offset)
        if limit is not None:
            statement = statement.limit(limit)

        rows = self._exec_all(statement, f"list cycles for press {press_number}")
        return [CycleMapper.sql_to_domain(row) for row in rows]

    def list_all(self) -> list[CycleRecord]:
        rows = self._exec_all(_newest_first(select(PressCycle)), "list cycles")
        return [CycleMapper.sql_to_domain(row) for row in rows]

    def get_last_for_tool(self, tool_id: int) -> CycleRecord:
        statement = _newest_first(
            select(PressCycle).where(PressCycle.tool_id == tool_id)
        )
        row = self._exec_first(statement, f"get last cycle for tool {tool_id}")
        if row is None:
            raise EntityNotFoundError("cycle for tool", tool_id)
        return CycleMapper.sql_to_domain(row)

    def update(self, record: CycleRecord, actor: User) -> CycleRecord:
        record.validate_rules(self.valid_presses)
        require_actor(actor)
        if record.id is None:
            raise EntityNotFoundError(self.entity_name, "None")

        logger.debug("Updating press cycle %s by %s", record.id, actor.name)

        row = self._get_row_required(record.id)
        row.press_number = record.press_number
        row.tool_id = record.tool_id
        row.tool_position = record.position.value
        row.total_cycles = record.total_cycles
        row.date = record.date
        row.performed_by = actor.user_id
        return CycleMapper.sql_to_domain(self._save_row(row, "update"))

    def delete(self, cycle_id: int) -> bool:
        logger.debug("Deleting press cycle %s", cycle_id)
        return self._delete_row(cycle_id)
