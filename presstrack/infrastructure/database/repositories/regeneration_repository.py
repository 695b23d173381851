"""
SQL implementation of the regeneration records.
"""

import logging
from collections import defaultdict
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select

from presstrack.domain.tooling.entities.regeneration import Regeneration
from presstrack.domain.tooling.entities.user import User, require_actor
from presstrack.domain.tooling.repositories.regeneration_repository import (
    RegenerationRepository,
)
from presstrack.domain.tooling.value_objects.common import as_utc
from presstrack.infrastructure.database.mappers.regeneration_mapper import (
    RegenerationMapper,
)
from presstrack.infrastructure.database.models import PressCycle, ToolRegeneration
from presstrack.shared.exceptions import EntityNotFoundError, RepositoryError

from .base import BaseRepository

logger = logging.getLogger(__name__)


class SQLRegenerationRepository(
    BaseRepository[ToolRegeneration], RegenerationRepository
):
    """Regenerations backed by the ``tool_regenerations`` table, newest first."""

    @property
    def row_class(self) -> type[ToolRegeneration]:
        return ToolRegeneration

    @property
    def entity_name(self) -> str:
        return "regeneration"

    def add(self, tool_id: int, cycle_id: int, reason: str, actor: User) -> int:
        require_actor(actor)
        regeneration = Regeneration(
            tool_id=tool_id,
            cycle_id=cycle_id,
            reason=reason,
            performed_by=actor.user_id,
        )
        regeneration.validate_rules()

        logger.debug(
            "Adding tool regeneration: tool=%s cycle=%s by=%s",
            tool_id,
            cycle_id,
            actor.name,
        )

        row = ToolRegeneration(
            tool_id=tool_id,
            cycle_id=cycle_id,
            reason=reason,
            performed_by=actor.user_id,
        )
        return self._save_row(row, "add").id

    def get(self, regeneration_id: int) -> Regeneration:
        return RegenerationMapper.sql_to_domain(
            self._get_row_required(regeneration_id)
        )

    def get_last_for_tool(self, tool_id: int) -> Regeneration:
        statement = (
            select(ToolRegeneration)
            .where(ToolRegeneration.tool_id == tool_id)
            .order_by(col(ToolRegeneration.id).desc())
        )
        row = self._exec_first(statement, f"get last regeneration for tool {tool_id}")
        if row is None:
            raise EntityNotFoundError("regeneration for tool", tool_id)
        return RegenerationMapper.sql_to_domain(row)

    def list_for_tool(self, tool_id: int) -> list[Regeneration]:
        statement = (
            select(ToolRegeneration)
            .where(ToolRegeneration.tool_id == tool_id)
            .order_by(col(ToolRegeneration.id).desc())
        )
        rows = self._exec_all(statement, f"list regenerations for tool {tool_id}")
        return [RegenerationMapper.sql_to_domain(row) for row in rows]

    def has_regenerations_for_cycle(self, cycle_id: int) -> bool:
        statement = select(ToolRegeneration).where(
            ToolRegeneration.cycle_id == cycle_id
        )
        return (
            self._exec_first(statement, f"check regenerations for cycle {cycle_id}")
            is not None
        )

    def anchor_dates(self) -> dict[int, list[datetime]]:
        statement = (
            select(ToolRegeneration.tool_id, PressCycle.date)
            .join(PressCycle, col(PressCycle.id) == col(ToolRegeneration.cycle_id))
            .order_by(col(PressCycle.date))
        )
        try:
            rows = self.session.exec(statement).all()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RepositoryError(
                f"Database error during list regeneration anchors: {str(e)}"
            ) from e

        anchors: dict[int, list[datetime]] = defaultdict(list)
        for tool_id, date in rows:
            anchors[tool_id].append(as_utc(date))
        return dict(anchors)

    def update(self, regeneration: Regeneration, actor: User) -> Regeneration:
        require_actor(actor)
        regeneration.validate_rules()
        if regeneration.id is None:
            raise EntityNotFoundError(self.entity_name, "None")

        logger.debug("Updating regeneration %s by %s", regeneration.id, actor.name)

        row = self._get_row_required(regeneration.id)
        row.tool_id = regeneration.tool_id
        row.cycle_id = regeneration.cycle_id
        row.reason = regeneration.reason
        row.performed_by = actor.user_id
        return RegenerationMapper.sql_to_domain(self._save_row(row, "update"))

    def delete(self, regeneration_id: int) -> bool:
        logger.debug("Deleting regeneration %s", regeneration_id)
        return self._delete_row(regeneration_id)
