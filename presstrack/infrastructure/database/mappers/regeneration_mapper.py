"""
Mapper for converting between regeneration records and SQL rows.
"""

from presstrack.domain.tooling.entities.regeneration import Regeneration
from presstrack.infrastructure.database.models import (
    ToolRegeneration as SQLToolRegeneration,
)


class RegenerationMapper:
    @staticmethod
    def sql_to_domain(row: SQLToolRegeneration) -> Regeneration:
        return Regeneration(
            id=row.id,
            tool_id=row.tool_id,
            cycle_id=row.cycle_id,
            reason=row.reason or "",
            performed_by=row.performed_by,
        )
