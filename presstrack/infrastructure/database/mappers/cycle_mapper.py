"""
Mapper for converting between cycle ledger entities and SQL rows.
"""

from presstrack.domain.tooling.entities.cycle import CycleRecord
from presstrack.domain.tooling.value_objects.enums import Position
from presstrack.infrastructure.database.models import PressCycle as SQLPressCycle


class CycleMapper:
    """Converts ledger entries; the partial-cycle annotation is never stored."""

    @staticmethod
    def domain_to_sql(record: CycleRecord, performed_by: int | None) -> SQLPressCycle:
        return SQLPressCycle(
            id=record.id,
            press_number=record.press_number,
            tool_id=record.tool_id,
            tool_position=record.position.value,
            total_cycles=record.total_cycles,
            date=record.date,
            performed_by=performed_by,
        )

    @staticmethod
    def sql_to_domain(row: SQLPressCycle) -> CycleRecord:
        return CycleRecord(
            id=row.id,
            press_number=row.press_number,
            tool_id=row.tool_id,
            position=Position(row.tool_position),
            total_cycles=row.total_cycles,
            date=row.date,
            performed_by=row.performed_by,
        )
