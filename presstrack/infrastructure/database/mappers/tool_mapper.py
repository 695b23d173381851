"""
Mapper for converting between Tool domain entities and SQL rows.

The tool format value object is flattened into width/height columns.
"""

from presstrack.domain.tooling.entities.tool import Tool as DomainTool
from presstrack.domain.tooling.value_objects.common import ToolFormat
from presstrack.domain.tooling.value_objects.enums import Position
from presstrack.infrastructure.database.models import Tool as SQLTool


class ToolMapper:
    @staticmethod
    def domain_to_sql(tool: DomainTool) -> SQLTool:
        return SQLTool(
            id=tool.id,
            position=tool.position.value,
            format_width=tool.format.width,
            format_height=tool.format.height,
            type=tool.type,
            code=tool.code,
            regenerating=tool.regenerating,
            is_dead=tool.is_dead,
            press=tool.press,
            binding=tool.binding,
        )

    @staticmethod
    def apply_to_sql(tool: DomainTool, row: SQLTool) -> SQLTool:
        """Copy the mutable state of a domain tool onto an existing row."""
        row.position = tool.position.value
        row.format_width = tool.format.width
        row.format_height = tool.format.height
        row.type = tool.type
        row.code = tool.code
        row.regenerating = tool.regenerating
        row.is_dead = tool.is_dead
        row.press = tool.press
        row.binding = tool.binding
        return row

    @staticmethod
    def sql_to_domain(row: SQLTool) -> DomainTool:
        return DomainTool(
            id=row.id,
            position=Position(row.position),
            format=ToolFormat(width=row.format_width, height=row.format_height),
            type=row.type,
            code=row.code,
            regenerating=row.regenerating,
            is_dead=row.is_dead,
            press=row.press,
            binding=row.binding,
        )
