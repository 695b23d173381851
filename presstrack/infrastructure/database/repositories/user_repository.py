"""
SQL implementation of the operator directory.
"""

from __future__ import annotations

import logging

from sqlmodel import col, select

from presstrack.domain.tooling.entities.user import User
from presstrack.domain.tooling.repositories.directories import UserDirectory
from presstrack.infrastructure.database.models import User as SQLUser

from .base import BaseRepository

logger = logging.getLogger(__name__)


def _to_domain(row: SQLUser) -> User:
    return User(user_id=row.telegram_id, name=row.name)


class SQLUserRepository(BaseRepository[SQLUser], UserDirectory):
    @property
    def row_class(self) -> type[SQLUser]:
        return SQLUser

    @property
    def entity_name(self) -> str:
        return "user"

    def add(self, user: User) -> User:
        user.validate_rules()
        logger.debug("Adding user %s (%s)", user.user_id, user.name)
        row = SQLUser(telegram_id=user.user_id, name=user.name)
        return _to_domain(self._save_row(row, "add"))

    def get(self, user_id: int) -> User:
        return _to_domain(self._get_row_required(user_id))

    def list(self) -> list[User]:
        rows = self._exec_all(
            select(SQLUser).order_by(col(SQLUser.name)), "list users"
        )
        return [_to_domain(row) for row in rows]
