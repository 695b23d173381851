"""
Base repository implementation providing generic row operations.

Concrete repositories extend this class with ledger and directory specific
queries and map rows to domain entities. Every SQLAlchemy failure is rolled
back and re-raised as ``RepositoryError`` with the failing operation as
context; unknown ids raise ``EntityNotFoundError``.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel

from presstrack.shared.exceptions import (
    EntityAlreadyExistsError,
    EntityNotFoundError,
    RepositoryError,
)

# Type variable for the managed table
RowType = TypeVar("RowType", bound=SQLModel)


class BaseRepository(Generic[RowType], ABC):
    """
    Base repository class providing generic CRUD operations on one table.

    Concrete repositories provide ``row_class`` and ``entity_name`` and
    convert rows to domain entities themselves.
    """

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    @property
    @abstractmethod
    def row_class(self) -> type[RowType]:
        """Return the SQLModel table class managed by this repository."""
        pass

    @property
    @abstractmethod
    def entity_name(self) -> str:
        """Name used in not-found and error messages."""
        pass

    def _get_row(self, row_id: Any) -> RowType | None:
        try:
            return self.session.get(self.row_class, row_id)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RepositoryError(
                f"Database error during get {self.entity_name} {row_id}: {str(e)}"
            ) from e

    def _get_row_required(self, row_id: Any) -> RowType:
        row = self._get_row(row_id)
        if row is None:
            raise EntityNotFoundError(self.entity_name, row_id)
        return row

    def _save_row(self, row: RowType, operation: str) -> RowType:
        """
        Insert or update a row in its own transaction.

        Raises:
            EntityAlreadyExistsError: If a unique constraint is violated
            RepositoryError: If the database operation fails
        """
        try:
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
            return row
        except IntegrityError as e:
            self.session.rollback()
            raise EntityAlreadyExistsError(self.entity_name, str(e.orig)) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RepositoryError(
                f"Database error during {operation} {self.entity_name}: {str(e)}"
            ) from e

    def _delete_row(self, row_id: Any) -> bool:
        """Delete a row by primary key; False when it does not exist."""
        row = self._get_row(row_id)
        if row is None:
            return False

        try:
            self.session.delete(row)
            self.session.commit()
            return True
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RepositoryError(
                f"Database error during delete {self.entity_name} {row_id}: {str(e)}"
            ) from e

    def _exec_all(self, statement: Any, operation: str) -> list[RowType]:
        try:
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RepositoryError(
                f"Database error during {operation}: {str(e)}"
            ) from e

    def _exec_first(self, statement: Any, operation: str) -> RowType | None:
        try:
            return self.session.exec(statement).first()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RepositoryError(
                f"Database error during {operation}: {str(e)}"
            ) from e
