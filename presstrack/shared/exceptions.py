"""
Domain Exceptions

Discriminated error types for the press tool ledger. Validation failures,
not-found conditions and persistence failures are distinct kinds so callers
can tell "rejected" from "absent" from "broken".
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    NOT_FOUND = "not_found"
    REPOSITORY = "repository"
    CONCURRENCY = "concurrency"
    CONFLICT = "conflict"
    INITIALIZATION = "initialization"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when a value is rejected before any write happens."""

    def __init__(
        self,
        field_name: str,
        value: str | int | float | bool | None,
        message: str,
        error_code: str | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "VALIDATION_ERROR"

        full_message = f"Validation failed for field '{field_name}': {message}"
        details: dict[str, str | int | bool | None] = {
            "field": field_name,
            "value": str(value) if value is not None else None,
            "error_code": self.error_code,
        }
        super().__init__(full_message, ErrorType.VALIDATION, details)


class BusinessRuleError(DomainError):
    """Raised when a state transition is not allowed."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.BUSINESS_RULE, details)


# Repository exceptions
class RepositoryError(DomainError):
    """Raised when the storage layer fails."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.REPOSITORY, details)


class EntityNotFoundError(DomainError):
    """Raised when an entity cannot be found."""

    def __init__(self, entity_type: str, entity_id: int | str) -> None:
        details = {"entity_type": entity_type, "entity_id": str(entity_id)}
        super().__init__(
            f"{entity_type} not found: {entity_id}", ErrorType.NOT_FOUND, details
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class EntityAlreadyExistsError(DomainError):
    """Raised when an insert or update collides with a unique constraint."""

    def __init__(self, entity_type: str, message: str) -> None:
        super().__init__(
            f"{entity_type} already exists: {message}",
            ErrorType.CONFLICT,
            {"entity_type": entity_type},
        )
        self.entity_type = entity_type


class ConcurrencyError(DomainError):
    """Raised when a concurrent modification was detected."""

    def __init__(self, entity_type: str, entity_id: int, reason: str = "") -> None:
        message = f"Concurrent modification of {entity_type} {entity_id}"
        if reason:
            message += f": {reason}"
        details = {"entity_type": entity_type, "entity_id": str(entity_id)}
        super().__init__(message, ErrorType.CONCURRENCY, details)
        self.entity_type = entity_type
        self.entity_id = entity_id


class DatabaseInitializationError(DomainError):
    """Raised when the schema cannot be created at bootstrap."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorType.INITIALIZATION)


def is_not_found(error: BaseException) -> bool:
    """Check whether an error represents an absent entity."""
    return (
        isinstance(error, DomainError) and error.error_type == ErrorType.NOT_FOUND
    )
