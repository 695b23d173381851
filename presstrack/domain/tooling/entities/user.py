"""Operator identity attached to ledger writes and regenerations."""

from pydantic import Field

from ....shared.base import ValueObject
from ....shared.exceptions import ValidationError


class User(ValueObject):
    """An operator, identified by their messenger (telegram) id."""

    user_id: int
    name: str = Field(default="")

    def validate_rules(self) -> None:
        if self.user_id <= 0:
            raise ValidationError("user_id", self.user_id, "must be positive")
        if not self.name.strip():
            raise ValidationError("name", self.name, "cannot be empty")


def require_actor(actor: User | None) -> User:
    """Validate the acting operator of a write; ``None`` is rejected."""
    if actor is None:
        raise ValidationError("actor", None, "an operator is required")
    actor.validate_rules()
    return actor
