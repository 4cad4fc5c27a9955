from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError


class RepositoryError(Exception):
    """Base class for errors raised by the repository."""


class ValidationError(RepositoryError):
    """Input did not satisfy the shape contract of an entity kind."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, message: str, exc: PydanticValidationError) -> "ValidationError":
        return cls(message, errors=exc.errors(include_url=False, include_context=False, include_input=False))


class DuplicateKeyError(ValidationError):
    """A business key (or username) is already taken in its collection."""

    def __init__(self, field: str, value: str):
        super().__init__(
            f"{field} '{value}' already exists",
            errors=[{"loc": [field], "msg": "already exists", "type": "duplicate_key"}],
        )
        self.field = field
        self.value = value
