"""Errors raised by the repositories.

Routers translate these into HTTP responses; nothing below the service
layer raises ``HTTPException``.
"""


class RepositoryError(Exception):
    """Base class for ledger and account data access errors."""


class NotFoundError(RepositoryError):
    """No row matched, or the row belongs to another user."""

    def __init__(self, entity_type: str, identifier: str | int):
        self.entity_type = entity_type
        self.identifier = identifier
        super().__init__(f"{entity_type} not found: {identifier}")


class DuplicateError(RepositoryError):
    """A unique value such as a username is already taken."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}={value} already exists")
