class DomainError(Exception):
    """Base domain error with a user-facing message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PermissionDenied(DomainError):
    """Raised when the user has insufficient permissions."""


class NotFound(DomainError):
    """Raised when a required entity is missing."""


class InvalidTransition(DomainError):
    """Raised when the record's current status forbids the operation."""


class InvalidArgument(DomainError):
    """Raised when input is malformed or a required field is empty."""


class PersistenceFailure(DomainError):
    """Raised when the backing store rejects a read or a write."""
