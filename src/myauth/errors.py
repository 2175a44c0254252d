from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Record not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when no valid session backs the request."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when the authenticated user's role is below the one required."""

    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class StorageError(Exception):
    """Raised when the database rejects a write (constraint violation and the like).

    Storage errors are internal: their messages are logged, never shown to the user.
    """


class PersistenceError(StorageError):
    """Raised when a write that must always produce a row produced none."""


class DataIntegrityError(StorageError):
    """Raised when a stored value does not match the domain model (e.g. unknown role)."""
