from abc import ABC
from enum import StrEnum


class ErrorKind(StrEnum):
    """Machine-readable failure categories shared by results and HTTP responses."""

    VALIDATION = "validation_error"
    INVALID_CREDENTIALS = "invalid_credentials"
    AUTHENTICATION = "authentication_error"
    DUPLICATE_USER = "duplicate_user"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """

    kind: ErrorKind


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when an operation needs a valid session and none is present."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class InvalidCredentialsError(UserError):
    """Raised when login fails.

    Unknown email and wrong password share this message so the response
    does not reveal which accounts exist.
    """

    kind = ErrorKind.INVALID_CREDENTIALS

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class DuplicateUserError(UserError):
    """Raised when registering an email that already has an account."""

    kind = ErrorKind.DUPLICATE_USER

    def __init__(self, message: str = "User already exists") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""

    kind = ErrorKind.VALIDATION


class UnavailableError(UserError):
    """Raised when the backing store cannot be reached. Safe to retry."""

    kind = ErrorKind.UNAVAILABLE

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(message)
