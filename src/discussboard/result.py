"""Tagged result type returned at the operation boundary.

Callers match on it instead of catching exceptions::

    match await app.login(email, password):
        case Ok(data=login):
            ...
        case Err(kind=kind, error=message):
            ...
"""

import functools
from collections.abc import Awaitable, Callable
from typing import Literal

import structlog
from pydantic import BaseModel
from pymongo.errors import PyMongoError

from discussboard.errors import (
    AuthenticationError,
    DuplicateUserError,
    ErrorKind,
    InvalidCredentialsError,
    NotFoundError,
    UnavailableError,
    UserError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

_ERROR_TYPES: dict[ErrorKind, type[UserError]] = {
    cls.kind: cls
    for cls in (
        ValidationError,
        InvalidCredentialsError,
        AuthenticationError,
        DuplicateUserError,
        NotFoundError,
        UnavailableError,
    )
}


class Ok[T](BaseModel):
    """Successful outcome carrying the operation's data."""

    success: Literal[True] = True
    data: T


class Err(BaseModel):
    """Failed outcome carrying a single human-readable message."""

    success: Literal[False] = False
    kind: ErrorKind
    error: str

    @classmethod
    def from_error(cls, exc: UserError) -> "Err":
        return cls(kind=exc.kind, error=str(exc))


type Result[T] = Ok[T] | Err


def to_error(err: Err) -> UserError:
    """Turn an Err back into the matching exception."""
    return _ERROR_TYPES[err.kind](err.error)


def returns_result[**P, T](func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[Result[T]]]:
    """Convert an async operation's outcome into a Result.

    UserError subclasses become Err with their own kind and message. Store
    failures are logged and reported as ``unavailable``; nothing is retried.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T]:
        try:
            return Ok(data=await func(*args, **kwargs))
        except UserError as exc:
            logger.debug("operation_rejected", operation=func.__name__, kind=str(exc.kind), error=str(exc))
            return Err.from_error(exc)
        except PyMongoError:
            logger.exception("store_unavailable", operation=func.__name__)
            return Err.from_error(UnavailableError())

    return wrapper
