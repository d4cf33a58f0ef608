import structlog
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from discussboard.errors import ErrorKind, UserError

logger = structlog.get_logger(__name__)

STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE_USER: 409,
    ErrorKind.UNAVAILABLE: 503,
}


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with the status code for their kind."""
    kind = exc.kind if isinstance(exc, UserError) else None
    if kind is None:
        return create_json_error_response(status_code=400, message=str(exc), error_type="bad_request")
    return create_json_error_response(status_code=STATUS_CODES.get(kind, 400), message=str(exc), error_type=kind)


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", error=str(exc))
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
