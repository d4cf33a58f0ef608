from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from discussboard.core.modules.session.models import Session
from discussboard.core.modules.user.models import UserView
from discussboard.web.deps import TOKEN_COOKIE, AppDep, AuthTokenDep, ConfigDep, set_token_cookie, unwrap
from discussboard.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class RegisterRequest(BaseModel):
    """Account registration request. Rules are checked server-side."""

    email: str = Field(..., description="Email address, used to sign in")
    password: str = Field(
        ..., description="At least 8 characters with upper and lower case letters, a digit and a symbol"
    )
    full_name: str = Field(..., description="Display name, 3 to 30 characters")


class LoginRequest(BaseModel):
    """Authentication request."""

    email: str = Field(..., description="Email for authentication")
    password: str = Field(..., description="Password for authentication")


class LoginResponse(BaseModel):
    """Authentication response."""

    token: str = Field(..., description="Session token for subsequent requests")
    session: Session = Field(..., description="Decoded session")


@router.post(
    "/auth/register",
    summary="Register account",
    description="Create a new account. Fails if the email is already registered.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "Account created"},
        400: {"model": ErrorResponse, "description": "Input failed validation"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def register(request: RegisterRequest, app: AppDep) -> UserView:
    return unwrap(await app.register(request.email, request.password, request.full_name))


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with email and password to receive a session token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, config: ConfigDep, response: Response) -> LoginResponse:
    issued = unwrap(await app.login(login_data.email, login_data.password))
    set_token_cookie(response, issued.token, config)
    return LoginResponse(token=issued.token, session=issued.session)


@router.post(
    "/auth/logout",
    summary="End session",
    description="Clear the session cookie. Tokens are stateless; clients holding a bearer token must discard it.",
    operation_id="logout",
    status_code=204,
    responses={204: {"description": "Signed out"}},
)
async def logout(app: AppDep, auth_token: AuthTokenDep, response: Response) -> None:
    unwrap(await app.logout(auth_token))
    response.delete_cookie(TOKEN_COOKIE)


@router.get(
    "/auth/session",
    summary="Current session",
    description="Get the session of the caller. Sessions older than a day are re-issued in the response.",
    operation_id="getSession",
    responses={
        200: {"description": "Current session"},
        401: {"model": ErrorResponse, "description": "Not authenticated or session expired"},
    },
)
async def get_session(app: AppDep, auth_token: AuthTokenDep) -> Session:
    return unwrap(await app.resolve_session(auth_token)).session


@router.get(
    "/auth/me",
    summary="Current user profile",
    description="Get the account of the currently authenticated user.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Account no longer exists"},
    },
)
async def get_current_user(app: AppDep, auth_token: AuthTokenDep) -> UserView:
    return unwrap(await app.get_current_user(auth_token))
