from typing import Annotated, cast

from fastapi import Depends, Request, Response
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from discussboard.app import App
from discussboard.config import Config
from discussboard.core.modules.session.models import AuthToken
from discussboard.result import Err, Ok, Result, to_error

TOKEN_COOKIE = "token"
REFRESHED_TOKEN_HEADER = "X-Session-Token"

# Security schemes
bearer_scheme = HTTPBearer(auto_error=False)
cookie_scheme = APIKeyCookie(name=TOKEN_COOKIE, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


def set_token_cookie(response: Response, token: str, config: Config) -> None:
    response.set_cookie(
        key=TOKEN_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        secure=not config.debug,
        max_age=config.session_max_age,
    )


async def get_auth_token(
    app: Annotated[App, Depends(get_app)],
    config: Annotated[Config, Depends(get_config)],
    response: Response,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
    token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> AuthToken | None:
    """Get the session token from the Authorization Bearer header or cookie.

    Anonymous requests yield None; each operation decides whether it needs a
    session. Tokens past the update age are re-issued on the response.
    """
    if credentials and credentials.scheme == "Bearer":
        auth_token = AuthToken(credentials.credentials)
    elif token_cookie:
        auth_token = AuthToken(token_cookie)
    else:
        return None

    match await app.resolve_session(auth_token):
        case Ok(data=resolved) if resolved.refreshed_token is not None:
            set_token_cookie(response, resolved.refreshed_token, config)
            response.headers[REFRESHED_TOKEN_HEADER] = resolved.refreshed_token
            return AuthToken(resolved.refreshed_token)
        case _:
            return auth_token


def unwrap[T](result: Result[T]) -> T:
    """Return an Ok's data or raise the matching UserError for the error handlers."""
    match result:
        case Ok(data=data):
            return data
        case Err() as err:
            raise to_error(err)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]
AuthTokenDep = Annotated[AuthToken | None, Depends(get_auth_token)]
