from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from discussboard.app import App
from discussboard.config import Config
from discussboard.errors import UserError
from discussboard.web.error_handlers import general_exception_handler, user_error_handler
from discussboard.web.openapi import set_custom_openapi
from discussboard.web.routers import auth_router, comments_router, discussions_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncGenerator[None]:
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="Discussboard API", lifespan=lifespan)

    # Set before startup so request handlers never see a half-configured app
    app.state.app = app_instance
    app.state.config = config

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "commit": config.git_commit_hash, "build_time": config.build_time}

    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(discussions_router, prefix="/api/v1")
    app.include_router(comments_router, prefix="/api/v1")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
