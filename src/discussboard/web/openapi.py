from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from discussboard.web.deps import TOKEN_COOKIE

# Endpoints that work without a session
PUBLIC_ENDPOINTS = {
    ("POST", "/api/v1/auth/register"),
    ("POST", "/api/v1/auth/login"),
    ("POST", "/api/v1/auth/logout"),
    ("GET", "/api/v1/discussions"),
    ("GET", "/api/v1/discussions/{discussion_id}"),
    ("GET", "/api/v1/discussions/{discussion_id}/comments"),
    ("GET", "/health"),
}


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Discussboard API",
            version="0.1.0",
            summary="Discussion forum with comments and upvotes",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "Session token returned by login (preferred)",
            },
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": TOKEN_COOKIE,
                "description": "Session token stored in cookie by login",
            },
        }
        openapi_schema["security"] = [{"BearerAuth": []}, {"SessionCookie": []}]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Invalid credentials", "type": "invalid_credentials"},
                {"message": "User already exists", "type": "duplicate_user"},
                {"message": "Must not be less than 3 characters", "type": "validation_error"},
            ]
        }
    }
