from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="myauth API",
            version="0.1.0",
            summary="Email sign-in, sessions, and role-gated user administration",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "description": "Session token in the Authorization header (preferred)",
            },
            "TokenQuery": {
                "type": "apiKey",
                "in": "query",
                "name": "token",
                "description": "Session token as a query parameter",
            },
        }

        openapi_schema["security"] = [
            {"BearerAuth": []},
            {"TokenQuery": []},
        ]

        public_endpoints = {
            ("GET", "/health"),
            ("GET", "/callback"),
            ("POST", "/api/logout"),
        }

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in public_endpoints:
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
                {"message": "Authentication required", "type": "authentication_error"},
                {"message": "Invalid or expired session", "type": "authentication_error"},
                {"message": "Insufficient permissions", "type": "access_denied"},
            ]
        }
    }
