"""
Consistent error payloads and exception handlers.

Every failure leaves the API as ``{"success": false, "message": ...}``,
optionally with an ``errors`` list describing invalid fields.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from clinic_cms.config import get_settings

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Domain error type with an HTTP status and client-facing message."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.errors = errors
        super().__init__(message)


def format_validation_errors(
    raw_errors: Iterable[dict[str, Any]], default_location: str = "body"
) -> list[dict[str, Any]]:
    formatted = []
    for error in raw_errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in {"body", "query", "path", "header", "form"}:
            location, field_parts = loc[0], loc[1:]
        else:
            location, field_parts = default_location, loc
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        formatted.append(
            {
                "field": ".".join(field_parts),
                "msg": message,
                "location": location,
            }
        )
    return formatted


def validation_failed(exc: ValidationError, location: str = "body") -> APIError:
    """Translate a pydantic error raised while parsing form fields."""
    return APIError(
        400,
        "Validation failed",
        errors=format_validation_errors(exc.errors(), default_location=location),
    )


def _error_body(message: str, errors: list[dict[str, Any]] | None = None) -> dict:
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.errors),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "Validation failed", format_validation_errors(exc.errors())
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 404 and exc.detail == "Not Found":
            return JSONResponse(
                status_code=404,
                content={
                    "success": False,
                    "message": "Route not found",
                    "method": request.method,
                    "url": str(request.url.path),
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        body = _error_body("Server error")
        if get_settings().is_development:
            body["error"] = str(exc)
        return JSONResponse(status_code=500, content=body)
