"""Exception handlers producing the uniform `{success: false, ...}` body."""

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskforge.core.errors import TaskforgeError
from taskforge.core.logging import color_palette, log


def error_body(message: str, error: Any = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return body


def register_error_handlers(app: FastAPI, debug: bool = False) -> None:
    """
    Configure global error handlers for the API.

    `error` details are only exposed in debug mode, except for validation
    failures whose details are always returned to the client.
    """

    @app.exception_handler(TaskforgeError)
    async def taskforge_error_handler(request: Request, exc: TaskforgeError):
        if exc.status_code >= 500:
            log.error(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, jsonable_encoder(exc.detail) if debug else None),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content=error_body("Validation failed", jsonable_encoder(exc.errors())),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message: Optional[str] = exc.detail if isinstance(exc.detail, str) else None
        if exc.status_code == 404 and message == "Not Found":
            message = "Route not found"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message or "Request failed"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        log.error(
            f"Unhandled exception on {color_palette['route'](request.url.path)}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=error_body("Internal server error", str(exc) if debug else None),
        )
