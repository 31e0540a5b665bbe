"""Global error handlers. Every error response is ``{"message": ...}``."""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from speedrun.errors import SpeedrunError

logger = structlog.get_logger()


def _field_errors(errors: list[Any]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts to ``{"field", "message"}`` pairs."""
    flattened = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        message = str(error.get("msg", "Invalid value"))
        flattened.append({"field": ".".join(location), "message": message.removeprefix("Value error, ")})
    return flattened


def setup_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(SpeedrunError)
    async def domain_exception_handler(request: Request, exc: SpeedrunError) -> JSONResponse:
        """Business-rule failures carry their own HTTP status."""
        logger.info(
            "request_rejected",
            path=request.url.path,
            error=type(exc).__name__,
            status_code=exc.status_code,
        )
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"message": "Validation error", "errors": _field_errors(list(exc.errors()))},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions. Always answers with JSON."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
