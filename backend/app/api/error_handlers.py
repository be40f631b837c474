"""Error Handlers: global exception handlers for the Mahasiswa API.

Invariants:
    - MahasiswaError → envelope from exc.to_response() with exc.http_status
    - MahasiswaError logged at the level of its severity, not its status code
    - RequestValidationError → 400 with field-level `errors` (same shape as ValidationFailedError)
    - StarletteHTTPException (unknown route, wrong method) → envelope keys status/pesan
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Pydantic error types translated to Indonesian field messages so both validation
      paths (schema and uniqueness) read the same to clients
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import ErrorSeverity, MahasiswaError, ValidationFailedError
from app.core.responses import (
    ResponseStatus,
    failure,
    MSG_FIELD_REQUIRED,
    MSG_FIELD_TOO_LONG,
    MSG_FIELD_NOT_STRING,
    MSG_INTERNAL_ERROR,
    MSG_NOT_FOUND,
)

logger = logging.getLogger(__name__)

_REQUIRED_TYPES = {"missing", "string_too_short", "null_not_allowed"}

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(MahasiswaError)
    async def mahasiswa_error_handler(request: Request, exc: MahasiswaError):
        """Handle all Mahasiswa API domain/infrastructure errors."""
        logger.log(
            _LOG_LEVELS[exc.severity],
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "mahasiswa_id": exc.context.mahasiswa_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error(exc.errors()).to_response(),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            content = failure(ResponseStatus.NOT_FOUND, MSG_NOT_FOUND)
        else:
            content = failure(ResponseStatus.ERROR, str(exc.detail))
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure(ResponseStatus.ERROR, MSG_INTERNAL_ERROR),
        )


def build_validation_error(errors: list[dict]) -> ValidationFailedError:
    """Translate pydantic error dicts into a field → messages mapping."""
    by_field: dict[str, list[str]] = {}
    for e in errors:
        name = _field_name(e["loc"])
        by_field.setdefault(name, []).append(_field_message(name, e))
    return ValidationFailedError(by_field)


def _field_name(loc: tuple) -> str:
    # ("body", "nim") -> "nim"; ("body",) -> "body"
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


def _field_message(name: str, error: dict) -> str:
    kind = error["type"]
    if kind in _REQUIRED_TYPES or (kind == "string_type" and error.get("input") is None):
        return MSG_FIELD_REQUIRED.format(field=name)
    if kind == "string_too_long":
        return MSG_FIELD_TOO_LONG.format(
            field=name, max_length=error.get("ctx", {}).get("max_length"),
        )
    if kind == "string_type":
        return MSG_FIELD_NOT_STRING.format(field=name)
    return error["msg"]
