"""Error Hierarchy: typed, categorized exceptions for all Mahasiswa API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are terminal for the request; infrastructure errors are 500-level
    - to_response() produces the wire envelope for the error's status code
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with MahasiswaError base: one FastAPI handler catches all
    - AuthRejectedError keeps the {pesan, detail} shape clients already parse
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from app.core.responses import (
    ResponseStatus,
    MSG_NOT_FOUND,
    MSG_VALIDATION_FAILED,
    MSG_TOKEN_INVALID,
    MSG_SERVICE_UNAVAILABLE,
)


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    mahasiswa_id: int | None = None
    debug_info: dict[str, Any] | None = None


class MahasiswaError(Exception):
    """Base exception for all Mahasiswa API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the response envelope."""
        return {
            "status": ResponseStatus.ERROR.value,
            "pesan": self.message,
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class AuthRejectedError(MahasiswaError):
    """Missing or incorrect bearer token."""
    def __init__(self, detail: str, context: ErrorContext | None = None):
        super().__init__(
            MSG_TOKEN_INVALID, "AUTH_REJECTED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.detail = detail

    def to_response(self) -> dict:
        return {"pesan": self.message, "detail": self.detail}


class ValidationFailedError(MahasiswaError):
    """Request data failed field rules (presence, blank, uniqueness)."""
    def __init__(
        self, errors: dict[str, list[str]], context: ErrorContext | None = None,
    ):
        super().__init__(
            MSG_VALIDATION_FAILED, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.errors = errors

    @classmethod
    def for_field(cls, field_name: str, message: str) -> "ValidationFailedError":
        return cls({field_name: [message]})

    def to_response(self) -> dict:
        return {
            "status": ResponseStatus.VALIDATION_FAILED.value,
            "pesan": self.message,
            "errors": self.errors,
        }


class ResourceNotFoundError(MahasiswaError):
    """Requested record does not exist."""
    def __init__(self, resource_id: object, context: ErrorContext | None = None):
        super().__init__(
            MSG_NOT_FOUND, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
        self.resource_id = resource_id

    def to_response(self) -> dict:
        return {
            "status": ResponseStatus.NOT_FOUND.value,
            "pesan": self.message,
        }


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(MahasiswaError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation

    def to_response(self) -> dict:
        # operation detail stays in the logs
        return {
            "status": ResponseStatus.ERROR.value,
            "pesan": MSG_SERVICE_UNAVAILABLE,
        }
