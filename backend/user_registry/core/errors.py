"""Error Taxonomy - domain failure kinds plus the exception hierarchy for infrastructure.

Invariants:
    - Domain failures (MISSING_INPUT, CONFLICT, NOT_FOUND, SHAPE_INVALID) are values,
      returned by the core as Failure outcomes (core/outcome.py), never raised
    - Infrastructure failures are raised as UserRegistryError subclasses
    - Every error carries a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - ErrorKind values double as the public error codes (ADR: stable external vocabulary)
    - Single hierarchy with UserRegistryError base: FastAPI global handler catches all
      (ADR: uniform error shape)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorKind(str, Enum):
    """Domain failure kinds - the external error vocabulary."""
    MISSING_INPUT = "MISSING_INPUT"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    SHAPE_INVALID = "SHAPE_INVALID"


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


KIND_CATEGORIES: dict[ErrorKind, ErrorCategory] = {
    ErrorKind.MISSING_INPUT: ErrorCategory.VALIDATION,
    ErrorKind.SHAPE_INVALID: ErrorCategory.VALIDATION,
    ErrorKind.CONFLICT: ErrorCategory.CONFLICT,
    ErrorKind.NOT_FOUND: ErrorCategory.RESOURCE_NOT_FOUND,
}


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class UserRegistryError(Exception):
    """Base exception for all user registry errors."""

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
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Store Errors ───────────────────────────────────────────────

class EmailConflictError(UserRegistryError):
    """Write rejected by the store's unique email constraint."""
    def __init__(self, email: str | None, context: ErrorContext | None = None):
        super().__init__(
            "User with this email already exists",
            ErrorKind.CONFLICT.value, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.email = email


class UserVanishedError(UserRegistryError):
    """Update target was deleted after it was read."""
    def __init__(self, user_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"User {user_id} no longer exists",
            ErrorKind.NOT_FOUND.value, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.user_id = user_id


class DatabaseError(UserRegistryError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
