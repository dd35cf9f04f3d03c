"""Error Hierarchy — typed, categorized exceptions for all user-service failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UserServiceError base: FastAPI global handler catches all
    - ValidationError is a base class so identity and field failures share one 400 path
    - Not-found is raised only by the request handler; the repository returns None
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from user_service.core.domain_types import FieldViolation


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
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_type: str | None = None
    resource_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class UserServiceError(Exception):
    """Base exception for all user-service errors."""

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

    @property
    def details(self) -> list[dict]:
        return []

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "details": self.details,
                "context": {
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(UserServiceError):
    """Client input failed presence/format checks before reaching storage."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidIdentifierError(ValidationError):
    """Path identifier is not a syntactically valid user id."""
    def __init__(self, raw_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.resource_type = ctx.resource_type or "User"
        ctx.resource_id = raw_id
        super().__init__(f"'{raw_id}' is not a valid user id", ctx)
        self.raw_id = raw_id

    @property
    def details(self) -> list[dict]:
        return [{"field": "id", "reason": "malformed"}]


class FieldValidationError(ValidationError):
    """One or more submitted fields are missing, empty, or malformed."""
    def __init__(
        self, violations: list[FieldViolation], context: ErrorContext | None = None,
    ):
        fields = ", ".join(v.field for v in violations)
        super().__init__(f"Invalid user fields: {fields}", context)
        self.violations = violations

    @property
    def details(self) -> list[dict]:
        return [v.to_detail() for v in self.violations]


class ResourceNotFoundError(UserServiceError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(UserServiceError):
    """Database operation failed (storage unavailable or rejected the write)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
