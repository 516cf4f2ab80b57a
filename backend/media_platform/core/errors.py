"""Error Hierarchy — typed, categorized exceptions for all media platform failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - ErrorCategory is the stable, inspectable kind — callers never match on message text
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope; no internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with MediaPlatformError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Pure checks in core/ return these instances instead of raising; services raise them
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error kinds — the closed set the transport adapter maps to status codes."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    PERMISSION = "permission"
    DATABASE = "database"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class MediaPlatformError(Exception):
    """Base exception for all media platform errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class DomainValidationError(MediaPlatformError):
    """Input violates a domain rule (blank body, self-parenting, cycle...)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(MediaPlatformError):
    """Referenced resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: object, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = str(resource_id)
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ResourceConflictError(MediaPlatformError):
    """A uniqueness rule would be violated."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.field = field


class PermissionDeniedError(MediaPlatformError):
    """Caller is neither the owning actor nor an administrator."""
    def __init__(
        self,
        action: str,
        resource_type: str,
        resource_id: object,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = str(resource_id)
        super().__init__(
            f"Not allowed to {action} {resource_type} '{resource_id}'",
            "PERMISSION_DENIED", ErrorCategory.PERMISSION,
            ErrorSeverity.WARNING, ctx, 403,
        )
        self.action = action


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(MediaPlatformError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or "A storage error occurred"
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation


class OperationTimeoutError(MediaPlatformError):
    """Operation exceeded its caller-supplied deadline."""
    def __init__(
        self, operation: str, timeout_seconds: float, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.user_message = ctx.user_message or "The operation timed out"
        super().__init__(
            f"Operation '{operation}' exceeded its {timeout_seconds}s deadline",
            "OPERATION_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.CRITICAL, ctx, 504,
        )
        self.operation = operation
        self.timeout_seconds = timeout_seconds
