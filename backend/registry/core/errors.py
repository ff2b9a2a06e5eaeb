"""Error Hierarchy — typed, categorized exceptions for every registry failure mode.

Invariants:
    - Every error has a code (str), numeric code (int), category, severity
    - Numeric codes are stable: 1 already-registered ... 6 invalid-percentage
    - Domain errors (400-level) are caller-recoverable; DatabaseError is critical
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with RegistryError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - ExpiredError is reserved; nothing raises it yet
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
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    property_id: int | None = None
    caller: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class RegistryError(Exception):
    """Base exception for all registry errors."""

    def __init__(
        self,
        message: str,
        code: str,
        numeric_code: int,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.numeric_code = numeric_code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "numeric_code": self.numeric_code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "property_id": self.context.property_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class AlreadyRegisteredError(RegistryError):
    """The id about to be issued already names a property."""
    def __init__(self, property_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Property {property_id} is already registered",
            "ALREADY_REGISTERED", 1, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.property_id = property_id


class UnauthorizedError(RegistryError):
    """Caller lacks the authority required for the operation."""
    def __init__(self, caller: str, property_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"'{caller}' is not authorized to modify property {property_id}",
            "UNAUTHORIZED", 2, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.caller = caller
        self.property_id = property_id


class InvalidParamsError(RegistryError):
    """Input violates a record invariant."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_PARAMS", 3, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class NotFoundError(RegistryError):
    """Target property does not exist."""
    def __init__(self, property_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Property {property_id} not found",
            "NOT_FOUND", 4, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.property_id = property_id


class ExpiredError(RegistryError):
    """Reserved for time-bounded rights that have lapsed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "EXPIRED", 5, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 410,
        )


class InvalidPercentageError(RegistryError):
    """Revenue share outside [0, 100]."""
    def __init__(self, percentage: int, context: ErrorContext | None = None):
        super().__init__(
            f"Revenue share percentage must be between 0 and 100, got {percentage}",
            "INVALID_PERCENTAGE", 6, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.percentage = percentage


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(RegistryError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", 500, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
