"""Error Hierarchy — typed, categorized exceptions for all task tracker failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400) are the caller's fault; storage errors (500) are ours
    - to_response() produces the REST envelope {"error": <message>}
    - Storage errors never expose their cause to the client (message is logged, not returned)

Design Decisions:
    - Single hierarchy with TaskTrackerError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - ErrorContext.user_message lets the route pick the client-facing wording
      ("Failed to save task" vs "Failed to read tasks") without new subclasses
"""

from dataclasses import dataclass, field
from enum import Enum
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    user_message: str | None = None


class TaskTrackerError(Exception):
    """Base exception for all task tracker errors."""

    public_message = "Internal Server Error"

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
    def client_message(self) -> str:
        return self.context.user_message or self.public_message

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {"error": self.client_message}


# ─── Domain Errors (400-level) ──────────────────────────────────

class TaskValidationError(TaskTrackerError):
    """Task creation input failed a business rule. Message is shown to the caller."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return self.message


class EndpointNotFoundError(TaskTrackerError):
    """Requested route does not exist."""
    public_message = "Endpoint not found"

    def __init__(self, path: str, context: ErrorContext | None = None):
        super().__init__(
            f"No route matches '{path}'",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
        self.path = path


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(TaskTrackerError):
    """Base for task store failures."""
    def __init__(
        self, message: str, code: str, operation: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            message, code, ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class CorruptedStoreError(StoreError):
    """Persisted collection is not a JSON array of task records."""
    def __init__(self, path: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Task store '{path}' is corrupted: {reason}",
            "CORRUPTED_STORE", "read", context,
        )
        self.path = path


class PersistenceError(StoreError):
    """Reading or writing the backing file failed at the OS level."""
    def __init__(
        self, path: str, operation: str, reason: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Task store {operation} of '{path}' failed: {reason}",
            "PERSISTENCE_ERROR", operation, context,
        )
        self.path = path
