"""Error Hierarchy — typed, categorized exceptions for all Pomodify failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are client errors; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No error is retried internally — callers surface them as-is
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PomodifyError base: FastAPI global handler catches all (ADR: uniform error shape)
    - InvalidTransitionError carries (status, phase, operation) so the rejected command
      can be diagnosed without re-reading the session
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    FORBIDDEN = "forbidden"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    session_id: str | None = None
    command: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class PomodifyError(Exception):
    """Base exception for all Pomodify errors."""

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
                    "session_id": self.context.session_id,
                    "command": self.context.command,
                    **(self.context.debug_info or {}),
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidTransitionError(PomodifyError):
    """Command is illegal for the session's current status/phase.

    Signals a logic or UI bug on the caller's side, never a transient condition.
    """
    def __init__(
        self,
        current_status: str,
        current_phase: str | None,
        attempted_operation: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.command = attempted_operation
        ctx.debug_info = {
            "current_status": current_status,
            "current_phase": current_phase,
        }
        phase_part = f"/{current_phase}" if current_phase else ""
        super().__init__(
            f"Cannot {attempted_operation} a session in state {current_status}{phase_part}",
            "INVALID_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.current_status = current_status
        self.current_phase = current_phase
        self.attempted_operation = attempted_operation


class SessionValidationError(PomodifyError):
    """Malformed durations, intervals or cycle counts — rejected before any mutation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"field": field}
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class ResourceNotFoundError(PomodifyError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ForbiddenError(PomodifyError):
    """Requesting user does not own the resource."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Not allowed to access {resource_type} '{resource_id}'",
            "FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(PomodifyError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ConcurrencyError(PomodifyError):
    """Concurrent modification detected — stored version differs from the one loaded."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
