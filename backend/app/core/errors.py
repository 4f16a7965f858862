"""Error Hierarchy — exceptions that cross layer boundaries in the dashboard.

Invariants:
    - Every error carries code, category, severity and http_status; subclasses
      fix them as class attributes, so a raise site only supplies the message
    - to_response() is the JSON envelope the API returns; debug_info never appears in it
    - Store failures carry fixed, user-safe text; driver messages stay in the logs

Design Decisions:
    - One base (DashboardError) so a single FastAPI handler covers every subclass
    - Form validation is not an exception here: actions return FormState
    - Authentication failures are tagged with AuthFailure, not told apart by message text
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from app.core.domain_types import AuthFailure


class ErrorSeverity(str, Enum):
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where an error happened. Only operation and invoice_id reach clients."""
    operation: str | None = None
    invoice_id: str | None = None
    debug_info: dict[str, Any] | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class DashboardError(Exception):
    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.CRITICAL
    http_status = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "invoice_id": self.context.invoice_id,
                },
            }
        }


# ─── Client-side (4xx) ──────────────────────────────────────────

class ResourceNotFoundError(DashboardError):
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    severity = ErrorSeverity.WARNING
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(f"{resource_type} '{resource_id}' not found", context)
        self.resource_type = resource_type
        self.resource_id = resource_id


class AuthenticationError(DashboardError):
    """Sign-in failed. `failure` tells a rejected credential from anything else.

    INVALID_CREDENTIALS is an expected 401; UNEXPECTED is a 500 because the
    identity provider itself broke (e.g. the user lookup could not run).
    """
    category = ErrorCategory.AUTHENTICATION

    def __init__(
        self,
        failure: AuthFailure,
        message: str | None = None,
        context: ErrorContext | None = None,
    ):
        invalid = failure is AuthFailure.INVALID_CREDENTIALS
        super().__init__(
            message or ("Invalid credentials." if invalid else "Sign-in failed."),
            context,
        )
        self.failure = failure
        self.code = failure.value
        self.severity = ErrorSeverity.WARNING if invalid else ErrorSeverity.CRITICAL
        self.http_status = 401 if invalid else 500


# ─── Store (5xx) ────────────────────────────────────────────────

class DatabaseError(DashboardError):
    """A session-level store failure, raised by DatabaseSessionManager."""
    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    http_status = 503

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(f"Database {operation} failed: {message}", context)
        self.operation = operation


class DataFetchError(DashboardError):
    """A read in the query layer failed. `message` is the fixed text for that read."""
    code = "DATA_FETCH_ERROR"
    category = ErrorCategory.DATABASE
    http_status = 503

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        context = context or ErrorContext()
        context.operation = operation
        super().__init__(message, context)
        self.operation = operation
