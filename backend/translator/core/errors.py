"""Error Hierarchy — typed, categorized exceptions for translator failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TranslatorError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - StorageReadError is raised and absorbed inside the History Store read path
      (reads are fail-open); it never reaches HTTP callers
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_RESOURCE = "external_resource"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    collection: str | None = None
    entry_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class TranslatorError(Exception):
    """Base exception for all translator errors."""

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
                    "collection": self.context.collection,
                    "entry_id": self.context.entry_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(TranslatorError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageReadError(TranslatorError):
    """Reading the storage slot failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage read failed: {message}",
            "STORAGE_READ_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.WARNING, context, 503,
        )


class StorageWriteError(TranslatorError):
    """Writing the storage slot failed; the collection was left unchanged."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage write failed: {message}",
            "STORAGE_WRITE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )


class DatabaseError(TranslatorError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class FactsUnavailableError(TranslatorError):
    """Trivia facts could not be loaded."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Facts unavailable: {message}",
            "FACTS_UNAVAILABLE", ErrorCategory.EXTERNAL_RESOURCE,
            ErrorSeverity.ERROR, context, 500,
        )
