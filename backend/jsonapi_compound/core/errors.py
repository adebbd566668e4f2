"""Error Hierarchy — typed, categorized exceptions for compound-document failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; server errors (500-level) are critical
    - to_response() produces a JSON:API `errors` envelope
    - No internal details leaked in user-facing messages (debug_info is never rendered)

Design Decisions:
    - Single hierarchy with JsonApiError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    RELATIONSHIP = "relationship"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    include_prefix: str | None = None
    relationship: str | None = None
    parameter: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class JsonApiError(Exception):
    """Base exception for all compound-document errors."""

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
        """Convert to a JSON:API error document."""
        error = {
            "status": str(self.http_status),
            "code": self.code,
            "title": self.category.value,
            "detail": self.context.user_message or self.message,
            "meta": {
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }
        if self.context.parameter:
            error["source"] = {"parameter": self.context.parameter}
        return {"errors": [error]}


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidIncludeError(JsonApiError):
    """The include query parameter is malformed."""
    def __init__(self, message: str, parameter: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.parameter = parameter
        super().__init__(
            message, "INVALID_INCLUDE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.parameter = parameter


class ResourceNotFoundError(JsonApiError):
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


# ─── Server Errors (500-level) ──────────────────────────────────

class UnknownRelationshipError(JsonApiError):
    """A relationship resolved to a value that is neither a resource, a collection nor MISSING."""
    def __init__(
        self,
        relationship: str,
        include_prefix: str,
        value_type: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.relationship = relationship
        ctx.include_prefix = include_prefix
        ctx.user_message = "A requested relationship could not be rendered"
        ctx.debug_info = {"value_type": value_type}
        super().__init__(
            f"Relationship '{include_prefix}{relationship}' resolved to unsupported "
            f"value of type {value_type}",
            "UNKNOWN_RELATIONSHIP", ErrorCategory.RELATIONSHIP,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.relationship = relationship
        self.include_prefix = include_prefix
        self.value_type = value_type
