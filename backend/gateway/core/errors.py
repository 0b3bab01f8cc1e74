"""Error Hierarchy — typed, categorized exceptions for every gateway failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Three kinds reach clients: ValidationError (400), AuthError (401), UpstreamError (500)
    - to_response() produces the single REST envelope {"error": message}
    - Messages carry the underlying error text only, never stack traces

Design Decisions:
    - Single hierarchy with GatewayError base: one FastAPI handler renders all of them
    - ErrorContext as dataclass: route/upstream identity for logs, not for clients
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    route: str | None = None
    upstream: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class GatewayError(Exception):
    """Base exception for all gateway errors."""

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
        """Convert to the uniform error envelope."""
        return {"error": self.message}

    def log_extra(self) -> dict:
        """Structured fields for the error log line."""
        return {
            "error_code": self.code,
            "status_code": self.http_status,
            "upstream": self.context.upstream,
            "operation": self.context.operation,
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(GatewayError):
    """Required request field missing or falsy."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class AuthError(GatewayError):
    """Forwarded credential missing or malformed."""
    def __init__(
        self,
        message: str = "Missing or invalid Authorization header",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "AUTH_ERROR", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Upstream Errors (500-level) ────────────────────────────────

class UpstreamError(GatewayError):
    """SOAP invocation, REST forward, token exchange or mail send failed."""
    def __init__(
        self,
        message: str,
        upstream: str,
        category: ErrorCategory = ErrorCategory.EXTERNAL_API,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.upstream = upstream
        super().__init__(
            message, "UPSTREAM_ERROR", category,
            ErrorSeverity.ERROR, ctx, 500,
        )
        self.upstream = upstream

    @classmethod
    def wrap(
        cls,
        exc: BaseException,
        upstream: str,
        operation: str | None = None,
    ) -> "UpstreamError":
        """Wrap an underlying failure, keeping its text."""
        category = (
            ErrorCategory.TIMEOUT if isinstance(exc, TimeoutError)
            else ErrorCategory.EXTERNAL_API
        )
        detail = str(exc) or type(exc).__name__
        return cls(
            f"Error : {detail}", upstream, category,
            ErrorContext(operation=operation),
        )
