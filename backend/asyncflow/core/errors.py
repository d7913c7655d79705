"""Error Hierarchy: typed, categorized exceptions for every pipeline failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - PipelineError is tagged with exactly one ErrorKind
    - to_response() for pipeline errors is the fixed user message, never the cause
    - The underlying cause travels as __cause__ (raise ... from), not in the response

Design Decisions:
    - Single hierarchy with AsyncFlowError base: the FastAPI global handler catches all
    - NetworkTimeout subclasses NetworkFailure: callers that only care about the
      tag never need to know timeouts exist
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

USER_FACING_MESSAGE = "It broke!"


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


class ErrorKind(str, Enum):
    """Tag carried by every PipelineError."""
    NETWORK_FAILURE = "network_failure"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass
class ErrorContext:
    """Where in the pipeline a failure happened. Logged, never returned to clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ip: str | None = None
    stage: str | None = None
    url: str | None = None
    status_code: int | None = None
    debug_info: dict[str, Any] | None = None


class AsyncFlowError(Exception):
    """Base exception for all asyncflow errors."""

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
        """Convert to REST error body."""
        return {"message": self.message}

    def log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "stage": self.context.stage,
            "url": self.context.url,
            "status_code": self.context.status_code,
        }


# ─── Pipeline Errors (500-level) ─────────────────────────────────

class PipelineError(AsyncFlowError):
    """Any failure of the two-stage lookup. Always surfaces as HTTP 500."""

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.ERROR, context, 500,
        )

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def to_response(self) -> dict:
        return {"message": USER_FACING_MESSAGE}


class NetworkFailure(PipelineError):
    """Transport error or non-success status from an outbound call."""
    kind = ErrorKind.NETWORK_FAILURE

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "NETWORK_FAILURE", ErrorCategory.EXTERNAL_API, context,
        )


class NetworkTimeout(NetworkFailure):
    """Outbound call exceeded the configured timeout."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, context)
        self.code = "NETWORK_TIMEOUT"
        self.category = ErrorCategory.TIMEOUT


class MalformedResponse(PipelineError):
    """JSON parsed, but an expected field is missing or has the wrong type."""
    kind = ErrorKind.MALFORMED_RESPONSE

    def __init__(
        self, message: str, field: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "MALFORMED_RESPONSE", ErrorCategory.VALIDATION, context,
        )
        self.field = field
