"""Error Hierarchy — typed, categorized exceptions for all RoomLink failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client-caused and contention errors are 4xx; infrastructure errors are 5xx
    - to_response() always carries the human message under the "error" key
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with RoomLinkError base: FastAPI global handler catches all
    - Contention outcomes (room full, code expired) are WARNING severity so the
      handler reports them without logging a fault
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
    AUTHENTICATION = "authentication"
    CONTENTION = "contention"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    room_code: str | None = None
    debug_info: dict[str, Any] | None = None


class RoomLinkError(Exception):
    """Base exception for all RoomLink errors."""

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
        """Convert to the uniform client-visible error envelope."""
        return {
            "error": self.message,
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }


# ─── Validation Errors (400-level, client-caused) ───────────────

class RoomCodeRequiredError(RoomLinkError):
    """Join attempted with an empty or blank code."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Room code is required",
            "ROOM_CODE_REQUIRED", ErrorCategory.VALIDATION,
            ErrorSeverity.INFO, context, 400,
        )


class AlreadyInRoomError(RoomLinkError):
    """User tried to join while already holding a room."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You are already in a room",
            "ALREADY_IN_ROOM", ErrorCategory.VALIDATION,
            ErrorSeverity.INFO, context, 409,
        )


class SelfJoinError(RoomLinkError):
    """Creator tried to join their own room."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Cannot join your own room",
            "SELF_JOIN", ErrorCategory.VALIDATION,
            ErrorSeverity.INFO, context, 400,
        )


class InvalidCodeError(RoomLinkError):
    """No room exists for the submitted code."""
    def __init__(self, code: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.room_code = code
        super().__init__(
            "Invalid room code",
            "INVALID_CODE", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )


class AuthenticationRequiredError(RoomLinkError):
    """Request reached the core without a verified identity."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required",
            "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.INFO, context, 401,
        )


# ─── Contention Errors (expected race outcomes) ─────────────────

class RoomFullError(RoomLinkError):
    """Room already has two participants."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Room is already full",
            "ROOM_FULL", ErrorCategory.CONTENTION,
            ErrorSeverity.WARNING, context, 409,
        )


class CodeExpiredError(RoomLinkError):
    """Room is older than the join TTL."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Room code expired",
            "CODE_EXPIRED", ErrorCategory.CONTENTION,
            ErrorSeverity.WARNING, context, 410,
        )


class ConcurrencyError(RoomLinkError):
    """Concurrent modification could not be resolved."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ProvisioningError(RoomLinkError):
    """User record could neither be created nor found after a lost race."""
    def __init__(self, user_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            "Failed to create or fetch user",
            "PROVISIONING_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )


class DatabaseError(RoomLinkError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
