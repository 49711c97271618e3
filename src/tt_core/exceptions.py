"""Custom exceptions for tt-core.

All exceptions inherit from TTError, so callers can catch every library
error with a single except clause.

Exception hierarchy:
    TTError (base)
    ├── ValidationError
    ├── NotFoundError
    └── DatabaseError
"""

from typing import Any


class TTError(Exception):
    """Base exception for all tt-core errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize tt error.

        Args:
            message: Error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ValidationError(TTError):
    """Raised when an operation violates a lifecycle precondition.

    Examples:
        - Starting a session while another one is active
        - Stopping or pausing with no active session
        - Resuming a session that is not paused
        - Abandoning a session that is already completed or abandoned
    """

    def __init__(
        self,
        message: str,
        session_id: int | None = None,
        state: str | None = None,
    ):
        """Initialize validation error.

        Args:
            message: Error description.
            session_id: The session the operation was attempted on.
            state: Current state of that session.
        """
        details: dict[str, Any] = {}
        if session_id is not None:
            details["session_id"] = session_id
        if state:
            details["state"] = state
        super().__init__(message, details)
        self.session_id = session_id
        self.state = state


class NotFoundError(TTError):
    """Raised when an operation references an id that does not exist."""

    def __init__(self, message: str, entity: str, entity_id: int):
        """Initialize not-found error.

        Args:
            message: Error description.
            entity: Kind of entity looked up ("session", "task").
            entity_id: The missing id.
        """
        super().__init__(message, {"entity": entity, "id": entity_id})
        self.entity = entity
        self.entity_id = entity_id


class DatabaseError(TTError):
    """Raised when the underlying SQLite operation fails.

    Wraps the original sqlite3 exception, which is also available as
    ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        cause: Exception | None = None,
    ):
        """Initialize database error.

        Args:
            message: Error description.
            operation: The store operation that failed.
            cause: The original exception.
        """
        details: dict[str, Any] = {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
        self.operation = operation
        self.cause = cause
