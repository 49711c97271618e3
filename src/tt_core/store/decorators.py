"""Decorators for store operations.

Every store operation is wrapped so that sqlite3 failures surface as
DatabaseError, with the original exception chained as the cause.
"""

import logging
import sqlite3
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from tt_core.exceptions import DatabaseError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def database_operation(operation: str) -> Callable[[F], F]:
    """Re-signal sqlite3 errors raised by a store operation as DatabaseError.

    Args:
        operation: Short description used in the message, e.g. "insert session".

    Example:
        @database_operation("get session")
        def get_session(store: TimeStore, session_id: int) -> Session | None:
            ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except sqlite3.Error as e:
                logger.debug(f"Store operation '{operation}' failed: {e}")
                raise DatabaseError(
                    f"Failed to {operation}: {e}", operation=operation, cause=e
                ) from e

        return wrapper  # type: ignore[return-value]

    return decorator
