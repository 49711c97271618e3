"""Command decorators shared by the tt CLI commands.

Library calls raise TTError subclasses; commands should report those the
same way everywhere instead of repeating try/except blocks.
"""

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import typer
from pydantic import ValidationError as ModelValidationError

from tt_core.config.messages import ERROR_MESSAGES
from tt_core.exceptions import TTError
from tt_core.utils.console import print_error

F = TypeVar("F", bound=Callable[..., Any])


def handle_tt_errors(func: F) -> F:
    """Turn library errors and rejected model input into exit code 1.

    Example:
        @app.command("stop")
        @handle_tt_errors
        def stop(...) -> None:
            ...
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except TTError as e:
            print_error(e.message)
            raise typer.Exit(code=1) from e
        except ModelValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or e.title
            print_error(ERROR_MESSAGES["invalid_input"].format(field=field, error=first["msg"]))
            raise typer.Exit(code=1) from e

    return wrapper  # type: ignore[return-value]
