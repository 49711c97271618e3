"""Utility helpers for tt-core."""

from tt_core.utils.command_decorators import handle_tt_errors
from tt_core.utils.console import (
    print_error,
    print_info,
    print_panel,
    print_success,
)
from tt_core.utils.logging import configure_logging

__all__ = [
    "configure_logging",
    "handle_tt_errors",
    "print_error",
    "print_info",
    "print_panel",
    "print_success",
]
