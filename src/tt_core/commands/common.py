"""Shared plumbing for tt CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime

import typer

from tt_core.config.settings import TTSettings, get_settings
from tt_core.store.core import TimeStore

# Accepted by every --at/--due style option
DATETIME_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
]


@dataclass
class CLIState:
    """Per-invocation state shared with subcommands via ``ctx.obj``."""

    settings: TTSettings


def get_state(ctx: typer.Context) -> CLIState:
    """Return the state set up by the root callback."""
    state = ctx.find_object(CLIState)
    if state is None:
        # Commands invoked without the root callback (direct calls in tests)
        state = CLIState(settings=get_settings())
        ctx.obj = state
    return state


@contextmanager
def open_store(ctx: typer.Context) -> Iterator[TimeStore]:
    """Open the configured store for the duration of one command."""
    with TimeStore(get_state(ctx).settings.db_path) as store:
        yield store


def format_time(value: datetime | None) -> str:
    """Format a timestamp for tables, or a dash when unset."""
    return value.strftime("%Y-%m-%d %H:%M") if value else "-"


def format_minutes(value: float | int | None) -> str:
    """Format a minute count, or a dash when unset."""
    return "-" if value is None else f"{round(value)}"
