"""Reporting commands: log and chain."""

from datetime import datetime, timedelta

import typer
from rich.markup import escape
from rich.table import Table

from tt_core.commands.common import format_minutes, format_time, open_store
from tt_core.config.messages import ERROR_MESSAGES, INFO_MESSAGES, TABLE_TITLES
from tt_core.models.enums import SessionState
from tt_core.services.time_tracking import TimeTrackingService
from tt_core.store.chains import chain_total_minutes
from tt_core.store.models import Session
from tt_core.utils import handle_tt_errors, print_error, print_info
from tt_core.utils.console import console


def _sessions_table(title: str, sessions: list[Session]) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Min", justify="right")
    table.add_column("State")
    table.add_column("Project")
    table.add_column("Tags")
    table.add_column("Description")

    for session in sessions:
        minutes = (
            session.explicit_duration_minutes
            if session.explicit_duration_minutes is not None
            else session.elapsed_minutes()
        )
        table.add_row(
            str(session.id),
            format_time(session.start_time),
            format_time(session.end_time),
            format_minutes(minutes),
            session.state.value,
            escape(session.project or "-"),
            escape(", ".join(session.tags)),
            escape(session.description),
        )
    return table


@handle_tt_errors
def log_command(
    ctx: typer.Context,
    start: datetime | None = typer.Option(
        None, "--from", formats=["%Y-%m-%d"], help="First day (default: today)"
    ),
    end: datetime | None = typer.Option(
        None, "--to", formats=["%Y-%m-%d"], help="Day after the last one (default: --from + 1)"
    ),
    project: str | None = typer.Option(None, "--project", "-p", help="Only this project"),
    tag: list[str] | None = typer.Option(None, "--tag", "-t", help="Only sessions with a tag"),
    state: SessionState | None = typer.Option(
        None, "--state", case_sensitive=False, help="Only sessions in this state"
    ),
) -> None:
    """List sessions started in a date range."""
    start = start or datetime.combine(datetime.now().date(), datetime.min.time())
    end = end or start + timedelta(days=1)
    if end <= start:
        print_error(ERROR_MESSAGES["invalid_range"])
        raise typer.Exit(code=1)

    with open_store(ctx) as store:
        sessions = TimeTrackingService(store).get_sessions(
            start, end, project=project, tags=tag or None, state=state
        )

    if not sessions:
        print_info(INFO_MESSAGES["no_sessions"])
        return
    console.print(_sessions_table(TABLE_TITLES["log"], sessions))


@handle_tt_errors
def chain_command(
    ctx: typer.Context,
    session_id: int = typer.Argument(..., help="Any session of the chain"),
) -> None:
    """Show every session in a continuation chain."""
    with open_store(ctx) as store:
        service = TimeTrackingService(store)
        root = service.chain_root(session_id)
        chain = service.get_continuation_chain(session_id)

    console.print(_sessions_table(TABLE_TITLES["chain"].format(root_id=root.id), chain))
    print_info(
        INFO_MESSAGES["chain_total"].format(minutes=chain_total_minutes(chain), count=len(chain))
    )
