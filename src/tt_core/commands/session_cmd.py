"""Session lifecycle commands: start, stop, pause, resume, abandon, status."""

from datetime import datetime

import typer
from rich.markup import escape

from tt_core.commands.common import DATETIME_FORMATS, format_time, open_store
from tt_core.config.messages import ERROR_MESSAGES, INFO_MESSAGES, SUCCESS_MESSAGES
from tt_core.services.time_tracking import StartSessionResult, TimeTrackingService
from tt_core.utils import handle_tt_errors, print_error, print_info, print_panel, print_success


def _report_start(result: StartSessionResult) -> None:
    if result.paused_session is not None:
        print_info(
            SUCCESS_MESSAGES["paused_for_start"].format(
                session_id=result.paused_session.id,
                description=result.paused_session.description,
            )
        )
    print_success(
        SUCCESS_MESSAGES["started"].format(
            session_id=result.session.id, description=result.session.description
        )
    )


@handle_tt_errors
def start_command(
    ctx: typer.Context,
    description: str = typer.Argument(..., help="What you are working on"),
    project: str | None = typer.Option(None, "--project", "-p", help="Project label"),
    tag: list[str] | None = typer.Option(
        None, "--tag", "-t", help="Tag (can specify multiple times)"
    ),
    estimate: int | None = typer.Option(
        None, "--estimate", "-e", min=0, help="Estimated minutes"
    ),
    at: datetime | None = typer.Option(
        None, "--at", formats=DATETIME_FORMATS, help="Start time (default: now)"
    ),
    pause_active: bool = typer.Option(
        False, "--pause-active", help="Pause the running session instead of failing"
    ),
) -> None:
    """Start tracking a new session."""
    with open_store(ctx) as store:
        result = TimeTrackingService(store).start_session(
            description,
            project=project,
            tags=tag or [],
            estimate_minutes=estimate,
            start_time=at,
            pause_active=pause_active,
        )
    _report_start(result)


@handle_tt_errors
def stop_command(
    ctx: typer.Context,
    at: datetime | None = typer.Option(
        None, "--at", formats=DATETIME_FORMATS, help="End time (default: now)"
    ),
    remark: str | None = typer.Option(None, "--remark", "-r", help="Closing remark"),
    duration: int | None = typer.Option(
        None, "--duration", "-d", min=0, help="Override the measured duration (minutes)"
    ),
) -> None:
    """Complete the active session."""
    with open_store(ctx) as store:
        session = TimeTrackingService(store).stop_session(
            end_time=at, remark=remark, explicit_duration_minutes=duration
        )
    minutes = (
        session.explicit_duration_minutes
        if session.explicit_duration_minutes is not None
        else round(session.elapsed_minutes())
    )
    print_success(SUCCESS_MESSAGES["stopped"].format(session_id=session.id, minutes=minutes))


@handle_tt_errors
def pause_command(
    ctx: typer.Context,
    at: datetime | None = typer.Option(
        None, "--at", formats=DATETIME_FORMATS, help="Pause time (default: now)"
    ),
) -> None:
    """Pause the active session."""
    with open_store(ctx) as store:
        session = TimeTrackingService(store).pause_session(end_time=at)
    print_success(
        SUCCESS_MESSAGES["paused"].format(session_id=session.id, description=session.description)
    )


@handle_tt_errors
def resume_command(
    ctx: typer.Context,
    session_id: int | None = typer.Argument(
        None, help="Paused session to resume (default: most recent paused)"
    ),
    project: str | None = typer.Option(
        None, "--project", "-p", help="Only consider paused sessions of this project"
    ),
    at: datetime | None = typer.Option(
        None, "--at", formats=DATETIME_FORMATS, help="Resume time (default: now)"
    ),
) -> None:
    """Resume a paused session as a continuation of its chain."""
    with open_store(ctx) as store:
        service = TimeTrackingService(store)
        if session_id is None:
            paused = service.find_paused_session(project=project)
            if paused is None or paused.id is None:
                print_error(ERROR_MESSAGES["no_paused_session"])
                raise typer.Exit(code=1)
            session_id = paused.id
        result = service.resume_session(session_id, start_time=at)

    if result.paused_session is not None:
        print_info(
            SUCCESS_MESSAGES["paused_for_start"].format(
                session_id=result.paused_session.id,
                description=result.paused_session.description,
            )
        )
    print_success(
        SUCCESS_MESSAGES["resumed"].format(
            root_id=result.session.continues_session_id, session_id=result.session.id
        )
    )


@handle_tt_errors
def abandon_command(
    ctx: typer.Context,
    session_id: int = typer.Argument(..., help="Session to abandon"),
) -> None:
    """Mark a session as abandoned."""
    with open_store(ctx) as store:
        session = TimeTrackingService(store).abandon_session(session_id)
    print_success(SUCCESS_MESSAGES["abandoned"].format(session_id=session.id))


@handle_tt_errors
def status_command(ctx: typer.Context) -> None:
    """Show the active session and how long it has been running."""
    with open_store(ctx) as store:
        service = TimeTrackingService(store)
        session = service.get_active_session()
        if session is None or session.id is None:
            print_info(INFO_MESSAGES["no_active_session"])
            return
        chain_minutes = service.get_chain_total_minutes(session.id)

    lines = [
        f"[bold]{escape(session.description)}[/bold]",
        f"Session: {session.id}",
        f"Started: {format_time(session.start_time)}",
        f"Elapsed: {round(session.elapsed_minutes())} min",
    ]
    if session.project:
        lines.append(f"Project: {escape(session.project)}")
    if session.tags:
        lines.append(f"Tags: {escape(', '.join(session.tags))}")
    if session.continues_session_id is not None:
        lines.append(f"Chain {session.continues_session_id}: {chain_minutes} min so far")
    print_panel("\n".join(lines), title="Working", style="green")
