"""Scheduled task commands: add, list, done, remove."""

from datetime import datetime

import typer
from rich.markup import escape
from rich.table import Table

from tt_core.commands.common import DATETIME_FORMATS, format_minutes, format_time, open_store
from tt_core.config.messages import INFO_MESSAGES, SUCCESS_MESSAGES, TABLE_TITLES
from tt_core.constants import MAX_PRIORITY, MIN_PRIORITY
from tt_core.models.plan import CompletionData, NewTask
from tt_core.services.scheduler import TTScheduler
from tt_core.utils import handle_tt_errors, print_info, print_success
from tt_core.utils.console import console

task_app = typer.Typer(
    name="task",
    help="Manage the scheduled task backlog",
    no_args_is_help=True,
)


@task_app.command("add")
@handle_tt_errors
def add_task(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="What needs to be done"),
    project: str | None = typer.Option(None, "--project", "-p", help="Project label"),
    tag: list[str] | None = typer.Option(
        None, "--tag", "-t", help="Tag (can specify multiple times)"
    ),
    estimate: int | None = typer.Option(
        None, "--estimate", "-e", min=0, help="Estimated minutes"
    ),
    priority: int | None = typer.Option(
        None,
        "--priority",
        min=MIN_PRIORITY,
        max=MAX_PRIORITY,
        help="1 (most important) to 9; default 5",
    ),
    due: datetime | None = typer.Option(
        None, "--due", formats=DATETIME_FORMATS, help="When the task is scheduled"
    ),
) -> None:
    """Add a task to the backlog."""
    new_task = NewTask(
        title=title,
        project=project,
        tags=tag or [],
        estimate_minutes=estimate,
        priority=priority,
        scheduled_date_time=due,
    )
    with open_store(ctx) as store:
        task = TTScheduler(store).add_task(new_task)
    print_success(SUCCESS_MESSAGES["task_added"].format(task_id=task.id, title=task.title))


@task_app.command("list")
@handle_tt_errors
def list_tasks(ctx: typer.Context) -> None:
    """List the backlog, oldest first."""
    with open_store(ctx) as store:
        tasks = TTScheduler(store).list_tasks()

    if not tasks:
        print_info(INFO_MESSAGES["no_tasks"])
        return

    table = Table(title=TABLE_TITLES["tasks"])
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("P", justify="right")
    table.add_column("Est", justify="right")
    table.add_column("Due")
    table.add_column("Project")
    table.add_column("Tags")
    table.add_column("Title")
    for task in tasks:
        table.add_row(
            str(task.id),
            str(task.priority),
            format_minutes(task.estimate_minutes),
            format_time(task.scheduled_date_time),
            escape(task.project or "-"),
            escape(", ".join(task.tags)),
            escape(task.title),
        )
    console.print(table)


@task_app.command("done")
@handle_tt_errors
def done_task(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task or session id"),
    minutes: int | None = typer.Option(None, "--minutes", min=0, help="Actual minutes spent"),
) -> None:
    """Mark a plan item as done."""
    with open_store(ctx) as store:
        TTScheduler(store).complete_task(
            CompletionData(task_id=task_id, completed_at=datetime.now(), actual_minutes=minutes)
        )
    print_success(SUCCESS_MESSAGES["task_done"].format(task_id=task_id))


@task_app.command("remove")
@handle_tt_errors
def remove_task(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task or session id"),
) -> None:
    """Remove a task (or delete a session) by id."""
    with open_store(ctx) as store:
        TTScheduler(store).remove_task(task_id)
    print_success(SUCCESS_MESSAGES["task_removed"].format(task_id=task_id))
