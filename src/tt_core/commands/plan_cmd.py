"""Daily plan command."""

from datetime import datetime

import typer
from rich.markup import escape
from rich.table import Table

from tt_core.commands.common import format_minutes, format_time, get_state, open_store
from tt_core.config.messages import INFO_MESSAGES, TABLE_TITLES
from tt_core.services.scheduler import TTScheduler
from tt_core.utils import handle_tt_errors, print_info
from tt_core.utils.console import console


@handle_tt_errors
def plan_command(
    ctx: typer.Context,
    limit: int | None = typer.Option(
        None, "--limit", "-n", min=1, help="Maximum entries (default: TT_PLAN_LIMIT)"
    ),
) -> None:
    """Show today's ranked plan."""
    settings = get_state(ctx).settings
    today = datetime.now()
    with open_store(ctx) as store:
        scheduler = TTScheduler(
            store, plan_limit=settings.plan_limit, workday_minutes=settings.workday_minutes
        )
        plan = scheduler.get_daily_plan(today, limit=limit)

    if not plan.tasks:
        print_info(INFO_MESSAGES["empty_plan"])
        return

    table = Table(title=TABLE_TITLES["plan"].format(day=f"{today:%Y-%m-%d}"))
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("P", justify="right")
    table.add_column("Est", justify="right")
    table.add_column("Due")
    table.add_column("Title")
    table.add_column("Chain", justify="right")

    for position, task in enumerate(plan.tasks, start=1):
        chain = (
            f"{task.chain_total_minutes} min / {task.chain_session_count}"
            if task.chain_total_minutes is not None
            else ""
        )
        table.add_row(
            str(position),
            task.kind,
            str(task.id),
            str(task.priority),
            format_minutes(task.estimate_minutes),
            format_time(task.scheduled_date_time),
            escape(task.title),
            chain,
        )

    console.print(table)
    print_info(
        INFO_MESSAGES["plan_totals"].format(
            total=plan.total_minutes, remaining=plan.remaining_minutes
        )
    )
