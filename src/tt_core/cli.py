"""Main CLI entry point for tt."""

from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError as SettingsValidationError

from tt_core import __version__
from tt_core.commands.common import CLIState
from tt_core.commands.log_cmd import chain_command, log_command
from tt_core.commands.plan_cmd import plan_command
from tt_core.commands.session_cmd import (
    abandon_command,
    pause_command,
    resume_command,
    start_command,
    status_command,
    stop_command,
)
from tt_core.commands.task_cmd import task_app
from tt_core.config.messages import ERROR_MESSAGES, HELP_TEXT, PROJECT_NAME, PROJECT_TAGLINE
from tt_core.config.paths import ENV_FILENAME
from tt_core.config.settings import get_settings
from tt_core.utils import configure_logging, print_error, print_panel
from tt_core.utils.console import console

# Load .env file from current directory if it exists
load_dotenv(Path.cwd() / ENV_FILENAME, verbose=False)

# Create main Typer app
app = typer.Typer(
    name="tt",
    help=PROJECT_TAGLINE,
    add_completion=False,
    rich_markup_mode="rich",
)

# Session lifecycle
app.command("start")(start_command)
app.command("stop")(stop_command)
app.command("pause")(pause_command)
app.command("resume")(resume_command)
app.command("abandon")(abandon_command)
app.command("status")(status_command)

# Reporting and planning
app.command("log")(log_command)
app.command("chain")(chain_command)
app.command("plan")(plan_command)
app.add_typer(task_app, name="task")


@app.command("version")
def version() -> None:
    """Show version information."""
    print_panel(
        f"[bold cyan]{PROJECT_NAME}[/bold cyan] version [green]{__version__}[/green]\n\n"
        f"{PROJECT_TAGLINE}",
        title="Version",
        style="cyan",
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    db: Path | None = typer.Option(
        None,
        "--db",
        help="SQLite database file (default: TT_DB_PATH or ~/.local/share/tt/tt.db)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log debug output to stderr",
    ),
    version_flag: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version information",
        is_eager=True,
    ),
) -> None:
    """tt - personal time tracking and daily planning.

    Get started:
        tt start "Write report"   # Start tracking
        tt pause                  # Take a break
        tt resume                 # Pick it back up
        tt plan                   # What to do next
    """
    if version_flag:
        version()
        raise typer.Exit()

    try:
        settings = get_settings()
    except SettingsValidationError as e:
        print_error(ERROR_MESSAGES["invalid_settings"].format(error=e))
        raise typer.Exit(code=1) from e

    if db is not None:
        settings.db_path = db
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings.log_level)
    ctx.obj = CLIState(settings=settings)

    if ctx.invoked_subcommand is None:
        console.print(HELP_TEXT)
        raise typer.Exit()


if __name__ == "__main__":
    app()
