"""UI messages and strings for the tt CLI.

This module consolidates the user-facing messages:
- Tagline and help text
- Success/error/info messages
- Table titles
"""

# =============================================================================
# Project Metadata
# =============================================================================

PROJECT_NAME = "tt-core"
PROJECT_TAGLINE = "Track where your time goes and plan what comes next"

# =============================================================================
# Help
# =============================================================================

HELP_TEXT = f"""
[bold cyan]tt[/bold cyan] - {PROJECT_TAGLINE}

[bold]Sessions:[/bold]
  [cyan]start[/cyan]       Start tracking a new session
  [cyan]stop[/cyan]        Complete the active session
  [cyan]pause[/cyan]       Pause the active session
  [cyan]resume[/cyan]      Continue a paused session
  [cyan]abandon[/cyan]     Give up on a session
  [cyan]status[/cyan]      Show the active session
  [cyan]chain[/cyan]       Show every session of a continuation chain
  [cyan]log[/cyan]         List sessions in a time range

[bold]Planning:[/bold]
  [cyan]task[/cyan]        Manage the scheduled task backlog
  [cyan]plan[/cyan]        Show today's ranked plan

[bold]Examples:[/bold]
  [dim]$ tt start "Write report" -p acme -t writing[/dim]
  [dim]$ tt pause[/dim]
  [dim]$ tt resume[/dim]
  [dim]$ tt task add "Renew certificate" --priority 2 --due 2025-06-01T17:00[/dim]
  [dim]$ tt plan --limit 5[/dim]
"""

# =============================================================================
# Success Messages
# =============================================================================

SUCCESS_MESSAGES = {
    "started": "Started session {session_id}: {description}",
    "paused_for_start": "Paused session {session_id}: {description}",
    "stopped": "Completed session {session_id} ({minutes} min)",
    "paused": "Paused session {session_id}: {description}",
    "resumed": "Resumed chain {root_id} as session {session_id}",
    "abandoned": "Abandoned session {session_id}",
    "task_added": "Added task {task_id}: {title}",
    "task_done": "Completed {task_id}",
    "task_removed": "Removed {task_id}",
}

# =============================================================================
# Error Messages
# =============================================================================

ERROR_MESSAGES = {
    "no_paused_session": "No paused session to resume.",
    "invalid_range": "--from must be before --to",
    "invalid_settings": "Invalid configuration: {error}",
    "invalid_input": "Invalid {field}: {error}",
}

# =============================================================================
# Info Messages
# =============================================================================

INFO_MESSAGES = {
    "no_active_session": "No active session.",
    "no_sessions": "No sessions in this range.",
    "no_tasks": "No scheduled tasks.",
    "empty_plan": "Nothing planned. Add tasks with: tt task add TITLE",
    "plan_totals": "Planned: {total} min, remaining workday: {remaining} min",
    "chain_total": "Chain total: {minutes} min over {count} session(s)",
}

# =============================================================================
# Table Titles
# =============================================================================

TABLE_TITLES = {
    "log": "Sessions",
    "chain": "Chain {root_id}",
    "plan": "Plan for {day}",
    "tasks": "Scheduled tasks",
}
