"""CLI commands for tt."""
