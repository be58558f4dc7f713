"""Registry for grouped CLI command modules."""

from __future__ import annotations

import typer
from rich.console import Console

from .call_command import register_call_commands
from .config_commands import register_config_commands
from .stream_command import register_stream_commands


def register_command_groups(app: typer.Typer, console: Console) -> None:
    """Attach grouped command modules to the main app."""
    register_call_commands(app=app, console=console)
    register_stream_commands(app=app, console=console)
    register_config_commands(app=app, console=console)
