"""CLI commands for nimiq_rpc.

The CLI is a thin shell over the library: `call` for raw JSON-RPC over HTTP,
`stream` for websocket subscriptions and `config` for the settings file.
"""

import typer
from rich.console import Console

from nimiq_rpc import __version__
from nimiq_rpc.cli.command_groups.group_registry import register_command_groups

app = typer.Typer(
    name="nimiq-rpc",
    help="nimiq-rpc - JSON-RPC client for Nimiq Albatross nodes",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"nimiq-rpc v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """nimiq-rpc - JSON-RPC client for Nimiq Albatross nodes."""
    pass


register_command_groups(app=app, console=console)


if __name__ == "__main__":
    app()
