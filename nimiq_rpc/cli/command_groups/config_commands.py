"""Config command group (show/path/get/set)."""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console

from nimiq_rpc.cli.shared.params import deep_get, deep_set, load_config_json, parse_value, save_config_json
from nimiq_rpc.config.loader import convert_keys, convert_to_camel, get_config_path, load_config
from nimiq_rpc.config.schema import Config
from nimiq_rpc.utils.exceptions import ConfigError


def register_config_commands(app: typer.Typer, console: Console) -> None:
    """Register config command group."""
    config_app = typer.Typer(help="Inspect and edit ~/.nimiq_rpc/config.json")
    app.add_typer(config_app, name="config")

    def _load_raw() -> dict:
        try:
            return load_config_json()
        except ConfigError as e:
            console.print(f"[red]Error:[/red] {e.message}")
            raise typer.Exit(1)

    @config_app.command("path")
    def config_path() -> None:
        """Print the config file location."""
        console.print(str(get_config_path()))

    @config_app.command("show")
    def config_show() -> None:
        """Print the effective configuration (file, env and defaults merged)."""
        try:
            config = load_config()
        except ConfigError as e:
            console.print(f"[red]Error:[/red] {e.message}")
            raise typer.Exit(1)
        console.print_json(data=convert_to_camel(config.model_dump()))

    @config_app.command("get")
    def config_get(
        key: str = typer.Argument(..., help="Dotted key path, e.g. ws.reconnectDelayMs"),
    ) -> None:
        data = _load_raw()
        try:
            value = deep_get(data, key)
        except KeyError:
            console.print(f"[red]Key not found:[/red] {key}")
            raise typer.Exit(1)
        console.print_json(data=value)

    @config_app.command("set")
    def config_set(
        key: str = typer.Argument(..., help="Dotted key path, e.g. http.timeoutMs"),
        value: str = typer.Argument(..., help="JSON value or plain string"),
    ) -> None:
        """Set a key in the config file; the result must still validate."""
        data = _load_raw()
        deep_set(data, key, parse_value(value))
        try:
            Config.model_validate(convert_keys(data))
        except ValidationError as e:
            console.print(f"[red]Invalid value for {key}:[/red] {e.errors()[0]['msg']}")
            raise typer.Exit(1)
        save_config_json(data)
        console.print(f"[green]✓[/green] Set {key}")
