"""Configuration management commands."""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dagweave.core.config import clear_config_cache, load_config
from dagweave.core.exceptions import ConfigurationError

app = typer.Typer(help="Configuration management commands", no_args_is_help=True)
console = Console()


@app.command("show")
def show_config(
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="TOML file to read instead of searching"),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print as JSON")] = False,
) -> None:
    """Show the resolved configuration (file values plus environment overrides)."""
    clear_config_cache()
    try:
        config = load_config(path)
    except ConfigurationError as e:
        console.print(f"[red]✗ Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    if as_json:
        console.print_json(json.dumps(asdict(config)))
        return

    table = Table(show_header=True, border_style="cyan")
    table.add_column("Section", style="green")
    table.add_column("Option", style="white")
    table.add_column("Value", style="yellow")
    for section, values in asdict(config).items():
        for option, value in values.items():
            table.add_row(section, option, escape(str(value)))
    console.print(table)
