"""dagweave CLI - Main entrypoint."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from dagweave import __version__
from dagweave.cli.commands import config_cmd, graph_cmd
from dagweave.core.config import load_config
from dagweave.core.exceptions import ConfigurationError
from dagweave.core.logging import configure_logging

app = typer.Typer(
    name="dagweave",
    help="dagweave - inspect directed acyclic graphs of keyed records.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()

_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}

app.command("show")(graph_cmd.show)
app.command("descendants")(graph_cmd.descendants)
app.command("ancestors")(graph_cmd.ancestors)
app.command("path")(graph_cmd.path)
app.add_typer(config_cmd.app, name="config", help="Configuration management")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]dagweave[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="TOML config whose graph settings override those in graph files",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level: debug|info|warning|error"),
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """dagweave CLI.

    Global options are resolved here and stored on ``ctx.obj`` for subcommands.
    """
    if ctx.obj is None:
        ctx.obj = {}

    try:
        settings = load_config(config)
    except ConfigurationError as e:
        console.print(f"[red]✗ Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    level = (log_level or settings.logging.level).upper()
    configure_logging(
        level=_LEVEL_ALIASES.get(level, level),  # type: ignore[arg-type]
        format=settings.logging.format,
        output_file=settings.logging.output_file,
        use_color=settings.logging.use_color,
        include_timestamp=settings.logging.include_timestamp,
    )

    ctx.obj.update({
        "settings": settings,
        "graph_config": settings.graph if config else None,
    })


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
