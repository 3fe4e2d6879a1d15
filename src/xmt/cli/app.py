"""CLI application for xmt."""

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from .. import __version__, shared
from ..config import Config
from ..exceptions import ConfigError
from ..output import OutputMode
from ..settings import Settings
from .commands import ask, confirm, detail, error, out, pick, print_message, success, theme, version, warn
from .log import configure_logging

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="xmt",
    help="xmt - Consistent terminal output for shell scripts",
    add_completion=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]xmt[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main_callback(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Render structured output as JSON and suppress messages"),
    ] = False,
    tree_output: Annotated[
        bool,
        typer.Option("--tree", help="Render structured output as a tree"),
    ] = False,
    theme_file: Annotated[
        Path | None,
        typer.Option("--theme", help="YAML file with an output mode and level styles"),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity. Use -v for DEBUG, -vv for TRACE.",
        ),
    ] = 0,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Set log level (DEBUG, INFO, WARNING, ERROR)"),
    ] = None,
    version: Annotated[
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = False,
) -> None:
    """xmt - Consistent terminal output for shell scripts."""
    settings = Settings()

    # Determine log level
    if log_level:
        level = log_level.upper()
    elif verbose >= 2:
        level = "TRACE"
    elif verbose == 1:
        level = "DEBUG"
    else:
        level = settings.log_level

    # Reconfigure logger if needed
    if level != settings.log_level:
        configure_logging(level, settings.log_format)

    if theme_file is not None:
        settings = settings.model_copy(update={"theme_file": theme_file})

    try:
        config = Config.from_settings(settings)
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    if json_output or tree_output:
        config = config.with_output(OutputMode.from_flags(json_output, tree_output))

    logger.debug(f"Using {config.output.value} output with {len(config.theme.styles)} custom styles")
    shared.init(config)


app.command("print")(print_message)
app.command()(detail)
app.command()(success)
app.command()(warn)
app.command()(error)
app.command()(out)
app.command()(ask)
app.command()(confirm)
app.command()(pick)
app.command()(theme)
app.command()(version)
