"""Structured output and utility commands."""

import json
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from pydantic import RootModel
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ... import __version__, shared
from ...output import OutputMode
from ...style import Level

console = Console()
err_console = Console(stderr=True)


class Document(RootModel[Any]):
    """Loaded JSON/YAML document, shown as YAML in text mode."""

    def __str__(self) -> str:
        return yaml.safe_dump(self.root, default_flow_style=False, sort_keys=False).rstrip("\n")


def load_document(text: str, path: Path | None = None) -> Document:
    """Parse a JSON or YAML document.

    Files ending in ``.json`` are parsed as JSON, everything else (stdin
    included) as YAML, which also accepts JSON.

    Raises:
        ValueError: If the text cannot be parsed
    """
    try:
        if path is not None and path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        source = path or "stdin"
        raise ValueError(f"Could not parse {source}: {e}") from e
    return Document(data)


def out(
    file: Annotated[
        Path | None,
        typer.Argument(help="JSON or YAML file to render (default: stdin)"),
    ] = None,
) -> None:
    """Render a JSON or YAML document as text, a tree or JSON.

    Examples:
        xmt out status.yaml
        xmt --tree out status.json
        kubectl get pod web -o json | xmt --tree out
    """
    try:
        if file is None or str(file) == "-":
            document = load_document(sys.stdin.read())
        else:
            document = load_document(file.read_text(encoding="utf-8"), file)
    except (OSError, ValueError) as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    shared.out(document)


def theme() -> None:
    """Show the style used for each level."""
    fmt = shared.get_instance().snapshot()

    if fmt.config.output is OutputMode.JSON:
        shared.out(
            {
                level.value: {**fmt.style_for(level).model_dump(), "custom": fmt.config.theme.get(level) is not None}
                for level in Level
            }
        )
        return

    table = Table(title="xmt theme", show_header=True, header_style="bold cyan")
    table.add_column("Level")
    table.add_column("Prefix")
    table.add_column("Color")
    table.add_column("Source", style="dim")

    for level in Level:
        style = fmt.style_for(level)
        source = "theme" if fmt.config.theme.get(level) is not None else "default"
        table.add_row(level.value, style.prefix or "", Text(style.color, style=style.color), source)

    console.print(table)


def version() -> None:
    """Show version information."""
    console.print(f"[bold blue]xmt[/bold blue] version [green]{__version__}[/green]")
