"""xmt - Terminal output formatting for command-line programs.

This package provides:
- Formatter: leveled messages, structured output (text, tree, JSON) and prompts
  that adapt to whether stdout/stderr are interactive terminals
- A process-wide shared formatter with nested indentation scopes
- CLI tool (xmt): the same output conventions for shell scripts

Basic usage::

    from xmt import Config, Formatter, Level, Style

    config = Config().with_style(Level.SUCCESS, Style.new("bright_green").with_prefix("*"))
    fmt = Formatter(config)
    fmt.print("Building")
    fmt.nest().success("done")

Shared formatter::

    import xmt

    xmt.init(xmt.Config().with_json_output())
    with xmt.nested("Checking"):
        xmt.warn("cache is stale")
    xmt.out({"ok": True})

CLI usage::

    xmt success "Deployed"
    xmt --tree out status.yaml
    xmt confirm "Continue?" --default-yes
"""

from loguru import logger

from .config import Config
from .exceptions import ConfigError, InputClosedError, UnsupportedEnvironmentError, XmtError
from .formatter import INDENT_MARKER, Formatter
from .output import OutputMode
from .shared import (
    SharedFormatter,
    detail,
    echo,
    error,
    get_instance,
    init,
    init_default,
    nest,
    nested,
    out,
    pick,
    prompt,
    prompt_yes_no,
    success,
    warn,
)
from .style import Level, Style, Theme, default_style
from .terminal import is_interactive

__version__ = "0.1.0"

# Library diagnostics stay silent unless the host opts in with logger.enable("xmt")
logger.disable("xmt")

__all__ = [
    "INDENT_MARKER",
    "Config",
    "ConfigError",
    "Formatter",
    "InputClosedError",
    "Level",
    "OutputMode",
    "SharedFormatter",
    "Style",
    "Theme",
    "UnsupportedEnvironmentError",
    "XmtError",
    "__version__",
    "default_style",
    "detail",
    "echo",
    "error",
    "get_instance",
    "init",
    "init_default",
    "is_interactive",
    "nest",
    "nested",
    "out",
    "pick",
    "prompt",
    "prompt_yes_no",
    "success",
    "warn",
]


def main() -> None:
    """CLI entry point."""
    import sys

    from rich.console import Console

    from .cli.app import app
    from .cli.log import configure_logging
    from .settings import Settings

    settings = Settings()
    configure_logging(settings.log_level, settings.log_format)

    console = Console(stderr=True)

    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        logger.exception("Unexpected error occurred")
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
