"""Interactive prompt commands.

Prompts need a terminal on stdout; without one these commands exit with
status 2. The answer of ``ask`` and ``pick`` is printed after the prompt.
"""

from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from ... import shared
from ...exceptions import InputClosedError, UnsupportedEnvironmentError

err_console = Console(stderr=True)

EXIT_UNSUPPORTED = 2


def _fail(e: Exception) -> typer.Exit:
    err_console.print(f"[red]Error: {escape(str(e))}[/red]")
    return typer.Exit(EXIT_UNSUPPORTED if isinstance(e, UnsupportedEnvironmentError) else 1)


def ask(
    message: Annotated[str, typer.Argument(help="Question to show")],
) -> None:
    """Ask for a line of text and print the answer.

    Examples:
        xmt ask "Project name: "
    """
    try:
        answer = shared.prompt(message)
    except (UnsupportedEnvironmentError, InputClosedError) as e:
        raise _fail(e) from e
    print(answer)


def confirm(
    message: Annotated[str, typer.Argument(help="Yes/no question to show")],
    default_yes: Annotated[
        bool,
        typer.Option("--default-yes/--default-no", help="Answer used for empty input"),
    ] = False,
) -> None:
    """Ask a yes/no question. Exits 0 for yes, 1 for no.

    Examples:
        xmt confirm "Continue?" --default-yes && deploy
    """
    try:
        answer = shared.prompt_yes_no(message, default_yes)
    except (UnsupportedEnvironmentError, InputClosedError) as e:
        raise _fail(e) from e
    if not answer:
        raise typer.Exit(1)


def pick(
    message: Annotated[str, typer.Argument(help="Heading shown above the choices")],
    items: Annotated[list[str], typer.Argument(help="Choices")],
) -> None:
    """Let the user pick one of ITEMS and print it.

    Examples:
        xmt pick "Environment" staging production
    """
    try:
        choice = shared.pick(message, items)
    except (UnsupportedEnvironmentError, InputClosedError) as e:
        raise _fail(e) from e
    print(choice)
