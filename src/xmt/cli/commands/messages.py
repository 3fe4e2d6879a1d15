"""Leveled message commands."""

from typing import Annotated

import typer

from ... import shared

Message = Annotated[list[str], typer.Argument(help="Message words, joined with spaces")]


def print_message(message: Message) -> None:
    """Print a normal message.

    Examples:
        xmt print "Building release"
    """
    shared.echo(" ".join(message))


def detail(message: Message) -> None:
    """Print decorative narration (terminal only, never under --json)."""
    shared.detail(" ".join(message))


def success(message: Message) -> None:
    """Print a success message."""
    shared.success(" ".join(message))


def warn(message: Message) -> None:
    """Print a warning."""
    shared.warn(" ".join(message))


def error(message: Message) -> None:
    """Print an error to stderr."""
    shared.error(" ".join(message))
