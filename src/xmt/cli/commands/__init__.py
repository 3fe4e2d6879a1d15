"""CLI commands for xmt."""

from .messages import detail, error, print_message, success, warn
from .prompts import ask, confirm, pick
from .utility import out, theme, version

__all__ = [
    "ask",
    "confirm",
    "detail",
    "error",
    "out",
    "pick",
    "print_message",
    "success",
    "theme",
    "version",
]
