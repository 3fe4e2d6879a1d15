"""Exceptions raised by xmt."""


class XmtError(Exception):
    """Base exception class for all xmt errors."""


class UnsupportedEnvironmentError(XmtError):
    """Raised when an interactive operation runs without a terminal on stdout.

    Prompting only makes sense when a person is watching the output, so
    ``prompt``, ``prompt_yes_no`` and ``pick`` refuse to run when stdout is
    redirected to a file or a pipe.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} is not supported when stdout is not an interactive terminal")


class InputClosedError(XmtError, EOFError):
    """Raised when stdin reaches end of file while waiting for an answer."""


class ConfigError(XmtError):
    """Raised when a configuration mapping or theme file is invalid."""
