"""Process-wide shared formatter.

Call sites that do not want to pass a formatter around use the module-level
functions here. They all go through a single :class:`SharedFormatter`, created
with the default configuration on first use and replaced with :func:`init`.

Basic usage::

    import xmt

    xmt.init(xmt.Config().with_tree_output())
    xmt.echo("Deploying")
    with xmt.nested("Uploading artifacts"):
        xmt.success("app.tar.gz")
"""

import threading
from collections.abc import Callable, Iterator, Sequence
from contextlib import AbstractContextManager, contextmanager
from typing import Any, ParamSpec, TypeVar

from loguru import logger

from .config import Config
from .formatter import Formatter

P = ParamSpec("P")
R = TypeVar("R")
T = TypeVar("T")


class SharedFormatter:
    """Lock-guarded holder of the current shared formatter.

    The lock is held only to read, write through or swap the formatter; never
    while a nest body runs or while a prompt waits for input.
    """

    def __init__(self, formatter: Formatter | None = None) -> None:
        self._mutex = threading.Lock()
        self._formatter = formatter

    def _current(self) -> Formatter:
        # Caller holds the mutex
        if self._formatter is None:
            self._formatter = Formatter()
            logger.debug("Created default shared formatter")
        return self._formatter

    @contextmanager
    def lock(self) -> Iterator[Formatter]:
        """Hold the lock and yield the current formatter."""
        with self._mutex:
            yield self._current()

    def snapshot(self) -> Formatter:
        """Return the current formatter without keeping the lock."""
        with self._mutex:
            return self._current()

    def replace(self, formatter: Formatter) -> Formatter:
        """Install ``formatter`` and return the one it replaces."""
        with self._mutex:
            previous = self._current()
            self._formatter = formatter
            return previous

    @contextmanager
    def nested(self, message: str) -> Iterator[Formatter]:
        """Print ``message`` and indent shared output one level for the block.

        The previous formatter is restored when the block exits, including on
        an exception, so nested blocks unwind like a stack.
        """
        with self._mutex:
            orig = self._current()
            orig.print(message)
            inner = orig.nest()
            self._formatter = inner
        logger.debug(f"Entered nested scope at level {inner.indent_level}: {message}")

        try:
            yield inner
        finally:
            with self._mutex:
                self._formatter = orig
            logger.debug(f"Left nested scope, back to level {orig.indent_level}")


_instance = SharedFormatter()


def get_instance() -> SharedFormatter:
    """Return the shared formatter handle."""
    return _instance


def init(config: Config) -> None:
    """Replace the shared formatter with a fresh one built from ``config``.

    Terminals are probed again and the indentation starts at zero.
    """
    _instance.replace(Formatter(config=config))
    logger.debug(f"Initialized shared formatter with {config.output.value} output")


def init_default() -> None:
    """Replace the shared formatter with one using the default configuration."""
    init(Config())


def nested(message: str) -> AbstractContextManager[Formatter]:
    """Context manager form of :func:`nest` on the shared formatter."""
    return _instance.nested(message)


def nest(message: str, func: Callable[P, R], *args: P.args, **kwargs: P.kwargs) -> R:
    """Print ``message``, then call ``func`` with shared output indented one level.

    Returns:
        Whatever ``func`` returns
    """
    with _instance.nested(message):
        return func(*args, **kwargs)


def echo(msg: str) -> None:
    """Print a normal message through the shared formatter."""
    with _instance.lock() as fmt:
        fmt.print(msg)


def detail(msg: str) -> None:
    """Print decorative narration through the shared formatter."""
    with _instance.lock() as fmt:
        fmt.detail(msg)


def success(msg: str) -> None:
    """Print a success message through the shared formatter."""
    with _instance.lock() as fmt:
        fmt.success(msg)


def warn(msg: str) -> None:
    """Print a warning through the shared formatter."""
    with _instance.lock() as fmt:
        fmt.warn(msg)


def error(msg: str) -> None:
    """Print an error through the shared formatter."""
    with _instance.lock() as fmt:
        fmt.error(msg)


def out(value: Any) -> None:
    """Render a structured value through the shared formatter."""
    with _instance.lock() as fmt:
        fmt.out(value)


# Prompts block on stdin, so they run on a snapshot outside the lock.


def prompt(msg: str) -> str:
    """Ask for a line of text using the shared formatter."""
    return _instance.snapshot().prompt(msg)


def prompt_yes_no(msg: str, default_yes: bool = False) -> bool:
    """Ask a yes/no question using the shared formatter."""
    return _instance.snapshot().prompt_yes_no(msg, default_yes)


def pick(msg: str, items: Sequence[T]) -> T:
    """Let the user choose one of ``items`` using the shared formatter."""
    return _instance.snapshot().pick(msg, items)
