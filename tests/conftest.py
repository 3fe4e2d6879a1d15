"""Pytest fixtures for xmt tests."""

import io
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

import pytest

from xmt import shared
from xmt.config import Config
from xmt.formatter import Formatter


@dataclass
class Streams:
    """In-memory stand-ins for stdout, stderr and stdin."""

    stdout: io.StringIO = field(default_factory=io.StringIO)
    stderr: io.StringIO = field(default_factory=io.StringIO)
    stdin: io.StringIO = field(default_factory=io.StringIO)

    def feed(self, text: str) -> None:
        """Replace pending stdin with ``text``."""
        self.stdin.seek(0)
        self.stdin.truncate()
        self.stdin.write(text)
        self.stdin.seek(0)


@pytest.fixture
def streams() -> Streams:
    """Provide fresh in-memory streams."""
    return Streams()


@pytest.fixture
def make_formatter(streams: Streams) -> Callable[..., Formatter]:
    """Build formatters bound to the in-memory streams.

    Both streams count as interactive unless told otherwise.
    """

    def factory(config: Config | None = None, *, tty: bool = True, stderr_tty: bool | None = None) -> Formatter:
        return Formatter(
            config=config or Config(),
            stdout_tty=tty,
            stderr_tty=tty if stderr_tty is None else stderr_tty,
            stdout=streams.stdout,
            stderr=streams.stderr,
            stdin=streams.stdin,
        )

    return factory


@pytest.fixture(autouse=True)
def restore_shared_formatter() -> Iterator[None]:
    """Keep tests from leaking their shared formatter into each other."""
    handle = shared.get_instance()
    original = handle.snapshot()
    yield
    handle.replace(original)
