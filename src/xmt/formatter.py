"""Formatter core: leveled messages, structured output and prompts."""

import dataclasses
import json
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, TextIO, TypeVar

from loguru import logger
from pydantic_core import PydanticSerializationError, to_jsonable_python
from rich.console import COLOR_SYSTEMS, Console
from rich.padding import Padding
from rich.style import Style as AnsiStyle
from rich.text import Text
from rich.tree import Tree

from .config import Config
from .exceptions import InputClosedError, UnsupportedEnvironmentError
from .output import OutputMode
from .style import Level, Style
from .terminal import is_interactive

T = TypeVar("T")

# One level of nesting on an interactive stream
INDENT_MARKER = "    "


def build_tree(data: Any, label: str) -> Tree:
    """Build a rich tree from a JSON-compatible structure.

    Mappings become labelled branches, sequences become ``[i]`` branches and
    scalars become ``key: value`` leaves.

    Args:
        data: Output of ``to_jsonable_python``
        label: Label of the root node

    Returns:
        Tree ready to be printed
    """
    root = Tree(Text(label, style="bold"))
    if isinstance(data, dict | list):
        _add_branch(root, data)
    else:
        root.add(Text(_scalar(data)))
    return root


def _add_branch(node: Tree, data: dict | list) -> None:
    items = data.items() if isinstance(data, dict) else ((f"[{i}]", v) for i, v in enumerate(data))
    for key, value in items:
        if isinstance(value, dict | list):
            _add_branch(node.add(Text(str(key), style="bold")), value)
        else:
            node.add(Text.assemble((str(key), "bold"), ": ", _scalar(value)))


def _scalar(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value)


@dataclass(frozen=True)
class Formatter:
    """Terminal formatter bound to a configuration and an indentation depth.

    Whether stdout and stderr are interactive is probed once, when the
    formatter is created, and kept for its lifetime. Later redirection of the
    process streams is not observed. Pass ``stdout_tty``/``stderr_tty`` to
    skip the probe.

    The streams default to ``sys.stdout``, ``sys.stderr`` and ``sys.stdin``,
    looked up at the time of each call.

    Formatters are immutable: :meth:`nest` returns a deeper copy and leaves
    the receiver untouched.
    """

    config: Config = field(default_factory=Config)
    indent_level: int = 0
    stdout_tty: bool | None = None
    stderr_tty: bool | None = None
    stdout: TextIO | None = field(default=None, repr=False, compare=False)
    stderr: TextIO | None = field(default=None, repr=False, compare=False)
    stdin: TextIO | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.indent_level < 0:
            raise ValueError(f"indent_level must be non-negative, got {self.indent_level}")
        if self.stdout_tty is None:
            object.__setattr__(self, "stdout_tty", is_interactive(self._out))
        if self.stderr_tty is None:
            object.__setattr__(self, "stderr_tty", is_interactive(self._err))

    @property
    def _out(self) -> TextIO:
        return self.stdout if self.stdout is not None else sys.stdout

    @property
    def _err(self) -> TextIO:
        return self.stderr if self.stderr is not None else sys.stderr

    @property
    def _in(self) -> TextIO:
        return self.stdin if self.stdin is not None else sys.stdin

    @property
    def _json_mode(self) -> bool:
        return self.config.output is OutputMode.JSON

    def style_for(self, level: Level) -> Style:
        """Return the theme's style for ``level`` or the built-in default."""
        return self.config.theme.resolve(level)

    def render_line(self, level: Level, msg: str) -> Text:
        """Compose the interactive form of ``msg``: indent, prefix, colour."""
        style = self.style_for(level)
        prefix = f"{style.prefix} " if style.prefix else ""
        return Text(f"{INDENT_MARKER * self.indent_level}{prefix}{msg}", style=style.color)

    # Leveled output

    def print(self, msg: str) -> None:
        """Print a normal message to stdout."""
        if self._json_mode:
            return
        self._write_line(self._out, bool(self.stdout_tty), Level.NORMAL, msg)

    def detail(self, msg: str) -> None:
        """Print decorative narration, only on an interactive stdout."""
        if not self.stdout_tty:
            return
        if self._json_mode:
            return
        self._write_line(self._out, True, Level.DETAIL, msg)

    def success(self, msg: str) -> None:
        """Print a success message to stdout."""
        if self._json_mode:
            return
        self._write_line(self._out, bool(self.stdout_tty), Level.SUCCESS, msg)

    def warn(self, msg: str) -> None:
        """Print a warning to stdout."""
        if self._json_mode:
            return
        self._write_line(self._out, bool(self.stdout_tty), Level.WARN, msg)

    def error(self, msg: str) -> None:
        """Print an error to stderr."""
        if self._json_mode:
            return
        self._write_line(self._err, bool(self.stderr_tty), Level.ERROR, msg)

    # Structured output

    def out(self, value: Any) -> None:
        """Render a structured value according to the output mode.

        JSON is used whenever the mode is JSON or stdout is not interactive
        (pretty on a terminal, compact otherwise). On a terminal, TREE renders
        an indented tree and TEXT writes ``str(value)``.

        A value that cannot be serialized terminates the process.
        """
        if self._json_mode or not self.stdout_tty:
            data = self._serialize(value)
            if self.stdout_tty:
                text = json.dumps(data, indent=2)
            else:
                text = json.dumps(data, separators=(",", ":"))
            print(text, file=self._out)
            return

        if self.config.output is OutputMode.TREE:
            tree = build_tree(self._serialize(value), label=type(value).__name__)
            width = len(INDENT_MARKER) * self.indent_level
            renderable = Padding(tree, (0, 0, 0, width), expand=False) if width else tree
            self._console(self._out).print(renderable)
            return

        indent = INDENT_MARKER * self.indent_level
        for line in str(value).splitlines() or [""]:
            print(f"{indent}{line}", file=self._out)

    def _serialize(self, value: Any) -> Any:
        try:
            return to_jsonable_python(value, inf_nan_mode="null")
        except (PydanticSerializationError, ValueError) as e:
            name = type(value).__name__
            logger.critical(f"Cannot serialize value of type {name}: {e}")
            raise SystemExit(f"xmt: cannot serialize value of type {name}: {e}") from e

    # Nesting

    def nest(self) -> "Formatter":
        """Return a copy of this formatter indented one level deeper."""
        return dataclasses.replace(self, indent_level=self.indent_level + 1)

    # Interactive prompts

    def prompt_yes_no(self, msg: str, default_yes: bool) -> bool:
        """Ask a yes/no question.

        Only the single letter ``n`` (or ``y`` when the default is no) departs
        from the default; ``no`` and empty input take the default.

        Raises:
            UnsupportedEnvironmentError: If stdout is not interactive
            InputClosedError: If stdin is closed
        """
        self._require_tty("prompt_yes_no")
        choices = "[Y/n]" if default_yes else "[y/N]"
        self._write_sameline(Level.PROMPT, f"{msg} {choices} - ")

        answer = self._read_line().strip().lower()
        if default_yes:
            return answer != "n"
        return answer == "y"

    def prompt(self, msg: str) -> str:
        """Ask for a line of text and return it stripped.

        Raises:
            UnsupportedEnvironmentError: If stdout is not interactive
            InputClosedError: If stdin is closed
        """
        self._require_tty("prompt")
        self._write_sameline(Level.PROMPT, msg)
        return self._read_line().strip()

    def pick(self, msg: str, items: Sequence[T]) -> T:
        """Let the user choose one of ``items`` by its 1-based number.

        Invalid answers are reported on stderr and asked again. The choices
        and those reports are shown in every output mode.

        Returns:
            The chosen element of ``items`` itself

        Raises:
            UnsupportedEnvironmentError: If stdout is not interactive
            InputClosedError: If stdin is closed
            ValueError: If ``items`` is empty
        """
        self._require_tty("pick")
        if not items:
            raise ValueError("pick needs at least one item")

        self._write_line(self._out, True, Level.NORMAL, msg)
        for i, item in enumerate(items, start=1):
            self._write_line(self._out, True, Level.NORMAL, f"[{i}] - {item}")

        while True:
            self._write_sameline(Level.PROMPT, "Enter your pick: ")
            answer = self._read_line().strip()
            try:
                choice = int(answer)
            except ValueError:
                self._write_line(self._err, bool(self.stderr_tty), Level.ERROR, "Please enter a number")
                continue

            if 1 <= choice <= len(items):
                return items[choice - 1]
            self._write_line(
                self._err, bool(self.stderr_tty), Level.ERROR, f"Pick must be between 1 and {len(items)}"
            )

    # Stream plumbing

    def _console(self, stream: TextIO) -> Console:
        return Console(
            file=stream,
            force_terminal=True,
            highlight=False,
            markup=False,
            emoji=False,
            soft_wrap=True,
        )

    def _colorize(self, stream: TextIO, level: Level, msg: str) -> str:
        # Colour codes only; the composed text is written as-is, tabs included
        line = self.render_line(level, msg)
        console = self._console(stream)
        if console.color_system is None or console.no_color:
            return line.plain
        return AnsiStyle.parse(str(line.style)).render(line.plain, color_system=COLOR_SYSTEMS[console.color_system])

    def _write_line(self, stream: TextIO, interactive: bool, level: Level, msg: str) -> None:
        if not interactive:
            print(msg, file=stream)
            return
        print(self._colorize(stream, level, msg), file=stream)

    def _write_sameline(self, level: Level, msg: str) -> None:
        print(self._colorize(self._out, level, msg), end="", file=self._out)
        self._out.flush()

    def _require_tty(self, operation: str) -> None:
        if not self.stdout_tty:
            raise UnsupportedEnvironmentError(operation)

    def _read_line(self) -> str:
        line = self._in.readline()
        if not line:
            raise InputClosedError("stdin was closed while waiting for input")
        return line
