"""Tests for the process-wide shared formatter."""

import re
import threading

import pytest

import xmt
from xmt import shared
from xmt.config import Config
from xmt.formatter import Formatter
from xmt.output import OutputMode

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def plain(text: str) -> str:
    """Strip ANSI colour codes."""
    return ANSI.sub("", text)


@pytest.fixture
def installed(make_formatter) -> Formatter:
    """Install an interactive in-memory formatter as the shared one."""
    fmt = make_formatter()
    shared.get_instance().replace(fmt)
    return fmt


def current_level() -> int:
    return shared.get_instance().snapshot().indent_level


@pytest.mark.unit
class TestLifecycle:
    """Tests for init and lazy creation."""

    def test_lazy_default(self):
        """Test a fresh handle creates a default formatter on first use."""
        handle = shared.SharedFormatter()

        with handle.lock() as fmt:
            assert fmt.config == Config()
            assert fmt.indent_level == 0

        assert handle.snapshot() is fmt

    def test_get_instance_is_stable(self):
        """Test every call returns the same handle."""
        assert shared.get_instance() is shared.get_instance()
        assert xmt.get_instance() is shared.get_instance()

    def test_init_replaces_formatter(self):
        """Test init installs a fresh formatter built from the config."""
        xmt.init(Config().with_tree_output())

        fmt = shared.get_instance().snapshot()
        assert fmt.config.output == OutputMode.TREE
        assert fmt.indent_level == 0

    def test_init_resets_indentation(self, installed):
        """Test init starts again at level zero."""
        shared.get_instance().replace(installed.nest().nest())

        xmt.init(Config())

        assert current_level() == 0

    def test_init_default(self):
        """Test init_default uses the default configuration."""
        xmt.init(Config().with_json_output())
        xmt.init_default()

        assert shared.get_instance().snapshot().config == Config()

    def test_replace_returns_previous(self, installed, make_formatter):
        """Test replace hands back the formatter it removed."""
        other = make_formatter(Config().with_json_output())

        assert shared.get_instance().replace(other) is installed
        assert shared.get_instance().snapshot() is other


@pytest.mark.unit
class TestConvenienceFunctions:
    """Tests for the module-level output functions."""

    def test_leveled_functions(self, installed, streams):
        """Test each function writes through the shared formatter."""
        xmt.echo("one")
        xmt.detail("two")
        xmt.success("three")
        xmt.warn("four")
        xmt.error("five")

        assert plain(streams.stdout.getvalue()) == "+ one\n+ two\n✔ three\n! four\n"
        assert plain(streams.stderr.getvalue()) == "! five\n"

    def test_out(self, make_formatter, streams):
        """Test out uses the shared output mode."""
        shared.get_instance().replace(make_formatter(Config().with_json_output(), tty=False))

        xmt.out({"ok": True})

        assert streams.stdout.getvalue() == '{"ok":true}\n'

    def test_prompts(self, installed, streams):
        """Test prompt functions read through the shared formatter."""
        streams.feed("alice\nn\n2\n")

        assert xmt.prompt("Name: ") == "alice"
        assert xmt.prompt_yes_no("Continue?", True) is False
        assert xmt.pick("Choose", ["a", "b"]) == "b"

    def test_prompt_yes_no_defaults_to_no(self, installed, streams):
        """Test the shared prompt_yes_no defaults to no."""
        streams.feed("\n")

        assert xmt.prompt_yes_no("Continue?") is False

    def test_prompt_does_not_hold_lock(self, installed, streams):
        """Test the lock is free while a prompt waits for input."""
        handle = shared.get_instance()

        class CheckingStdin:
            def readline(self) -> str:
                acquired = handle._mutex.acquire(blocking=False)
                if acquired:
                    handle._mutex.release()
                assert acquired
                return "answer\n"

        fmt = Formatter(Config(), stdout_tty=True, stderr_tty=True, stdout=streams.stdout, stdin=CheckingStdin())
        handle.replace(fmt)

        assert xmt.prompt("Name: ") == "answer"

    def test_redirected_prompt_fails(self, make_formatter):
        """Test the shared prompts keep the terminal requirement."""
        shared.get_instance().replace(make_formatter(tty=False))

        with pytest.raises(xmt.UnsupportedEnvironmentError):
            xmt.pick("Choose", ["a"])


@pytest.mark.unit
class TestNest:
    """Tests for nested scopes on the shared formatter."""

    def test_nest_prints_header_and_indents(self, installed, streams):
        """Test the header is printed at the outer level and the body is indented."""

        def body() -> str:
            xmt.echo("inside")
            return "result"

        assert xmt.nest("Header", body) == "result"
        xmt.echo("after")

        assert plain(streams.stdout.getvalue()) == "+ Header\n    + inside\n+ after\n"

    def test_nest_passes_arguments(self, installed):
        """Test extra arguments are forwarded to the body."""
        assert xmt.nest("Sum", lambda a, b=0: a + b, 2, b=3) == 5

    def test_level_restored(self, installed):
        """Test the level is the same before and after."""
        before = current_level()

        xmt.nest("Header", lambda: None)

        assert current_level() == before

    def test_recursive_nesting(self, installed, streams):
        """Test recursive scopes unwind like a stack."""
        seen: list[int] = []

        def recurse(depth: int) -> None:
            seen.append(current_level())
            if depth:
                xmt.nest(f"level {depth}", recurse, depth - 1)
            seen.append(current_level())

        xmt.nest("root", recurse, 3)

        assert seen == [1, 2, 3, 4, 4, 3, 2, 1]
        assert current_level() == 0
        assert "            + level 1" in plain(streams.stdout.getvalue())

    def test_restored_on_exception(self, installed):
        """Test the previous formatter comes back when the body raises."""

        def body() -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            xmt.nest("Header", body)

        assert shared.get_instance().snapshot() is installed

    def test_nested_context_manager(self, installed, streams):
        """Test the context manager form."""
        with xmt.nested("Outer") as outer:
            assert outer.indent_level == 1
            with xmt.nested("Inner"):
                assert current_level() == 2
                xmt.warn("deep")
            assert current_level() == 1

        assert current_level() == 0
        assert plain(streams.stdout.getvalue()) == "+ Outer\n    + Inner\n        ! deep\n"

    def test_lock_not_held_during_body(self, installed):
        """Test other threads can print while a body runs."""
        done = threading.Event()

        def other_thread() -> None:
            xmt.echo("from other thread")
            done.set()

        def body() -> bool:
            thread = threading.Thread(target=other_thread)
            thread.start()
            thread.join(timeout=5)
            return done.is_set()

        assert xmt.nest("Header", body) is True

    def test_header_suppressed_in_json_mode(self, make_formatter, streams):
        """Test JSON mode still nests but prints no header."""
        shared.get_instance().replace(make_formatter(Config().with_json_output()))

        with xmt.nested("Header"):
            assert current_level() == 1

        assert streams.stdout.getvalue() == ""


@pytest.mark.unit
class TestConcurrency:
    """Tests for concurrent use of the shared formatter."""

    def test_concurrent_writes_keep_lines_whole(self, make_formatter, streams):
        """Test lines from several threads never interleave."""
        shared.get_instance().replace(make_formatter(tty=False))

        def worker(n: int) -> None:
            for i in range(50):
                xmt.echo(f"worker-{n}-line-{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        lines = streams.stdout.getvalue().splitlines()
        assert len(lines) == 200
        assert all(re.fullmatch(r"worker-\d-line-\d+", line) for line in lines)
