"""Terminal capability probe."""

from typing import Any


def is_interactive(stream: Any) -> bool:
    """Check whether ``stream`` is attached to an interactive terminal.

    Streams without ``isatty`` (or closed/detached ones, whose ``isatty``
    raises) count as non-interactive.

    Args:
        stream: File-like object such as ``sys.stdout``

    Returns:
        True if the stream is a TTY, False otherwise
    """
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (ValueError, OSError):
        return False
