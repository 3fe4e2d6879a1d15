"""Output mode for structured values."""

from enum import Enum


class OutputMode(str, Enum):
    """How :meth:`xmt.Formatter.out` renders structured values."""

    TEXT = "text"  # str(value), human-readable
    TREE = "tree"  # Indented tree of the serialized value
    JSON = "json"  # Machine-readable JSON, leveled messages suppressed

    @classmethod
    def from_flags(cls, json_output: bool = False, tree_output: bool = False) -> "OutputMode":
        """Pick the output mode selected by command-line style flags.

        Args:
            json_output: ``--json`` was given
            tree_output: ``--tree`` was given

        Returns:
            JSON if requested, otherwise TREE if requested, otherwise TEXT
        """
        if json_output:
            return cls.JSON
        if tree_output:
            return cls.TREE
        return cls.TEXT
