"""Formatter configuration."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigError
from .output import OutputMode
from .settings import Settings
from .style import Level, Style, Theme


class Config(BaseModel):
    """Output mode and theme for a formatter.

    Immutable. The ``with_*`` modifiers return updated copies, so a config can
    be shared freely and built up in a chain::

        config = Config().with_style(Level.WARN, Style.new("magenta").with_prefix("?")).with_tree_output()
    """

    model_config = ConfigDict(frozen=True)

    output: OutputMode = Field(default=OutputMode.TEXT, description="Rendering of structured values")
    theme: Theme = Field(default_factory=Theme, description="Styles overriding the built-in defaults")

    def with_style(self, level: Level, style: Style) -> "Config":
        """Return a copy using ``style`` for ``level``."""
        return self.model_copy(update={"theme": self.theme.set(level, style)})

    def with_output(self, output: OutputMode) -> "Config":
        """Return a copy using ``output`` as the only active output mode."""
        return self.model_copy(update={"output": output})

    def with_json_output(self) -> "Config":
        """Return a copy rendering structured values as JSON."""
        return self.with_output(OutputMode.JSON)

    def with_tree_output(self) -> "Config":
        """Return a copy rendering structured values as a tree."""
        return self.with_output(OutputMode.TREE)

    def with_text_output(self) -> "Config":
        """Return a copy rendering structured values as plain text."""
        return self.with_output(OutputMode.TEXT)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Config":
        """Validate a plain mapping such as the content of a theme file.

        Args:
            data: Mapping with optional ``output`` and ``theme`` keys

        Returns:
            Validated configuration

        Raises:
            ConfigError: If the mapping does not describe a valid configuration
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load a configuration from a YAML file.

        An empty file yields the default configuration. A leading ``~`` in
        the path is expanded.

        Raises:
            ConfigError: If the file cannot be read or holds invalid content
        """
        path = Path(path).expanduser()
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Error reading configuration file {path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"Configuration file {path} must contain a mapping")
        return cls.from_mapping(data)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Config":
        """Build a configuration from environment settings.

        The theme file is loaded first; ``settings.output`` then overrides its
        output mode when set.
        """
        config = cls.from_yaml(settings.theme_file) if settings.theme_file else cls()
        if settings.output is not None:
            config = config.with_output(settings.output)
        return config
