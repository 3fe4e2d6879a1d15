"""Levels, styles and themes."""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from rich.color import Color, ColorParseError


class Level(str, Enum):
    """Semantic category of an output line."""

    NORMAL = "normal"
    PROMPT = "prompt"
    SUCCESS = "success"
    DETAIL = "detail"
    WARN = "warn"
    ERROR = "error"


class Style(BaseModel):
    """Prefix glyph and colour applied to one level."""

    model_config = ConfigDict(frozen=True)

    prefix: str | None = Field(None, description="Short glyph written before the message")
    color: str = Field(..., description="Colour name understood by rich (white, green, #ff8800, ...)")

    @field_validator("color")
    @classmethod
    def ensure_color(cls, v: str) -> str:
        """Reject colours rich cannot render."""
        try:
            Color.parse(v)
        except ColorParseError as e:
            raise ValueError(f"unknown colour {v!r}") from e
        return v

    @classmethod
    def new(cls, color: str) -> "Style":
        """Create a style with no prefix."""
        return cls(color=color)

    def with_prefix(self, prefix: str) -> "Style":
        """Return a copy of this style using ``prefix``."""
        return self.model_copy(update={"prefix": prefix})


_DEFAULT_STYLES: dict[Level, Style] = {
    Level.NORMAL: Style(prefix="+", color="white"),
    Level.PROMPT: Style(prefix="+", color="white"),
    Level.DETAIL: Style(prefix="+", color="white"),
    Level.SUCCESS: Style(prefix="✔", color="green"),
    Level.WARN: Style(prefix="!", color="yellow"),
    Level.ERROR: Style(prefix="!", color="red"),
}


def default_style(level: Level) -> Style:
    """Return the built-in style used when a theme has no entry for ``level``."""
    return _DEFAULT_STYLES[level]


class Theme(BaseModel):
    """Mapping of levels to styles.

    A theme does not need an entry for every level; :meth:`resolve` falls back
    to :func:`default_style`. Themes are values: :meth:`set` returns a new
    theme and leaves the receiver untouched.

    Can be validated from a bare mapping, which is the shape used in theme
    files::

        Theme.model_validate({"warn": {"prefix": "?", "color": "magenta"}})
    """

    model_config = ConfigDict(frozen=True)

    styles: Mapping[Level, Style] = Field(default_factory=dict, validate_default=True)

    @model_validator(mode="before")
    @classmethod
    def wrap_bare_mapping(cls, data: Any) -> Any:
        """Accept ``{level: style}`` as well as ``{"styles": {level: style}}``."""
        if isinstance(data, Mapping) and "styles" not in data:
            return {"styles": dict(data)}
        return data

    @field_validator("styles")
    @classmethod
    def freeze_styles(cls, v: Mapping[Level, Style]) -> Mapping[Level, Style]:
        """Store the styles read-only so copies of a theme stay independent."""
        return MappingProxyType(dict(v))

    @field_serializer("styles")
    def dump_styles(self, v: Mapping[Level, Style]) -> dict[Level, Style]:
        return dict(v)

    def set(self, level: Level, style: Style) -> "Theme":
        """Return a theme with ``style`` bound to ``level``."""
        return self.model_copy(update={"styles": MappingProxyType({**self.styles, level: style})})

    def get(self, level: Level) -> Style | None:
        """Return the style bound to ``level``, if any."""
        return self.styles.get(level)

    def resolve(self, level: Level) -> Style:
        """Return the style for ``level``, falling back to the default."""
        style = self.styles.get(level)
        return style if style is not None else default_style(level)
