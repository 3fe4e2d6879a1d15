"""Settings management for xmt."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .output import OutputMode


class Settings(BaseSettings):
    """Settings with environment variable support.

    Environment variables are prefixed with XMT_.
    Example: XMT_OUTPUT=json XMT_THEME_FILE=~/.config/xmt/theme.yaml
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="XMT_",
        extra="ignore",
    )

    # Formatter settings
    output: OutputMode | None = Field(
        default=None,
        description="Output mode for structured values (text, tree, json)",
    )
    theme_file: Path | None = Field(
        default=None,
        description="YAML file with an output mode and level styles",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: str = Field(
        default="pretty",
        description="Log format: 'pretty' for colored output, 'json' for structured",
    )
