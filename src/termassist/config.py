"""Configuration management for termassist."""

from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from .errors import HomeDirectoryNotFoundError
from .logging_utils import configure_logging

DATA_SUBDIR = Path(".local") / "share" / "termassist"


class Settings(BaseSettings):
    """Application settings."""

    # Storage
    home: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("TERMASSIST_HOME", "HOME"),
        description="User home directory",
    )
    data_dir: Optional[Path] = Field(None, description="Directory holding the plugin store files")

    # Interactive picker
    tick_interval_ms: int = Field(default=200, description="Event source tick interval in milliseconds")

    # Logging Configuration
    log_level: str = Field(default="WARNING", description="Log level")

    class Config:
        """Pydantic configuration."""

        env_prefix = "TERMASSIST_"
        case_sensitive = False

    @field_validator("tick_interval_ms")
    @classmethod
    def _positive_tick(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("tick_interval_ms must be positive")
        return value

    @property
    def tick_interval(self) -> float:
        return self.tick_interval_ms / 1000.0


def resolve_data_dir(settings: Settings) -> Path:
    """Return the directory holding the per-plugin store files.

    Raises:
        HomeDirectoryNotFoundError: no explicit data directory is configured
            and the home directory is unset or does not exist.
    """
    if settings.data_dir is not None:
        return settings.data_dir.expanduser()
    if not settings.home:
        raise HomeDirectoryNotFoundError("Cannot find $HOME env variable")
    home = Path(settings.home)
    if not home.is_dir():
        raise HomeDirectoryNotFoundError(f"Home directory does not exist: {home}")
    return home / DATA_SUBDIR


def get_settings() -> Settings:
    """Get application settings and configure logging from them."""
    settings = Settings()

    configure_logging(settings.log_level)

    return settings
