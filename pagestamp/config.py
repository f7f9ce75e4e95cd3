"""Configuration management with Pydantic settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class Settings(BaseSettings):
    """pagestamp configuration settings.

    Precedence: CLI flag > environment variable > .env file > defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="PAGESTAMP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    fallback_density: float = Field(
        default=72.0,
        gt=0.0,
        description="Stamp density (pixels per inch) used when the image carries no resolution metadata",
    )

    preview_screen_fraction: float = Field(
        default=0.8,
        gt=0.0,
        le=1.0,
        description="Fraction of the screen the interactive page preview may occupy",
    )

    output_suffix: str = Field(
        default="_sig",
        min_length=1,
        description="Suffix appended to the input name when no output path is given",
    )

    temp_dir: Path | None = Field(
        default=None,
        description="Parent directory for intermediate splice artifacts (defaults to system temp)",
    )

    log_level: LogLevel = Field(
        default="WARNING",
        description="Root log level for the command line",
    )

    def default_output_path(self, input_path: Path) -> Path:
        """Return the automatic destination for a stamped copy of ``input_path``.

        The suffix replaces the extension (``contract.pdf`` becomes
        ``contract_sig.pdf``) rather than being appended to the full name.
        """
        return input_path.with_name(f"{input_path.stem}{self.output_suffix}.pdf")


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
