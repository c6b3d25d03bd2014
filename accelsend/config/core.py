"""Core configuration settings - server, logging and served files."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


# === Server Configuration ===


class ServerSettings(BaseModel):
    """Server-specific configuration settings."""

    host: str = Field(
        default="127.0.0.1",
        description="Server host address",
    )

    port: int = Field(
        default=8000,
        description="Server port number",
        ge=1,
        le=65535,
    )

    reload: bool = Field(
        default=False,
        description="Enable auto-reload for development",
    )


# === Logging Configuration ===


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    format: str = Field(
        default="console",
        description="Logging output format: 'console' for development, 'json' for production",
    )

    file: str | None = Field(
        default=None,
        description="Path to JSON log file. If specified, logs are also written to this file in JSON format",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate and normalize the log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        level = v.upper()
        if level not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return level

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate the log output format."""
        fmt = v.lower()
        if fmt not in ("console", "json"):
            raise ValueError(f"Invalid log format: {v}. Must be 'console' or 'json'")
        return fmt


# === Files Configuration ===


class FilesSettings(BaseModel):
    """Directory served by the bundled file application."""

    root: Path = Field(
        default=Path("."),
        description="Directory whose files are served under /files/",
    )
