import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from accelsend.core.errors import ConfigurationError
from accelsend.core.logging import get_logger

from .core import FilesSettings, LoggingSettings, ServerSettings
from .sendfile import SendfileSettings
from .utils import find_toml_config_file


__all__ = ["Settings", "ConfigurationError", "get_settings"]


class Settings(BaseSettings):
    """
    Configuration settings for accelsend.

    Settings are loaded from explicit overrides, environment variables,
    TOML configuration files and .env files, in that order of precedence.
    TOML configuration files are looked up in the following order:
    1. --config / CONFIG_FILE
    2. .accelsend.toml in current directory
    3. config.toml in XDG_CONFIG_HOME/accelsend/
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    server: ServerSettings = Field(
        default_factory=ServerSettings,
        description="Server configuration settings",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    sendfile: SendfileSettings = Field(
        default_factory=SendfileSettings,
        description="Sendfile offload configuration",
    )

    files: FilesSettings = Field(
        default_factory=FilesSettings,
        description="Served directory configuration",
    )

    @property
    def server_url(self) -> str:
        """Get the complete server URL."""
        return f"http://{self.server.host}:{self.server.port}"

    @classmethod
    def load_toml_config(cls, toml_path: Path) -> dict[str, Any]:
        """Load configuration from a TOML file."""
        try:
            with toml_path.open("rb") as f:
                return tomllib.load(f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read TOML config file {toml_path}: {e}"
            ) from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML syntax in {toml_path}: {e}") from e

    @classmethod
    def load_config_file(cls, config_path: Path) -> dict[str, Any]:
        """Load configuration from a file based on its extension."""
        suffix = config_path.suffix.lower()

        if suffix == ".toml":
            return cls.load_toml_config(config_path)
        raise ConfigurationError(
            f"Unsupported config file format: {suffix}. "
            "Only TOML (.toml) files are supported."
        )

    @classmethod
    def from_config(
        cls,
        config_path: Path | str | None = None,
        **kwargs: Any,
    ) -> "Settings":
        """Create Settings from a configuration file plus explicit overrides.

        Precedence: ``kwargs`` > environment > TOML file > .env file > defaults.
        TOML values are passed as init data, so they beat ``.env`` values.

        Raises:
            ConfigurationError: If the file cannot be read or values are invalid
        """
        if config_path is None:
            config_path_env = os.environ.get("CONFIG_FILE")
            if config_path_env:
                config_path = Path(config_path_env)

        if isinstance(config_path, str):
            config_path = Path(config_path)

        if config_path is None:
            config_path = find_toml_config_file()

        config_data: dict[str, Any] = {}
        if config_path and config_path.exists():
            config_data = cls.load_config_file(config_path)
            logger = get_logger(__name__)
            logger.info(
                "config_file_loaded",
                path=str(config_path),
                category="config",
            )

        init_data = _deep_merge(_without_env_overrides(config_data), kwargs)

        try:
            return cls(**init_data)
        except (ValidationError, SettingsError) as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}",
                details={"config_path": str(config_path) if config_path else None},
            ) from e


def _without_env_overrides(
    config_data: dict[str, Any], prefix: str = ""
) -> dict[str, Any]:
    """Drop file values that an environment variable already sets."""
    env_keys = {key.upper() for key in os.environ}
    result: dict[str, Any] = {}
    for key, value in config_data.items():
        env_key = f"{prefix}{key}".upper()
        if env_key in env_keys:
            continue
        if isinstance(value, dict) and not prefix:
            result[key] = _without_env_overrides(value, prefix=f"{env_key}__")
        else:
            result[key] = value
    return result


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from the discovered configuration sources."""
    return Settings.from_config(config_path=config_path)
