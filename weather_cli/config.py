"""
Configuration constants and startup configuration loading for the weather CLI.
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class ExternalAPIConfig:
    """External API configuration"""

    OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
    UNITS = "metric"


class CLIConfig:
    """CLI-specific configuration"""

    DEFAULT_CONFIG_FILE = "config.yaml"
    DEFAULT_LOG_FILE = "weather.log"
    DEFAULT_LOG_LEVEL = "INFO"

    # Environment variables, read when the CLI starts so .env values apply
    CONFIG_FILE_ENV_VAR = "WEATHER_CONFIG_FILE"
    LOG_FILE_ENV_VAR = "WEATHER_LOG_FILE"
    LOG_LEVEL_ENV_VAR = "LOG_LEVEL"

    API_KEY_ENV_VAR = "OPENWEATHER_API_KEY"
    API_KEY_FIELD = "api_key"


class ConfigError(Exception):
    """Base exception for configuration errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(message)


class MissingConfigFileError(ConfigError):
    """Raised when the configuration file does not exist."""


class ConfigReadError(ConfigError):
    """Raised when the configuration file cannot be read or parsed."""


class MissingAPIKeyError(ConfigError):
    """Raised when no API key is configured."""


class Settings(BaseModel):
    """Resolved runtime settings."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    config_path: str


def _read_config_file(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigReadError(f"Error reading config file: {e}", str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigReadError(
            f"Config file {path} must contain a mapping, got {type(data).__name__}",
            str(path),
        )
    return data


def load_settings(
    path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
) -> Settings:
    """
    Resolve the settings needed before any request is made.

    The YAML file at ``path`` supplies ``api_key``; the ``OPENWEATHER_API_KEY``
    environment variable overrides it. The file may be absent only when the
    environment provides the key.

    Args:
        path: Config file path (defaults to CLIConfig.DEFAULT_CONFIG_FILE)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Settings: Resolved settings

    Raises:
        MissingConfigFileError: If the file is absent and no key is in the environment
        ConfigReadError: If the file cannot be read or is not a mapping
        MissingAPIKeyError: If no non-blank API key was found
    """
    config_path = Path(path or CLIConfig.DEFAULT_CONFIG_FILE)
    env = os.environ if environ is None else environ
    env_key = (env.get(CLIConfig.API_KEY_ENV_VAR) or "").strip()

    file_data = {}
    if config_path.exists():
        file_data = _read_config_file(config_path)
        logger.debug("Loaded config from %s", config_path)
    elif not env_key:
        raise MissingConfigFileError(
            f"Config file {config_path} not found", str(config_path)
        )

    file_key = file_data.get(CLIConfig.API_KEY_FIELD)
    if file_key is not None and not isinstance(file_key, str):
        file_key = str(file_key)
    api_key = env_key or (file_key or "").strip()

    if not api_key:
        raise MissingAPIKeyError(
            "API key is missing in the config file", str(config_path)
        )

    return Settings(api_key=api_key, config_path=str(config_path))
