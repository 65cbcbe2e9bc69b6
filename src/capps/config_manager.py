"""Configuration management module.

Reads optional user defaults from a TOML file. capps never writes this
file; it only supplies defaults that command-line flags override.

Default location: ~/.capps/config.toml

Example:
    default_glob = "api-*"
    default_tenant = "Prod*"
    excluded_subscription_marker = "Test"
    az_command = "az"
    cli_timeout = 60
"""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration operations fail."""

    pass


@dataclass
class CappsConfig:
    """capps configuration data."""

    default_glob: str = "*"
    default_tenant: str = "*"
    excluded_subscription_marker: str = "Test"
    az_command: str = "az"
    cli_timeout: int = 60

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CappsConfig":
        """Create from dictionary, validating value types.

        Raises:
            ConfigError: If a known key has the wrong type
        """
        defaults = cls()
        values: dict[str, Any] = {}
        for key in ("default_glob", "default_tenant", "excluded_subscription_marker", "az_command"):
            value = data.get(key, getattr(defaults, key))
            if not isinstance(value, str):
                raise ConfigError(f"'{key}' must be a string, got {type(value).__name__}")
            values[key] = value

        timeout = data.get("cli_timeout", defaults.cli_timeout)
        # bool is an int subclass
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
            raise ConfigError(f"'cli_timeout' must be a positive integer, got {timeout!r}")
        values["cli_timeout"] = timeout

        return cls(**values)


class ConfigManager:
    """Load the capps configuration file."""

    DEFAULT_CONFIG_DIR = Path.home() / ".capps"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

    @classmethod
    def get_config_path(cls, custom_path: str | None = None) -> Path:
        """Get configuration file path.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            Path to config file
        """
        if custom_path:
            return Path(custom_path).expanduser()
        return cls.DEFAULT_CONFIG_FILE

    @classmethod
    def load_config(cls, custom_path: str | None = None) -> CappsConfig:
        """Load configuration from file.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            CappsConfig object (defaults when the file does not exist)

        Raises:
            ConfigError: If the file cannot be read or is invalid
        """
        config_path = cls.get_config_path(custom_path)

        if not config_path.exists():
            if custom_path:
                raise ConfigError(f"Config file not found: {config_path}")
            logger.debug("Config file not found, using defaults")
            return CappsConfig()

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load config: {e}") from e

        logger.debug(f"Loaded config from: {config_path}")
        return CappsConfig.from_dict(data)


__all__ = ["CappsConfig", "ConfigError", "ConfigManager"]
