"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - Single YAML file (config/config.yaml) for storefront, browser and timeouts
    - Environment variable override (STOREFRONT_BASE_URL overrides storefront.base_url)
    - Dot notation path access
    - Default value support

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "config.yaml"


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (STOREFRONT_BASE_URL)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("storefront.base_url", "http://localhost:3000")
        'http://localhost:3000'

        >>> config.get("timeouts.exists", 2000)
        2000

    Environment Variable Mapping:
        - storefront.base_url -> STOREFRONT_BASE_URL
        - browser.headless -> BROWSER_HEADLESS
        - timeouts.navigation -> TIMEOUTS_NAVIGATION
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file. Falls back to
                `SMOKE_CONFIG` env var, then DEFAULT_CONFIG_PATH.
        """
        if getattr(self, "_initialized", False):
            return

        env_path = os.environ.get("SMOKE_CONFIG")
        self._config_path = Path(config_path or env_path or DEFAULT_CONFIG_PATH)
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.
        Environment strings are converted to the type of the YAML value
        (or of `default` when the key is not in YAML).

        Args:
            key: Dot-notation path (e.g., "storefront.base_url")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                break

        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, value if value is not None else default)

        return default if value is None else value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get entire configuration section.

        Args:
            section: Section name (e.g., "timeouts", "browser")

        Scalar values honour the same environment overrides as `get`
        (`test_data.user_email` <- `TEST_DATA_USER_EMAIL`).

        Returns:
            Section dictionary or empty dict if not found
        """
        values = dict(self._config.get(section, {}) or {})
        for key, value in values.items():
            if not isinstance(value, dict):
                values[key] = self.get(f"{section}.{key}", value)
        return values

    def timeout(self, name: str, default: int) -> int:
        """Shortcut for `timeouts.<name>` in milliseconds."""
        return int(self.get(f"timeouts.{name}", default))

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton instance.

        Useful for testing when configuration needs to be reloaded
        with different settings.
        """
        cls._instance = None
        cls._config = {}


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
]
