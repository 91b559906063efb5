"""
Configuration Service

Service class for plugin settings.
Stored values are layered over DEFAULT_SETTINGS.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger("BaseColumns.ConfigService")


DEFAULT_SETTINGS: Dict[str, Any] = {
    "min_column_width": 100,
    "max_column_width": 300,
    "default_width_behavior": "custom",
    "custom_column_width": 150,
    "window_width": 1200,
    "create_backups": True,
}


class ConfigService:
    """
    Service class for configuration management.

    Provides:
    - Configuration loading (defaults merged under stored values)
    - Configuration saving
    - Dot-path access
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config service.

        Args:
            config_path: Path to config file
        """
        if config_path is None:
            config_path = Path.home() / ".basecolumns" / "config.json"

        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = dict(DEFAULT_SETTINGS)

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file.

        A missing file is not an error; defaults are used.

        Returns:
            Configuration dictionary

        Raises:
            ValueError: If config file is invalid JSON
        """
        self._config = dict(DEFAULT_SETTINGS)
        if not self.config_path.exists():
            logger.debug(f"No config at {self.config_path}; using defaults")
            return self._config.copy()

        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                stored = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing {self.config_path}: {e}")
            raise ValueError(
                f"Error parsing {self.config_path}: {e}\n"
                "Please ensure the config file is valid JSON."
            ) from e

        if not isinstance(stored, dict):
            raise ValueError(f"Config file {self.config_path} must contain a JSON object")

        self._config.update(stored)
        logger.info(f"Configuration loaded from {self.config_path}")
        return self._config.copy()

    def save(self, data: Optional[Dict[str, Any]] = None) -> bool:
        """
        Save configuration to file.

        Args:
            data: Optional data to save (uses internal config if None)

        Returns:
            True if successful
        """
        try:
            if data is not None:
                self._config = data

            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with self.config_path.open("w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=4)
            logger.info(f"Configuration saved to {self.config_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to save config: {e}")
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value: Any = self._config
        for k in key.split("."):
            if not isinstance(value, dict):
                return default
            value = value.get(k)
            if value is None:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value (supports dot notation)."""
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            config = config.setdefault(k, {})
        config[keys[-1]] = value
