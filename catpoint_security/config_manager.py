"""Configuration management with JSON file persistence."""

import json
import logging
import os
from dataclasses import asdict, fields
from typing import Optional, Dict, Any, Callable, List

from .models.config import SystemConfig
from .config.defaults import DEFAULT_CONFIG, DEFAULT_PATHS
from .utils import ensure_directory_exists

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigManager:
    """Manages system configuration with file persistence and change callbacks."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_PATHS["config_file"]
        self._config: Optional[SystemConfig] = None
        self._config_change_callbacks: List[Callable[[SystemConfig], None]] = []

        # Load initial configuration
        self.load_config()

    def load_config(self) -> SystemConfig:
        """Load configuration from file or create default."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    config_dict = json.load(f)
                self._config = SystemConfig(**self._known_keys(config_dict))
            except (json.JSONDecodeError, TypeError) as e:
                logger.warning(f"Error loading config: {e}. Using defaults.")
                self._config = SystemConfig()
        else:
            self._config = SystemConfig()
            self.save_config()

        return self._config

    def save_config(self) -> None:
        """Save current configuration to file."""
        if self._config is None:
            return

        directory = os.path.dirname(self.config_path)
        if directory:
            ensure_directory_exists(directory)

        with open(self.config_path, 'w') as f:
            json.dump(asdict(self._config), f, indent=2)

    def get_config(self) -> SystemConfig:
        """Get current configuration."""
        if self._config is None:
            return self.load_config()
        return self._config

    def update_config(self, **kwargs) -> None:
        """Update configuration with new values."""
        if self._config is None:
            self.load_config()

        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
            else:
                logger.warning(f"Ignoring unknown config key: {key}")

        self.save_config()
        self._notify_callbacks()

    def reset_to_defaults(self) -> None:
        """Replace the current configuration with the defaults and save it."""
        self._config = SystemConfig(**DEFAULT_CONFIG)
        self.save_config()
        self._notify_callbacks()
        logger.info("Configuration reset to defaults")

    def validate_config(self) -> bool:
        """Validate current configuration."""
        if self._config is None:
            return False

        config = self._config

        # Threshold is a percentage
        if not 0.0 <= config.cat_confidence_threshold <= 100.0:
            return False

        # Validate detection parameters
        if (config.detection_scale_factor <= 1.0 or
                config.detection_min_neighbors < 0 or
                config.detection_min_size <= 0 or
                config.detection_max_size <= config.detection_min_size):
            return False

        # Validate notification settings
        if config.notification_cooldown_seconds < 0:
            return False
        if config.notifications_enabled and not config.notification_webhook_url:
            return False

        if config.log_level.upper() not in VALID_LOG_LEVELS:
            return False

        return True

    def add_config_change_callback(self, callback: Callable[[SystemConfig], None]) -> None:
        """Add callback to be called when config changes."""
        self._config_change_callbacks.append(callback)

    def remove_config_change_callback(self, callback: Callable[[SystemConfig], None]) -> None:
        """Remove config change callback."""
        if callback in self._config_change_callbacks:
            self._config_change_callbacks.remove(callback)

    def _notify_callbacks(self) -> None:
        for callback in self._config_change_callbacks:
            try:
                callback(self._config)
            except Exception as e:
                logger.error(f"Error in config change callback: {e}")

    @staticmethod
    def _known_keys(config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Drop keys that SystemConfig does not define."""
        if not isinstance(config_dict, dict):
            raise TypeError("config file must contain a JSON object")
        known = {f.name for f in fields(SystemConfig)}
        return {k: v for k, v in config_dict.items() if k in known}
