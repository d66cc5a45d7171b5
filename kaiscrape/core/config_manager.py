"""
Configuration Manager - JSON-based settings management.

This module provides centralized configuration management for kaiscrape,
handling user preferences with validation, atomic persistence and default
value management.
"""

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from kaiscrape.core.config_schemas import AppSettings
from kaiscrape.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Manages application settings with JSON persistence and validation.

    Provides thread-safe access to configuration data with automatic
    validation and default value management.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Directory containing configuration files.
                       Defaults to './config' if not specified.
        """
        self.config_dir = Path(config_dir or "config")
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._settings_file = self.config_dir / "settings.json"

        self._lock = Lock()
        self._settings: Optional[AppSettings] = None

        self._load_configurations()

    def _load_configurations(self) -> None:
        """Load all configuration files with error handling."""
        try:
            self._settings = self._load_settings()
            logger.debug("Configuration loaded successfully")
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise ConfigurationError(f"Configuration loading failed: {e}", str(self._settings_file))

    def _load_settings(self) -> AppSettings:
        """Load and validate application settings."""
        if not self._settings_file.exists():
            logger.info("Settings file not found, creating default configuration")
            settings = AppSettings()
            self._save_settings(settings)
            return settings

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return AppSettings.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Invalid settings file, using defaults: {e}")
            # Backup corrupted file
            backup_path = self._settings_file.with_suffix('.json.backup')
            self._settings_file.replace(backup_path)
            logger.info(f"Corrupted settings backed up to {backup_path}")

            settings = AppSettings()
            self._save_settings(settings)
            return settings

    def _save_settings(self, settings: AppSettings) -> None:
        """Save settings to file with atomic write."""
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings.model_dump(), f, indent=2, ensure_ascii=False)
            temp_file.replace(self._settings_file)
            logger.debug("Settings saved successfully")
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise ConfigurationError(f"Failed to save settings: {e}", str(self._settings_file))

    @property
    def settings(self) -> AppSettings:
        """Get current application settings (thread-safe)."""
        with self._lock:
            if self._settings is None:
                self._settings = self._load_settings()
            return self._settings

    def update_setting(self, key_path: str, value: Any) -> None:
        """
        Update a specific setting using dot notation.

        Args:
            key_path: Dot-separated path to the setting (e.g., 'site.base_url')
            value: New value for the setting

        Raises:
            ConfigurationError: If key path is invalid or value is invalid
        """
        with self._lock:
            if self._settings is None:
                raise ConfigurationError("Settings not loaded")

            settings_dict = self._settings.model_dump()

            keys = key_path.split('.')
            current = settings_dict

            for key in keys[:-1]:
                if not isinstance(current, dict) or key not in current:
                    raise ConfigurationError(f"Invalid setting path: {key_path}")
                current = current[key]

            final_key = keys[-1]
            if not isinstance(current, dict) or final_key not in current:
                raise ConfigurationError(f"Invalid setting key: {final_key}")

            current[final_key] = value

            try:
                updated_settings = AppSettings.model_validate(settings_dict)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid setting value: {e}")

            self._settings = updated_settings
            self._save_settings(updated_settings)
            logger.info(f"Setting updated: {key_path} = {value}")

    def get_setting(self, key_path: str, default: Any = None) -> Any:
        """
        Get a specific setting using dot notation.

        Args:
            key_path: Dot-separated path to the setting
            default: Default value if setting not found

        Returns:
            The setting value or default
        """
        with self._lock:
            if self._settings is None:
                return default

            current: Any = self._settings.model_dump()

            try:
                for key in key_path.split('.'):
                    current = current[key]
                return current
            except (KeyError, TypeError):
                return default

    def reload_configuration(self) -> None:
        """Reload configuration from files."""
        with self._lock:
            logger.info("Reloading configuration from files")
            self._settings = None
            self._load_configurations()

    def reset_to_defaults(self) -> None:
        """Reset all configuration to default values."""
        with self._lock:
            logger.warning("Resetting configuration to defaults")
            self._settings = AppSettings()
            self._save_settings(self._settings)

    def validate_configuration(self) -> Dict[str, Any]:
        """
        Validate current configuration and return validation report.

        Returns:
            Dictionary containing validation results and any issues found
        """
        report: Dict[str, Any] = {
            "valid": True,
            "issues": [],
            "warnings": []
        }

        try:
            if self._settings:
                AppSettings.model_validate(self._settings.model_dump())
            else:
                report["issues"].append("Settings not loaded")
                report["valid"] = False
        except ValidationError as e:
            report["valid"] = False
            report["issues"].append(f"Settings validation failed: {e}")

        if self._settings and not self._settings.network.enable_fallback_fetch:
            report["warnings"].append("Fallback fetch is disabled; a single failed request aborts a stage")

        if self._settings and self._settings.logging.file:
            log_dir = Path(self._settings.logging.file).expanduser().parent
            if not log_dir.exists():
                report["warnings"].append(f"Log file directory does not exist: {log_dir}")

        return report


__all__ = ["ConfigManager"]
