"""
Configuration Defaults - Default configuration templates.
"""

import json
from pathlib import Path

from kaiscrape.core.config_schemas import AppSettings


def get_default_settings() -> AppSettings:
    """
    Get default application settings.

    Returns:
        AppSettings instance with sensible defaults
    """
    return AppSettings()


def create_default_config_files(config_dir: Path) -> None:
    """
    Create default configuration files in the specified directory.

    Existing files are left untouched.

    Args:
        config_dir: Directory to create configuration files in
    """
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / "settings.json"
    if not settings_file.exists():
        settings = get_default_settings()
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings.model_dump(), f, indent=2, ensure_ascii=False)


__all__ = ["get_default_settings", "create_default_config_files"]
