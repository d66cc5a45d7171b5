"""
CLI Context - Global application state shared by commands.

The main callback stores the configuration manager here so commands can
reach it without circular imports.
"""

from typing import Any, Dict, Optional

from kaiscrape.core import ConfigManager
from kaiscrape.plugins.animekai import AnimeKaiConfig


# Global application state
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    if _config_manager is None:
        raise RuntimeError("Configuration manager not initialized")
    return _config_manager


def set_config_manager(config_manager: ConfigManager) -> None:
    """Set the global configuration manager instance."""
    global _config_manager
    _config_manager = config_manager


def get_plugin_config() -> Dict[str, Any]:
    """Plugin configuration derived from the current settings."""
    return AnimeKaiConfig.from_settings(get_config_manager().settings).to_dict()


# Export context functions
__all__ = [
    "get_config_manager",
    "set_config_manager",
    "get_plugin_config",
]
