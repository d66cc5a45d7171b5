"""
Info Command - Application and configuration overview.
"""

import platform
import sys
from typing import Any, Dict

from kaiscrape import __version__
from kaiscrape.core import ConfigManager
from kaiscrape.plugins.animekai import plugin_metadata
from kaiscrape.ui import UIComponents, get_console


def show_application_info(config_manager: ConfigManager) -> None:
    """
    Display application, site and configuration information.

    Args:
        config_manager: Configuration manager instance
    """
    console = get_console()
    ui = UIComponents(config_manager.settings.ui.table_style)

    console.print(ui.create_info_panel(
        ui.create_status_grid(_gather_application_info(config_manager)),
        title="📱 Application Information"
    ))
    console.print()
    console.print(ui.create_info_panel(
        ui.create_status_grid(_gather_configuration_info(config_manager)),
        title="⚙️  Configuration Status"
    ))


def _gather_application_info(config_manager: ConfigManager) -> Dict[str, Any]:
    return {
        "Version": __version__,
        "Site Adapter": f"{plugin_metadata.name} v{plugin_metadata.version}",
        "Python Version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        "Operating System": f"{platform.system()} {platform.release()}",
        "Configuration Directory": str(config_manager.config_dir),
    }


def _gather_configuration_info(config_manager: ConfigManager) -> Dict[str, Any]:
    settings = config_manager.settings
    report = config_manager.validate_configuration()

    warnings_count = len(report["warnings"])

    return {
        "Configuration Status": "✅ Valid" if report["valid"] else "⚠️  Issues",
        "Warnings": f"{warnings_count} warnings" if warnings_count else "None",
        "Site": settings.site.base_url,
        "Network Timeout": f"{settings.network.timeout}s",
        "Fallback Fetch": "✅ Enabled" if settings.network.enable_fallback_fetch else "❌ Disabled",
        "Log Level": settings.logging.level,
        "Log File": settings.logging.file or "-",
        "Theme": settings.ui.color_theme.title(),
    }


# Export info functions
__all__ = ["show_application_info"]
