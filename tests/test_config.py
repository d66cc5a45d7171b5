import json

import pytest

from kaiscrape.core import ConfigManager, create_default_config_files
from kaiscrape.core.config_schemas import AppSettings, LoggingSettings
from kaiscrape.core.exceptions import ConfigurationError
from kaiscrape.plugins.animekai import AnimeKaiConfig, get_default_config, validate_config


def test_defaults_are_created(tmp_path):
    manager = ConfigManager(tmp_path)

    assert (tmp_path / "settings.json").exists()
    assert manager.settings.site.base_url == "https://animekai.to"
    assert manager.settings.network.enable_fallback_fetch is True


def test_create_default_config_files_keeps_existing(tmp_path):
    settings_file = tmp_path / "settings.json"
    create_default_config_files(tmp_path)
    settings_file.write_text(json.dumps({"network": {"timeout": 45}}), encoding="utf-8")

    create_default_config_files(tmp_path)

    assert ConfigManager(tmp_path).settings.network.timeout == 45


def test_update_and_get_setting(tmp_path):
    manager = ConfigManager(tmp_path)

    manager.update_setting("network.timeout", 60)

    assert manager.get_setting("network.timeout") == 60
    assert ConfigManager(tmp_path).settings.network.timeout == 60
    assert manager.get_setting("network.missing", "fallback") == "fallback"


def test_invalid_values_are_rejected(tmp_path):
    manager = ConfigManager(tmp_path)

    with pytest.raises(ConfigurationError):
        manager.update_setting("network.timeout", 1)
    with pytest.raises(ConfigurationError):
        manager.update_setting("site.base_url", "animekai.to")
    with pytest.raises(ConfigurationError):
        manager.update_setting("nope.value", 1)

    assert manager.settings.network.timeout == 30


def test_corrupt_settings_are_backed_up(tmp_path):
    (tmp_path / "settings.json").write_text("{not json", encoding="utf-8")

    manager = ConfigManager(tmp_path)

    assert manager.settings == AppSettings()
    assert (tmp_path / "settings.json.backup").read_text(encoding="utf-8") == "{not json"


def test_reset_to_defaults(tmp_path):
    manager = ConfigManager(tmp_path)
    manager.update_setting("ui.color_theme", "dark")

    manager.reset_to_defaults()

    assert manager.settings.ui.color_theme == "default"


def test_validation_report_warns_when_fallback_disabled(tmp_path):
    manager = ConfigManager(tmp_path)
    manager.update_setting("network.enable_fallback_fetch", False)

    report = manager.validate_configuration()

    assert report["valid"]
    assert report["warnings"]


def test_log_size_in_bytes():
    assert LoggingSettings(max_size="10mb").max_bytes == 10 * 1024 * 1024
    assert LoggingSettings(max_size="512B").max_bytes == 512


def test_plugin_config_from_settings():
    settings = AppSettings.model_validate({
        "network": {"timeout": 15, "enable_fallback_fetch": False},
        "site": {"base_url": "https://animekai.bz/"},
    })

    config = AnimeKaiConfig.from_settings(settings)

    assert config.base_url == "https://animekai.bz"
    assert config.timeout == 15
    assert config.enable_fallback_fetch is False


def test_validate_plugin_config():
    assert validate_config(get_default_config())["base_url"] == "https://animekai.to"

    with pytest.raises(ValueError):
        validate_config({"timeout": 0})
