"""
Tests for configuration management
"""
import logging

import pytest

from config import Settings, configure_logging, get_settings, reload_settings
from showmatch.constants import AUTO_SELECT_THRESHOLDS, PRESELECT_THRESHOLDS


def test_settings_defaults():
    """Test that settings have sensible defaults"""
    settings = Settings()

    assert settings.app_name == "Show Matcher"
    assert settings.auto_select_min_score == 0.80
    assert settings.auto_select_min_gap == 0.10
    assert settings.preselect_min_score == 0.60
    assert settings.preselect_min_gap == 0.15
    assert settings.year_tolerance == 1
    assert settings.max_workers == 4
    assert settings.debug is False


def test_settings_thresholds_match_constants():
    """Default thresholds equal the named constants"""
    settings = Settings()

    assert settings.auto_select_thresholds() == AUTO_SELECT_THRESHOLDS
    assert settings.preselect_thresholds() == PRESELECT_THRESHOLDS


def test_settings_from_environment(monkeypatch):
    """Environment variables override defaults"""
    monkeypatch.setenv("SHOW_MATCHER_AUTO_SELECT_MIN_SCORE", "0.9")
    monkeypatch.setenv("SHOW_MATCHER_MAX_WORKERS", "8")

    settings = Settings()

    assert settings.auto_select_min_score == 0.9
    assert settings.max_workers == 8


def test_settings_validation():
    """Test settings validation"""
    settings = Settings(auto_select_min_gap=0.2)
    assert settings.auto_select_min_gap == 0.2

    with pytest.raises(Exception):
        Settings(auto_select_min_score=1.5)  # Above 1.0

    with pytest.raises(Exception):
        Settings(max_workers=0)

    with pytest.raises(Exception):
        Settings(log_level="CHATTY")


def test_log_level_is_normalized():
    """Log level accepts any case"""
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_settings_singleton():
    """Test that get_settings returns the same instance"""
    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2


def test_reload_settings_replaces_singleton(monkeypatch):
    """reload_settings picks up new environment values"""
    first = get_settings()
    monkeypatch.setenv("SHOW_MATCHER_YEAR_TOLERANCE", "2")

    reloaded = reload_settings()

    assert reloaded is not first
    assert reloaded.year_tolerance == 2
    assert get_settings() is reloaded

    monkeypatch.delenv("SHOW_MATCHER_YEAR_TOLERANCE")
    reload_settings()


def test_settings_to_dict():
    """Test conversion to dictionary"""
    config_dict = Settings().to_dict()

    assert isinstance(config_dict, dict)
    assert config_dict["app_name"] == "Show Matcher"
    assert "auto_select_min_score" in config_dict


def test_configure_logging_with_file(tmp_path):
    """A log file handler is added when log_file is set"""
    log_file = tmp_path / "logs" / "matcher.log"
    settings = Settings(log_file=log_file, log_level="INFO")

    configure_logging(settings)
    logging.getLogger("showmatch.test").info("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_file.exists()
    assert "hello" in log_file.read_text(encoding="utf-8")

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
