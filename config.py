#!/usr/bin/env python3
"""
Configuration Management for Show Matcher
Uses pydantic-settings for type-safe configuration with environment variable support
"""
import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from showmatch.constants import (
    AUTO_SELECT_MIN_GAP,
    AUTO_SELECT_MIN_SCORE,
    PRESELECT_MIN_GAP,
    PRESELECT_MIN_SCORE,
    YEAR_TOLERANCE,
    Thresholds,
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # ========== Application Info ==========
    app_name: str = Field(default="Show Matcher", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")

    # ========== Show Selection ==========
    auto_select_min_score: float = Field(
        default=AUTO_SELECT_MIN_SCORE,
        ge=0.0,
        le=1.0,
        description="Minimum fuzzy score to auto-select a show candidate"
    )
    auto_select_min_gap: float = Field(
        default=AUTO_SELECT_MIN_GAP,
        ge=0.0,
        le=1.0,
        description="Minimum lead over the second best show candidate"
    )
    year_tolerance: int = Field(
        default=YEAR_TOLERANCE,
        ge=0,
        le=5,
        description="Accepted distance between extracted and first aired year"
    )

    # ========== Episode Pre-selection ==========
    preselect_min_score: float = Field(
        default=PRESELECT_MIN_SCORE,
        ge=0.0,
        le=1.0,
        description="Minimum fuzzy score to pre-select an episode title"
    )
    preselect_min_gap: float = Field(
        default=PRESELECT_MIN_GAP,
        ge=0.0,
        le=1.0,
        description="Minimum lead over the other episode title"
    )

    # ========== Processing Settings ==========
    max_workers: int = Field(
        default=4,
        ge=1,
        description="Concurrent show lookups"
    )

    # ========== Logging Settings ==========
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Log file path (None for stderr only)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="SHOW_MATCHER_",  # Environment variables: SHOW_MATCHER_MAX_WORKERS, etc.
        extra="ignore"  # Ignore extra fields in .env
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept any case, store the canonical level name"""
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("log_file")
    @classmethod
    def expand_path(cls, v):
        """Expand user home directory"""
        if v is None:
            return v
        return Path(v).expanduser()

    def auto_select_thresholds(self) -> Thresholds:
        return Thresholds(self.auto_select_min_score, self.auto_select_min_gap)

    def preselect_thresholds(self) -> Thresholds:
        return Thresholds(self.preselect_min_score, self.preselect_min_gap)

    def to_dict(self) -> dict:
        """Convert settings to dictionary"""
        return self.model_dump()


def configure_logging(settings: Settings) -> None:
    """Configure root logging for the command-line host"""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    level = "DEBUG" if settings.debug else settings.log_level
    logging.basicConfig(
        level=getattr(logging, level),
        format='%(levelname)s: %(message)s',
        handlers=handlers,
        force=True,
    )


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create settings singleton"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment/file"""
    global _settings
    _settings = Settings()
    return _settings


if __name__ == "__main__":
    # Show the effective configuration
    import json

    print("Show Matcher - Configuration")
    print("=" * 50)
    print(json.dumps(get_settings().to_dict(), indent=2, default=str))
