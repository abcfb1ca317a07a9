"""
Thumbmark v1 - Shared Configuration Module

This module provides centralized configuration management for the CLI and
the web UI. It loads settings from environment variables and provides typed
access.
"""

import logging
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class DatabaseSettings(BaseSettings):
    """Bookmark store configuration"""
    path: str = Field(default="bookmarks.db", alias="THUMBMARK_DB_PATH")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class StorageSettings(BaseSettings):
    """Thumbnail file store configuration"""
    thumbnail_dir: str = Field(default="thumbnails", alias="THUMBNAIL_DIR")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


WaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]


class CaptureSettings(BaseSettings):
    """Headless browser capture configuration"""
    timeout: float = Field(default=30.0, gt=0, alias="CAPTURE_TIMEOUT")
    viewport_width: int = Field(default=1280, ge=1, alias="CAPTURE_VIEWPORT_WIDTH")
    viewport_height: int = Field(default=720, ge=1, alias="CAPTURE_VIEWPORT_HEIGHT")
    wait_until: WaitUntil = Field(default="load", alias="CAPTURE_WAIT_UNTIL")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class AppSettings(BaseSettings):
    """General application settings"""
    env: str = Field(default="development", alias="APP_ENV")
    debug: bool = Field(default=False, alias="APP_DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    host: str = Field(default="127.0.0.1", alias="APP_HOST")
    port: int = Field(default=8080, alias="APP_PORT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class Config:
    """Main configuration class that combines all settings"""

    def __init__(self):
        self.database = DatabaseSettings()
        self.storage = StorageSettings()
        self.capture = CaptureSettings()
        self.app = AppSettings()

    @property
    def is_development(self) -> bool:
        return self.app.env == "development"

    @property
    def is_production(self) -> bool:
        return self.app.env == "production"


# Global config instance, created on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance"""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_env(env_file: str = ".env") -> None:
    """Load environment variables from file"""
    from dotenv import load_dotenv
    env_path = Path(env_file)
    if env_path.exists():
        load_dotenv(env_path)
    else:
        logger.debug(f"{env_file} not found, using process environment only")


def configure_logging(level: str | None = None) -> None:
    """Configure root logging in the format shared by every entry point"""
    logging.basicConfig(
        level=(level or get_config().app.log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
