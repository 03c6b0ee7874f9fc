"""Configuration management for the resume builder client.

This module provides centralized configuration management for the application,
including backend URLs, local storage paths, UI settings and logging.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from cvchat.constants.config_constants import ConfigConstants
from cvchat.constants.form_constants import FormConstants
from cvchat.error_handling.exceptions import ConfigurationError


def _load_environment_variables():
    """Load environment variables from the project .env file, if present."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)


# Load environment variables at module level
_load_environment_variables()


@dataclass
class ApiConfig:
    """Backend and content server endpoints."""

    api_url: str = field(
        default_factory=lambda: os.getenv("API_URL", ConfigConstants.DEFAULT_API_URL)
    )
    cdn_url: str = field(
        default_factory=lambda: os.getenv("CDN_URL", ConfigConstants.DEFAULT_CDN_URL)
    )
    request_timeout: int = field(
        default_factory=lambda: int(
            os.getenv(
                "REQUEST_TIMEOUT_SECONDS", str(ConfigConstants.DEFAULT_REQUEST_TIMEOUT)
            )
        )
    )

    def __post_init__(self):
        self.api_url = self.api_url.rstrip("/")
        self.cdn_url = self.cdn_url.rstrip("/")
        for key, value in (("API_URL", self.api_url), ("CDN_URL", self.cdn_url)):
            if not value.startswith(("http://", "https://")):
                raise ConfigurationError(
                    f"{key} must be an http(s) URL, got {value!r}", config_key=key
                )
        if self.request_timeout <= 0:
            raise ConfigurationError(
                "REQUEST_TIMEOUT_SECONDS must be positive",
                config_key="REQUEST_TIMEOUT_SECONDS",
            )


@dataclass
class StorageConfig:
    """Configuration for local session persistence."""

    directory: str = field(
        default_factory=lambda: os.getenv(
            "STORAGE_DIRECTORY", ConfigConstants.DEFAULT_STORAGE_DIRECTORY
        )
    )
    filename: str = field(
        default_factory=lambda: os.getenv(
            "STORAGE_FILE", ConfigConstants.DEFAULT_STORAGE_FILE
        )
    )

    @property
    def path(self) -> Path:
        return Path(self.directory) / self.filename


@dataclass
class FormConfig:
    """Limits applied by the form data model."""

    max_entries_per_section: int = field(
        default_factory=lambda: int(
            os.getenv(
                "FORM_MAX_ENTRIES_PER_SECTION",
                str(FormConstants.MAX_ENTRIES_PER_SECTION),
            )
        )
    )


@dataclass
class UIConfig:
    """Configuration for user interface settings."""

    page_title: str = field(
        default_factory=lambda: os.getenv(
            "UI_PAGE_TITLE", ConfigConstants.DEFAULT_PAGE_TITLE
        )
    )
    page_icon: str = field(
        default_factory=lambda: os.getenv("UI_PAGE_ICON", ConfigConstants.DEFAULT_PAGE_ICON)
    )
    layout: str = field(
        default_factory=lambda: os.getenv("UI_LAYOUT", ConfigConstants.DEFAULT_LAYOUT)
    )
    preview_height: int = field(
        default_factory=lambda: int(
            os.getenv("UI_PREVIEW_HEIGHT", str(ConfigConstants.DEFAULT_PREVIEW_HEIGHT))
        )
    )
    show_debug_information: bool = field(
        default_factory=lambda: os.getenv("UI_SHOW_DEBUG", "false").lower() == "true"
    )


@dataclass
class LoggingConfig:
    """Configuration for logging settings."""

    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", ConfigConstants.DEFAULT_LOG_LEVEL)
    )
    log_directory: str = field(
        default_factory=lambda: os.getenv(
            "LOG_DIRECTORY", ConfigConstants.DEFAULT_LOG_DIRECTORY
        )
    )
    main_log_file: str = field(
        default_factory=lambda: os.getenv(
            "LOG_MAIN_FILE", ConfigConstants.DEFAULT_MAIN_LOG_FILE
        )
    )
    error_log_file: str = field(
        default_factory=lambda: os.getenv(
            "LOG_ERROR_FILE", ConfigConstants.DEFAULT_ERROR_LOG_FILE
        )
    )
    log_to_console: bool = field(
        default_factory=lambda: os.getenv("LOG_TO_CONSOLE", "true").lower() == "true"
    )


@dataclass
class EnvironmentConfig:
    """Environment-specific settings."""

    environment: str = field(
        default_factory=lambda: os.getenv(
            "ENVIRONMENT", ConfigConstants.DEFAULT_ENVIRONMENT
        )
    )
    debug: bool = field(
        default_factory=lambda: os.getenv("DEBUG", "true").lower() == "true"
    )


@dataclass
class ApplicationMetadataConfig:
    """Application metadata settings."""

    app_name: str = field(
        default_factory=lambda: os.getenv("APP_NAME", ConfigConstants.DEFAULT_APP_NAME)
    )
    app_version: str = field(
        default_factory=lambda: os.getenv(
            "APP_VERSION", ConfigConstants.DEFAULT_APP_VERSION
        )
    )


@dataclass
class AppConfig:
    """Main application configuration."""

    api: ApiConfig = field(default_factory=ApiConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    form: FormConfig = field(default_factory=FormConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    env: EnvironmentConfig = field(default_factory=EnvironmentConfig)
    metadata: ApplicationMetadataConfig = field(
        default_factory=ApplicationMetadataConfig
    )

    def __post_init__(self):
        """Apply environment-specific adjustments."""
        if self.env.environment == "development":
            self.ui.show_debug_information = True
        elif self.env.environment == "testing":
            self.logging.log_to_console = False
        elif self.env.environment == "production":
            self.env.debug = False
            self.logging.log_level = "WARNING"
            self.ui.show_debug_information = False

    def asset_url(self, path: str) -> str:
        """Join a backend-returned asset path onto the content server URL."""
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.api.cdn_url}{path}"


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


def reload_config() -> AppConfig:
    """Reload the configuration from environment variables."""
    global _config
    _config = AppConfig()
    return _config


def update_config(**kwargs) -> None:
    """Update configuration values."""
    config = get_config()
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
        else:
            raise ValueError(f"Unknown configuration key: {key}")
