"""Configuration-related constants for centralized configuration.

This module contains constants used for application configuration
to eliminate hardcoded values and improve maintainability.
"""

from typing import Final


class ConfigConstants:
    """Constants for application configuration settings."""

    # Backend endpoints
    DEFAULT_API_URL: Final[str] = "http://localhost:3000/api"
    DEFAULT_CDN_URL: Final[str] = "http://localhost:3000"
    DEFAULT_REQUEST_TIMEOUT: Final[int] = 60

    # Local persistence
    DEFAULT_STORAGE_DIRECTORY: Final[str] = "instance/storage"
    DEFAULT_STORAGE_FILE: Final[str] = "session_store.json"

    # UI Configuration
    DEFAULT_PAGE_TITLE: Final[str] = "AI Resume Builder"
    DEFAULT_PAGE_ICON: Final[str] = "📄"
    DEFAULT_LAYOUT: Final[str] = "wide"
    DEFAULT_PREVIEW_HEIGHT: Final[int] = 900

    # Logging
    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    DEFAULT_LOG_DIRECTORY: Final[str] = "instance/logs"
    DEFAULT_MAIN_LOG_FILE: Final[str] = "app.log"
    DEFAULT_ERROR_LOG_FILE: Final[str] = "error.log"
    DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    DEFAULT_JSON_LOG_FORMAT: Final[
        str
    ] = "%(asctime)s %(name)s %(levelname)s %(message)s %(filename)s %(lineno)d"

    # Environment
    DEFAULT_ENVIRONMENT: Final[str] = "development"
    DEFAULT_APP_NAME: Final[str] = "cvchat"
    DEFAULT_APP_VERSION: Final[str] = "0.1.0"
