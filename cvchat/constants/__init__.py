"""Constants package for centralized configuration values.

This package provides centralized constants to eliminate hardcoded values
throughout the codebase and improve maintainability.
"""

from cvchat.constants.config_constants import ConfigConstants
from cvchat.constants.error_constants import ErrorConstants
from cvchat.constants.form_constants import FormConstants
from cvchat.constants.storage_constants import StorageConstants
from cvchat.constants.ui_constants import UIConstants

__all__ = [
    "ConfigConstants",
    "ErrorConstants",
    "FormConstants",
    "StorageConstants",
    "UIConstants",
]
