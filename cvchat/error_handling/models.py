"""Core error models for the application."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    VALIDATION = "validation"
    NETWORK = "network"
    API_ERROR = "api_error"
    PARSING = "parsing"
    FORM_EDIT = "form_edit"
    STATE = "state"
    STORAGE = "storage"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


USER_MESSAGES = {
    ErrorCategory.VALIDATION: "Please check your input and try again.",
    ErrorCategory.NETWORK: "Network connection error. Please check your internet connection.",
    ErrorCategory.API_ERROR: "The resume service returned an error. Please try again.",
    ErrorCategory.PARSING: "Failed to process the server response.",
    ErrorCategory.FORM_EDIT: "That change is not allowed.",
    ErrorCategory.STATE: "That action is not available right now.",
    ErrorCategory.STORAGE: "Local data could not be saved.",
    ErrorCategory.CONFIGURATION: "Configuration error. Please contact support.",
    ErrorCategory.UNKNOWN: "An unexpected error occurred. Please try again.",
}


@dataclass
class ErrorContext:
    """Contextual information for errors."""

    error_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)
    component: Optional[str] = None
    operation: Optional[str] = None
    session_id: Optional[str] = None
    template_id: Optional[str] = None
    additional_data: Dict[str, Any] = field(default_factory=dict)
