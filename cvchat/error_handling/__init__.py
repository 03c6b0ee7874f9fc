"""Error handling module for the cvchat application."""

from .exceptions import (
    CATCHABLE_EXCEPTIONS,
    BackendResponseError,
    ConfigurationError,
    CvChatError,
    EntryLimitReachedError,
    FormEditError,
    FormPathError,
    FormSpecificationError,
    InvalidTransitionError,
    LastEntryRemovalError,
    NetworkError,
    PreviewLoadError,
    SessionPreconditionError,
    StorageError,
)
from .models import ErrorCategory, ErrorContext, ErrorSeverity

# StreamlitErrorBoundary is imported from .boundaries directly to keep
# streamlit out of non-UI imports.

__all__ = [
    "CATCHABLE_EXCEPTIONS",
    "BackendResponseError",
    "ConfigurationError",
    "CvChatError",
    "EntryLimitReachedError",
    "FormEditError",
    "FormPathError",
    "FormSpecificationError",
    "InvalidTransitionError",
    "LastEntryRemovalError",
    "NetworkError",
    "PreviewLoadError",
    "SessionPreconditionError",
    "StorageError",
    "ErrorCategory",
    "ErrorContext",
    "ErrorSeverity",
]
