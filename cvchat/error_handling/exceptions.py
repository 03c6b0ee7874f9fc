"""Custom exception classes for the cvchat application.

Errors are classified by type rather than by message text: network failures,
backend rejections, precondition failures caught before any call, and form
edits the data model refuses.
"""

from typing import Optional

from .models import USER_MESSAGES, ErrorCategory, ErrorContext, ErrorSeverity


class CvChatError(Exception):
    """Base class for all application-specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[ErrorContext] = None,
        original_exception: Optional[Exception] = None,
        **kwargs,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.original_exception = original_exception
        self.context.additional_data.update(kwargs)

    @property
    def user_message(self) -> str:
        """Generic text for the error category."""
        return USER_MESSAGES.get(self.category, USER_MESSAGES[ErrorCategory.UNKNOWN])


class NetworkError(CvChatError):
    """Raised when the backend or content server cannot be reached."""

    def __init__(self, message: str, url: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.NETWORK,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )
        if url:
            self.context.additional_data["url"] = url


class BackendResponseError(CvChatError):
    """Raised for non-2xx responses or `success: false` envelopes."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.API_ERROR,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )
        self.status_code = status_code
        if status_code is not None:
            self.context.additional_data["status_code"] = status_code
        if endpoint:
            self.context.operation = endpoint


class SessionPreconditionError(ValueError, CvChatError):
    """Raised before a backend call when session, template or input is missing."""

    def __init__(self, message: str, missing_data: Optional[str] = None, **kwargs):
        ValueError.__init__(self, message)
        CvChatError.__init__(
            self,
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.MEDIUM,
            **kwargs,
        )
        if missing_data:
            self.context.additional_data["missing_data"] = missing_data


class FormSpecificationError(ValueError, CvChatError):
    """Raised when a form specification cannot be parsed."""

    def __init__(self, message: str, **kwargs):
        ValueError.__init__(self, message)
        CvChatError.__init__(
            self,
            message=message,
            category=ErrorCategory.PARSING,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )


class FormEditError(CvChatError):
    """Base class for edits the form data model refuses."""

    def __init__(self, message: str, section: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.FORM_EDIT,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.section = section
        if section:
            self.context.additional_data["section"] = section


class FormPathError(FormEditError, KeyError):
    """Raised when a field path does not match the section kind."""

    def __str__(self) -> str:
        return self.message


class EntryLimitReachedError(FormEditError):
    """Raised when a section already holds the maximum number of entries."""


class LastEntryRemovalError(FormEditError):
    """Raised when removing an entry would empty a fixed-fields section."""


class InvalidTransitionError(CvChatError):
    """Raised for a screen mode change that is not allowed."""

    def __init__(self, current, requested, **kwargs):
        super().__init__(
            message=f"Cannot move from {current.value} to {requested.value}",
            category=ErrorCategory.STATE,
            severity=ErrorSeverity.MEDIUM,
            **kwargs,
        )
        self.current = current
        self.requested = requested


class StorageError(CvChatError):
    """Raised when local persistence fails."""

    def __init__(self, message: str, key: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.STORAGE,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        if key:
            self.context.additional_data["key"] = key


class PreviewLoadError(CvChatError):
    """Raised when preview HTML cannot be loaded from the content server."""

    def __init__(self, message: str, resume_path: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.NETWORK,
            severity=ErrorSeverity.MEDIUM,
            **kwargs,
        )
        if resume_path:
            self.context.additional_data["resume_path"] = resume_path


class ConfigurationError(CvChatError):
    """Raised for configuration-related issues."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )
        if config_key:
            self.context.additional_data["config_key"] = config_key


# Exceptions UI handlers catch and surface; anything else propagates.
CATCHABLE_EXCEPTIONS = (
    CvChatError,
    ValueError,
    TypeError,
    KeyError,
    IOError,
    ConnectionError,
)
