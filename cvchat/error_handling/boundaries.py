"""
Error Boundaries for Streamlit Components

This module provides error boundary decorators and context managers for handling
errors gracefully in the Streamlit screens, preventing crashes and providing
user-friendly error messages.
"""

import functools
import traceback
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Optional

import streamlit as st

from .exceptions import CATCHABLE_EXCEPTIONS, CvChatError, NetworkError
from .models import ErrorSeverity
from ..config.logging_config import get_logger, log_error_with_context

logger = get_logger(__name__)


class StreamlitErrorBoundary:
    """Error boundary for Streamlit components with user-friendly error handling."""

    def __init__(
        self,
        component_name: str,
        show_error_details: bool = False,
        fallback_message: Optional[str] = None,
        severity: str = ErrorSeverity.MEDIUM,
    ):
        self.component_name = component_name
        self.show_error_details = show_error_details
        self.fallback_message = (
            fallback_message or f"An error occurred in {component_name}"
        )
        self.severity = severity

    def __call__(self, func: Callable) -> Callable:
        """Decorator to wrap functions with error boundary."""

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except CATCHABLE_EXCEPTIONS as e:
                self._handle_error(e, func.__name__)
                return None

        return wrapper

    def _handle_error(self, error: Exception, func_name: str):
        """Log the error and display it."""
        error_id = self._generate_error_id()
        log_error_with_context(
            logger, f"Error in {self.component_name}.{func_name} [{error_id}]", error
        )
        self._display_error_message(error, error_id)

    def _generate_error_id(self) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"ERR_{self.component_name}_{timestamp}"

    def _display_error_message(self, error: Exception, error_id: str):
        """Display appropriate error message to user."""
        if self.severity in (ErrorSeverity.CRITICAL, ErrorSeverity.HIGH):
            st.error(f"❌ {self.fallback_message}")
            st.info(f"Error ID: {error_id} - Please try again.")
        else:
            st.warning(f"⚠️ {self.fallback_message}")
        if self.show_error_details:
            with st.expander("Technical Details"):
                st.code(str(error))
                st.code(traceback.format_exc())


@contextmanager
def error_boundary(
    component_name: str,
    severity: str = ErrorSeverity.MEDIUM,
    show_details: bool = False,
    fallback_message: Optional[str] = None,
):
    """Context manager for error boundaries."""
    try:
        yield
    except CATCHABLE_EXCEPTIONS as e:
        boundary = StreamlitErrorBoundary(
            component_name=component_name,
            show_error_details=show_details,
            fallback_message=fallback_message,
            severity=severity,
        )
        boundary._handle_error(e, "context_manager")


def safe_streamlit_component(
    component_name: str,
    severity: str = ErrorSeverity.MEDIUM,
    show_details: bool = False,
    fallback_message: Optional[str] = None,
):
    """Decorator for making Streamlit components safe with error boundaries."""
    return StreamlitErrorBoundary(
        component_name=component_name,
        show_error_details=show_details,
        fallback_message=fallback_message,
        severity=severity,
    )


def handle_api_errors(alert_message: Optional[str] = None) -> Callable:
    """Decorator for handlers that call the backend.

    Failures become a blocking alert; the handler returns None.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except NetworkError as e:
                log_error_with_context(logger, f"Network error in {func.__name__}", e)
                st.error(f"🌐 {alert_message or e.user_message}")
            except CvChatError as e:
                log_error_with_context(logger, f"Backend error in {func.__name__}", e)
                st.error(f"❌ {alert_message or e.message}")
            return None

        return wrapper

    return decorator
