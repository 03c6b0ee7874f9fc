"""Unit tests for error classification and Streamlit error boundaries."""

from unittest.mock import patch

from cvchat.error_handling.boundaries import handle_api_errors, safe_streamlit_component
from cvchat.error_handling.exceptions import (
    BackendResponseError,
    FormPathError,
    NetworkError,
    SessionPreconditionError,
)
from cvchat.error_handling.models import ErrorCategory, ErrorSeverity


class TestExceptions:
    def test_backend_error_carries_status_and_endpoint(self):
        error = BackendResponseError("bad", status_code=503, endpoint="/chat")

        assert error.category == ErrorCategory.API_ERROR
        assert error.context.additional_data["status_code"] == 503
        assert error.context.operation == "/chat"

    def test_precondition_error_is_a_value_error(self):
        error = SessionPreconditionError("missing", missing_data="session_id")

        assert isinstance(error, ValueError)
        assert error.context.additional_data["missing_data"] == "session_id"

    def test_form_path_error_reads_plainly(self):
        error = FormPathError("Unknown section 'x'", section="x")

        assert isinstance(error, KeyError)
        assert str(error) == "Unknown section 'x'"
        assert error.severity == ErrorSeverity.LOW


class TestHandleApiErrors:
    """Test cases for the backend alert decorator."""

    @patch("streamlit.error")
    def test_network_error_uses_alert_message(self, mock_error):
        # Arrange
        @handle_api_errors(alert_message="Could not load")
        def action():
            raise NetworkError("timeout")

        # Act
        result = action()

        # Assert
        assert result is None
        assert "Could not load" in mock_error.call_args.args[0]

    @patch("streamlit.error")
    def test_backend_error_without_alert_uses_its_message(self, mock_error):
        @handle_api_errors()
        def action():
            raise BackendResponseError("Session expired")

        action()

        assert "Session expired" in mock_error.call_args.args[0]

    @patch("streamlit.error")
    def test_success_passes_through(self, mock_error):
        @handle_api_errors()
        def action():
            return 7

        assert action() == 7
        mock_error.assert_not_called()


class TestSafeStreamlitComponent:
    @patch("streamlit.warning")
    def test_unexpected_error_is_contained(self, mock_warning):
        # Arrange
        @safe_streamlit_component(component_name="screen")
        def render():
            raise ValueError("boom")

        # Act
        result = render()

        # Assert
        assert result is None
        mock_warning.assert_called_once()
