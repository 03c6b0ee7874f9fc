"""Unit tests for the Streamlit widget callbacks."""

from unittest.mock import Mock, patch

import pytest

from cvchat.constants.error_constants import ErrorConstants
from cvchat.error_handling.exceptions import (
    BackendResponseError,
    EntryLimitReachedError,
    LastEntryRemovalError,
    SessionPreconditionError,
)
from cvchat.frontend import callbacks
from cvchat.frontend.state_helpers import CONTEXT_KEY, StateManager


@pytest.fixture
def session_state():
    with patch("streamlit.session_state", new_callable=lambda: {}) as mock_session_state:
        yield mock_session_state


@pytest.fixture
def context(settings):
    ctx = Mock()
    ctx.settings = settings
    ctx.form_spec = None
    return ctx


@pytest.fixture
def state(session_state, context):
    session_state[CONTEXT_KEY] = context
    return StateManager()


class TestFormEditCallbacks:
    """Test cases for form edit callbacks."""

    def test_field_change_reads_widget_value(self, state, context, session_state):
        # Arrange
        session_state["basic::name::0"] = "Ada"

        # Act
        callbacks.handle_field_change(state, ("basicInfo", "name"), "basic::name::0")

        # Assert
        context.set_field.assert_called_once_with(("basicInfo", "name"), "Ada")

    def test_entry_limit_becomes_notice(self, state, context):
        # Arrange
        context.add_entry.side_effect = EntryLimitReachedError(
            "full", section="workExperience", limit=10
        )

        # Act
        callbacks.handle_add_entry(state, "workExperience")

        # Assert
        assert state.pop_notices() == [
            (
                "warning",
                ErrorConstants.MSG_ENTRY_LIMIT_REACHED.format(
                    limit=10, section="Work Experience"
                ),
            )
        ]
        assert state.form_revision == 0

    def test_successful_add_bumps_revision(self, state, context):
        callbacks.handle_add_entry(state, "workExperience")

        assert state.form_revision == 1

    def test_edit_without_spec_becomes_error_notice(self, state, context):
        context.toggle_suggestion.side_effect = SessionPreconditionError("Chat first")

        callbacks.handle_toggle_suggestion(state, "skills", "Python")

        assert state.pop_notices() == [("error", "Chat first")]


class TestConfirmation:
    """Test cases for confirmed destructive actions."""

    def test_remove_waits_for_confirmation(self, state, context):
        # Act
        callbacks.handle_request_remove_entry(state, "projects", 1)

        # Assert
        assert state.pending_confirmation == ("remove_entry", "projects", 1)
        context.remove_entry.assert_not_called()

    def test_confirmed_remove_of_last_entry_is_refused(self, state, context):
        # Arrange
        context.remove_entry.side_effect = LastEntryRemovalError("last", section="projects")
        callbacks.handle_request_remove_entry(state, "projects", 0)

        # Act
        callbacks.handle_confirm(state)

        # Assert
        assert state.pending_confirmation is None
        assert state.pop_notices() == [
            ("warning", ErrorConstants.MSG_LAST_ENTRY.format(section="Projects"))
        ]

    def test_confirmed_restart(self, state, context):
        # Arrange
        callbacks.handle_request_restart(state)

        # Act
        callbacks.handle_confirm(state)

        # Assert
        context.restart.assert_called_once()
        assert state.get("resume_checked") is True

    def test_cancel_does_nothing(self, state, context):
        callbacks.handle_request_restart(state)

        callbacks.handle_cancel_confirmation(state)

        assert state.pending_confirmation is None
        context.restart.assert_not_called()


class TestBackendCallbacks:
    """Test cases for callbacks that reach the backend."""

    def test_blank_profession_becomes_notice(self, state, context, session_state):
        # Arrange
        session_state["profession_input"] = ""
        context.bootstrap.side_effect = SessionPreconditionError(
            ErrorConstants.MSG_PROFESSION_REQUIRED
        )

        # Act
        callbacks.handle_profession_submit(state)

        # Assert
        assert state.pop_notices() == [("error", ErrorConstants.MSG_PROFESSION_REQUIRED)]

    @patch("streamlit.error")
    def test_template_fetch_failure_shows_alert(self, mock_error, state):
        # Arrange
        container = Mock()
        container.template_service().list_templates.side_effect = BackendResponseError("x")

        # Act
        with patch("cvchat.frontend.callbacks.get_container", return_value=container):
            callbacks.load_templates(state)

        # Assert
        mock_error.assert_called_once()
        assert ErrorConstants.MSG_FETCH_TEMPLATES_FAILED in mock_error.call_args.args[0]
        assert state.templates is None

    def test_preview_wraps_backend_html(self, state, context):
        # Arrange
        context.request_preview.return_value = "<p>cv</p>"
        container = Mock()
        container.preview_renderer().render.return_value = "<html>wrapped</html>"

        # Act
        with patch("cvchat.frontend.callbacks.get_container", return_value=container):
            callbacks.handle_preview(state)

        # Assert
        container.preview_renderer().render.assert_called_with(html_content="<p>cv</p>")
        assert state.get("preview_document") == "<html>wrapped</html>"

    def test_export_stores_pdf_url(self, state, context):
        # Arrange
        context.session_id = "s-1"
        context.sanitized_form_data.return_value = {"basicInfo": {}}
        container = Mock()
        container.preview_renderer().handle_event.return_value = "http://cdn.test/r.pdf"

        # Act
        with patch("cvchat.frontend.callbacks.get_container", return_value=container):
            callbacks.handle_export_pdf(state)

        # Assert
        container.preview_renderer().handle_event.assert_called_with(
            {"type": "print"}, "s-1", {"basicInfo": {}}
        )
        assert state.get("pdf_url") == "http://cdn.test/r.pdf"

    def test_chat_spec_change_bumps_revision(self, state, context):
        # Arrange
        def reply(_text):
            context.form_spec = Mock()

        context.send_chat.side_effect = reply

        # Act
        callbacks.send_chat_message(state, "hello")

        # Assert
        assert state.form_revision == 1
