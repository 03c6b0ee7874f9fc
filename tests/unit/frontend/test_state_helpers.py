"""Unit tests for StateManager class.

These tests verify the StateManager's state initialization, manipulation,
and property access methods without requiring a running Streamlit app.
"""

from unittest.mock import Mock, patch

from cvchat.frontend.state_helpers import CONTEXT_KEY, StateManager


class TestStateManager:
    """Test suite for StateManager class."""

    @patch("streamlit.session_state", new_callable=lambda: {})
    def test_initialize_state_sets_defaults(self, mock_session_state):
        """Test that _initialize_state sets all default values correctly."""
        # Act
        StateManager()

        # Assert
        expected_defaults = {
            "templates": None,
            "resume_checked": False,
            "pending_confirmation": None,
            "notices": [],
            "form_revision": 0,
            "preview_document": None,
            "pdf_url": None,
        }
        for key, expected_value in expected_defaults.items():
            assert mock_session_state[key] == expected_value

    @patch("streamlit.session_state", new_callable=lambda: {})
    def test_initialize_state_preserves_existing_values(self, mock_session_state):
        # Arrange
        mock_session_state["form_revision"] = 4
        mock_session_state["resume_checked"] = True

        # Act
        StateManager()

        # Assert
        assert mock_session_state["form_revision"] == 4
        assert mock_session_state["resume_checked"] is True

    @patch("streamlit.session_state", new_callable=lambda: {})
    def test_context_is_created_once(self, mock_session_state):
        """Test that the session context is built lazily and then reused."""
        # Arrange
        container = Mock()
        container.session_context.return_value = Mock(name="context")
        state_manager = StateManager()

        # Act
        with patch("cvchat.frontend.state_helpers.get_container", return_value=container):
            first = state_manager.context
            second = state_manager.context

        # Assert
        assert first is second
        assert mock_session_state[CONTEXT_KEY] is first
        container.session_context.assert_called_once()

    @patch("streamlit.session_state", new_callable=lambda: {})
    def test_notices_are_consumed_once(self, _):
        # Arrange
        state_manager = StateManager()
        state_manager.add_notice("warning", "first")
        state_manager.add_notice("error", "second")

        # Act
        notices = state_manager.pop_notices()

        # Assert
        assert notices == [("warning", "first"), ("error", "second")]
        assert state_manager.pop_notices() == []

    @patch("streamlit.session_state", new_callable=lambda: {})
    def test_reset_ui_state(self, mock_session_state):
        # Arrange
        state_manager = StateManager()
        state_manager.pending_confirmation = ("restart",)
        state_manager.set("preview_document", "<html/>")
        state_manager.set("active_section", "skills")

        # Act
        state_manager.reset_ui_state()

        # Assert
        assert state_manager.pending_confirmation is None
        assert state_manager.get("preview_document") is None
        assert "active_section" not in mock_session_state
        assert state_manager.form_revision == 1

    @patch("streamlit.session_state", new_callable=lambda: {})
    def test_clear_key_ignores_missing(self, mock_session_state):
        state_manager = StateManager()

        state_manager.clear_key("missing")
        state_manager.clear_key("pdf_url")

        assert "pdf_url" not in mock_session_state
