"""State management for the Streamlit front end.

The :class:`StateManager` wraps ``st.session_state``. Domain state (session
id, transcript, form data) lives in the :class:`SessionContext` kept under a
single key; everything else stored here is raw UI state such as pending
confirmations, notices and widget revisions.
"""

from typing import Any, List, Optional, Tuple

import streamlit as st

from cvchat.config.logging_config import get_logger
from cvchat.core.container import get_container
from cvchat.core.session_context import SessionContext
from cvchat.models.template_models import ResumeTemplate

logger = get_logger(__name__)

CONTEXT_KEY = "session_context"


class StateManager:
    """Handles all session state logic for the Streamlit app."""

    def __init__(self):
        self._initialize_state()

    def _initialize_state(self):
        """Initializes the session state with default values."""
        defaults = {
            "templates": None,
            "resume_checked": False,
            "pending_confirmation": None,
            "notices": [],
            "form_revision": 0,
            "preview_document": None,
            "pdf_url": None,
        }

        for key, value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = value
                logger.debug("Initialized session state key: %s", key)

    def get(self, key: str, default: Any = None) -> Any:
        return st.session_state.get(key, default)

    def set(self, key: str, value: Any) -> None:
        st.session_state[key] = value
        logger.debug("Set session state key: %s", key)

    def clear_key(self, key: str) -> None:
        if key in st.session_state:
            del st.session_state[key]
            logger.debug("Cleared session state key: %s", key)

    @property
    def context(self) -> SessionContext:
        """The session context for this browser session, created on first use."""
        context = st.session_state.get(CONTEXT_KEY)
        if context is None:
            context = get_container().session_context()
            st.session_state[CONTEXT_KEY] = context
            logger.info("Created new session context")
        return context

    @property
    def templates(self) -> Optional[List[ResumeTemplate]]:
        return self.get("templates")

    @templates.setter
    def templates(self, templates: Optional[List[ResumeTemplate]]) -> None:
        self.set("templates", templates)

    @property
    def pending_confirmation(self) -> Optional[Tuple]:
        """Destructive action waiting for the user's yes/no, e.g. ``("restart",)``."""
        return self.get("pending_confirmation")

    @pending_confirmation.setter
    def pending_confirmation(self, action: Optional[Tuple]) -> None:
        self.set("pending_confirmation", action)

    @property
    def form_revision(self) -> int:
        return self.get("form_revision", 0)

    def bump_form_revision(self) -> None:
        """Give form widgets fresh keys after entries were added or removed."""
        self.set("form_revision", self.form_revision + 1)

    def add_notice(self, level: str, text: str) -> None:
        notices = list(self.get("notices", []))
        notices.append((level, text))
        self.set("notices", notices)

    def pop_notices(self) -> List[Tuple[str, str]]:
        notices = self.get("notices", [])
        self.set("notices", [])
        return notices

    def reset_ui_state(self) -> None:
        """Forget per-session UI state after a restart or template switch."""
        self.pending_confirmation = None
        self.clear_key("active_section")
        self.set("preview_document", None)
        self.set("pdf_url", None)
        self.bump_form_revision()
