#!/usr/bin/env python3
"""
Main launcher for the conversational resume builder Streamlit application.

Run with ``streamlit run app.py``.
"""
import streamlit as st

from cvchat.config.logging_config import get_logger, setup_logging
from cvchat.config.settings import get_config
from cvchat.error_handling.boundaries import safe_streamlit_component
from cvchat.error_handling.models import ErrorSeverity
from cvchat.frontend.state_helpers import StateManager
from cvchat.frontend.ui_components import display_main

_ui = get_config().ui

# Page configuration - MUST be first Streamlit command
st.set_page_config(
    page_title=_ui.page_title,
    page_icon=_ui.page_icon,
    layout=_ui.layout,
)

setup_logging()
logger = get_logger(__name__)


@safe_streamlit_component(
    component_name="main_app",
    severity=ErrorSeverity.HIGH,
    show_details=_ui.show_debug_information,
)
def main():
    """Render the screen for the current session."""
    metadata = get_config().metadata
    st.sidebar.caption(f"{metadata.app_name} v{metadata.app_version}")

    state_manager = StateManager()
    display_main(state_manager)


if __name__ == "__main__":
    main()
