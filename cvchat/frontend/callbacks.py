"""Callbacks wired to Streamlit widgets.

Backend failures surface as alerts through ``handle_api_errors``; edits the
form data model refuses surface as notices. Destructive actions only record a
pending confirmation here and run from :func:`handle_confirm`.
"""

import streamlit as st

from cvchat.config.logging_config import get_logger
from cvchat.constants.error_constants import ErrorConstants
from cvchat.core.container import get_container
from cvchat.core.form_data import camel_to_title
from cvchat.error_handling.boundaries import handle_api_errors
from cvchat.error_handling.exceptions import (
    EntryLimitReachedError,
    FormEditError,
    LastEntryRemovalError,
    SessionPreconditionError,
)
from cvchat.frontend.state_helpers import StateManager

logger = get_logger(__name__)


def _form_edit_notice(state: StateManager, error: FormEditError) -> None:
    label = camel_to_title(error.section or "")
    if isinstance(error, EntryLimitReachedError):
        limit = error.context.additional_data.get(
            "limit", state.context.settings.form.max_entries_per_section
        )
        text = ErrorConstants.MSG_ENTRY_LIMIT_REACHED.format(limit=limit, section=label)
    elif isinstance(error, LastEntryRemovalError):
        text = ErrorConstants.MSG_LAST_ENTRY.format(section=label)
    else:
        text = error.message
    logger.info("Form edit refused: %s", error.message)
    state.add_notice("warning", text)


def _precondition_notice(state: StateManager, error: SessionPreconditionError) -> None:
    logger.warning("Precondition failed: %s", error.message)
    state.add_notice("error", error.message)


# -- template selection ----------------------------------------------------


@handle_api_errors(alert_message=ErrorConstants.MSG_FETCH_TEMPLATES_FAILED)
def load_templates(state: StateManager) -> None:
    state.templates = get_container().template_service().list_templates()


@handle_api_errors(alert_message=ErrorConstants.MSG_SEED_TEMPLATE_FAILED)
def handle_seed_templates(state: StateManager) -> None:
    get_container().template_service().seed_initial_template()
    state.templates = None


def handle_template_selected(state: StateManager, template_id: str) -> None:
    state.reset_ui_state()
    state.context.select_template(template_id)


def handle_leave_workspace(state: StateManager) -> None:
    state.context.leave_workspace()
    state.reset_ui_state()
    state.set("resume_checked", True)


# -- session bootstrap and chat --------------------------------------------


@handle_api_errors()
def handle_profession_submit(state: StateManager) -> None:
    profession = state.get("profession_input", "")
    try:
        state.context.bootstrap(profession)
    except SessionPreconditionError as e:
        _precondition_notice(state, e)
        return
    state.bump_form_revision()


def send_chat_message(state: StateManager, text: str) -> None:
    """Send a chat message; failures become a transcript entry, not an alert."""
    context = state.context
    known_spec = context.form_spec
    context.send_chat(text)
    if context.form_spec is not known_spec:
        state.bump_form_revision()


# -- form edits ------------------------------------------------------------


def handle_field_change(state: StateManager, path: tuple, widget_key: str) -> None:
    try:
        state.context.set_field(path, st.session_state.get(widget_key, ""))
    except FormEditError as e:
        _form_edit_notice(state, e)
    except SessionPreconditionError as e:
        _precondition_notice(state, e)


def handle_toggle_suggestion(state: StateManager, section: str, value: str) -> None:
    try:
        state.context.toggle_suggestion(section, value)
    except FormEditError as e:
        _form_edit_notice(state, e)
    except SessionPreconditionError as e:
        _precondition_notice(state, e)


def handle_add_entry(state: StateManager, section: str) -> None:
    try:
        state.context.add_entry(section)
    except FormEditError as e:
        _form_edit_notice(state, e)
        return
    except SessionPreconditionError as e:
        _precondition_notice(state, e)
        return
    state.bump_form_revision()


def handle_request_remove_entry(state: StateManager, section: str, index: int) -> None:
    state.pending_confirmation = ("remove_entry", section, index)


def handle_request_restart(state: StateManager) -> None:
    state.pending_confirmation = ("restart",)


def handle_cancel_confirmation(state: StateManager) -> None:
    state.pending_confirmation = None


def handle_confirm(state: StateManager) -> None:
    action = state.pending_confirmation
    state.pending_confirmation = None
    if not action:
        return

    if action[0] == "restart":
        state.context.restart()
        state.reset_ui_state()
        # Do not jump straight back into another saved session.
        state.set("resume_checked", True)
        return

    if action[0] == "remove_entry":
        _, section, index = action
        try:
            state.context.remove_entry(section, index)
        except FormEditError as e:
            _form_edit_notice(state, e)
            return
        state.bump_form_revision()
        return

    logger.warning("Unknown confirmation action: %r", action)


# -- submission, preview and export ----------------------------------------


@handle_api_errors(alert_message=ErrorConstants.MSG_SUBMIT_FAILED)
def handle_submit_form(state: StateManager) -> None:
    try:
        state.context.submit_form()
    except SessionPreconditionError as e:
        _precondition_notice(state, e)


@handle_api_errors(alert_message=ErrorConstants.MSG_PREVIEW_GENERATION_FAILED)
def handle_preview(state: StateManager) -> None:
    context = state.context
    try:
        html = context.request_preview()
    except SessionPreconditionError as e:
        _precondition_notice(state, e)
        return
    if html is None:
        return
    renderer = get_container().preview_renderer()
    state.set("preview_document", renderer.render(html_content=html))
    state.set("pdf_url", None)


@handle_api_errors(alert_message=ErrorConstants.MSG_PREVIEW_LOAD_FAILED)
def handle_open_saved_resume(state: StateManager, resume_path: str) -> None:
    renderer = get_container().preview_renderer()
    state.set("preview_document", renderer.render(resume_path=resume_path))


def handle_sample_preview(state: StateManager) -> None:
    renderer = get_container().preview_renderer()
    state.set("preview_document", renderer.render())


def handle_close_preview(state: StateManager) -> None:
    state.set("preview_document", None)


@handle_api_errors(alert_message=ErrorConstants.MSG_PDF_GENERATION_FAILED)
def handle_export_pdf(state: StateManager) -> None:
    """Relay a print request the same way the preview shell would."""
    context = state.context
    try:
        payload = context.sanitized_form_data()
        url = get_container().preview_renderer().handle_event(
            {"type": "print"}, context.session_id, payload
        )
    except SessionPreconditionError as e:
        _precondition_notice(state, e)
        return
    state.set("pdf_url", url)
