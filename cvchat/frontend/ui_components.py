"""Streamlit screens: template selection, profession prompt, chat, form and preview."""

import streamlit as st
import streamlit.components.v1 as components

from cvchat.config.logging_config import get_logger
from cvchat.constants.ui_constants import UIConstants
from cvchat.core.form_data import BASIC_INFO, camel_to_title, section_tabs
from cvchat.core.session_context import AppScreen, ScreenMode
from cvchat.core.container import get_container
from cvchat.error_handling.boundaries import error_boundary
from cvchat.frontend import callbacks
from cvchat.frontend.state_helpers import StateManager
from cvchat.models.form_models import SectionKind
from cvchat.services.template_service import find_resumable_template

logger = get_logger(__name__)


def display_notices(state: StateManager):
    for level, text in state.pop_notices():
        if level == "error":
            st.error(f"❌ {text}")
        else:
            st.warning(f"⚠️ {text}")


def display_confirmation(state: StateManager):
    """Render the yes/no prompt for a pending destructive action."""
    action = state.pending_confirmation
    if not action:
        return

    if action[0] == "restart":
        question = UIConstants.RESTART_CONFIRMATION
    else:
        _, section, index = action
        question = f"Remove entry {index + 1} from {camel_to_title(section)}?"

    with st.container(border=True):
        st.warning(question)
        col1, col2 = st.columns(2)
        col1.button(
            "Yes",
            key="confirm_yes",
            type="primary",
            on_click=callbacks.handle_confirm,
            args=(state,),
            use_container_width=True,
        )
        col2.button(
            "No",
            key="confirm_no",
            on_click=callbacks.handle_cancel_confirmation,
            args=(state,),
            use_container_width=True,
        )


# -- template selection ----------------------------------------------------


def display_template_selection(state: StateManager):
    st.title("📄 Choose a Template")

    if state.templates is None:
        with st.spinner("Loading templates..."):
            callbacks.load_templates(state)
    templates = state.templates or []

    if not state.get("resume_checked"):
        state.set("resume_checked", True)
        resumable = find_resumable_template(templates, get_container().session_store())
        if resumable is not None:
            logger.info("Resuming saved session for template %s", resumable.id)
            callbacks.handle_template_selected(state, resumable.id)
            st.rerun()

    st.button(
        "👁️ Preview a sample resume",
        on_click=callbacks.handle_sample_preview,
        args=(state,),
    )
    if state.get("preview_document"):
        display_preview(state)
        return

    if not templates:
        st.info("No templates available yet.")
        st.button(
            "Add the default template",
            on_click=callbacks.handle_seed_templates,
            args=(state,),
        )
        return

    columns = st.columns(min(len(templates), 3))
    for i, template in enumerate(templates):
        with columns[i % len(columns)]:
            with st.container(border=True):
                if template.image:
                    st.image(template.image, use_container_width=True)
                st.subheader(template.name)
                if template.description:
                    st.caption(template.description)
                st.button(
                    "Use Template",
                    key=f"use_template_{template.id}",
                    type="primary",
                    on_click=callbacks.handle_template_selected,
                    args=(state, template.id),
                    use_container_width=True,
                )


# -- profession prompt -----------------------------------------------------


def display_profession_prompt(state: StateManager):
    st.title("Enter Your Profession")
    with st.form("profession_form"):
        st.text_input(
            "Profession",
            key="profession_input",
            placeholder="e.g. Software Engineer, UX Designer...",
        )
        submitted = st.form_submit_button("Start", type="primary")
    if submitted:
        with st.spinner("Initializing..."):
            callbacks.handle_profession_submit(state)
        if state.context.screen == AppScreen.WORKSPACE:
            st.rerun()

    st.button("← Back to templates", on_click=callbacks.handle_leave_workspace, args=(state,))


# -- workspace -------------------------------------------------------------


def display_workspace(state: StateManager):
    context = state.context
    header, actions = st.columns([4, 1])
    with header:
        st.title("AI Resume Builder")
        if context.profession:
            st.caption(f"Profession: {context.profession}")
    with actions:
        st.button(
            "🔄 Restart",
            on_click=callbacks.handle_request_restart,
            args=(state,),
            use_container_width=True,
        )
        st.button(
            "← Templates",
            on_click=callbacks.handle_leave_workspace,
            args=(state,),
            use_container_width=True,
        )

    display_confirmation(state)

    if state.get("preview_document"):
        display_preview(state)
        return

    chat_tab, form_tab = st.tabs(["💬 Chat", "📝 Form"])
    with chat_tab:
        display_chat_tab(state)
    with form_tab:
        display_form_tab(state)


def display_chat_tab(state: StateManager):
    context = state.context
    for message in context.messages:
        role = "user" if message.is_user else "assistant"
        with st.chat_message(role):
            if message.is_resume_ready:
                st.markdown("**Your resume is ready!**")
                if message.resume_path:
                    st.link_button(
                        "Download Resume", context.download_url(message.resume_path)
                    )
            else:
                st.markdown(message.text)
            if message.json_path and not message.is_resume_ready:
                st.link_button("Open file", context.download_url(message.json_path))

    prompt = st.chat_input(
        "Type your message...", disabled=context.is_awaiting_reply
    )
    if prompt:
        with st.spinner("Thinking..."):
            callbacks.send_chat_message(state, prompt)
        st.rerun()


def display_form_tab(state: StateManager):
    context = state.context
    if context.form_spec is None or context.form_data is None:
        st.info(UIConstants.AWAITING_SPEC_HINT)
        return

    tabs = section_tabs(context.form_spec)
    if state.get("active_section") not in tabs:
        state.clear_key("active_section")
    selected = st.radio(
        "Section",
        tabs,
        format_func=camel_to_title,
        horizontal=True,
        key="active_section",
        label_visibility="collapsed",
    )
    if selected not in tabs:
        selected = BASIC_INFO

    with st.container(border=True):
        if selected == BASIC_INFO:
            display_basic_info(state)
        else:
            display_section(state, selected)

    display_form_actions(state)


def display_basic_info(state: StateManager):
    context = state.context
    revision = state.form_revision
    for field_name, is_required in context.form_spec.basic_info.items():
        widget_key = f"basic::{field_name}::{revision}"
        st.text_input(
            camel_to_title(field_name) + (" *" if is_required else ""),
            value=context.form_data[BASIC_INFO].get(field_name, ""),
            key=widget_key,
            on_change=callbacks.handle_field_change,
            args=(state, (BASIC_INFO, field_name), widget_key),
        )


def display_section(state: StateManager, section: str):
    context = state.context
    config = context.form_spec.section(section)
    entries = context.form_data.get(section, [])
    revision = state.form_revision

    if config.kind == SectionKind.SUGGESTIONS:
        st.caption("Select all that apply")
        columns = st.columns(3)
        for i, suggestion in enumerate(config.suggestions):
            selected = suggestion in entries
            columns[i % 3].button(
                ("✓ " if selected else "") + suggestion,
                key=f"suggestion::{section}::{i}::{revision}",
                type="primary" if selected else "secondary",
                on_click=callbacks.handle_toggle_suggestion,
                args=(state, section, suggestion),
                use_container_width=True,
            )
        return

    for index, entry in enumerate(entries):
        with st.container(border=True):
            title, remove = st.columns([5, 1])
            title.markdown(f"**{camel_to_title(section)} #{index + 1}**")
            remove.button(
                "🗑️",
                key=f"remove::{section}::{index}::{revision}",
                help="Remove this entry",
                on_click=callbacks.handle_request_remove_entry,
                args=(state, section, index),
            )
            if config.kind == SectionKind.FIXED_FIELDS:
                for field_name in config.fields:
                    widget_key = f"field::{section}::{index}::{field_name}::{revision}"
                    st.text_input(
                        camel_to_title(field_name),
                        value=entry.get(field_name, ""),
                        key=widget_key,
                        on_change=callbacks.handle_field_change,
                        args=(state, (section, index, field_name), widget_key),
                    )
            else:
                widget_key = f"text::{section}::{index}::{revision}"
                st.text_area(
                    camel_to_title(section),
                    value=entry,
                    key=widget_key,
                    label_visibility="collapsed",
                    on_change=callbacks.handle_field_change,
                    args=(state, (section, index), widget_key),
                )

    st.button(
        f"➕ Add {camel_to_title(section)}",
        key=f"add::{section}::{revision}",
        on_click=callbacks.handle_add_entry,
        args=(state, section),
    )


def display_form_actions(state: StateManager):
    context = state.context
    submitting = context.mode == ScreenMode.SUBMITTING
    col1, col2 = st.columns(2)
    with col1:
        if st.button(
            "👁️ Preview", use_container_width=True, disabled=submitting
        ):
            with st.spinner("Generating preview..."):
                callbacks.handle_preview(state)
            if state.get("preview_document"):
                st.rerun()
    with col2:
        if st.button(
            "🚀 Submit", type="primary", use_container_width=True, disabled=submitting
        ):
            with st.spinner("Generating your resume..."):
                callbacks.handle_submit_form(state)

    if context.mode == ScreenMode.SUBMITTED and context.resume_path:
        with st.container(border=True):
            st.success("Your resume is ready!")
            st.link_button(
                "⬇️ Download Resume",
                context.download_url(),
                use_container_width=True,
            )
            st.button(
                "View Resume",
                on_click=callbacks.handle_open_saved_resume,
                args=(state, context.resume_path),
                use_container_width=True,
            )


def display_preview(state: StateManager):
    context = state.context
    config = context.settings
    toolbar = st.columns(3)
    toolbar[0].button(
        "← Back", on_click=callbacks.handle_close_preview, args=(state,), use_container_width=True
    )
    toolbar[1].button(
        "🖨️ Export PDF",
        on_click=callbacks.handle_export_pdf,
        args=(state,),
        use_container_width=True,
        disabled=not context.session_id,
    )
    pdf_url = state.get("pdf_url")
    if pdf_url:
        toolbar[2].link_button("Open PDF", pdf_url, use_container_width=True)

    with error_boundary("resume_preview", fallback_message="The preview could not be displayed"):
        components.html(
            state.get("preview_document"),
            height=config.ui.preview_height,
            scrolling=True,
        )


def display_main(state: StateManager):
    display_notices(state)
    screen = state.context.screen
    if screen == AppScreen.WORKSPACE:
        display_workspace(state)
    elif screen == AppScreen.PROFESSION_PROMPT:
        display_profession_prompt(state)
    else:
        display_template_selection(state)
