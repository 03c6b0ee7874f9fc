"""Texts shown in the conversation and on the screens."""

from typing import Final


class UIConstants:
    """Fixed conversation texts and markers."""

    RESUME_READY_SENTINEL: Final[str] = "JSON_FORMAT_READY"
    GREETING_TEMPLATE: Final[str] = (
        "Hi! I understand you're a {profession}. I'll help you create a "
        "professional resume. You can either chat with me about your experience "
        "or use the form to input your details directly."
    )
    RESTART_CONFIRMATION: Final[
        str
    ] = "Are you sure you want to restart? This will clear all data."
    AWAITING_SPEC_HINT: Final[str] = "Chat first to generate the form"
