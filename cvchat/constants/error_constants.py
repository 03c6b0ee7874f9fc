"""Error handling constants for centralized error management.

User-facing texts live here so callers and tests agree on them.
"""

from typing import Final


class ErrorConstants:
    """Constants for error handling and user-facing error messages."""

    # Default messages used when the backend envelope carries none
    MSG_SEND_MESSAGE_FAILED: Final[str] = "Failed to send message"
    MSG_PREVIEW_FAILED: Final[str] = "Failed to get resume preview"
    MSG_PDF_FAILED: Final[str] = "Failed to generate resume PDF"
    MSG_FETCH_TEMPLATES_FAILED: Final[str] = "Failed to fetch templates"
    MSG_UPDATE_TEMPLATE_FAILED: Final[str] = "Failed to update template"
    MSG_CREATE_TEMPLATE_FAILED: Final[str] = "Failed to create template"
    MSG_SEED_TEMPLATE_FAILED: Final[str] = "Failed to seed template"
    MSG_INVALID_RESPONSE: Final[str] = "Backend returned an invalid response"

    # Transcript / alert texts
    MSG_CHAT_ERROR_REPLY: Final[
        str
    ] = "Sorry, there was an error processing your message. Please try again."
    MSG_SESSION_NOT_INITIALIZED: Final[str] = "Session not initialized"
    MSG_PROFESSION_REQUIRED: Final[str] = "Please enter your profession"
    MSG_TEMPLATE_REQUIRED: Final[str] = "Please select a template first"
    MSG_SUBMIT_FAILED: Final[str] = "Failed to submit form. Please try again."
    MSG_PREVIEW_GENERATION_FAILED: Final[
        str
    ] = "Failed to generate preview. Please try again."
    MSG_PDF_GENERATION_FAILED: Final[str] = "Failed to generate PDF. Please try again."
    MSG_PREVIEW_LOAD_FAILED: Final[str] = "Failed to load the resume preview"
    MSG_ENTRY_LIMIT_REACHED: Final[
        str
    ] = "You can add at most {limit} entries to {section}."
    MSG_LAST_ENTRY: Final[str] = "{section} needs at least one entry."
