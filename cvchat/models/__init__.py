"""Models module for the cvchat application."""

from cvchat.models.chat_models import ChatMessage, ChatRequest, ChatResponse, ChatResult
from cvchat.models.form_models import (
    FixedFieldsSection,
    FormSpecification,
    FreeTextListSection,
    SectionKind,
    SuggestionSection,
)
from cvchat.models.preview_models import PreviewEvent, PreviewEventType
from cvchat.models.template_models import INITIAL_TEMPLATE, ResumeTemplate, TemplateUpdate

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ChatResult",
    "FixedFieldsSection",
    "FormSpecification",
    "FreeTextListSection",
    "SectionKind",
    "SuggestionSection",
    "PreviewEvent",
    "PreviewEventType",
    "INITIAL_TEMPLATE",
    "ResumeTemplate",
    "TemplateUpdate",
]
