"""Services module for the cvchat application."""

from cvchat.services.api_client import BackendClient
from cvchat.services.chat_service import ChatService
from cvchat.services.resume_service import ResumeService
from cvchat.services.storage import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    namespaced_keys,
)
from cvchat.services.template_service import TemplateService, find_resumable_template

__all__ = [
    "BackendClient",
    "ChatService",
    "ResumeService",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "namespaced_keys",
    "TemplateService",
    "find_resumable_template",
]
