"""Module for the dependency injection container."""

import threading
from typing import Optional

from dependency_injector import containers, providers

from cvchat.config.logging_config import get_logger
from cvchat.config.settings import get_config
from cvchat.core.request_tracker import RequestTracker
from cvchat.core.session_context import SessionContext
from cvchat.rendering.preview_renderer import PreviewRenderer
from cvchat.services.api_client import BackendClient
from cvchat.services.chat_service import ChatService
from cvchat.services.resume_service import ResumeService
from cvchat.services.storage import JsonFileStore
from cvchat.services.template_service import TemplateService


class Container(containers.DeclarativeContainer):  # pylint: disable=c-extension-no-member
    """Dependency injection container for the application.

    Use get_container() instead of instantiating this class directly.
    """

    _singleton_key = object()

    def __new__(cls, *args, singleton_key=None, **kwargs):
        if singleton_key is not cls._singleton_key:
            raise RuntimeError(
                "Container cannot be instantiated directly. "
                "Use get_container() function instead."
            )
        return object.__new__(cls)

    config = providers.Singleton(get_config)  # pylint: disable=c-extension-no-member

    backend_client = providers.Singleton(  # pylint: disable=c-extension-no-member
        BackendClient,
        settings=config,
        logger=providers.Callable(get_logger, "cvchat.backend"),
    )

    session_store = providers.Singleton(  # pylint: disable=c-extension-no-member
        JsonFileStore,
        path=config.provided.storage.path,
        logger=providers.Callable(get_logger, "cvchat.storage"),
    )

    chat_service = providers.Singleton(  # pylint: disable=c-extension-no-member
        ChatService,
        client=backend_client,
        logger=providers.Callable(get_logger, "cvchat.chat_service"),
    )

    template_service = providers.Singleton(  # pylint: disable=c-extension-no-member
        TemplateService,
        client=backend_client,
        logger=providers.Callable(get_logger, "cvchat.template_service"),
    )

    resume_service = providers.Singleton(  # pylint: disable=c-extension-no-member
        ResumeService,
        client=backend_client,
        logger=providers.Callable(get_logger, "cvchat.resume_service"),
    )

    preview_renderer = providers.Singleton(  # pylint: disable=c-extension-no-member
        PreviewRenderer,
        resume_service=resume_service,
        store=session_store,
        # PDF links are shown in the page, never opened on the host.
        opener=providers.Object(None),  # pylint: disable=c-extension-no-member
        logger=providers.Callable(get_logger, "cvchat.preview"),
    )

    # One context per browser session; callers keep the instance they get.
    session_context = providers.Factory(  # pylint: disable=c-extension-no-member
        SessionContext,
        chat_service=chat_service,
        resume_service=resume_service,
        store=session_store,
        settings=config,
        tracker=providers.Factory(RequestTracker),
        logger=providers.Callable(get_logger, "cvchat.session"),
    )


class ContainerSingleton:
    """Thread-safe singleton for the DI container."""

    _instance: Optional["Container"] = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> "Container":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = Container(singleton_key=Container._singleton_key)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (mainly for testing)."""
        with cls._lock:
            cls._instance = None


def get_container() -> Container:
    """Returns the singleton instance of the DI container."""
    return ContainerSingleton.get_instance()
