"""Unit tests for the dependency injection container."""

import pytest

from cvchat.core.container import Container, ContainerSingleton, get_container
from cvchat.core.session_context import SessionContext
from cvchat.rendering.preview_renderer import PreviewRenderer
from cvchat.services.api_client import BackendClient
from cvchat.services.storage import JsonFileStore


class TestContainerSingleton:
    """Test cases for Container singleton enforcement."""

    def setup_method(self):
        """Reset singleton before each test."""
        ContainerSingleton.reset_instance()

    def teardown_method(self):
        """Clean up after each test."""
        ContainerSingleton.reset_instance()

    def test_direct_instantiation_raises_error(self):
        with pytest.raises(RuntimeError, match="Container cannot be instantiated directly"):
            Container()

    def test_get_container_returns_singleton(self):
        container1 = get_container()
        container2 = get_container()

        assert container1 is container2
        assert isinstance(container1, Container)

    def test_container_provides_expected_services(self):
        # Arrange
        container = get_container()

        # Assert
        assert isinstance(container.backend_client(), BackendClient)
        assert container.backend_client() is container.backend_client()
        assert isinstance(container.session_store(), JsonFileStore)
        assert isinstance(container.preview_renderer(), PreviewRenderer)
        assert container.preview_renderer().opener is None

    def test_each_session_gets_its_own_context(self):
        # Arrange
        container = get_container()

        # Act
        first = container.session_context()
        second = container.session_context()

        # Assert
        assert isinstance(first, SessionContext)
        assert first is not second
        assert first.tracker is not second.tracker
        assert first.store is second.store
