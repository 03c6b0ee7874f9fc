# tests/conftest.py
from unittest.mock import Mock

import pytest
import requests

from cvchat.config.logging_config import setup_logging
from cvchat.config.settings import ApiConfig, AppConfig, StorageConfig
from cvchat.services.storage import InMemoryStore

# Ensure logging is initialized before any tests run
setup_logging()


@pytest.fixture
def settings(tmp_path):
    """Configuration pointing at a fake backend and a temporary store."""
    return AppConfig(
        api=ApiConfig(
            api_url="http://backend.test/api",
            cdn_url="http://cdn.test",
            request_timeout=5,
        ),
        storage=StorageConfig(directory=str(tmp_path), filename="store.json"),
    )


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def make_response():
    """Factory for fake ``requests.Response`` objects."""

    def _make(status_code=200, body=None, text=None):
        response = Mock(spec=requests.Response)
        response.status_code = status_code
        response.ok = 200 <= status_code < 400
        response.url = "http://backend.test/api"
        if body is None:
            response.json.side_effect = ValueError("No JSON object could be decoded")
        else:
            response.json.return_value = body
        response.text = text if text is not None else ""
        return response

    return _make


@pytest.fixture
def http_session():
    return Mock(spec=requests.Session)


@pytest.fixture
def developer_spec():
    """A form specification in the backend's wrapped shape."""
    return {
        "required": {
            "basicInfo": {"name": True, "email": True},
            "sections": {
                "workExperience": {
                    "required": True,
                    "fields": ["companyName", "jobTitle"],
                },
                "technicalSkills": {
                    "required": True,
                    "suggestions": ["Python", "SQL"],
                },
                "hobbies": {"required": False},
            },
        }
    }


@pytest.fixture
def designer_spec():
    """A different specification in the unwrapped shape."""
    return {
        "basicInfo": {"name": True, "portfolio": True},
        "sections": {
            "designSkills": {"required": True, "suggestions": ["Figma"]},
            "projects": {"required": True, "fields": ["projectName"]},
        },
    }
