"""Unit tests for configuration settings."""

import os
from unittest.mock import patch

import pytest

from cvchat.config.settings import ApiConfig, AppConfig, EnvironmentConfig, FormConfig, update_config
from cvchat.error_handling.exceptions import ConfigurationError


class TestApiConfig:
    def test_trailing_slashes_are_stripped(self):
        config = ApiConfig(api_url="http://api.test/api/", cdn_url="http://cdn.test/")

        assert config.api_url == "http://api.test/api"
        assert config.cdn_url == "http://cdn.test"

    @patch.dict(os.environ, {"API_URL": "http://env.test/api", "REQUEST_TIMEOUT_SECONDS": "12"})
    def test_values_come_from_environment(self):
        config = ApiConfig()

        assert config.api_url == "http://env.test/api"
        assert config.request_timeout == 12

    @patch.dict(os.environ, {"FORM_MAX_ENTRIES_PER_SECTION": "3"})
    def test_entry_limit_from_environment(self):
        assert FormConfig().max_entries_per_section == 3


class TestAppConfig:
    """Test cases for AppConfig helpers."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/resumes/a.pdf", "http://cdn.test/resumes/a.pdf"),
            ("resumes/a.pdf", "http://cdn.test/resumes/a.pdf"),
            ("https://other.test/a.pdf", "https://other.test/a.pdf"),
        ],
    )
    def test_asset_url(self, settings, path, expected):
        assert settings.asset_url(path) == expected

    def test_storage_path(self, settings, tmp_path):
        assert settings.storage.path == tmp_path / "store.json"

    def test_production_environment_adjustments(self):
        config = AppConfig(env=EnvironmentConfig(environment="production", debug=True))

        assert config.env.debug is False
        assert config.logging.log_level == "WARNING"
        assert config.ui.show_debug_information is False

    def test_update_config_rejects_unknown_keys(self):
        with pytest.raises(ValueError):
            update_config(not_a_section=1)


class TestApiConfigValidation:
    @pytest.mark.parametrize(
        "kwargs,key",
        [
            ({"api_url": "localhost:3000/api"}, "API_URL"),
            ({"cdn_url": "ftp://cdn.test"}, "CDN_URL"),
            ({"request_timeout": 0}, "REQUEST_TIMEOUT_SECONDS"),
        ],
    )
    def test_invalid_values_raise(self, kwargs, key):
        with pytest.raises(ConfigurationError) as exc_info:
            ApiConfig(**kwargs)
        assert exc_info.value.context.additional_data["config_key"] == key
