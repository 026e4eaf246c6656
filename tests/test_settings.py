"""Tests for the configuration holder."""

import base64
import logging

import pytest
from pydantic import ValidationError

from tests.conftest import make_settings


class TestSettings:
    """Derived values of Settings."""

    def test_defaults(self):
        config = make_settings()
        assert config.companion_namespace == "banildtools"
        assert config.companion_name == "BanildTools"
        assert config.http_timeout == 60.0
        assert config.plugin_directory_url == "https://wordpress.org/plugins/wp-json/wp/v2"

    def test_trailing_slash_is_stripped(self):
        config = make_settings(wordpress_url="https://blog.example.com///")
        assert config.wordpress_url == "https://blog.example.com"
        assert config.api_root == "https://blog.example.com/wp-json"

    def test_auth_token_encodes_username_and_password(self):
        config = make_settings(wordpress_username="editor", wordpress_password="s3cr:et")
        assert base64.b64decode(config.auth_token).decode() == "editor:s3cr:et"

    def test_has_commerce_keys_needs_both(self):
        assert make_settings(wc_consumer_key="ck_1", wc_consumer_secret="cs_1").has_commerce_keys
        assert not make_settings(wc_consumer_key="ck_1").has_commerce_keys
        assert not make_settings(wc_consumer_secret="cs_1").has_commerce_keys

    def test_is_immutable(self):
        config = make_settings()
        with pytest.raises(ValidationError):
            config.wordpress_url = "https://other.example.com"


class TestEnsureValid:
    """Startup gate."""

    def test_missing_url_exits(self, caplog):
        config = make_settings(wordpress_url="")
        with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as exc:
            config.ensure_valid()
        assert exc.value.code == 1
        assert "WORDPRESS_URL environment variable is required" in caplog.text

    @pytest.mark.parametrize("field", ["wordpress_username", "wordpress_password"])
    def test_missing_credentials_exit(self, field, caplog):
        config = make_settings(**{field: ""})
        with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as exc:
            config.ensure_valid()
        assert exc.value.code == 1
        assert "WORDPRESS_USERNAME and WORDPRESS_PASSWORD" in caplog.text

    def test_valid_configuration_passes(self, caplog):
        with caplog.at_level(logging.INFO):
            make_settings().ensure_valid()
        assert "Configuration validated" in caplog.text
