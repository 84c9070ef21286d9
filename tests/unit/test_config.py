"""
Unit Tests for Configuration and Logging

These tests verify that:
- Settings provide the documented defaults
- The base URL is normalized for endpoint concatenation
- validate_configuration() rejects invalid settings
- Loggers live under the "ionomy" namespace

Run with:
    pytest tests/unit/test_config.py -v
"""

import logging

import pytest

from ionomy.core.config import DEFAULT_BASE_URL, Settings, normalize_base_url, settings, validate_configuration
from ionomy.core.logging import get_logger, log_api_request, log_api_response, set_log_level


class TestSettings:
    """Test default values and computed properties"""

    def test_default_base_url(self):
        assert Settings.model_fields["ionomy_base_url"].default == "https://ionomy.com/api/v1/"

    def test_shared_settings_base_url_is_http(self):
        assert settings.normalized_base_url.startswith("http")
        assert settings.normalized_base_url.endswith("/")

    def test_keep_alive_is_boolean(self):
        assert isinstance(settings.ionomy_keep_alive, bool)

    def test_has_credentials_requires_both(self):
        assert Settings(ionomy_api_key="k", ionomy_api_secret="s").has_credentials is True
        assert Settings(ionomy_api_key="k", ionomy_api_secret="").has_credentials is False
        assert Settings(ionomy_api_key="", ionomy_api_secret="s").has_credentials is False

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("https://ionomy.com/api/v1", "https://ionomy.com/api/v1/"),
            ("https://ionomy.com/api/v1/", "https://ionomy.com/api/v1/"),
            ("", DEFAULT_BASE_URL),
            (None, DEFAULT_BASE_URL),
        ],
    )
    def test_normalize_base_url(self, raw, expected):
        assert normalize_base_url(raw) == expected


class TestValidateConfiguration:
    """Test startup validation"""

    def test_valid_configuration_passes(self):
        validate_configuration(Settings(ionomy_base_url=DEFAULT_BASE_URL, request_timeout=10, log_level="INFO"))

    def test_rejects_non_http_base_url(self):
        with pytest.raises(ValueError, match="IONOMY_BASE_URL"):
            validate_configuration(Settings(ionomy_base_url="ftp://ionomy.com/"))

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError, match="REQUEST_TIMEOUT"):
            validate_configuration(Settings(request_timeout=0))

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            validate_configuration(Settings(log_level="VERBOSE"))

    def test_warns_on_partial_credentials(self, caplog):
        with caplog.at_level(logging.WARNING, logger="ionomy"):
            validate_configuration(Settings(ionomy_api_key="key", ionomy_api_secret=""))

        assert "unsigned" in caplog.text

    def test_secret_not_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="ionomy"):
            validate_configuration(Settings(ionomy_api_key="key", ionomy_api_secret="hidden-secret"))

        assert "hidden-secret" not in caplog.text


class TestLogging:
    """Test logger naming and helpers"""

    def test_get_logger_keeps_package_names(self):
        assert get_logger("ionomy.api_client").name == "ionomy.api_client"

    def test_get_logger_prefixes_other_names(self):
        assert get_logger("scripts.check").name == "ionomy.scripts.check"

    def test_set_log_level(self):
        root = logging.getLogger("ionomy")
        previous = root.level
        try:
            set_log_level("debug")
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)

    def test_log_api_request_and_response(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="ionomy"):
            log_api_request("public/orderbook", {"market": "BTC-LTC"}, signed=True)
            log_api_response("public/orderbook", 200, 0.25)

        assert "GET public/orderbook (signed)" in caplog.text
        assert "'market': 'BTC-LTC'" in caplog.text
        assert "Status: 200 | Time: 0.250s" in caplog.text
