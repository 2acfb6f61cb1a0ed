# ABOUTME: Tests for environment-backed settings.
# ABOUTME: Validates required keys, defaults, overrides and secret redaction.

import pytest

from weather_chat.config import DEFAULT_GEMINI_MODEL, OPENWEATHER_BASE_URL, Settings
from weather_chat.errors import ConfigError


class TestSettingsFromEnv:
    def test_required_keys_and_defaults(self):
        """from_env reads both keys and fills in defaults for the rest.

        Implementation: Passes an explicit environment mapping with only the keys.
        Passing implies: Endpoints, model name and timeout have working defaults.
        """
        settings = Settings.from_env({"OPENWEATHER_API_KEY": "ow", "GEMINI_API_KEY": "gm"})

        assert settings.openweather_api_key == "ow"
        assert settings.gemini_api_key == "gm"
        assert settings.gemini_model == DEFAULT_GEMINI_MODEL
        assert settings.openweather_base_url == OPENWEATHER_BASE_URL
        assert settings.http_timeout_seconds == 10.0

    def test_overrides(self):
        settings = Settings.from_env(
            {
                "OPENWEATHER_API_KEY": "ow",
                "GEMINI_API_KEY": "gm",
                "GEMINI_MODEL": "gemini-2.0-flash",
                "HTTP_TIMEOUT_SECONDS": "2.5",
            }
        )
        assert settings.gemini_model == "gemini-2.0-flash"
        assert settings.http_timeout_seconds == 2.5

    def test_missing_keys_raise_config_error(self):
        """Missing credentials are reported by variable name.

        Implementation: Omits GEMINI_API_KEY and blanks OPENWEATHER_API_KEY.
        Passing implies: Both missing variables appear in the error message.
        """
        with pytest.raises(ConfigError, match="OPENWEATHER_API_KEY, GEMINI_API_KEY"):
            Settings.from_env({"OPENWEATHER_API_KEY": ""})

    def test_invalid_timeout_raises_config_error(self):
        with pytest.raises(ConfigError, match="http_timeout_seconds"):
            Settings.from_env({"OPENWEATHER_API_KEY": "ow", "GEMINI_API_KEY": "gm", "HTTP_TIMEOUT_SECONDS": "-1"})

    def test_keys_are_not_in_repr(self):
        settings = Settings(openweather_api_key="secret-ow", gemini_api_key="secret-gm")
        assert "secret-ow" not in repr(settings)
        assert "secret-gm" not in repr(settings)
