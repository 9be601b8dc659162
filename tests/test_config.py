"""
Unit tests for settings loaded from the environment.
"""
import os
from unittest.mock import patch

import pytest

from conftest import make_settings
from portal_client.config import AppSettings, ConfigurationError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test from an empty directory with no PORTAL_* variables."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("PORTAL_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("PORTAL_ENV_FILE", str(tmp_path / "missing.env"))


class TestFromEnv:
    def test_defaults(self):
        settings = AppSettings.from_env()

        assert settings.base_url == "http://localhost:5000/api"
        assert settings.timeout_seconds == 10
        assert settings.retry_attempts == 2
        assert settings.retry_base_delay_seconds == pytest.approx(0.2)
        assert settings.page_size == 10
        assert settings.count_probe_limit == 1000
        assert settings.token_header_scheme == "Trendora"
        assert settings.session_path == ""
        assert settings.log_level == "INFO"

    def test_overrides(self):
        env = {
            "PORTAL_API_URL": "https://portal.example.com/api/",
            "PORTAL_PAGE_SIZE": "25",
            "PORTAL_COUNT_PROBE_LIMIT": "0",
            "PORTAL_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env):
            settings = AppSettings.from_env()

        assert settings.base_url == "https://portal.example.com/api"
        assert settings.page_size == 25
        assert settings.count_probe_limit == 0
        assert settings.log_level == "DEBUG"

    def test_env_file_fills_missing_values(self, tmp_path):
        env_file = tmp_path / "portal.env"
        env_file.write_text('# local\nPORTAL_TIMEOUT_SECONDS="30"\n', encoding="utf-8")

        with patch.dict(os.environ, {"PORTAL_ENV_FILE": str(env_file)}):
            assert AppSettings.from_env().timeout_seconds == 30

    def test_non_integer_value(self):
        with patch.dict(os.environ, {"PORTAL_TIMEOUT_SECONDS": "ten"}):
            with pytest.raises(ConfigurationError, match="PORTAL_TIMEOUT_SECONDS"):
                AppSettings.from_env()


class TestValidate:
    def test_relative_url_is_rejected(self):
        with pytest.raises(ConfigurationError, match="PORTAL_API_URL"):
            make_settings(base_url="/api").validate()

    def test_problems_are_reported_together(self):
        settings = make_settings(timeout_seconds=0, retry_attempts=-1, page_size=0)

        with pytest.raises(ConfigurationError) as exc_info:
            settings.validate()

        message = str(exc_info.value)
        assert "PORTAL_TIMEOUT_SECONDS" in message
        assert "PORTAL_RETRY_ATTEMPTS" in message
        assert "PORTAL_PAGE_SIZE" in message

    def test_probe_limit_must_exceed_page_size(self):
        with pytest.raises(ConfigurationError, match="PORTAL_COUNT_PROBE_LIMIT"):
            make_settings(count_probe_limit=10, page_size=10).validate()

    def test_unknown_log_level(self):
        with pytest.raises(ConfigurationError, match="PORTAL_LOG_LEVEL"):
            make_settings(log_level="CHATTY").validate()

    def test_valid_settings_pass(self):
        make_settings().validate()
