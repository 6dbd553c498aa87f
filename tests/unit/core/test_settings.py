"""
Tests for environment loading.
"""

import pytest
from pydantic import ValidationError

from github_http.core.config import AdapterOptions
from github_http.core.exceptions import ConfigurationError
from github_http.core.logging.config import LogFormat, LogLevel
from github_http.core.settings import AdapterSettings, load_options_from_env


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop GITHUB_HTTP_* variables leaking in from the host."""
    import os
    for name in list(os.environ):
        if name.upper().startswith("GITHUB_HTTP_"):
            monkeypatch.delenv(name)


class TestLoadOptionsFromEnv:

    def test_defaults(self):
        options = load_options_from_env()
        assert isinstance(options, AdapterOptions)
        assert options == AdapterOptions()

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("GITHUB_HTTP_BASE_URL", "https://github.example.com/api/v3/")
        monkeypatch.setenv("GITHUB_HTTP_TIMEOUT", "30")
        monkeypatch.setenv("GITHUB_HTTP_API_VERSION", "v3")

        options = load_options_from_env()

        assert options.base_url == "https://github.example.com/api/v3/"
        assert options.timeout == 30
        assert options.api_version == "v3"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / "adapter.env"
        env_file.write_text("GITHUB_HTTP_API_LIMIT=60\nGITHUB_HTTP_USER_AGENT=my-app/1.0\n")

        options = load_options_from_env(env_file=str(env_file))

        assert options.api_limit == 60
        assert options.user_agent == "my-app/1.0"

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("GITHUB_HTTP_API_VERSION", "v3")
        options = load_options_from_env(api_version="beta")
        assert options.api_version == "beta"

    def test_unknown_override(self):
        with pytest.raises(ConfigurationError):
            load_options_from_env(colour="blue")

    def test_invalid_timeout(self, monkeypatch):
        monkeypatch.setenv("GITHUB_HTTP_TIMEOUT", "0")
        with pytest.raises(ValidationError):
            load_options_from_env()

    def test_logging_disabled_by_default(self):
        assert load_options_from_env().logging is None

    def test_logging_enabled(self, monkeypatch, tmp_path):
        log_file = tmp_path / "adapter.log"
        monkeypatch.setenv("GITHUB_HTTP_LOG_ENABLED", "true")
        monkeypatch.setenv("GITHUB_HTTP_LOG_LEVEL", "debug")
        monkeypatch.setenv("GITHUB_HTTP_LOG_FORMAT", "JSON")
        monkeypatch.setenv("GITHUB_HTTP_LOG_FILE_PATH", str(log_file))

        logging_config = AdapterSettings().to_logging_config()

        assert logging_config.level is LogLevel.DEBUG
        assert logging_config.format is LogFormat.JSON
        assert logging_config.enable_file is True
        assert logging_config.file_path == str(log_file)
