"""Tests for configuration loading and startup failure handling."""

from __future__ import annotations

import pytest

from src.config import load_settings
from src.errors import ConfigurationError
from src.main import main
from src.mclogs.client import DEFAULT_BASE_URL


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in ("DISCORD_TOKEN", "MCLOGS_BASE_URL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)


class TestLoadSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISCORD_TOKEN", "secret")

        settings = load_settings()

        assert settings.discord_token == "secret"
        assert settings.mclogs_base_url == DEFAULT_BASE_URL
        assert settings.log_level == "INFO"

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISCORD_TOKEN", " secret ")
        monkeypatch.setenv("MCLOGS_BASE_URL", "https://api.test")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = load_settings()

        assert settings.discord_token == "secret"
        assert settings.mclogs_base_url == "https://api.test"
        assert settings.log_level == "debug"

    def test_missing_token_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="DISCORD_TOKEN"):
            load_settings()

    def test_blank_token_is_configuration_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISCORD_TOKEN", "   ")
        with pytest.raises(ConfigurationError):
            load_settings()


class TestMain:
    def test_missing_token_exits_non_zero(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main()
        assert excinfo.value.code == 1
