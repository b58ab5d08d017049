"""Tests for environment-driven settings and logging setup."""

import logging
import logging.handlers

import pytest
from comicshop.config import Settings
from comicshop.logging import configure_logging
from comicshop.shared.exceptions import ConfigurationError
from pydantic import ValidationError


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.env == "development"
        assert settings.seed == "default"
        assert settings.effective_log_level == "DEBUG"
        assert not settings.renders_json

    def test_reads_environment(self):
        settings = Settings.from_env(
            {
                "COMICSHOP_ENV": "Production",
                "LOG_LEVEL": "error",
                "COMICSHOP_SEED": "empty",
                "COMICSHOP_CURRENCY": "EUR",
            }
        )
        assert settings.env == "production"
        assert settings.effective_log_level == "ERROR"
        assert settings.seed == "empty"
        assert settings.currency == "EUR"
        assert settings.renders_json

    @pytest.mark.parametrize("env,level", [("test", "WARNING"), ("staging", "INFO"), ("production", "INFO")])
    def test_level_follows_environment(self, env, level):
        assert Settings(env=env).effective_log_level == level

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValidationError):
            Settings(env="qa")

    def test_unknown_environment_from_env_is_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc:
            Settings.from_env({"COMICSHOP_ENV": "qa"})
        assert list(exc.value.messages) == ["env"]
        assert "qa" in exc.value.messages["env"][0]


class TestConfigureLogging:
    def test_sets_root_level(self):
        configure_logging(Settings(env="test"))
        assert logging.getLogger().level == logging.WARNING

    def test_file_logging(self, tmp_path):
        configure_logging(Settings(env="test", log_dir=str(tmp_path / "logs")))
        try:
            assert (tmp_path / "logs").is_dir()
            handlers = logging.getLogger().handlers
            assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in handlers)
        finally:
            configure_logging(Settings(env="test"))
