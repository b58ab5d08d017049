"""Environment-driven settings for the shop."""

import os

from pydantic import BaseModel, ValidationError, field_validator

from comicshop.shared.exceptions import ConfigurationError

_ENVIRONMENTS = ("development", "test", "staging", "production")

_LEVEL_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


class Settings(BaseModel):
    env: str = "development"
    log_level: str | None = None
    log_dir: str | None = None
    seed: str = "default"
    currency: str = "USD"

    @field_validator("env")
    @classmethod
    def env_must_be_known(cls, value):
        value = value.lower()
        if value not in _ENVIRONMENTS:
            raise ValueError(f"Unknown environment {value!r}, expected one of {', '.join(_ENVIRONMENTS)}")
        return value

    @field_validator("log_level")
    @classmethod
    def log_level_is_upper(cls, value):
        return value.upper() if value else value

    @property
    def effective_log_level(self) -> str:
        return self.log_level or _LEVEL_BY_ENV[self.env]

    @property
    def renders_json(self) -> bool:
        return self.env in ("production", "staging")

    @classmethod
    def from_env(cls, environ=None):
        """Read settings from ``COMICSHOP_*`` variables (and ``LOG_LEVEL``)."""
        environ = os.environ if environ is None else environ
        values = {
            "env": environ.get("COMICSHOP_ENV") or environ.get("ENVIRONMENT") or "development",
            "log_level": environ.get("LOG_LEVEL"),
            "log_dir": environ.get("COMICSHOP_LOG_DIR"),
            "seed": environ.get("COMICSHOP_SEED", "default"),
            "currency": environ.get("COMICSHOP_CURRENCY", "USD"),
        }
        try:
            return cls(**values)
        except ValidationError as exc:
            messages = {}
            for error in exc.errors():
                field = ".".join(str(part) for part in error["loc"]) or "_entity"
                messages.setdefault(field, []).append(error["msg"])
            raise ConfigurationError(messages) from exc
