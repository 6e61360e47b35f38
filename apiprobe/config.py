"""Settings for the application under test, read from the environment."""

from __future__ import annotations

import os
import typing

from pydantic import BaseModel, ValidationError, field_validator

from ._exceptions import ConfigurationError
from .url import _normalize_base_url

BASE_URL_ENV = "APIPROBE_BASE_URL"
TIMEOUT_ENV = "APIPROBE_TIMEOUT"
XDEBUG_SESSION_ENV = "XDEBUG_SESSION"
XDEBUG_CONFIG_ENV = "XDEBUG_CONFIG"

XDEBUG_COOKIE_NAME = "XDEBUG_SESSION"


def _idekey_from_config(config: str) -> str | None:
    # XDEBUG_CONFIG is a space separated list of key=value pairs.
    for part in config.split():
        key, sep, value = part.partition("=")
        if sep and key == "idekey":
            return value
    return None


class Settings(BaseModel):
    base_url: str = "http://localhost:8080/"
    timeout: float = 30.0
    debug_session: str | None = None

    @field_validator("base_url")
    @classmethod
    def check_base_url(cls, value: str) -> str:
        try:
            return str(_normalize_base_url(value))
        except ConfigurationError as exc:
            raise ValueError(str(exc)) from None

    @field_validator("timeout")
    @classmethod
    def check_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @field_validator("debug_session")
    @classmethod
    def check_debug_session(cls, value: str | None) -> str | None:
        if value is not None and (not value or any(c in value for c in ";, \t")):
            raise ValueError(f"invalid debug session identifier: {value!r}")
        return value

    @property
    def debug_cookies(self) -> dict[str, str]:
        """Cookies to seed into a stateful driver when a session starts."""
        if self.debug_session is None:
            return {}
        return {XDEBUG_COOKIE_NAME: self.debug_session}

    @classmethod
    def from_env(cls, environ: typing.Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``environ`` (defaults to ``os.environ``).

        Unset variables keep the model defaults. Invalid values raise
        :class:`ConfigurationError`.
        """
        environ = os.environ if environ is None else environ
        data: dict[str, typing.Any] = {}
        if environ.get(BASE_URL_ENV):
            data["base_url"] = environ[BASE_URL_ENV]
        if environ.get(TIMEOUT_ENV):
            data["timeout"] = environ[TIMEOUT_ENV]
        if environ.get(XDEBUG_SESSION_ENV):
            data["debug_session"] = environ[XDEBUG_SESSION_ENV]
        elif environ.get(XDEBUG_CONFIG_ENV):
            idekey = _idekey_from_config(environ[XDEBUG_CONFIG_ENV])
            if idekey is not None:
                data["debug_session"] = idekey

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc
