# Copyright (C) 2025 Antonio Paolillo. All rights reserved.
# SPDX-License-Identifier: MIT

"""
Configuration for build-ruby.

The only setting is the container engine endpoint, read from the `DOCKER_HOST`
environment variable. The engine is always reached over plain HTTP, so the
scheme given in the variable (`tcp://`, `https://`, ...) is replaced by `http`.
"""

from urllib.parse import urlsplit, urlunsplit

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from buildruby.errors import ConfigError


class Settings(BaseSettings):
    """Settings loaded from the environment."""

    model_config = SettingsConfigDict(extra="ignore")

    docker_host: str = Field(
        description="Container engine endpoint, e.g. tcp://127.0.0.1:2375",
    )

    @field_validator("docker_host")
    @classmethod
    def force_http_scheme(cls, value: str) -> str:
        """Replace the endpoint scheme with `http` and reject URLs without a host."""
        parts = urlsplit(value.strip())
        if not parts.netloc:
            raise ValueError(f"DOCKER_HOST is not a URL with a host: {value!r}")
        return urlunsplit(parts._replace(scheme="http"))


def load_settings() -> Settings:
    """
    Builds the settings from the environment.

    Raises:
        ConfigError: If `DOCKER_HOST` is unset or cannot be parsed.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigError(f"Invalid container engine configuration (DOCKER_HOST): {e}") from e
