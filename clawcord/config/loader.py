from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
import sys
from typing import Mapping

from dotenv import load_dotenv

from .validator import validate_settings, ConfigValidationError


DEFAULT_API_URL = "http://localhost:8080/v1/chat/completions"
DEFAULT_MODEL = "default"
DEFAULT_PREFIX = "!"
DEFAULT_TIMEOUT_SECONDS = 600.0


@dataclass(frozen=True)
class Settings:
    discord_token: str = field(repr=False)
    openclaw_api_key: str = field(repr=False)
    openclaw_api_url: str = DEFAULT_API_URL
    openclaw_model: str = DEFAULT_MODEL
    bot_prefix: str = DEFAULT_PREFIX  # reserved, dispatch does not read it
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS


def _get(values: Mapping[str, str | None], name: str, default: str) -> str:
    value = values.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def build_settings(values: Mapping[str, str | None]) -> Settings:
    """
    Validate raw values and turn them into a Settings instance.

    Raises ConfigValidationError if validation fails.
    """
    validate_settings(values)
    return Settings(
        discord_token=_get(values, "DISCORD_TOKEN", ""),
        openclaw_api_key=_get(values, "OPENCLAW_API_KEY", ""),
        openclaw_api_url=_get(values, "OPENCLAW_API_URL", DEFAULT_API_URL),
        openclaw_model=_get(values, "OPENCLAW_MODEL", DEFAULT_MODEL),
        bot_prefix=_get(values, "BOT_PREFIX", DEFAULT_PREFIX),
        request_timeout=float(_get(values, "OPENCLAW_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))),
    )


def get_config(environ: Mapping[str, str | None] | None = None) -> Settings:
    """
    Public helper for loading configuration.

    - Loads .env into the process environment unless an explicit mapping is given.
    - Validates required variables.
    - Exits with error code 1 if validation fails.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    try:
        settings = build_settings(environ)
    except ConfigValidationError:
        sys.exit(1)

    logging.info(
        "Config loaded | url: %s | model: %s | timeout: %ss",
        settings.openclaw_api_url,
        settings.openclaw_model,
        settings.request_timeout,
    )
    return settings
