"""
Environment configuration validator.

Validates required variables and common misconfigurations before the bot
is allowed to connect to Discord.
"""

from __future__ import annotations

import logging
import math
from typing import Mapping


logger = logging.getLogger(__name__)

REQUIRED_VARS = ("DISCORD_TOKEN", "OPENCLAW_API_KEY")


class ConfigValidationError(Exception):
    """Raised when config validation fails."""

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message)
        self.missing = missing or []


def _is_set(values: Mapping[str, str | None], name: str) -> bool:
    value = values.get(name)
    return bool(value and value.strip())


def validate_settings(values: Mapping[str, str | None]) -> None:
    """
    Validate the raw environment values used to build Settings.

    Every problem is collected before anything is reported, so a single run
    lists all missing variables at once.

    Args:
        values: Mapping of environment variable name to raw string value

    Raises:
        ConfigValidationError: If a required variable is missing or a value
            cannot be used
    """
    errors = []
    warnings = []

    # ── Required variables ─────────────────────────────────────────────────
    missing = [name for name in REQUIRED_VARS if not _is_set(values, name)]
    for name in missing:
        errors.append(f"- {name}")

    # ── Optional variables ─────────────────────────────────────────────────
    timeout = values.get("OPENCLAW_TIMEOUT")
    if timeout is not None and timeout.strip():
        try:
            seconds = float(timeout)
        except ValueError:
            errors.append(f"- OPENCLAW_TIMEOUT must be a number of seconds, got {timeout!r}")
        else:
            if not math.isfinite(seconds) or seconds <= 0:
                errors.append(f"- OPENCLAW_TIMEOUT must be a positive, finite number, got {timeout!r}")

    url = values.get("OPENCLAW_API_URL")
    if url and url.strip() and not url.strip().startswith(("http://", "https://")):
        warnings.append(f"OPENCLAW_API_URL does not look like an http(s) URL: {url!r}")

    for warning in warnings:
        logger.warning("Config warning: %s", warning)

    if errors:
        logger.error("=" * 70)
        if len(errors) == len(missing):
            logger.error("Missing required environment variables:")
        else:
            logger.error("Missing or invalid environment variables:")
        for error in errors:
            logger.error("   %s", error)
        logger.error("=" * 70)
        logger.error("Copy .env.example to .env and fill in your credentials")
        raise ConfigValidationError(
            f"Config validation failed with {len(errors)} error(s)", missing=missing
        )
