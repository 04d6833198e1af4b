"""Settings for periodchain.

Applications tune library behaviour through ``PERIODCHAIN_``-prefixed
environment variables (or a ``.env`` file) instead of threading options
through every call site.

Features:
    - **PeriodChainSettings:** log level, log format, default insert mode
    - **env_prefix:** ``PERIODCHAIN_``
    - **.env file support:** Automatic loading via pydantic-settings
    - **Extra ignore:** Unknown env vars don't cause startup failures

Examples:
    >>> import os
    >>> os.environ["PERIODCHAIN_INSERT_MODE"] = "anchored"
    >>> get_settings(_force_reload=True).insert_mode
    <InsertMode.ANCHORED: 'anchored'>

Tags:
    settings, configuration, pydantic, environment, periodchain
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from periodchain.core.enums import InsertMode
from periodchain.core.errors import ConfigError
from periodchain.core.logging import configure_logging


class PeriodChainSettings(BaseSettings):
    """Library-wide settings.

    Fields
    ──────
    log_level    : Structlog log level
    json_logs    : JSON output (True), console (False), auto-detect (None)
    insert_mode  : Default ``InsertMode`` for new chains
    """

    model_config = SettingsConfigDict(
        env_prefix="PERIODCHAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None

    # ── Chain behaviour ──────────────────────────────────────────
    insert_mode: InsertMode = Field(
        default=InsertMode.PRESERVE,
        description="Default insert mode for chains created without one",
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, PeriodChainSettings] = {}


def get_settings(*, _force_reload: bool = False) -> PeriodChainSettings:
    """Load, validate, and cache a :class:`PeriodChainSettings` instance.

    Parameters
    ----------
    _force_reload:
        Bypass cache and reload from the environment.
    """
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    try:
        settings = PeriodChainSettings()
    except PydanticValidationError as exc:
        raise ConfigError(f"Invalid periodchain settings: {exc}", cause=exc) from exc
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Drop the cached settings so the next ``get_settings`` re-reads env."""
    _settings_cache.clear()


def configure_from_settings(settings: PeriodChainSettings | None = None) -> PeriodChainSettings:
    """Apply logging configuration from settings and return them."""
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)
    return settings


__all__ = [
    "PeriodChainSettings",
    "get_settings",
    "clear_settings_cache",
    "configure_from_settings",
]
