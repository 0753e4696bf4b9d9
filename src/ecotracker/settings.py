"""Environment-backed settings primitives for :mod:`ecotracker`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["EcoTrackerSettings", "get_settings"]

NotificationPermission = Literal["default", "granted", "denied"]

_DEFAULT_STORE_PATH = Path.home() / ".ecotracker" / "store.json"
_DEFAULT_TOP_TIPS = 4


class EcoTrackerSettings(BaseSettings):
    """Expose environment-derived configuration knobs for ecotracker.

    Malformed values fall back to the documented defaults instead of raising,
    so a bad environment never prevents the calculator from starting.

    Attributes:
        store_path: JSON file backing the key-value store.
        top_tips: Default number of tips returned by the tip selector.
        log_level: Logging level name applied by the CLI.
        notification_permission: Initial reminder notification permission.
    """

    store_path: Path = Field(default=_DEFAULT_STORE_PATH, alias="ECOTRACKER_STORE_PATH")
    top_tips: int = Field(default=_DEFAULT_TOP_TIPS, alias="ECOTRACKER_TOP_TIPS")
    log_level: str = Field(default="INFO", alias="ECOTRACKER_LOG_LEVEL")
    notification_permission: NotificationPermission = Field(
        default="default", alias="ECOTRACKER_NOTIFICATIONS"
    )

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator("top_tips", mode="before")
    @classmethod
    def _parse_top_tips(cls, value: object) -> int:
        """Parse the tip count while tolerating malformed input.

        Args:
            value: Raw environment value.

        Returns:
            Parsed non-negative integer, otherwise the default.
        """

        if isinstance(value, int):
            return value if value >= 0 else _DEFAULT_TOP_TIPS
        if isinstance(value, str):
            try:
                parsed = int(value.strip())
            except ValueError:
                return _DEFAULT_TOP_TIPS
            return parsed if parsed >= 0 else _DEFAULT_TOP_TIPS
        return _DEFAULT_TOP_TIPS

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        """Upper-case the level name, defaulting to ``INFO`` when unknown."""

        if isinstance(value, str):
            name = value.strip().upper()
            if name in logging.getLevelNamesMapping():
                return name
        return "INFO"

    @field_validator("notification_permission", mode="before")
    @classmethod
    def _parse_permission(cls, value: object) -> str:
        if isinstance(value, str) and value.strip().lower() in {
            "default",
            "granted",
            "denied",
        }:
            return value.strip().lower()
        return "default"

    @property
    def log_level_value(self) -> int:
        """Return the numeric logging level."""

        return logging.getLevelNamesMapping()[self.log_level]


def get_settings() -> EcoTrackerSettings:
    """Return a :class:`EcoTrackerSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return EcoTrackerSettings()
