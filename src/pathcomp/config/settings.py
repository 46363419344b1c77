"""Configuration settings using Pydantic Settings.

Values come from (highest first) explicit arguments, the JSON config file,
``PATHCOMP_*`` environment variables, ``.env`` and the defaults below.

Usage:
    from pathcomp.config import Settings, load_settings, save_settings

    settings = load_settings("pathcomp.json")
    settings.trigger_sizes[0]      # start trigger half-extents
    save_settings(settings, "pathcomp.json")
"""

from __future__ import annotations

import json
import logging
from pathlib import Path as FsPath
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from pathcomp.storage.models import RetryPolicy

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "pathcomp.json"

Color = tuple[float, float, float, float]
Size = tuple[float, float, float]


class Settings(BaseSettings):  # type: ignore[misc]
    """Application configuration.

    Only ``direct_mode``, ``autosave``, ``autoreset``, ``trigger_sizes`` and the
    ``write_*`` fields affect recording; the rest is read by the presentation
    layer.

    Environment Variables:
        PATHCOMP_DIRECT_MODE
        PATHCOMP_AUTOSAVE
        PATHCOMP_AUTORESET
        PATHCOMP_TRIGGER_SIZES (JSON, e.g. [[1,1,1],[2,1,2]])
        PATHCOMP_CONFIG_FILE
        PATHCOMP_WRITE_ATTEMPTS
        PATHCOMP_WRITE_BACKOFF
        PATHCOMP_WRITE_BASE_DELAY
    """

    model_config = SettingsConfigDict(
        env_prefix="PATHCOMP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    direct_mode: bool = False
    autosave: bool = False
    autoreset: bool = True

    trigger_sizes: tuple[Size, Size] = ((1.0, 1.0, 1.0), (1.0, 1.0, 1.0))
    timer_size: float = Field(default=24.0, gt=0)
    timer_position: tuple[float, float] = (400.0, 50.0)

    trigger_colors: tuple[Color, Color] = ((0.0, 0.0, 0.0, 0.8), (1.0, 1.0, 1.0, 0.8))
    fast_color: Color = (0.4, 1.0, 0.2, 0.8)
    slow_color: Color = (1.0, 0.1, 0.2, 0.8)
    gold_color: Color = (1.0, 0.9, 0.5, 0.9)
    select_color: Color = (0.7, 0.8, 1.0, 0.8)

    config_file: str = DEFAULT_CONFIG_FILE

    write_attempts: int = Field(default=3, ge=1)
    write_backoff: Literal["none", "linear", "exponential"] = "exponential"
    write_base_delay: float = Field(default=0.05, ge=0)

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.write_attempts,
            backoff=self.write_backoff,
            base_delay=self.write_base_delay,
        )


class SettingsError(Exception):
    """Config file exists but could not be read or parsed."""


def load_settings(file_path: str = DEFAULT_CONFIG_FILE) -> Settings:
    """Load settings from a JSON file layered over env and defaults.

    A missing file yields the defaults.

    Raises:
        SettingsError: If the file is unreadable or invalid.
    """
    path = FsPath(file_path)
    if not path.exists():
        logger.info("No config file at %s, using defaults", file_path)
        return Settings(config_file=file_path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsError(f"Failed to read config {file_path!r}: {e}") from e
    if not isinstance(data, dict):
        raise SettingsError(f"Config {file_path!r} must contain a JSON object")

    data["config_file"] = file_path
    try:
        settings = Settings(**data)
    except ValidationError as e:
        raise SettingsError(f"Invalid config {file_path!r}: {e}") from e

    logger.info("Config loaded")
    return settings


def save_settings(settings: Settings, file_path: str | None = None) -> None:
    """Write settings as JSON.

    Raises:
        SettingsError: If the file cannot be written.
    """
    target = file_path or settings.config_file
    try:
        FsPath(target).write_text(settings.model_dump_json(indent=2), encoding="utf-8")
    except OSError as e:
        raise SettingsError(f"Failed to write config {target!r}: {e}") from e
    logger.info("Config saved")
