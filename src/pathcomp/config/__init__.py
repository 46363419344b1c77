"""Configuration module using Pydantic Settings.

Usage:
    from pathcomp.config import Settings, load_settings

    settings = load_settings()
    settings = Settings(autosave=True)
"""

from pathcomp.config.settings import (
    DEFAULT_CONFIG_FILE,
    Settings,
    SettingsError,
    load_settings,
    save_settings,
)

__all__ = [
    "Settings",
    "SettingsError",
    "load_settings",
    "save_settings",
    "DEFAULT_CONFIG_FILE",
]
