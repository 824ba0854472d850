"""Process configuration for the Snapdi API and its tooling."""

from .settings import (
    MIN_JWT_SECRET_LENGTH,
    Settings,
    clear_settings_cache,
    get_config_dir,
    get_settings,
)

__all__ = [
    "MIN_JWT_SECRET_LENGTH",
    "Settings",
    "clear_settings_cache",
    "get_config_dir",
    "get_settings",
]
