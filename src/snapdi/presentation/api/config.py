"""API configuration adapter.

Bridges the centralized snapdi_config settings with the API layer. The app
factory stores the settings it was built with on ``app.state``, so tests can
run an app with their own settings without touching the process-wide cache.
"""

from fastapi import Request

from snapdi_config.settings import Settings, get_settings


def get_api_settings(request: Request) -> Settings:
    """Settings of the running app (falls back to the global settings)."""
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()
