"""FastAPI dependency exposing the settings the app was created with."""

from fastapi import Request

from fitcoach.config.settings import Settings


def get_app_settings(request: Request) -> Settings:
    """Return the Settings instance stored on the application by create_app."""
    return request.app.state.settings
