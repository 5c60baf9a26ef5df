"""FastAPI dependency injection."""

from debtease.config import Settings, settings


def get_settings() -> Settings:
    return settings
