"""FastAPI dependency injection."""

from __future__ import annotations

from cadastre.config import settings


def get_settings():
    return settings
