"""Core app configuration and database."""

from docuploader.core.config import get_settings, settings
from docuploader.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
