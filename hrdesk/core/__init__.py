"""Core app configuration, database and error kinds."""

from hrdesk.core.config import get_settings, settings
from hrdesk.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
