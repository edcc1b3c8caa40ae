"""Persistence backends for app settings, including the saved cart."""

import logging

from ..config import ShoppableSettings
from ..database.connection import init_database
from ..protocol import SettingsStore
from .database import DatabaseSettingsStore
from .json_file import JSONFileSettingsStore
from .memory import MemorySettingsStore

logger = logging.getLogger(__name__)

__all__ = [
    "DatabaseSettingsStore",
    "JSONFileSettingsStore",
    "MemorySettingsStore",
    "create_settings_store",
    "get_settings_store",
    "reset_settings_store",
]


def create_settings_store(settings: ShoppableSettings) -> SettingsStore:
    """Build the settings store selected by ``settings.store_backend``."""
    backend = settings.store_backend
    if backend == "memory":
        return MemorySettingsStore()
    if backend == "file":
        return JSONFileSettingsStore(settings.settings_file)
    if backend == "database":
        return DatabaseSettingsStore(init_database(settings))
    raise ValueError(f"Unknown settings store backend: {backend}")


# Global settings store instance
_settings_store: SettingsStore | None = None


def get_settings_store(settings: ShoppableSettings | None = None) -> SettingsStore:
    """Get the process-wide settings store, creating it on first use."""
    global _settings_store
    if _settings_store is None:
        if settings is None:
            raise RuntimeError("Settings must be provided to create the settings store")
        _settings_store = create_settings_store(settings)
        logger.info(f"Using {settings.store_backend} settings store")
    return _settings_store


def reset_settings_store() -> None:
    """Discard the process-wide settings store."""
    global _settings_store
    if isinstance(_settings_store, DatabaseSettingsStore):
        _settings_store.db_manager.close()
    _settings_store = None
