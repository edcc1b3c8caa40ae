"""Settings store backed by a SQL database."""

import json
import logging
from typing import Any

from sqlalchemy import select

from ..database.connection import DatabaseManager
from ..database.models import SettingEntry

logger = logging.getLogger(__name__)


class DatabaseSettingsStore:
    """Stores each key as a row of JSON text in the ``settings`` table."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def get(self, key: str) -> Any | None:
        with self.db_manager.get_session() as session:
            raw = session.execute(
                select(SettingEntry.value).where(SettingEntry.key == key)
            ).scalar_one_or_none()

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Ignoring undecodable setting '{key}': {e}")
            return None

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        with self.db_manager.get_session() as session:
            session.merge(SettingEntry(key=key, value=payload))
        logger.debug(f"Stored setting '{key}'")

